"""Path mini-language parser -> fixed-point point sequences.

Supported commands: M/m, L/l, H/h, V/v, A/a, Z/z (SVG path syntax, absolute
and relative). Arcs are flattened to line segments; every coordinate is
converted to integers at SCALE units per millimetre.
"""
import re

from shared.types import Point, FixedPoint, PathSequence
from shared.geometry import flatten_arc, round_half_up

# Fixed-point units per millimetre
SCALE = 1000

DEFAULT_SEGMENTS_PER_ARC = 32

_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "A": 7, "Z": 0}

_TOKEN_RE = re.compile(r"""
    (?P<cmd>[MmLlHhVvAaZz])
  | (?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)
  | (?P<sep>[\s,]+)
""", re.VERBOSE)


class ParseError(ValueError):
    """Malformed path data. No partial result is returned."""

    def __init__(self, message: str, token: str = "", position: int = -1):
        super().__init__(message)
        self.token = token
        self.position = position


def to_fixed(p: Point, scale: int = SCALE) -> FixedPoint:
    return (round_half_up(p[0] * scale), round_half_up(p[1] * scale))


def from_fixed(p: FixedPoint, scale: int = SCALE) -> Point:
    return (p[0] / scale, p[1] / scale)


def tokenize(d: str) -> list[tuple[str, str, int]]:
    """Split path data into (kind, text, position) tokens, kind 'cmd' or 'num'."""
    tokens = []
    pos = 0
    while pos < len(d):
        m = _TOKEN_RE.match(d, pos)
        if m is None:
            raise ParseError(f"unrecognized token {d[pos]!r} at position {pos}",
                             token=d[pos], position=pos)
        if m.lastgroup != "sep":
            tokens.append((m.lastgroup, m.group(), pos))
        pos = m.end()
    return tokens


def split_commands(d: str) -> list[tuple[str, list[float], int]]:
    """Group tokens into (command, args, position), checking argument counts."""
    out: list[tuple[str, list[float], int]] = []
    for kind, text, pos in tokenize(d):
        if kind == "cmd":
            out.append((text, [], pos))
        elif not out:
            raise ParseError(f"number {text!r} before any command at position {pos}",
                             token=text, position=pos)
        else:
            out[-1][1].append(float(text))
    for cmd, args, pos in out:
        arity = _ARITY[cmd.upper()]
        if arity == 0:
            if args:
                raise ParseError(f"{cmd} takes no arguments, got {len(args)} at position {pos}",
                                 token=cmd, position=pos)
        elif not args or len(args) % arity:
            raise ParseError(
                f"{cmd} needs a multiple of {arity} arguments, got {len(args)} at position {pos}",
                token=cmd, position=pos)
        if cmd in "Aa":
            for i in range(0, len(args), 7):
                if args[i+3] not in (0.0, 1.0) or args[i+4] not in (0.0, 1.0):
                    raise ParseError(f"arc flags must be 0 or 1 at position {pos}",
                                     token=cmd, position=pos)
    return out


def parse_path(d: str, segments_per_arc: int = DEFAULT_SEGMENTS_PER_ARC,
               scale: int = SCALE) -> list[PathSequence]:
    """Parse path data into open/closed fixed-point point sequences.

    Each move-to starts a new sequence. Close-path marks the sequence closed
    (without repeating the first point); drawing after a close-path starts a
    new sequence at the sub-path start. Raises ParseError on malformed input.
    """
    sequences: list[PathSequence] = []
    pts: list[Point] = []
    cur: Point = (0.0, 0.0)
    start: Point = (0.0, 0.0)

    def flush(closed: bool):
        nonlocal pts
        if closed and len(pts) > 1 and pts[-1] == pts[0]:
            pts.pop()
        if pts:
            fixed = [to_fixed(p, scale) for p in pts]
            sequences.append(PathSequence(fixed, closed))
        pts = []

    for cmd, args, pos in split_commands(d):
        up = cmd.upper()
        rel = cmd != up
        if up == "M":
            flush(False)
            for i in range(0, len(args), 2):
                x, y = args[i], args[i+1]
                cur = (cur[0] + x, cur[1] + y) if rel else (x, y)
                if i == 0:
                    start = cur
                pts.append(cur)
            continue
        if up == "Z":
            if pts:
                flush(True)
            cur = start
            continue
        if not pts:
            if not sequences:
                raise ParseError(f"path must begin with a move-to, got {cmd!r} at position {pos}",
                                 token=cmd, position=pos)
            pts.append(start)
            cur = start
        if up == "L":
            for i in range(0, len(args), 2):
                x, y = args[i], args[i+1]
                cur = (cur[0] + x, cur[1] + y) if rel else (x, y)
                pts.append(cur)
        elif up == "H":
            for x in args:
                cur = (cur[0] + x if rel else x, cur[1])
                pts.append(cur)
        elif up == "V":
            for y in args:
                cur = (cur[0], cur[1] + y if rel else y)
                pts.append(cur)
        else:  # A
            for i in range(0, len(args), 7):
                rx, ry, rot, large, sweep, x, y = args[i:i+7]
                end = (cur[0] + x, cur[1] + y) if rel else (x, y)
                pts.extend(flatten_arc(cur, rx, ry, rot, int(large), int(sweep),
                                       end, segments_per_arc))
                cur = end
    flush(False)
    return sequences
