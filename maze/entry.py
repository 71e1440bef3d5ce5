"""Entry point selection: score outer-ring cells, rotate the hardest to the top."""
import math
from typing import NamedTuple

from shared.types import Node
from shared.geometry import wrap_angle, rotate_points
from maze.constants import INFLECTION_WEIGHT, ROTATION_WEIGHT

# Entry sits at the top of the disk in SVG (y down) coordinates
ENTRY_THETA = -math.pi / 2


class ChainMetrics(NamedTuple):
    length: int        # edges from the node to the root
    inflections: int   # inward/outward reversals along the chain
    rotation: float    # sum of |dtheta| per step, radians

    @property
    def score(self) -> float:
        return self.length + INFLECTION_WEIGHT * self.inflections + ROTATION_WEIGHT * self.rotation


def chain_metrics(nodes: list[Node], idx: int) -> ChainMetrics:
    """Walk the parent chain from *idx* to the root.

    Sideways steps neither count as nor reset a radial reversal.
    """
    length = 0; inflections = 0; rotation = 0.0
    prev_radial = 0
    cur = nodes[idx]
    while cur.parent is not None:
        nxt = nodes[cur.parent]
        length += 1
        radial = 1 if nxt.r < cur.r else (-1 if nxt.r > cur.r else 0)
        if radial:
            if prev_radial and radial != prev_radial:
                inflections += 1
            prev_radial = radial
        rotation += abs(wrap_angle(nxt.theta - cur.theta))
        cur = nxt
    return ChainMetrics(length, inflections, rotation)


def select_entry(nodes: list[Node], outer_ring: list[int]) -> tuple[int, ChainMetrics]:
    """Highest-scoring outer-ring cell; the first one wins ties."""
    best_idx, best = outer_ring[0], None
    for idx in outer_ring:
        m = chain_metrics(nodes, idx)
        if best is None or m.score > best.score:
            best_idx, best = idx, m
    return best_idx, best


def rotate_to_entry(nodes: list[Node], entry_idx: int) -> list[Node]:
    """Rotate every non-root node so the entry cell lands at ENTRY_THETA.

    Pure coordinate transform; parents and visited flags are unchanged.
    """
    angle = ENTRY_THETA - nodes[entry_idx].theta
    movable = [n for n in nodes if n.r != 0]
    xy = rotate_points([(n.x, n.y) for n in movable], angle)
    rotated = {n.index: n._replace(x=float(p[0]), y=float(p[1]),
                                   theta=wrap_angle(n.theta + angle))
               for n, p in zip(movable, xy)}
    return [rotated.get(n.index, n) for n in nodes]
