"""SVG page sizing and path-data formatting."""
from typing import Iterable

from .types import FixedPoint

# Margin around the disk, mm, on each side of the viewBox
PADDING = 20.0


def fmt_num(v: float, nd: int = 2) -> str:
    """Fixed-decimal formatting without a negative zero."""
    s = f"{v:.{nd}f}"
    if s.lstrip("-").strip("0.") == "":
        return s.lstrip("-")
    return s


def view_box(diameter: float, padding: float = PADDING) -> tuple[float, float]:
    """(min, size) of the square viewBox centered on the origin."""
    size = diameter + padding * 2
    return -size / 2, size


def view_box_attr(diameter: float, padding: float = PADDING) -> str:
    lo, size = view_box(diameter, padding)
    return f"{lo:g} {lo:g} {size:g} {size:g}"


def contours_to_path_d(contours: Iterable[list[FixedPoint]], scale: int,
                       closed: bool = True) -> str:
    """Emit M/L(/Z) path data for fixed-point contours, 3 decimals in mm."""
    parts = []
    for pts in contours:
        if not pts:
            continue
        x0, y0 = pts[0]
        cmd = [f"M {fmt_num(x0 / scale, 3)} {fmt_num(y0 / scale, 3)}"]
        for x, y in pts[1:]:
            cmd.append(f"L {fmt_num(x / scale, 3)} {fmt_num(y / scale, 3)}")
        if closed:
            cmd.append("Z")
        parts.append(" ".join(cmd))
    return " ".join(parts)
