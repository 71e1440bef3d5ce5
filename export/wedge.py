"""Removable entry wedge: a pie-slice cutout with retaining ear tabs.

The slice is built in a local frame (u = radial outward, v = tangential)
and rotated onto the entry angle. Its narrow end at the entry radius is one
corridor wide; its sides are rays from the disk center, so it widens toward
the rim and runs past the outer boundary.
"""
import math
from typing import NamedTuple

from shared.types import Point
from shared.geometry import polar, rotate_points, regular_polygon

SCREW_HOLE_RADIUS = 1.5        # 3 mm screw
SCREW_HOLE_SEGMENTS = 24
EAR_START = 0.4                # ear span as fractions of entry -> rim distance
EAR_END = 0.7
EAR_DEPTH_FACTOR = 0.25        # ear depth = corridor width * factor
OVERSHOOT_FACTOR = 0.5         # run past the rim by corridor width * factor


class Wedge(NamedTuple):
    outline: list[Point]       # closed polygon, mm
    screw_hole: list[Point]    # closed polygon, mm


def wedge_local(entry_radius: float, outer_radius: float, corridor_width: float) -> list[Point]:
    """Wedge outline in the local frame, counter-clockwise, entry end first."""
    a = corridor_width / 2
    span = outer_radius - entry_radius
    d1 = entry_radius + EAR_START * span
    d2 = entry_radius + EAR_END * span
    d_out = outer_radius + OVERSHOOT_FACTOR * corridor_width
    ear = EAR_DEPTH_FACTOR * corridor_width

    def hw(d):
        return a * d / entry_radius

    right = [
        (entry_radius, -a),
        (d1, -hw(d1)), (d1, -hw(d1) - ear),
        (d2, -hw(d2) - ear), (d2, -hw(d2)),
        (d_out, -hw(d_out)),
    ]
    left = [(u, -v) for u, v in reversed(right)]
    return right + left


def entry_wedge(entry_point: Point, outer_radius: float, corridor_width: float,
                hole_radius: float = 0.0) -> Wedge:
    """Wedge cutout and screw hole for an entry point (mm, maze frame).

    The screw hole sits on the wedge axis, midway between the entry hole's
    outer edge and the rim.
    """
    rho = math.hypot(entry_point[0], entry_point[1])
    if rho <= 0:
        raise ValueError("entry point must not be the disk center")
    if outer_radius <= rho:
        raise ValueError(f"outer radius {outer_radius:g} must exceed entry radius {rho:g}")
    phi = math.atan2(entry_point[1], entry_point[0])

    local = wedge_local(rho, outer_radius, corridor_width)
    outline = [(float(x), float(y)) for x, y in rotate_points(local, phi)]

    inner = min(rho + hole_radius, outer_radius)
    d_screw = (inner + outer_radius) / 2
    cx, cy = polar(d_screw, phi)
    hole = regular_polygon(cx, cy, SCREW_HOLE_RADIUS, SCREW_HOLE_SEGMENTS)
    screw_hole = [(float(x), float(y)) for x, y in hole]
    return Wedge(outline, screw_hole)
