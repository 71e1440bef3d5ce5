"""Corridor offsetting and union: centerlines -> cut-ready closed contours.

All polygon work is integer arithmetic on fixed-point coordinates
(SCALE units per mm) through pyclipper.
"""
import logging
from typing import NamedTuple, Sequence

import pyclipper

from shared.types import Point, FixedPoint, PathSequence
from shared.geometry import (
    dedupe_consecutive, polyline_self_intersects, regular_polygon,
)
from export.pathparse import SCALE, parse_path, DEFAULT_SEGMENTS_PER_ARC

logger = logging.getLogger(__name__)

JOIN_TYPES = {
    "round": pyclipper.JT_ROUND,
    "miter": pyclipper.JT_MITER,
    "square": pyclipper.JT_SQUARE,
}

# Shape classes, in output order
CORRIDORS = "corridors"
BOUNDARY = "boundary"
CENTER_HOLE = "center_hole"
ENTRY_HOLE = "entry_hole"
WEDGE = "wedge"
WEDGE_HOLE = "wedge_hole"
SHAPE_CLASSES = (CORRIDORS, BOUNDARY, CENTER_HOLE, ENTRY_HOLE, WEDGE, WEDGE_HOLE)

BOUNDARY_SEGMENTS = 128
HOLE_SEGMENTS = 64
MITER_LIMIT = 2.0
ARC_TOLERANCE_MM = 0.02


class GeometryWarning(UserWarning):
    """A sub-path dropped during offset/union; the rest is still processed."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"sub-path {index}: {reason}")
        self.index = index
        self.reason = reason


class OutlineSet(NamedTuple):
    """Unioned contours keyed by shape class, plus collected warnings."""
    shapes: dict[str, list[list[FixedPoint]]]
    warnings: list[GeometryWarning]

    def contours(self, shape_class: str) -> list[list[FixedPoint]]:
        return self.shapes.get(shape_class, [])


def join_type_for(corner_rounding: bool) -> str:
    return "round" if corner_rounding else "miter"


def circle_polygon(center: Point, radius: float, segments: int,
                   scale: int = SCALE) -> list[FixedPoint]:
    """Regular N-gon approximation of a circle, fixed point."""
    xy = regular_polygon(center[0], center[1], radius, segments) * scale
    return [(int(round(x)), int(round(y))) for x, y in xy]


def offset_sequences(
    sequences: Sequence[PathSequence], distance: float, join: str = "round",
    scale: int = SCALE, arc_tolerance: float = ARC_TOLERANCE_MM,
) -> tuple[list[list[FixedPoint]], list[GeometryWarning]]:
    """Offset each sequence by *distance* mm into closed polygons.

    Open sequences are stroked with round ends; closed sequences are stroked
    as closed outlines. Zero-length and self-intersecting sequences are
    skipped with a warning.
    """
    if join not in JOIN_TYPES:
        raise ValueError(f"unknown join type {join!r}")
    jt = JOIN_TYPES[join]
    warnings: list[GeometryWarning] = []
    co = pyclipper.PyclipperOffset(MITER_LIMIT, arc_tolerance * scale)
    added = 0
    for i, seq in enumerate(sequences):
        pts = dedupe_consecutive(seq.points)
        if seq.closed and len(pts) > 1 and pts[0] == pts[-1]:
            pts.pop()
        if len(pts) < 2:
            warnings.append(GeometryWarning(i, "zero-length sub-path"))
            continue
        if polyline_self_intersects(pts, closed=seq.closed):
            warnings.append(GeometryWarning(i, "self-intersecting sub-path"))
            continue
        end = pyclipper.ET_CLOSEDLINE if seq.closed else pyclipper.ET_OPENROUND
        co.AddPath(pts, jt, end)
        added += 1
    for w in warnings:
        logger.warning("offset skipped %s", w)
    if not added:
        return [], warnings
    result = co.Execute(distance * scale)
    return [[tuple(p) for p in poly] for poly in result], warnings


def union_polygons(polygons: list[list[FixedPoint]]) -> list[list[FixedPoint]]:
    """Boolean union (non-zero fill) into strictly simple contours."""
    polys = [p for p in polygons if len(p) >= 3]
    if not polys:
        return []
    pc = pyclipper.Pyclipper()
    pc.StrictlySimple = True
    pc.AddPaths(polys, pyclipper.PT_SUBJECT, True)
    result = pc.Execute(pyclipper.CT_UNION, pyclipper.PFT_NONZERO, pyclipper.PFT_NONZERO)
    return [[tuple(p) for p in poly] for poly in result]


def outline_corridors(
    sequences: Sequence[PathSequence], corridor_width: float, join: str = "round",
    scale: int = SCALE,
) -> tuple[list[list[FixedPoint]], list[GeometryWarning]]:
    """Offset by half the corridor width, then union."""
    polys, warnings = offset_sequences(sequences, corridor_width / 2, join, scale)
    return union_polygons(polys), warnings


def contour_area(contours: list[list[FixedPoint]], scale: int = SCALE) -> float:
    """Net filled area in mm^2 (holes from union output subtract)."""
    return sum(pyclipper.Area(c) for c in contours) / (scale * scale)


def disk_shapes(outer_radius: float, hole_radius: float,
                entry_point: Point | None = None) -> dict[str, list[list[FixedPoint]]]:
    """Boundary circle, center hole and (when given) entry hole contours."""
    shapes = {
        BOUNDARY: [circle_polygon((0.0, 0.0), outer_radius, BOUNDARY_SEGMENTS)],
        CENTER_HOLE: [circle_polygon((0.0, 0.0), hole_radius, HOLE_SEGMENTS)],
    }
    if entry_point is not None:
        shapes[ENTRY_HOLE] = [circle_polygon(entry_point, hole_radius, HOLE_SEGMENTS)]
    return shapes


def build_outline(
    corridor_path: str, corridor_width: float, outer_radius: float,
    hole_radius: float, corner_rounding: bool = True,
    entry_point: Point | None = None,
    segments_per_arc: int = DEFAULT_SEGMENTS_PER_ARC,
) -> OutlineSet:
    """Corridor, boundary and hole contours for a corridor path description.

    Raises ParseError for malformed path data.
    """
    sequences = parse_path(corridor_path, segments_per_arc)
    corridors, warnings = outline_corridors(
        sequences, corridor_width, join_type_for(corner_rounding))
    shapes = {CORRIDORS: corridors}
    shapes.update(disk_shapes(outer_radius, hole_radius, entry_point))
    return OutlineSet(shapes, warnings)
