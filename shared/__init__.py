"""Shared types, geometry, and SVG utilities."""

from .types import Point, FixedPoint, MazeConfig, Node, MazeModel, PathSequence, Decoration
from .geometry import (
    round_half_up, wrap_angle, polar,
    arc_center_params, flatten_arc, segments_intersect, dedupe_consecutive,
    polyline_self_intersects, rotation_matrix, rotate_points, regular_polygon,
)
from .svg import PADDING, fmt_num, view_box, view_box_attr, contours_to_path_d
