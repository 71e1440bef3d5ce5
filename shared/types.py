"""Shared type definitions for the orbital maze project."""
from typing import NamedTuple, Optional

Point = tuple[float, float]
FixedPoint = tuple[int, int]   # integer coordinates, mm * SCALE


class MazeConfig(NamedTuple):
    """Physical and generation parameters. All lengths in millimetres."""
    diameter: float
    wall_width: float
    corridor_width: float
    difficulty: int
    corner_rounding: bool
    seed: int
    hole_radius: float
    show_entry_wedge: bool = False


class Node(NamedTuple):
    """One cell of the polar grid.

    ``parent`` is an index into the node arena (``None`` for the root and
    for nodes never reached by generation).
    """
    index: int
    r: int               # ring ordinal, 0 = root
    c: int               # cell index within ring r
    theta: float
    x: float
    y: float
    visited: bool = False
    parent: Optional[int] = None


class MazeModel(NamedTuple):
    """Result of one generation run. Never mutated after it is returned."""
    config: MazeConfig
    corridor_path: str
    solution_path: str
    start_point: Point
    end_point: Point
    nodes: tuple[Node, ...]
    entry_index: int
    step_size: float
    ring_sizes: tuple[int, ...]


class PathSequence(NamedTuple):
    """Parsed point run in fixed-point coordinates."""
    points: list[FixedPoint]
    closed: bool


class Decoration(NamedTuple):
    """Opaque vector fragment overlaid at the center hole."""
    path: str
    view_box: str
