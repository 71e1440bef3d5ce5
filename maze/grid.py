"""Polar grid construction: concentric rings of cells around a single root.

Nodes live in a flat arena (a list indexed by ``Node.index``); rings hold
arena indices. Ring 0 is the root at the origin.
"""
import logging
from typing import NamedTuple

from shared.types import MazeConfig, Node
from shared.geometry import round_half_up, polar, TWO_PI
from maze.config import Dimensions, validate_config

logger = logging.getLogger(__name__)


class PolarGrid(NamedTuple):
    nodes: list[Node]          # arena; root at index 0
    rings: list[list[int]]     # rings[r][c] -> arena index
    dims: Dimensions

    @property
    def num_rings(self) -> int:
        return self.dims.num_rings

    @property
    def step_size(self) -> float:
        return self.dims.step_size


def ring_cell_count(r: int, step_size: float) -> int:
    """Cells on ring r: round(circumference / stepSize), at least 1."""
    if r == 0:
        return 1
    return max(1, round_half_up(TWO_PI * r * step_size / step_size))


def build_polar_grid(config: MazeConfig) -> PolarGrid:
    """Build the ring/cell arena for a config.

    Raises InvalidConfiguration before creating any node.
    """
    dims = validate_config(config)
    step = dims.step_size

    nodes = [Node(index=0, r=0, c=0, theta=0.0, x=0.0, y=0.0)]
    rings = [[0]]
    for r in range(1, dims.num_rings + 1):
        radius = r * step
        n_cells = ring_cell_count(r, step)
        row = []
        for c in range(n_cells):
            theta = c / n_cells * TWO_PI
            idx = len(nodes)
            x, y = polar(radius, theta)
            nodes.append(Node(index=idx, r=r, c=c, theta=theta, x=x, y=y))
            row.append(idx)
        rings.append(row)
        logger.debug("ring %d: radius %.2f mm, %d cells", r, radius, n_cells)
    return PolarGrid(nodes, rings, dims)


def ring_index_map(index: int, from_count: int, to_count: int) -> int:
    """Map a cell index onto a ring with a different cell count.

    Rounded ratio, not guaranteed symmetric between inward and outward use.
    """
    return round_half_up(index * to_count / from_count) % to_count


def inward_neighbor(grid: PolarGrid, idx: int) -> int | None:
    node = grid.nodes[idx]
    if node.r == 0:
        return None
    if node.r == 1:
        return 0
    inner = grid.rings[node.r - 1]
    return inner[ring_index_map(node.c, len(grid.rings[node.r]), len(inner))]


def outward_neighbor(grid: PolarGrid, idx: int) -> int | None:
    node = grid.nodes[idx]
    if node.r >= grid.num_rings:
        return None
    if node.r == 0:
        return grid.rings[1][0]
    outer = grid.rings[node.r + 1]
    return outer[ring_index_map(node.c, len(grid.rings[node.r]), len(outer))]


def neighbors(grid: PolarGrid, idx: int) -> list[int]:
    """Adjacent cells in tie-break order: CW, CCW, inward, outward.

    The root's neighbors are every ring-1 cell in index order.
    """
    node = grid.nodes[idx]
    if node.r == 0:
        return list(grid.rings[1]) if grid.num_rings >= 1 else []
    ring = grid.rings[node.r]
    m = len(ring)
    out = [ring[(node.c + 1) % m], ring[(node.c - 1) % m]]
    out.append(inward_neighbor(grid, idx))
    outer = outward_neighbor(grid, idx)
    if outer is not None:
        out.append(outer)
    return out
