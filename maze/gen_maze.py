"""Maze generation entry point: config -> MazeModel.

Pipeline: polar grid -> growing tree -> entry selection and rotation ->
path stitching. Each call owns its own RNG and node arena.
"""
import logging

from shared.types import MazeConfig, MazeModel
from maze.grid import build_polar_grid
from maze.generator import grow_tree
from maze.entry import select_entry, rotate_to_entry
from maze.rng import SeededRandom
from maze.stitch import stitch_corridors, solution_path

logger = logging.getLogger(__name__)


def generate(config: MazeConfig) -> MazeModel:
    """Generate a maze. Raises InvalidConfiguration for unusable configs."""
    grid = build_polar_grid(config)
    tree = grow_tree(grid, config.difficulty, SeededRandom(config.seed))

    outer = grid.rings[grid.num_rings]
    entry_idx, metrics = select_entry(tree.nodes, outer)
    nodes = rotate_to_entry(tree.nodes, entry_idx)

    corridors = stitch_corridors(nodes, tree.edges, grid.step_size)
    solution = solution_path(nodes, entry_idx, grid.step_size)
    entry = nodes[entry_idx]

    logger.info(
        "maze seed=%d difficulty=%d: %d rings, %d nodes, %d sub-paths, "
        "entry (%d,%d) score %.1f",
        config.seed, config.difficulty, grid.num_rings, len(nodes),
        len(corridors.chains), entry.r, entry.c, metrics.score)

    return MazeModel(
        config=config,
        corridor_path=corridors.path,
        solution_path=solution,
        start_point=(entry.x, entry.y),
        end_point=(0.0, 0.0),
        nodes=tuple(nodes),
        entry_index=entry_idx,
        step_size=grid.step_size,
        ring_sizes=tuple(len(r) for r in grid.rings),
    )
