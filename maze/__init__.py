"""Polar maze generation: grid, growing tree, entry selection, path stitching."""

from .config import (
    InvalidConfiguration, Dimensions,
    default_config, derived_dimensions, validate_config, config_from_mapping,
)
from .rng import SeededRandom
from .grid import PolarGrid, build_polar_grid, neighbors, ring_cell_count
from .generator import TreeResult, DifficultyParams, difficulty_params, grow_tree
from .entry import ENTRY_THETA, ChainMetrics, chain_metrics, select_entry, rotate_to_entry
from .stitch import StitchResult, stitch_corridors, solution_path
from .gen_maze import generate
