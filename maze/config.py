"""Maze configuration: defaults, derived dimensions, and validation."""
import math
from typing import Any, Mapping, NamedTuple

from shared.types import MazeConfig
from maze.constants import (
    DEFAULT_DIAMETER, DEFAULT_WALL_WIDTH, DEFAULT_CORRIDOR_WIDTH,
    DEFAULT_DIFFICULTY, DEFAULT_CORNER_ROUNDING, DEFAULT_HOLE_RADIUS,
    DEFAULT_SHOW_ENTRY_WEDGE, DIFFICULTY_RANGE,
)


class InvalidConfiguration(ValueError):
    """Raised when a config cannot produce a maze. No nodes are created."""


class Dimensions(NamedTuple):
    """Radii derived from a config (mm)."""
    radius: float
    step_size: float
    usable_radius: float
    num_rings: int


# camelCase keys accepted from JSON written by other front ends
_ALIASES = {
    "wallWidth": "wall_width",
    "corridorWidth": "corridor_width",
    "cornerRounding": "corner_rounding",
    "holeRadius": "hole_radius",
    "showEntryWedge": "show_entry_wedge",
}


def default_config(seed: int = 0) -> MazeConfig:
    return MazeConfig(
        diameter=DEFAULT_DIAMETER,
        wall_width=DEFAULT_WALL_WIDTH,
        corridor_width=DEFAULT_CORRIDOR_WIDTH,
        difficulty=DEFAULT_DIFFICULTY,
        corner_rounding=DEFAULT_CORNER_ROUNDING,
        seed=seed,
        hole_radius=DEFAULT_HOLE_RADIUS,
        show_entry_wedge=DEFAULT_SHOW_ENTRY_WEDGE,
    )


def derived_dimensions(config: MazeConfig) -> Dimensions:
    """radius, stepSize, usableRadius and ring count for a config."""
    radius = config.diameter / 2
    step_size = config.corridor_width + config.wall_width
    usable = radius - config.wall_width - config.corridor_width / 2
    num_rings = math.floor(usable / step_size) if step_size > 0 else 0
    return Dimensions(radius, step_size, usable, num_rings)


def validate_config(config: MazeConfig) -> Dimensions:
    """Check a config and return its derived dimensions.

    Raises InvalidConfiguration naming the first offending field.
    """
    if not config.diameter > 0:
        raise InvalidConfiguration(f"diameter must be > 0, got {config.diameter}")
    if not config.corridor_width > 0:
        raise InvalidConfiguration(f"corridor_width must be > 0, got {config.corridor_width}")
    if not config.wall_width >= 0:
        raise InvalidConfiguration(f"wall_width must be >= 0, got {config.wall_width}")
    if not config.hole_radius > 0:
        raise InvalidConfiguration(f"hole_radius must be > 0, got {config.hole_radius}")
    d = config.difficulty
    lo, hi = DIFFICULTY_RANGE
    if isinstance(d, bool) or not isinstance(d, int) or not lo <= d <= hi:
        raise InvalidConfiguration(f"difficulty must be an integer in {lo}..{hi}, got {d!r}")
    if isinstance(config.seed, bool) or not isinstance(config.seed, int):
        raise InvalidConfiguration(f"seed must be an integer, got {config.seed!r}")

    dims = derived_dimensions(config)
    if dims.usable_radius <= 0:
        raise InvalidConfiguration(
            f"usable radius {dims.usable_radius:g} mm is not positive "
            f"(diameter {config.diameter:g}, wall {config.wall_width:g}, "
            f"corridor {config.corridor_width:g})")
    if dims.num_rings < 1:
        raise InvalidConfiguration(
            f"ring count {dims.num_rings} < 1: usable radius {dims.usable_radius:g} mm "
            f"is smaller than step size {dims.step_size:g} mm")
    return dims


def config_from_mapping(mapping: Mapping[str, Any], base: MazeConfig | None = None) -> MazeConfig:
    """Build a MazeConfig from a JSON-style mapping.

    Accepts snake_case field names or the camelCase aliases; missing keys
    come from *base* (defaults if omitted).
    """
    cfg = (base or default_config())._asdict()
    for key, value in mapping.items():
        name = _ALIASES.get(key, key)
        if name not in cfg:
            raise InvalidConfiguration(f"unknown config key {key!r}")
        cfg[name] = value
    if isinstance(cfg["difficulty"], float) and cfg["difficulty"].is_integer():
        cfg["difficulty"] = int(cfg["difficulty"])
    if isinstance(cfg["seed"], float) and cfg["seed"].is_integer():
        cfg["seed"] = int(cfg["seed"])
    return MazeConfig(**cfg)
