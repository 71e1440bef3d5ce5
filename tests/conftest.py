"""Shared test fixtures: the reference maze (290 mm, 11/14 mm, difficulty 5)."""
import pytest
from maze import default_config, build_polar_grid, grow_tree, SeededRandom, generate
from export.pathparse import parse_path
from export.outline import build_outline

REFERENCE_SEED = 38763


@pytest.fixture(scope="session")
def scenario_config():
    """Default config with the reference seed."""
    return default_config(seed=REFERENCE_SEED)


@pytest.fixture(scope="session")
def scenario_grid(scenario_config):
    return build_polar_grid(scenario_config)


@pytest.fixture(scope="session")
def scenario_tree(scenario_grid, scenario_config):
    """TreeResult before entry rotation."""
    return grow_tree(scenario_grid, scenario_config.difficulty,
                     SeededRandom(scenario_config.seed))


@pytest.fixture(scope="session")
def scenario_model(scenario_config):
    return generate(scenario_config)


@pytest.fixture(scope="session")
def scenario_sequences(scenario_model):
    """Parsed corridor centerlines, fixed point."""
    return parse_path(scenario_model.corridor_path)


@pytest.fixture(scope="session")
def scenario_outline(scenario_model):
    cfg = scenario_model.config
    return build_outline(
        scenario_model.corridor_path, cfg.corridor_width, cfg.diameter / 2,
        cfg.hole_radius, cfg.corner_rounding, scenario_model.start_point,
    )
