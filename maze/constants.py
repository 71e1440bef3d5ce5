"""Named defaults and tuning constants for maze generation.

All lengths in millimetres.
"""

# Default configuration
DEFAULT_DIAMETER = 290.0
DEFAULT_WALL_WIDTH = 11.0
DEFAULT_CORRIDOR_WIDTH = 14.0
DEFAULT_DIFFICULTY = 5
DEFAULT_CORNER_ROUNDING = True
DEFAULT_HOLE_RADIUS = 12.0
DEFAULT_SHOW_ENTRY_WEDGE = False

# Accepted difficulty levels (inclusive)
DIFFICULTY_RANGE = (1, 5)

# Growing-tree weights
BASE_WEIGHT = 100.0
TURN_PENALTY = 50.0
INWARD_BONUS = 1200.0
OUTWARD_PENALTY = 40.0            # applied only above OUTWARD_PENALTY_MIN_DIFFICULTY
OUTWARD_PENALTY_MIN_DIFFICULTY = 3
JITTER = 50.0
MIN_WEIGHT = 1.0

# Entry scoring
INFLECTION_WEIGHT = 200.0
ROTATION_WEIGHT = 10.0

# Path mini-language output precision (decimals)
PATH_PRECISION = 2
