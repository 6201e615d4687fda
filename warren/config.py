"""
Configuration constants.

Centralizes the tunable numbers used by dungeon generation.
Organized by functional area for easy maintenance.
"""

from warren.types import RGB, RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

RANDOM_SEED: RandomSeed = None

# =============================================================================
# DUNGEON BOUNDS
# =============================================================================

# Side length of the default square map. Must be even so the root box has an
# integral half extent.
DEFAULT_DUNGEON_SIZE = 100

# Depth limit handed to the quadtree. The root is depth 0 and a node only
# splits while its depth is <= this value.
QUADTREE_MAX_DEPTH = 3

# =============================================================================
# ROOMS
# =============================================================================

# Half extents are sampled per axis in [MIN_ROOM_HALFSIZE, MAX_ROOM_HALFSIZE).
MIN_ROOM_HALFSIZE = 1
MAX_ROOM_HALFSIZE = 6

# Tiles left free between a room and the edge of its quadtree leaf.
MIN_ROOM_MARGIN = 2

# =============================================================================
# CORRIDOR PATHFINDING
# =============================================================================

OBSTACLE_DANGER = 25  # Passing through or next to an unrelated room
CORRIDOR_REUSE_BONUS = 100  # Subtracted when stepping onto an existing corridor
TURN_PENALTY = 5  # Changing direction relative to the parent step

# Search gives up after this many expansions per grid tile.
PATHFINDING_MAX_EXPANSIONS_FACTOR = 8

# =============================================================================
# POST-PROCESSING
# =============================================================================

# After one guaranteed entrance, every other connector of a room opens with
# this probability.
CONNECTOR_EXTRA_OPEN_CHANCE = 0.01

# =============================================================================
# DISPLAY
# =============================================================================

WALL_COLOR: RGB = (40, 40, 48)
FLOOR_COLOR: RGB = (214, 196, 150)
CORRIDOR_COLOR: RGB = (120, 160, 200)
NONE_COLOR: RGB = (0, 0, 0)

# Integer upscaling applied when the CLI saves a PNG.
PNG_SCALE = 4
