from __future__ import annotations

from typing import TypeAlias

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================


TileCoord = int  # Always integer tile position

# Grid coordinates. Origin (0, 0) is the bottom-left tile of the dungeon.
TilePos = tuple[TileCoord, TileCoord]  # Example: (5, 3) = column 5, row 3

# =============================================================================
# RENDERING-RELATED TYPES
# =============================================================================

# An 8-bit per channel colour, e.g. (255, 0, 0) for red.
RGB = tuple[int, int, int]

# =============================================================================
# UTILITY TYPES
# =============================================================================

# Master seed for a generation run. None means "use system entropy".
RandomSeed: TypeAlias = int | str | None
