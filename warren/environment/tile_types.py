"""
Tile types for dungeon layouts.

This module defines:
- `Tile`: the integer tile IDs stored in the grid's numpy array.
- Per-tile display properties (colour and ASCII glyph), kept in lookup arrays
  indexed by tile ID so a whole tile map can be converted in one vectorised
  step (e.g. `get_color_map(grid.tiles)` for image output).
"""

from enum import IntEnum

import numpy as np

from warren import config
from warren.types import RGB


class Tile(IntEnum):
    """Tile IDs. The values are what the grid array stores."""

    WALL = 0
    FLOOR = 1
    CORRIDOR = 2
    NONE = 3  # Cleared space: a wall nothing walkable touches


_TILE_COLORS: dict[Tile, RGB] = {
    Tile.WALL: config.WALL_COLOR,
    Tile.FLOOR: config.FLOOR_COLOR,
    Tile.CORRIDOR: config.CORRIDOR_COLOR,
    Tile.NONE: config.NONE_COLOR,
}

_TILE_GLYPHS: dict[Tile, str] = {
    Tile.WALL: "#",
    Tile.FLOOR: ".",
    Tile.CORRIDOR: ",",
    Tile.NONE: " ",
}

# --- Pre-calculated Property Arrays for Efficient Lookups ---
# Indexed by tile ID, in the same order as the Tile enum values.

_tile_properties_color = np.array([_TILE_COLORS[t] for t in Tile], dtype=np.uint8)
_tile_properties_glyph = np.array([_TILE_GLYPHS[t] for t in Tile], dtype="U1")

# --- Public Helper Functions for Accessing Tile Properties ---


def tile_color(tile: Tile) -> RGB:
    return _TILE_COLORS[tile]


def tile_glyph(tile: Tile) -> str:
    return _TILE_GLYPHS[tile]


def get_color_map(tile_map: np.ndarray) -> np.ndarray:
    """
    Converts a map of tile IDs of shape (w, h) into an RGB map of shape
    (w, h, 3) with dtype uint8.
    """
    return _tile_properties_color[tile_map]


def get_glyph_map(tile_map: np.ndarray) -> np.ndarray:
    """Converts a map of tile IDs into a map of single-character glyphs."""
    return _tile_properties_glyph[tile_map]
