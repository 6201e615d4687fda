"""The tile grid that every generation stage reads and writes.

Tiles live in a single numpy ``uint8`` array indexed ``[x, y]`` with the
origin at the bottom-left. Stages share the one array, so a write is visible
to every later read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

from warren.environment.tile_types import Tile, get_glyph_map, tile_color
from warren.types import TileCoord
from warren.util.coordinates import Box, Point

if TYPE_CHECKING:
    from warren.environment.room import Room
    from warren.view.render import PixelSink

logger = logging.getLogger(__name__)


class GridBoundsError(IndexError):
    """Raised when a grid access falls outside the grid."""


# Neighbour offsets in the order stages scan them: +x, -x, +y, -y.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Grid:
    """A width x height array of tiles with an optional pixel sink attached.

    When a sink is attached, every tile write is forwarded to it as a pixel
    in the tile's display colour. Call ``flush()`` to ask the sink to present
    what it has received.
    """

    def __init__(
        self,
        width: TileCoord,
        height: TileCoord,
        fill: Tile = Tile.WALL,
        sink: PixelSink | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.tiles = np.full((width, height), fill, dtype=np.uint8, order="F")
        self.sink = sink
        if sink is not None:
            color = tile_color(fill)
            for x in range(width):
                for y in range(height):
                    sink.set_pixel(x, y, color)

    @classmethod
    def from_bounds(
        cls,
        bounds: Box,
        fill: Tile = Tile.WALL,
        sink: PixelSink | None = None,
    ) -> Grid:
        """Create a grid covering ``bounds``, which must start at the origin."""
        if bounds.left != 0 or bounds.bottom != 0:
            raise ValueError(f"Grid bounds must start at the origin, got {bounds}")
        size = bounds.size()
        return cls(size.x, size.y, fill=fill, sink=sink)

    # -------------------------------------------------------------------------
    # Single tile access
    # -------------------------------------------------------------------------

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: TileCoord, y: TileCoord) -> None:
        # numpy would happily wrap negative indices around, which always
        # means a bug in the caller here.
        if not self.in_bounds(x, y):
            raise GridBoundsError(
                f"Tile ({x}, {y}) is outside the {self.width}x{self.height} grid"
            )

    def get_tile(self, x: TileCoord, y: TileCoord) -> Tile:
        self._check(x, y)
        return Tile(int(self.tiles[x, y]))

    def set_tile(self, x: TileCoord, y: TileCoord, tile: Tile) -> None:
        self._check(x, y)
        self.tiles[x, y] = tile
        if self.sink is not None:
            self.sink.set_pixel(x, y, tile_color(tile))

    def fill_room(self, room: Room | None) -> None:
        """Mark the room footprint ``[left, right) x [bottom, top)`` as FLOOR."""
        if room is None:
            logger.debug("fill_room called without a room, nothing to fill")
            return
        if room.left < 0 or room.bottom < 0 or room.right > self.width or (
            room.top > self.height
        ):
            raise GridBoundsError(
                f"{room} does not fit in the {self.width}x{self.height} grid"
            )
        self.tiles[room.left : room.right, room.bottom : room.top] = Tile.FLOOR
        if self.sink is not None:
            color = tile_color(Tile.FLOOR)
            for x in range(room.left, room.right):
                for y in range(room.bottom, room.top):
                    self.sink.set_pixel(x, y, color)

    def fill_mask(self, mask: np.ndarray, tile: Tile) -> int:
        """Set every cell selected by a boolean ``mask`` to ``tile``.

        Returns the number of cells written.
        """
        if mask.shape != self.tiles.shape:
            raise GridBoundsError(
                f"Mask of shape {mask.shape} does not match grid {self.tiles.shape}"
            )
        self.tiles[mask] = tile
        if self.sink is not None:
            color = tile_color(tile)
            for x, y in np.argwhere(mask):
                self.sink.set_pixel(int(x), int(y), color)
        return int(np.count_nonzero(mask))

    def neighbors4(self, x: TileCoord, y: TileCoord) -> Iterator[Point]:
        """Yield the in-bounds 4-neighbours of (x, y) in +x, -x, +y, -y order."""
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield Point(nx, ny)

    # -------------------------------------------------------------------------
    # Whole-grid queries
    # -------------------------------------------------------------------------

    def count(self, tile: Tile) -> int:
        return int(np.count_nonzero(self.tiles == tile))

    def mask(self, tile: Tile) -> np.ndarray:
        """Boolean map of the cells holding ``tile``."""
        return self.tiles == tile

    @staticmethod
    def dilate(mask: np.ndarray) -> np.ndarray:
        """OR each cell with its 3x3 neighbourhood, clipped at the grid edge."""
        width, height = mask.shape
        padded = np.pad(mask, 1, mode="constant", constant_values=False)
        result = np.zeros_like(mask, dtype=bool)
        for dx in range(3):
            for dy in range(3):
                result |= padded[dx : dx + width, dy : dy + height]
        return result

    def flush(self) -> None:
        """Ask the attached sink, if any, to present the pixels written so far."""
        if self.sink is not None:
            self.sink.apply()

    def to_ascii(self) -> str:
        """Render the grid as text, top row first."""
        glyphs = get_glyph_map(self.tiles)
        return "\n".join(
            "".join(glyphs[:, y]) for y in range(self.height - 1, -1, -1)
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
