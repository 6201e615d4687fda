"""Post-processing that turns rooms + corridors + maze into a playable layout.

After the maze fill, rooms are still sealed off from the maze by a one-tile
wall. This module:
- finds the wall cells that could open a room onto a corridor (connectors),
- opens one connector per room, plus the occasional extra one,
- removes dead-end corridors one cell at a time, and
- clears walls that no longer border anything walkable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from warren import config
from warren.environment.grid import NEIGHBOR_OFFSETS, Grid
from warren.environment.tile_types import Tile
from warren.util.coordinates import Point
from warren.util.steps import run_steps

if TYPE_CHECKING:
    from warren.environment.room import Room
    from warren.util.rng import RNG

logger = logging.getLogger(__name__)


def _shifted(tiles: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Interior-sized view of ``tiles`` shifted by (dx, dy)."""
    width, height = tiles.shape
    return tiles[1 + dx : width - 1 + dx, 1 + dy : height - 1 + dy]


# =============================================================================
# CONNECTORS
# =============================================================================


def find_connectors(grid: Grid, rooms: list[Room]) -> int:
    """Record every connector against the rooms it would open.

    A connector is an interior WALL cell with a CORRIDOR 4-neighbour and a
    FLOOR 4-neighbour. It is added to each room that owns one of those floor
    neighbours.

    Returns:
        The number of connector cells found.
    """
    tiles = grid.tiles
    if grid.width < 3 or grid.height < 3:
        return 0

    next_to_corridor = np.zeros((grid.width - 2, grid.height - 2), dtype=bool)
    next_to_floor = np.zeros_like(next_to_corridor)
    for dx, dy in NEIGHBOR_OFFSETS:
        neighbor = _shifted(tiles, dx, dy)
        next_to_corridor |= neighbor == Tile.CORRIDOR
        next_to_floor |= neighbor == Tile.FLOOR
    is_wall = _shifted(tiles, 0, 0) == Tile.WALL
    is_connector = is_wall & next_to_corridor & next_to_floor

    found = 0
    for ix, iy in np.argwhere(is_connector):
        connector = Point(int(ix) + 1, int(iy) + 1)
        owners = [
            room
            for room in rooms
            if any(
                room.contains(n) and grid.get_tile(n.x, n.y) == Tile.FLOOR
                for n in grid.neighbors4(connector.x, connector.y)
            )
        ]
        for room in owners:
            room.add_connector(connector)
        if owners:
            found += 1

    logger.debug(f"Found {found} connector cells")
    return found


def open_rooms(
    grid: Grid,
    rooms: list[Room],
    rng: RNG,
    extra_chance: float = config.CONNECTOR_EXTRA_OPEN_CHANCE,
) -> int:
    """Give every room an entrance.

    Rooms are visited in random order. Each opens one random connector, and
    each of its other connectors opens with probability ``extra_chance``.
    Connectors that stay closed are dropped from the room.

    Returns:
        The number of wall cells turned into CORRIDOR.
    """
    order = list(rooms)
    rng.shuffle(order)

    opened = 0
    for room in order:
        if not room.connectors:
            logger.warning(f"{room} has no connectors and stays without an entrance")
            continue

        entrance = room.connectors[rng.randrange(len(room.connectors))]
        kept = []
        for connector in room.connectors:
            if connector != entrance and rng.random() >= extra_chance:
                continue
            kept.append(connector)
            if grid.get_tile(connector.x, connector.y) != Tile.CORRIDOR:
                grid.set_tile(connector.x, connector.y, Tile.CORRIDOR)
                opened += 1
        room.connectors = kept

    logger.debug(f"Opened {opened} connectors for {len(rooms)} rooms")
    return opened


# =============================================================================
# DEAD ENDS
# =============================================================================


class DeadEndRemover:
    """Resumable dead-end removal. Each ``step()`` fills in one dead end.

    A dead end is a CORRIDOR cell with WALL on at least three of its four
    sides, where the outside of the grid counts as WALL. Removing one often
    creates the next, so the search starts around the last removed cell and
    only falls back to a full scan when that neighbourhood is clean.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.done = False
        self.removed = 0
        self._last: Point | None = None

    def is_dead_end(self, x: int, y: int) -> bool:
        grid = self.grid
        if not grid.in_bounds(x, y) or grid.tiles[x, y] != Tile.CORRIDOR:
            return False
        walls = 0
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny) or grid.tiles[nx, ny] == Tile.WALL:
                walls += 1
        return walls >= 3

    def _scan(self) -> Point | None:
        """First dead end in x-major order, or None."""
        grid = self.grid
        walls = np.pad(grid.mask(Tile.WALL), 1, mode="constant", constant_values=True)
        wall_count = np.zeros(grid.tiles.shape, dtype=np.int8)
        for dx, dy in NEIGHBOR_OFFSETS:
            wall_count += walls[
                1 + dx : grid.width + 1 + dx, 1 + dy : grid.height + 1 + dy
            ]
        dead_ends = np.argwhere(grid.mask(Tile.CORRIDOR) & (wall_count >= 3))
        if len(dead_ends) == 0:
            return None
        x, y = dead_ends[0]
        return Point(int(x), int(y))

    def _next_dead_end(self) -> Point | None:
        if self._last is not None:
            for dx, dy in NEIGHBOR_OFFSETS:
                x, y = self._last.x + dx, self._last.y + dy
                if self.is_dead_end(x, y):
                    return Point(x, y)
        return self._scan()

    def step(self) -> bool:
        """Remove one dead end. Returns False once none remain."""
        if self.done:
            return False
        dead_end = self._next_dead_end()
        if dead_end is None:
            self.done = True
            logger.debug(f"Removed {self.removed} dead-end cells")
            return False
        self.grid.set_tile(dead_end.x, dead_end.y, Tile.WALL)
        self.removed += 1
        self._last = dead_end
        return True

    def run(self) -> int:
        """Remove every dead end. Returns the number of cells removed."""
        run_steps(self)
        return self.removed


# =============================================================================
# ISOLATED WALLS
# =============================================================================


def remove_isolated_walls(grid: Grid) -> int:
    """Turn every WALL with no FLOOR or CORRIDOR in its 3x3 into NONE.

    Returns:
        The number of cells cleared.
    """
    walkable = grid.mask(Tile.FLOOR) | grid.mask(Tile.CORRIDOR)
    isolated = grid.mask(Tile.WALL) & ~grid.dilate(walkable)
    cleared = grid.fill_mask(isolated, Tile.NONE)
    logger.debug(f"Cleared {cleared} isolated wall cells")
    return cleared
