"""Recursive-backtracker maze that fills the space left between rooms.

The maze walks a lattice of cells two tiles apart, so a wall always remains
between parallel strands. It only carves into cells whose whole 3x3
neighbourhood is still WALL, which keeps it clear of rooms and of the
corridors dug before it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from warren.environment.grid import Grid
from warren.environment.tile_types import Tile
from warren.util.coordinates import Direction, Point
from warren.util.steps import run_steps

if TYPE_CHECKING:
    from warren.util.rng import RNG

logger = logging.getLogger(__name__)

# Candidate directions are checked in this order before one is drawn.
_CARVE_ORDER = (Direction.EAST, Direction.WEST, Direction.NORTH, Direction.SOUTH)


class MazeFiller:
    """Resumable maze carving. Each ``step()`` carves one passage or backtracks.

    Example:
        filler = MazeFiller(grid, rng)
        while filler.step():
            grid.flush()  # animate one move at a time
    """

    def __init__(self, grid: Grid, rng: RNG) -> None:
        self.grid = grid
        self.rng = rng
        self.done = False
        self.cells_carved = 0
        self._started = False
        self._current: Point | None = None
        self._stack: list[Point] = []

    def step(self) -> bool:
        """Advance the maze by one lattice move. Returns True while work remains."""
        if self.done:
            return False

        if not self._started:
            self._started = True
            start = self._find_start()
            if start is None:
                logger.debug("No all-wall cell left to start a maze from")
                self.done = True
                return False
            self._carve(start)
            self._current = start
            self._stack.append(start)
            return True

        current = self._current
        assert current is not None
        options = [
            d for d in _CARVE_ORDER if self._is_valid_wall(current + d.offset * 2)
        ]
        if options:
            direction = self.rng.choice(options)
            self._carve(current + direction.offset)
            destination = current + direction.offset * 2
            self._carve(destination)
            self._current = destination
            self._stack.append(destination)
            return True

        # Dead end: back up and retry from the cell below on the stack.
        self._stack.pop()
        if not self._stack:
            self.done = True
            logger.debug(f"Maze finished, {self.cells_carved} cells carved")
            return False
        self._current = self._stack[-1]
        return True

    def run(self) -> int:
        """Carve the whole maze. Returns the number of cells carved."""
        run_steps(self)
        return self.cells_carved

    def _carve(self, p: Point) -> None:
        self.grid.set_tile(p.x, p.y, Tile.CORRIDOR)
        self.cells_carved += 1

    def _find_start(self) -> Point | None:
        """First interior cell, scanning x then y, whose 3x3 is all WALL."""
        grid = self.grid
        if grid.width < 3 or grid.height < 3:
            return None
        solid = ~grid.dilate(~grid.mask(Tile.WALL))
        candidates = np.argwhere(solid[1:-1, 1:-1])
        if len(candidates) == 0:
            return None
        x, y = candidates[0]
        return Point(int(x) + 1, int(y) + 1)

    def _is_valid_wall(self, p: Point) -> bool:
        grid = self.grid
        if p.x <= 0 or p.y <= 0 or p.x >= grid.width - 1 or p.y >= grid.height - 1:
            return False
        neighborhood = grid.tiles[p.x - 1 : p.x + 2, p.y - 1 : p.y + 2]
        return bool(np.all(neighborhood == Tile.WALL))
