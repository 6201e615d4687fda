"""Danger-weighted A* used to dig corridors between rooms.

This is not a shortest-path search. Each candidate cell carries a danger
score that steers corridors away from unrelated rooms, toward corridors that
already exist, and away from needless turns. The heuristic is the squared
distance to the goal, which makes the search greedy: it finds *a* plausible
corridor quickly rather than the cheapest one.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from warren import config
from warren.environment.tile_types import Tile
from warren.util.coordinates import Direction, Point

if TYPE_CHECKING:
    from warren.environment.grid import Grid
    from warren.environment.room import Room

logger = logging.getLogger(__name__)

# Successors are generated in this order: -x, +x, -y, +y.
_EXPANSION_ORDER = (Direction.WEST, Direction.EAST, Direction.SOUTH, Direction.NORTH)


@dataclass(slots=True)
class PathNode:
    """One search node. ``parent`` indexes into the search's node arena."""

    pos: Point
    parent: int | None
    distance_cost: int
    danger_cost: int
    heuristic: int
    direction: Direction | None

    @property
    def total_cost(self) -> int:
        return self.distance_cost + self.heuristic + self.danger_cost


@dataclass(slots=True)
class DangerField:
    """Danger terms for one search, read from the grid when the search starts.

    Cells in or next to a room floor cost extra unless they border one of the
    two rooms being linked. Existing corridors are cheaper to walk, and every
    change of direction costs a little.
    """

    near_floor: np.ndarray
    corridor: np.ndarray
    start_room: Room
    goal_room: Room

    @classmethod
    def from_grid(cls, grid: Grid, start_room: Room, goal_room: Room) -> DangerField:
        return cls(
            near_floor=grid.dilate(grid.mask(Tile.FLOOR)),
            corridor=grid.mask(Tile.CORRIDOR),
            start_room=start_room,
            goal_room=goal_room,
        )

    def score(
        self, pos: Point, direction: Direction, parent_direction: Direction | None
    ) -> int:
        """Danger of stepping onto ``pos`` in ``direction``."""
        danger = 0
        if (
            self.near_floor[pos.x, pos.y]
            and not self.start_room.contains(pos, 1)
            and not self.goal_room.contains(pos, 1)
        ):
            danger += config.OBSTACLE_DANGER
        if self.corridor[pos.x, pos.y]:
            danger -= config.CORRIDOR_REUSE_BONUS
        if direction != parent_direction:
            danger += config.TURN_PENALTY
        return danger


def _square_distance(a: Point, b: Point) -> int:
    dx = b.x - a.x
    dy = b.y - a.y
    return dx * dx + dy * dy


class CorridorPathfinder:
    """Finds corridor routes between pairs of rooms on a grid.

    Each search reads the grid as it is at call time, so corridors dug by
    earlier searches are rewarded in later ones.
    """

    def __init__(self, grid: Grid, max_expansions: int | None = None) -> None:
        self.grid = grid
        if max_expansions is None:
            max_expansions = (
                config.PATHFINDING_MAX_EXPANSIONS_FACTOR * grid.width * grid.height
            )
        self.max_expansions = max_expansions

    def find_corridor(self, start_room: Room, goal_room: Room) -> list[Point] | None:
        """Search from ``start_room``'s center toward ``goal_room``'s center.

        The search stops as soon as a successor reaches the goal point or
        steps inside the goal room.

        Returns:
            The cells from the start center to the first cell reached in the
            goal room, in walking order. None if no route was found within
            the expansion budget.
        """
        grid = self.grid
        start = start_room.center
        goal = goal_room.center

        field = DangerField.from_grid(grid, start_room, goal_room)
        cleared = grid.mask(Tile.NONE)

        arena: list[PathNode] = [
            PathNode(
                pos=start,
                parent=None,
                distance_cost=0,
                danger_cost=0,
                heuristic=_square_distance(start, goal),
                direction=None,
            )
        ]
        # (total_cost, arena index). Arena indices grow with insertion, so
        # ties pop first-in, first-out.
        open_heap: list[tuple[int, int]] = [(arena[0].total_cost, 0)]
        best_cost: dict[Point, int] = {start: arena[0].total_cost}
        expansions = 0

        while open_heap:
            if expansions >= self.max_expansions:
                logger.debug(
                    f"Corridor search {start_room} -> {goal_room} gave up after "
                    f"{expansions} expansions"
                )
                return None
            _, index = heapq.heappop(open_heap)
            expansions += 1
            node = arena[index]

            for direction in _EXPANSION_ORDER:
                pos = node.pos + direction.offset
                if not grid.in_bounds(pos.x, pos.y) or cleared[pos.x, pos.y]:
                    continue


                successor = PathNode(
                    pos=pos,
                    parent=index,
                    distance_cost=node.distance_cost + 1,
                    danger_cost=field.score(pos, direction, node.direction),
                    heuristic=_square_distance(pos, goal),
                    direction=direction,
                )

                if pos == goal or goal_room.contains(pos):
                    arena.append(successor)
                    path = self._materialize(arena, len(arena) - 1)
                    logger.debug(
                        f"Corridor {start_room} -> {goal_room}: {len(path)} cells, "
                        f"{expansions} expansions"
                    )
                    return path

                total = successor.total_cost
                known = best_cost.get(pos)
                if known is not None and known < total:
                    continue
                if known is None or total < known:
                    best_cost[pos] = total
                arena.append(successor)
                heapq.heappush(open_heap, (total, len(arena) - 1))

        logger.debug(f"No corridor between {start_room} and {goal_room}")
        return None

    @staticmethod
    def _materialize(arena: list[PathNode], index: int) -> list[Point]:
        path: list[Point] = []
        current: int | None = index
        while current is not None:
            node = arena[current]
            path.append(node.pos)
            current = node.parent
        path.reverse()
        return path


def paint_corridor(grid: Grid, path: list[Point]) -> int:
    """Paint every non-FLOOR cell of ``path`` as CORRIDOR.

    Room floors are never overwritten. Returns the number of cells that
    changed.
    """
    painted = 0
    for p in path:
        tile = grid.get_tile(p.x, p.y)
        if tile == Tile.FLOOR or tile == Tile.CORRIDOR:
            continue
        grid.set_tile(p.x, p.y, Tile.CORRIDOR)
        painted += 1
    return painted


def link_rooms_with_corridors(
    grid: Grid,
    a: Room,
    b: Room,
    pathfinder: CorridorPathfinder | None = None,
) -> bool:
    """Dig a corridor from room ``a`` to room ``b``.

    Returns False, leaving the grid untouched, when no route exists.
    """
    if pathfinder is None:
        pathfinder = CorridorPathfinder(grid)
    path = pathfinder.find_corridor(a, b)
    if path is None:
        return False
    paint_corridor(grid, path)
    return True
