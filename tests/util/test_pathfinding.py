from __future__ import annotations

import numpy as np

from warren import config
from warren.environment.grid import Grid
from warren.environment.room import Room
from warren.environment.tile_types import Tile
from warren.util.coordinates import Box, Direction, Point
from warren.util.pathfinding import (
    CorridorPathfinder,
    DangerField,
    link_rooms_with_corridors,
    paint_corridor,
)


def _room(cx: int, cy: int, hx: int = 1, hy: int = 1) -> Room:
    return Room(Box(center=Point(cx, cy), half=Point(hx, hy)))


def _assert_walkable_path(grid: Grid, path: list[Point]) -> None:
    for a, b in zip(path, path[1:], strict=False):
        assert abs(a.x - b.x) + abs(a.y - b.y) == 1
    for p in path:
        assert grid.in_bounds(p.x, p.y)


def test_two_rooms_on_empty_grid_are_connected() -> None:
    grid = Grid(12, 12)
    a = _room(2, 2)
    b = _room(9, 9)
    grid.fill_room(a)
    grid.fill_room(b)

    path = CorridorPathfinder(grid).find_corridor(a, b)

    assert path is not None
    assert path[0] == Point(2, 2)
    assert b.contains(path[-1])
    # The search stops at the first cell inside the goal room.
    assert not any(b.contains(p) for p in path[:-1])
    _assert_walkable_path(grid, path)


def test_open_grid_path_is_bounded() -> None:
    grid = Grid(30, 20)
    a = _room(3, 3)
    b = _room(25, 15)

    path = CorridorPathfinder(grid).find_corridor(a, b)

    assert path is not None
    _assert_walkable_path(grid, path)
    manhattan_to_footprint = (b.left - 3) + (b.bottom - 3)
    assert len(path) - 1 >= manhattan_to_footprint
    assert len(path) <= grid.width * grid.height


def test_sealed_goal_returns_none() -> None:
    grid = Grid(12, 12)
    a = _room(2, 2)
    b = _room(9, 9)
    grid.fill_room(a)
    grid.fill_room(b)
    # Ring of cleared space around the goal room's footprint [8, 10) x [8, 10).
    for x in range(7, 11):
        for y in range(7, 11):
            if x in (7, 10) or y in (7, 10):
                grid.set_tile(x, y, Tile.NONE)

    assert CorridorPathfinder(grid).find_corridor(a, b) is None


def test_expansion_budget_stops_search() -> None:
    grid = Grid(40, 40)
    a = _room(3, 3)
    b = _room(35, 35)

    assert CorridorPathfinder(grid, max_expansions=3).find_corridor(a, b) is None


def test_search_is_deterministic() -> None:
    grid = Grid(24, 24)
    a = _room(4, 4)
    b = _room(18, 12)
    obstacle = _room(11, 8, 2, 2)
    for room in (a, b, obstacle):
        grid.fill_room(room)

    finder = CorridorPathfinder(grid)
    assert finder.find_corridor(a, b) == finder.find_corridor(a, b)


def test_path_never_enters_cleared_space() -> None:
    grid = Grid(20, 12)
    a = _room(3, 6)
    b = _room(16, 6)
    # A cleared column with a single gap at y = 1.
    for y in range(12):
        if y != 1:
            grid.set_tile(10, y, Tile.NONE)

    path = CorridorPathfinder(grid, max_expansions=100_000).find_corridor(a, b)

    assert path is not None
    assert all(grid.get_tile(p.x, p.y) != Tile.NONE for p in path)
    assert Point(10, 1) in path


def test_paint_corridor_keeps_floors() -> None:
    grid = Grid(6, 3)
    grid.set_tile(0, 1, Tile.FLOOR)
    grid.set_tile(5, 1, Tile.FLOOR)
    path = [Point(x, 1) for x in range(6)]

    assert paint_corridor(grid, path) == 4
    assert grid.get_tile(0, 1) == Tile.FLOOR
    assert grid.get_tile(5, 1) == Tile.FLOOR
    assert np.all(grid.tiles[1:5, 1] == Tile.CORRIDOR)
    # Painting the same path again changes nothing.
    assert paint_corridor(grid, path) == 0


def test_link_rooms_with_corridors() -> None:
    grid = Grid(16, 16)
    a = _room(3, 3)
    b = _room(12, 12)
    grid.fill_room(a)
    grid.fill_room(b)

    assert link_rooms_with_corridors(grid, a, b)
    assert grid.count(Tile.CORRIDOR) > 0
    assert grid.count(Tile.FLOOR) == 8


# =============================================================================
# Danger score
# =============================================================================


def _danger_field() -> DangerField:
    """Start, goal and an unrelated room in a row, plus two corridor cells."""
    grid = Grid(20, 12)
    start = _room(3, 6)
    goal = _room(16, 6)
    other = _room(10, 6)
    for room in (start, goal, other):
        grid.fill_room(room)
    grid.set_tile(6, 6, Tile.CORRIDOR)
    grid.set_tile(8, 5, Tile.CORRIDOR)
    return DangerField.from_grid(grid, start, goal)


class TestDangerField:
    def test_plain_rock_straight_ahead_is_free(self) -> None:
        field = _danger_field()
        assert field.score(Point(6, 9), Direction.EAST, Direction.EAST) == 0

    def test_turning_costs_the_turn_penalty(self) -> None:
        field = _danger_field()
        turn = config.TURN_PENALTY
        assert field.score(Point(6, 9), Direction.EAST, Direction.NORTH) == turn
        # The first step out of the start has no parent direction.
        assert field.score(Point(6, 9), Direction.EAST, None) == turn

    def test_rooms_being_linked_are_not_obstacles(self) -> None:
        field = _danger_field()
        # Beside the start room and beside the goal room.
        assert field.score(Point(4, 6), Direction.EAST, Direction.EAST) == 0
        assert field.score(Point(14, 6), Direction.EAST, Direction.EAST) == 0

    def test_unrelated_room_is_an_obstacle(self) -> None:
        field = _danger_field()
        obstacle = config.OBSTACLE_DANGER
        # Beside the third room, and inside it.
        assert field.score(Point(8, 6), Direction.EAST, Direction.EAST) == obstacle
        assert field.score(Point(9, 6), Direction.EAST, Direction.EAST) == obstacle

    def test_existing_corridor_is_a_bonus(self) -> None:
        field = _danger_field()
        assert (
            field.score(Point(6, 6), Direction.EAST, Direction.EAST)
            == -config.CORRIDOR_REUSE_BONUS
        )

    def test_terms_add_up(self) -> None:
        field = _danger_field()
        # A corridor cell beside the third room, entered with a turn.
        assert field.score(Point(8, 5), Direction.NORTH, Direction.EAST) == -70


def test_straight_line_when_nothing_is_in_the_way() -> None:
    grid = Grid(20, 12)
    a = _room(3, 3)
    b = _room(15, 3)
    grid.fill_room(a)
    grid.fill_room(b)

    path = CorridorPathfinder(grid).find_corridor(a, b)

    assert path is not None
    assert all(p.y == 3 for p in path)


def test_search_follows_an_existing_corridor() -> None:
    grid = Grid(20, 12)
    a = _room(3, 3)
    b = _room(15, 3)
    grid.fill_room(a)
    grid.fill_room(b)
    # A parallel corridor one row up is cheaper than the straight line.
    detour = [Point(x, 4) for x in range(5, 13)]
    for p in detour:
        grid.set_tile(p.x, p.y, Tile.CORRIDOR)

    path = CorridorPathfinder(grid).find_corridor(a, b)

    assert path is not None
    _assert_walkable_path(grid, path)
    assert all(p in path for p in detour)
