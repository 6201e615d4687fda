from __future__ import annotations

import random
from collections.abc import Iterator

import numpy as np
import pytest

from warren.environment.generators.quadtree import Quadrant, QuadtreeNode
from warren.environment.grid import Grid
from warren.environment.room import Room, RoomSizing
from warren.environment.tile_types import Tile
from warren.util.coordinates import Box, Point


def _with_depth(
    node: QuadtreeNode, depth: int = 0
) -> Iterator[tuple[QuadtreeNode, int]]:
    yield node, depth
    for child in node.children.values():
        yield from _with_depth(child, depth + 1)


def _build(size: int, max_depth: int, seed: int) -> QuadtreeNode:
    root = QuadtreeNode(Box.from_size(size, size))
    root.build_tree(0, max_depth, random.Random(seed))
    return root


def test_quadrant_opposites() -> None:
    assert Quadrant.NE.opposite is Quadrant.SW
    assert Quadrant.NW.opposite is Quadrant.SE
    assert Quadrant.SE.opposite is Quadrant.NW
    assert Quadrant.SW.opposite is Quadrant.NE


class TestBuildTree:
    @pytest.mark.parametrize("seed", range(20))
    def test_leaves_respect_limits(self, seed: int) -> None:
        max_depth = 3
        min_size = RoomSizing().min_halfsize
        root = _build(100, max_depth, seed)

        for node, depth in _with_depth(root):
            if node.is_leaf:
                assert (
                    depth > max_depth
                    or node.box.half.x // 2 < min_size + 2
                    or node.box.half.y // 2 < min_size + 2
                )
            else:
                assert depth <= max_depth
                assert set(node.children) == set(Quadrant)

    @pytest.mark.parametrize("seed", range(20))
    def test_children_tile_their_parent(self, seed: int) -> None:
        root = _build(100, 3, seed)

        for node in root.iter_nodes():
            if node.is_leaf:
                continue
            parent = node.box
            area = 0
            for child in node.children.values():
                box = child.box
                assert box.half.x > 0 and box.half.y > 0
                assert parent.left <= box.left and box.right <= parent.right
                assert parent.bottom <= box.bottom and box.top <= parent.top
                area += box.size().x * box.size().y
            assert area == parent.size().x * parent.size().y

        nw = root.children[Quadrant.NW].box
        se = root.children[Quadrant.SE].box
        assert nw.left == root.box.left and nw.top == root.box.top
        assert se.right == root.box.right and se.bottom == root.box.bottom

    def test_depth_zero_splits_once(self) -> None:
        root = _build(100, 0, seed=1)
        assert root.depth() == 1
        assert len(root.leaves()) == 4

    def test_small_box_stays_leaf(self) -> None:
        root = _build(10, 3, seed=1)
        assert root.is_leaf
        assert root.depth() == 0
        assert root.leaves() == [root]


class TestAddRooms:
    @pytest.mark.parametrize("seed", range(10))
    def test_rooms_are_filled_and_inside_leaves(self, seed: int) -> None:
        root = _build(64, 3, seed)
        grid = Grid(64, 64)

        rooms = root.add_rooms(grid, random.Random(seed))

        assert rooms
        assert len(rooms) <= len(root.leaves())
        for leaf in root.leaves():
            if leaf.room is None:
                continue
            room = leaf.room
            assert leaf.box.left < room.left and room.right < leaf.box.right
            assert leaf.box.bottom < room.bottom and room.top < leaf.box.top
            footprint = grid.tiles[room.left : room.right, room.bottom : room.top]
            assert np.all(footprint == Tile.FLOOR)
        assert grid.count(Tile.FLOOR) == sum(r.size().x * r.size().y for r in rooms)
        assert all(node.room is None for node in root.iter_nodes() if not node.is_leaf)


def _square_of_rooms() -> tuple[QuadtreeNode, dict[Quadrant, Room]]:
    root = QuadtreeNode(Box.from_size(40, 40))
    rooms: dict[Quadrant, Room] = {}
    centers = {
        Quadrant.NW: Point(10, 30),
        Quadrant.NE: Point(30, 30),
        Quadrant.SW: Point(10, 10),
        Quadrant.SE: Point(30, 10),
    }
    for quadrant, center in centers.items():
        box = Box(center, Point(10, 10))
        rooms[quadrant] = Room(Box(center, Point(2, 2)))
        root.children[quadrant] = QuadtreeNode(box, room=rooms[quadrant])
    return root, rooms


class TestLinkRooms:
    def test_links_the_square(self) -> None:
        root, rooms = _square_of_rooms()
        links: list[tuple[Room, Room]] = []

        result = root.link_rooms(lambda a, b: links.append((a, b)))

        assert result is None
        q = Quadrant
        assert links == [
            (rooms[q.NE], rooms[q.NW]),
            (rooms[q.NW], rooms[q.SW]),
            (rooms[q.SW], rooms[q.SE]),
            (rooms[q.SE], rooms[q.NE]),
        ]

    @pytest.mark.parametrize("quadrant", list(Quadrant))
    def test_returns_opposite_room(self, quadrant: Quadrant) -> None:
        root, rooms = _square_of_rooms()
        assert root.link_rooms(lambda a, b: None, quadrant) is rooms[quadrant.opposite]

    def test_missing_rooms_are_skipped(self) -> None:
        root, rooms = _square_of_rooms()
        root.children[Quadrant.NW].room = None
        links: list[tuple[Room, Room]] = []

        root.link_rooms(lambda a, b: links.append((a, b)))

        assert links == [
            (rooms[Quadrant.SW], rooms[Quadrant.SE]),
            (rooms[Quadrant.SE], rooms[Quadrant.NE]),
        ]

    def test_leaf_returns_its_room(self) -> None:
        room = Room(Box(Point(5, 5), Point(1, 1)))
        leaf = QuadtreeNode(Box.from_size(10, 10), room=room)
        assert leaf.link_rooms(lambda a, b: None, Quadrant.NE) is room

    @pytest.mark.parametrize("seed", range(10))
    def test_generated_tree_links_every_room(self, seed: int) -> None:
        root = _build(100, 2, seed)
        rooms = root.add_rooms(Grid(100, 100), random.Random(seed))
        parent = {id(room): id(room) for room in rooms}

        def find(key: int) -> int:
            while parent[key] != key:
                key = parent[key]
            return key

        def union(a: Room, b: Room) -> None:
            parent[find(id(a))] = find(id(b))

        root.link_rooms(union)

        linked = {find(id(room)) for room in rooms}
        if all(leaf.room is not None for leaf in root.leaves()):
            assert len(linked) == 1


def test_draw_limits_covers_every_leaf(recording_sink) -> None:
    root = _build(40, 2, seed=3)
    root.draw_limits(recording_sink, random.Random(0))

    assert len(recording_sink.pixels) == 40 * 40
    assert recording_sink.applied == 1


def test_draw_rooms_only_paints_rooms(recording_sink) -> None:
    root = _build(64, 2, seed=3)
    rooms = root.add_rooms(Grid(64, 64), random.Random(3))
    root.draw_rooms(recording_sink, random.Random(0))

    assert len(recording_sink.pixels) == sum(r.size().x * r.size().y for r in rooms)
    assert recording_sink.applied == 1
