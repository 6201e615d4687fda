"""Quadtree space partitioning.

The dungeon bounds are split recursively into four quadrants around a random
point. Each leaf then receives at most one room, and rooms are linked pairwise
up the tree so that every subtree ends up connected to its siblings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

from warren.environment.room import Room, RoomSizing, create_random_room
from warren.util.coordinates import Box, Point
from warren.util.rng import RNG, range_or_low

if TYPE_CHECKING:
    from warren.environment.grid import Grid
    from warren.types import RGB
    from warren.view.render import PixelSink

logger = logging.getLogger(__name__)


class Quadrant(Enum):
    NW = "NW"
    NE = "NE"
    SW = "SW"
    SE = "SE"

    @property
    def opposite(self) -> Quadrant:
        """The diagonally opposite quadrant."""
        return _OPPOSITE_QUADRANT[self]


_OPPOSITE_QUADRANT = {
    Quadrant.NE: Quadrant.SW,
    Quadrant.NW: Quadrant.SE,
    Quadrant.SE: Quadrant.NW,
    Quadrant.SW: Quadrant.NE,
}

# Order in which subtrees are walked for room placement, linking and drawing.
_VISIT_ORDER = (Quadrant.NE, Quadrant.NW, Quadrant.SE, Quadrant.SW)

# The four sides of the square formed by the children's rooms.
_LINKED_PAIRS = (
    (Quadrant.NE, Quadrant.NW),
    (Quadrant.NW, Quadrant.SW),
    (Quadrant.SW, Quadrant.SE),
    (Quadrant.SE, Quadrant.NE),
)

ConnectRooms: TypeAlias = Callable[[Room, Room], object]


def _random_color(rng: RNG) -> RGB:
    return (rng.randrange(256), rng.randrange(256), rng.randrange(256))


def _draw_box(box: Box, sink: PixelSink, color: RGB) -> None:
    for x in range(box.left, box.right):
        for y in range(box.bottom, box.top):
            sink.set_pixel(x, y, color)


@dataclass(eq=False)
class QuadtreeNode:
    """A node of the partition. Leaves own at most one room."""

    box: Box
    room: Room | None = None
    children: dict[Quadrant, QuadtreeNode] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def build_tree(
        self,
        current_depth: int,
        max_depth: int,
        rng: RNG,
        sizing: RoomSizing | None = None,
    ) -> None:
        """Split this node recursively until the depth or size limit is hit.

        A node stays a leaf once ``current_depth`` exceeds ``max_depth``, or
        when a quarter of its half extent could no longer hold a minimal room
        on either axis.
        """
        if sizing is None:
            sizing = RoomSizing()
        if current_depth > max_depth:
            return
        min_size = sizing.min_halfsize
        box = self.box
        if box.half.x // 2 < min_size + 2 or box.half.y // 2 < min_size + 2:
            return

        # Offsets from the left/bottom edges are even, so every child gets
        # an integral half extent.
        x = box.left + 2 * range_or_low(rng, min_size + 1, box.half.x - min_size)
        y = box.bottom + 2 * range_or_low(rng, min_size + 1, box.half.y - min_size)

        left = (x - box.left) // 2
        right = (box.right - x) // 2
        up = (box.top - y) // 2
        down = (y - box.bottom) // 2

        quadrant_boxes = (
            (Quadrant.NW, Box(Point(x - left, y + up), Point(left, up))),
            (Quadrant.NE, Box(Point(x + right, y + up), Point(right, up))),
            (Quadrant.SW, Box(Point(x - left, y - down), Point(left, down))),
            (Quadrant.SE, Box(Point(x + right, y - down), Point(right, down))),
        )
        for quadrant, child_box in quadrant_boxes:
            child = QuadtreeNode(child_box)
            self.children[quadrant] = child
            child.build_tree(current_depth + 1, max_depth, rng, sizing)

    def _ordered_children(self) -> Iterator[tuple[Quadrant, QuadtreeNode]]:
        for quadrant in _VISIT_ORDER:
            child = self.children.get(quadrant)
            if child is not None:
                yield quadrant, child

    def add_rooms(
        self, grid: Grid, rng: RNG, sizing: RoomSizing | None = None
    ) -> list[Room]:
        """Place a room in every leaf and fill it into ``grid``.

        Returns:
            The rooms that could be placed, in visit order. Leaves too small
            for a room keep ``room = None``.
        """
        rooms: list[Room] = []
        self._add_rooms(grid, rng, sizing, rooms)
        return rooms

    def _add_rooms(
        self,
        grid: Grid,
        rng: RNG,
        sizing: RoomSizing | None,
        rooms: list[Room],
    ) -> None:
        for _, child in self._ordered_children():
            child._add_rooms(grid, rng, sizing, rooms)
        if not self.is_leaf:
            return
        self.room = create_random_room(self.box, rng, sizing)
        if self.room is None:
            logger.debug(f"Leaf {self.box} is too small for a room")
        else:
            rooms.append(self.room)
        grid.fill_room(self.room)

    def link_rooms(
        self, connect: ConnectRooms, quadrant: Quadrant | None = None
    ) -> Room | None:
        """Connect the rooms of sibling subtrees, bottom-up.

        Each internal node links one representative room from each child
        around the square NE-NW-SW-SE. It hands its parent the room of the
        child diagonally opposite to its own position, so each level links a
        different part of the subtree.

        Args:
            connect: Called with each pair of rooms to join.
            quadrant: This node's position in its parent. None for the root.

        Returns:
            The representative room for the parent, or None.
        """
        if self.is_leaf:
            return self.room

        representatives: dict[Quadrant, Room | None] = {}
        for child_quadrant, child in self._ordered_children():
            representatives[child_quadrant] = child.link_rooms(connect, child_quadrant)

        for a_quadrant, b_quadrant in _LINKED_PAIRS:
            a = representatives.get(a_quadrant)
            b = representatives.get(b_quadrant)
            if a is None or b is None:
                continue
            connect(a, b)

        if quadrant is None:
            return None
        return representatives.get(quadrant.opposite)

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def iter_nodes(self) -> Iterator[QuadtreeNode]:
        """Yield this node and all descendants, parents before children."""
        yield self
        for _, child in self._ordered_children():
            yield from child.iter_nodes()

    def leaves(self) -> list[QuadtreeNode]:
        return [node for node in self.iter_nodes() if node.is_leaf]

    def depth(self) -> int:
        """Number of levels below this node. A leaf has depth 0."""
        if self.is_leaf:
            return 0
        return 1 + max(child.depth() for child in self.children.values())

    # -------------------------------------------------------------------------
    # Visualization
    # -------------------------------------------------------------------------

    def draw_limits(self, sink: PixelSink, rng: RNG) -> None:
        """Paint every leaf's box in its own random colour."""
        for leaf in self.leaves():
            _draw_box(leaf.box, sink, _random_color(rng))
        sink.apply()

    def draw_rooms(self, sink: PixelSink, rng: RNG) -> None:
        """Paint every placed room in its own random colour."""
        for leaf in self.leaves():
            if leaf.room is not None:
                _draw_box(leaf.room.box, sink, _random_color(rng))
        sink.apply()
