"""Rooms and their random placement inside a quadtree leaf."""

from __future__ import annotations

from dataclasses import dataclass, field

from warren import config
from warren.types import TileCoord
from warren.util.coordinates import Box, Point
from warren.util.rng import RNG, range_or_low


@dataclass(frozen=True)
class RoomSizing:
    """Size limits for room placement.

    Attributes:
        min_halfsize: Smallest half extent a room may have on either axis.
        max_halfsize: Exclusive upper bound for the sampled half extent.
        margin: Tiles kept free between a room and its leaf's edges.
    """

    min_halfsize: int = config.MIN_ROOM_HALFSIZE
    max_halfsize: int = config.MAX_ROOM_HALFSIZE
    margin: int = config.MIN_ROOM_MARGIN

    def __post_init__(self) -> None:
        if self.min_halfsize < 1:
            raise ValueError(f"min_halfsize must be >= 1, got {self.min_halfsize}")
        if self.max_halfsize < self.min_halfsize:
            raise ValueError(
                f"max_halfsize ({self.max_halfsize}) must be >= "
                f"min_halfsize ({self.min_halfsize})"
            )
        if self.margin < 1:
            raise ValueError(f"margin must be >= 1, got {self.margin}")


@dataclass(eq=False)
class Room:
    """A rectangular room: a box of floor plus the wall cells that could open it.

    The room never changes size once placed. ``connectors`` is filled in by
    post-processing and keeps insertion order without duplicates.
    """

    box: Box
    connectors: list[Point] = field(default_factory=list)

    @property
    def center(self) -> Point:
        return self.box.center

    @property
    def half(self) -> Point:
        return self.box.half

    @property
    def left(self) -> TileCoord:
        return self.box.left

    @property
    def right(self) -> TileCoord:
        return self.box.right

    @property
    def bottom(self) -> TileCoord:
        return self.box.bottom

    @property
    def top(self) -> TileCoord:
        return self.box.top

    def size(self) -> Point:
        return self.box.size()

    def contains(self, p: Point, margin: int = 0) -> bool:
        return self.box.contains(p, margin)

    def intersects(self, other: Room | Box) -> bool:
        other_box = other.box if isinstance(other, Room) else other
        return self.box.intersects(other_box)

    def add_connector(self, p: Point) -> bool:
        """Record ``p`` as a connector. Returns False if it was already known."""
        if p in self.connectors:
            return False
        self.connectors.append(p)
        return True

    def __repr__(self) -> str:
        return f"Room(center={self.center}, half={self.half})"


def create_random_room(
    bounds: Box, rng: RNG, sizing: RoomSizing | None = None
) -> Room | None:
    """Place a randomly sized room inside ``bounds``.

    The room keeps ``sizing.margin`` tiles of clearance from every edge of
    ``bounds``. Returns None when ``bounds`` is too small to hold even the
    smallest room with that clearance.
    """
    if sizing is None:
        sizing = RoomSizing()
    min_size = sizing.min_halfsize
    margin = sizing.margin

    if bounds.half.x < min_size + margin or bounds.half.y < min_size + margin:
        return None

    w = range_or_low(rng, min_size, min(bounds.half.x - margin, sizing.max_halfsize))
    h = range_or_low(rng, min_size, min(bounds.half.y - margin, sizing.max_halfsize))

    # The upper limits are exclusive, so the far side keeps exactly `margin`
    # tiles when the center lands on the last allowed value.
    x = range_or_low(rng, bounds.left + w + margin, bounds.right - w - (margin - 1))
    y = range_or_low(rng, bounds.bottom + h + margin, bounds.top - h - (margin - 1))

    return Room(Box(center=Point(x, y), half=Point(w, h)))
