"""Integer geometry in tile coordinates.

Origin (0, 0) is the bottom-left tile, x grows to the right and y grows
upwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from warren.types import TileCoord, TilePos


def _trunc_div(a: int, n: int) -> int:
    """Integer division rounding toward zero (C-style), unlike ``//``."""
    q = abs(a) // abs(n)
    return q if (a >= 0) == (n >= 0) else -q


@dataclass(frozen=True, slots=True)
class Point:
    """An integer (x, y) couple."""

    x: TileCoord = 0
    y: TileCoord = 0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, n: int) -> Point:
        return Point(self.x * n, self.y * n)

    def __truediv__(self, n: int) -> Point:
        """Divide both components by ``n``, truncating toward zero."""
        return Point(_trunc_div(self.x, n), _trunc_div(self.y, n))

    def __iter__(self) -> Iterator[TileCoord]:
        yield self.x
        yield self.y

    def as_tuple(self) -> TilePos:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


class Direction(Enum):
    """The four cardinal steps on the grid, valued by their (dx, dy) offset."""

    EAST = (1, 0)
    WEST = (-1, 0)
    NORTH = (0, 1)
    SOUTH = (0, -1)

    @property
    def offset(self) -> Point:
        dx, dy = self.value
        return Point(dx, dy)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE_DIRECTION[self]


_OPPOSITE_DIRECTION = {
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
}


@dataclass(frozen=True, slots=True)
class Box:
    """Axis aligned bounding box stored as a center and a half extent.

    The tiles covered by a box are ``[left, right) x [bottom, top)``.
    """

    center: Point
    half: Point

    def __post_init__(self) -> None:
        if self.half.x < 0 or self.half.y < 0:
            raise ValueError(f"Box half extent must be non-negative, got {self.half}")

    @classmethod
    def from_size(cls, width: int, height: int) -> Box:
        """Create a box covering ``[0, width) x [0, height)``.

        Raises:
            ValueError: If either dimension is odd or not positive, since
                the half extent would not be integral.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Box size must be positive, got {width}x{height}")
        if width % 2 or height % 2:
            raise ValueError(f"Box size must be even, got {width}x{height}")
        half = Point(width // 2, height // 2)
        return cls(center=half, half=half)

    @property
    def left(self) -> TileCoord:
        return self.center.x - self.half.x

    @property
    def right(self) -> TileCoord:
        return self.center.x + self.half.x

    @property
    def bottom(self) -> TileCoord:
        return self.center.y - self.half.y

    @property
    def top(self) -> TileCoord:
        return self.center.y + self.half.y

    @property
    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def top_right(self) -> Point:
        return Point(self.right, self.top)

    def size(self) -> Point:
        return self.half * 2

    def intersects(self, other: Box) -> bool:
        """Separating axis test. Touching edges do not count as overlap."""
        distance = other.center - self.center
        halfs = self.half + other.half
        return abs(distance.x) < halfs.x and abs(distance.y) < halfs.y

    def contains(self, p: Point, margin: int = 0) -> bool:
        """Check if ``p`` lies in the box grown by ``margin`` tiles on every side."""
        return (
            self.left - margin <= p.x < self.right + margin
            and self.bottom - margin <= p.y < self.top + margin
        )

    def __repr__(self) -> str:
        return f"Box(center={self.center}, half={self.half})"
