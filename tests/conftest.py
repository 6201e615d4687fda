from __future__ import annotations

import random

import pytest

from warren.types import RGB


class RecordingSink:
    """Pixel sink that remembers the last colour written to each pixel."""

    def __init__(self) -> None:
        self.pixels: dict[tuple[int, int], RGB] = {}
        self.writes = 0
        self.applied = 0

    def set_pixel(self, x: int, y: int, color: RGB) -> None:
        self.pixels[(x, y)] = color
        self.writes += 1

    def apply(self) -> None:
        self.applied += 1


@pytest.fixture
def rng() -> random.Random:
    """A seeded RNG so tests are reproducible."""
    return random.Random(12345)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
