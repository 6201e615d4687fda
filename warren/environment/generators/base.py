"""Base classes for dungeon generation."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from warren.environment.generators.quadtree import QuadtreeNode
    from warren.environment.grid import Grid
    from warren.environment.room import Room
    from warren.types import RandomSeed
    from warren.util.coordinates import Box


@dataclass
class GenerationStats:
    """Counters filled in by the pipeline stages."""

    leaves: int = 0
    rooms_placed: int = 0
    links_attempted: int = 0
    links_failed: int = 0
    corridor_cells: int = 0
    maze_cells: int = 0
    connectors_found: int = 0
    connectors_opened: int = 0
    dead_ends_removed: int = 0
    walls_cleared: int = 0


@dataclass
class GeneratedDungeon:
    """Everything a generator produces.

    Attributes:
        grid: The finished tile grid.
        rooms: Placed rooms, in placement order.
        tree: Root of the quadtree the rooms were placed in.
        seed: The master seed the run was generated from.
        stats: Per-stage counters.
    """

    grid: Grid
    rooms: list[Room]
    tree: QuadtreeNode | None
    seed: RandomSeed
    stats: GenerationStats = field(default_factory=GenerationStats)


class BaseDungeonGenerator(abc.ABC):
    """Abstract base class for dungeon generation algorithms."""

    def __init__(self, bounds: Box) -> None:
        self.bounds = bounds

    @abc.abstractmethod
    def generate(self) -> GeneratedDungeon:
        """Generate the dungeon layout."""
        raise NotImplementedError
