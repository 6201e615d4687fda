"""Generation context for the pipeline dungeon generator.

The GenerationContext is a mutable container that holds all state during
dungeon generation. Each layer in the pipeline receives the same context and
modifies it in place. This avoids copying the tile array between layers and
replaces any process-wide dungeon state: a run owns its context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from warren import config
from warren.environment.generators.base import GeneratedDungeon, GenerationStats
from warren.environment.grid import Grid
from warren.environment.room import Room, RoomSizing
from warren.types import RandomSeed
from warren.util.coordinates import Box
from warren.util.rng import RNGProvider

if TYPE_CHECKING:
    from warren.environment.generators.quadtree import QuadtreeNode
    from warren.view.render import PixelSink


@dataclass
class GenerationContext:
    """Mutable state container passed through the generation pipeline.

    Attributes:
        bounds: The dungeon's extent. Always anchored at the origin.
        max_depth: Depth limit for the quadtree.
        sizing: Room size limits.
        grid: The tile grid every layer reads and writes.
        rng: Provider of the per-stage random streams for this run.
        rooms: Placed rooms, filled in by RoomPlacementLayer.
        tree: Quadtree root, set by QuadtreeLayer.
        stats: Counters each layer adds to.
    """

    bounds: Box
    max_depth: int
    sizing: RoomSizing
    grid: Grid
    rng: RNGProvider
    rooms: list[Room] = field(default_factory=list)
    tree: QuadtreeNode | None = None
    stats: GenerationStats = field(default_factory=GenerationStats)

    @classmethod
    def create(
        cls,
        bounds: Box,
        max_depth: int = config.QUADTREE_MAX_DEPTH,
        seed: RandomSeed = None,
        sizing: RoomSizing | None = None,
        sink: PixelSink | None = None,
    ) -> GenerationContext:
        """Create a context with an all-WALL grid covering ``bounds``.

        Raises:
            ValueError: If ``bounds`` is not anchored at the origin, is empty,
                or ``max_depth`` is negative.
        """
        if bounds.left != 0 or bounds.bottom != 0:
            raise ValueError(f"Dungeon bounds must start at the origin, got {bounds}")
        if bounds.half.x <= 0 or bounds.half.y <= 0:
            raise ValueError(f"Dungeon bounds must not be empty, got {bounds}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")

        return cls(
            bounds=bounds,
            max_depth=max_depth,
            sizing=sizing if sizing is not None else RoomSizing(),
            grid=Grid.from_bounds(bounds, sink=sink),
            rng=RNGProvider(seed),
        )

    @property
    def seed(self) -> RandomSeed:
        return self.rng.master_seed

    def to_generated_dungeon(self) -> GeneratedDungeon:
        return GeneratedDungeon(
            grid=self.grid,
            rooms=self.rooms,
            tree=self.tree,
            seed=self.seed,
            stats=self.stats,
        )
