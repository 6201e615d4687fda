"""Factory functions for creating pre-configured pipelines.

These functions provide convenient ways to create the standard dungeon
pipeline without needing to manually assemble layers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from warren import config
from warren.environment.generators.base import GeneratedDungeon
from warren.types import RandomSeed
from warren.util.coordinates import Box

from .layers import (
    ConnectorLayer,
    CorridorLayer,
    DeadEndLayer,
    MazeLayer,
    QuadtreeLayer,
    RoomPlacementLayer,
    WallCleanupLayer,
)
from .pipeline import PipelineGenerator

if TYPE_CHECKING:
    from warren.environment.room import RoomSizing
    from warren.view.render import PixelSink


def create_dungeon_pipeline(
    bounds: Box | None = None,
    max_depth: int = config.QUADTREE_MAX_DEPTH,
    seed: RandomSeed = None,
    sizing: RoomSizing | None = None,
    sink: PixelSink | None = None,
) -> PipelineGenerator:
    """Create the standard dungeon pipeline.

    The dungeon pipeline generates:
    1. A quadtree over the whole bounds (QuadtreeLayer)
    2. One room per leaf, filled as FLOOR (RoomPlacementLayer)
    3. A* corridors between sibling subtrees (CorridorLayer)
    4. A maze through the remaining walls (MazeLayer)
    5. Room entrances onto the corridors (ConnectorLayer)
    6. Removal of every dead end (DeadEndLayer)
    7. Clearing of walls that touch nothing walkable (WallCleanupLayer)

    Args:
        bounds: The dungeon's extent. Defaults to a square of
            config.DEFAULT_DUNGEON_SIZE tiles.
        max_depth: Depth limit for the quadtree.
        seed: Optional master seed. Defaults to config.RANDOM_SEED.
        sizing: Room size limits. Defaults to the values in config.
        sink: Optional pixel sink that mirrors every tile write.

    Returns:
        A configured PipelineGenerator.
    """
    if bounds is None:
        bounds = Box.from_size(config.DEFAULT_DUNGEON_SIZE, config.DEFAULT_DUNGEON_SIZE)
    if seed is None:
        seed = config.RANDOM_SEED

    layers = [
        QuadtreeLayer(),
        RoomPlacementLayer(),
        CorridorLayer(),
        MazeLayer(),
        ConnectorLayer(),
        DeadEndLayer(),
        WallCleanupLayer(),
    ]

    return PipelineGenerator(
        layers=layers,
        bounds=bounds,
        max_depth=max_depth,
        seed=seed,
        sizing=sizing,
        sink=sink,
    )


def generate_dungeon(
    bounds: Box | None = None,
    max_depth: int = config.QUADTREE_MAX_DEPTH,
    seed: RandomSeed = None,
    sizing: RoomSizing | None = None,
    sink: PixelSink | None = None,
) -> GeneratedDungeon:
    """Generate a complete dungeon in one call.

    Example:
        dungeon = generate_dungeon(Box.from_size(64, 64), seed="crypt")
        print(dungeon.grid.to_ascii())
    """
    return create_dungeon_pipeline(bounds, max_depth, seed, sizing, sink).generate()
