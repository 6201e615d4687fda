"""Pipeline-based dungeon generation system.

This package provides a layered architecture for dungeon generation. Each
layer transforms a shared GenerationContext, and the pipeline outputs a
GeneratedDungeon.

Example usage:
    from warren.environment.generators.pipeline import generate_dungeon

    dungeon = generate_dungeon(seed=1234)

The pipeline can also be assembled manually for custom configurations:
    from warren.environment.generators.pipeline import (
        PipelineGenerator,
        QuadtreeLayer,
        RoomPlacementLayer,
        CorridorLayer,
    )

    generator = PipelineGenerator(
        layers=[QuadtreeLayer(), RoomPlacementLayer(), CorridorLayer()],
        bounds=Box.from_size(64, 64),
    )
"""

from .context import GenerationContext
from .factory import create_dungeon_pipeline, generate_dungeon
from .layer import GenerationLayer, SteppedGenerationLayer
from .layers import (
    ConnectorLayer,
    CorridorLayer,
    DeadEndLayer,
    MazeLayer,
    QuadtreeLayer,
    RoomPlacementLayer,
    WallCleanupLayer,
)
from .pipeline import PipelineGenerator, PipelineRun

__all__ = [
    "ConnectorLayer",
    "CorridorLayer",
    "DeadEndLayer",
    "GenerationContext",
    "GenerationLayer",
    "MazeLayer",
    "PipelineGenerator",
    "PipelineRun",
    "QuadtreeLayer",
    "RoomPlacementLayer",
    "SteppedGenerationLayer",
    "WallCleanupLayer",
    "create_dungeon_pipeline",
    "generate_dungeon",
]
