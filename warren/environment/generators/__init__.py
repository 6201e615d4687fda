"""Dungeon generation algorithms for Warren.

This package provides:
- QuadtreeNode: Recursive space partitioning with one room per leaf
- MazeFiller: Resumable recursive-backtracker maze
- Post-processing: connectors, dead-end removal, isolated-wall cleanup
- PipelineGenerator: Layered pipeline that sequences all of the above

Most callers only need generate_dungeon().
"""

from .base import BaseDungeonGenerator, GeneratedDungeon, GenerationStats
from .maze import MazeFiller
from .pipeline import (
    ConnectorLayer,
    CorridorLayer,
    DeadEndLayer,
    GenerationContext,
    GenerationLayer,
    MazeLayer,
    PipelineGenerator,
    PipelineRun,
    QuadtreeLayer,
    RoomPlacementLayer,
    SteppedGenerationLayer,
    WallCleanupLayer,
    create_dungeon_pipeline,
    generate_dungeon,
)
from .postprocess import (
    DeadEndRemover,
    find_connectors,
    open_rooms,
    remove_isolated_walls,
)
from .quadtree import Quadrant, QuadtreeNode

__all__ = [
    "BaseDungeonGenerator",
    "ConnectorLayer",
    "CorridorLayer",
    "DeadEndLayer",
    "DeadEndRemover",
    "GeneratedDungeon",
    "GenerationContext",
    "GenerationLayer",
    "GenerationStats",
    "MazeFiller",
    "MazeLayer",
    "PipelineGenerator",
    "PipelineRun",
    "Quadrant",
    "QuadtreeLayer",
    "QuadtreeNode",
    "RoomPlacementLayer",
    "SteppedGenerationLayer",
    "WallCleanupLayer",
    "create_dungeon_pipeline",
    "find_connectors",
    "generate_dungeon",
    "open_rooms",
    "remove_isolated_walls",
]
