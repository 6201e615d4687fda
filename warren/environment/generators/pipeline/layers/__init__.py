"""Generation layers for the pipeline dungeon generator.

Each layer transforms the GenerationContext in a specific way:
- Room layers: Partition space and place rooms
- Corridor layers: Link rooms with A* corridors
- Maze layers: Fill the leftover wall mass with a maze
- Cleanup layers: Open rooms, remove dead ends, clear orphaned walls
"""

from .cleanup import ConnectorLayer, DeadEndLayer, WallCleanupLayer
from .corridors import CorridorLayer
from .maze import MazeLayer
from .rooms import QuadtreeLayer, RoomPlacementLayer

__all__ = [
    "ConnectorLayer",
    "CorridorLayer",
    "DeadEndLayer",
    "MazeLayer",
    "QuadtreeLayer",
    "RoomPlacementLayer",
    "WallCleanupLayer",
]
