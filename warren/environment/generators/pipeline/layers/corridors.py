"""Corridor layer: links rooms up the quadtree with danger-weighted A*."""

from __future__ import annotations

import logging

from warren.environment.generators.pipeline.context import GenerationContext
from warren.environment.generators.pipeline.layer import GenerationLayer
from warren.environment.room import Room
from warren.util.pathfinding import CorridorPathfinder, paint_corridor

logger = logging.getLogger(__name__)


class CorridorLayer(GenerationLayer):
    """Digs CORRIDOR tiles between the rooms of sibling subtrees.

    A failed search leaves that pair unconnected; later layers do not assume
    the room graph is connected.
    """

    def __init__(self, max_expansions: int | None = None) -> None:
        self.max_expansions = max_expansions

    def apply(self, ctx: GenerationContext) -> None:
        if ctx.tree is None:
            raise RuntimeError(
                "CorridorLayer needs a quadtree; run QuadtreeLayer first"
            )

        pathfinder = CorridorPathfinder(ctx.grid, self.max_expansions)
        stats = ctx.stats

        def connect(a: Room, b: Room) -> None:
            stats.links_attempted += 1
            path = pathfinder.find_corridor(a, b)
            if path is None:
                stats.links_failed += 1
                logger.debug(f"Rooms {a} and {b} left unconnected")
                return
            stats.corridor_cells += paint_corridor(ctx.grid, path)

        ctx.tree.link_rooms(connect)
        logger.debug(
            f"Linked rooms: {stats.links_attempted} attempts, "
            f"{stats.links_failed} failed, {stats.corridor_cells} corridor cells"
        )
