"""Space partitioning and room placement layers.

- QuadtreeLayer: Splits the dungeon bounds into a quadtree
- RoomPlacementLayer: Places one room per quadtree leaf and fills it as FLOOR
"""

from __future__ import annotations

import logging

from warren.environment.generators.pipeline.context import GenerationContext
from warren.environment.generators.pipeline.layer import GenerationLayer
from warren.environment.generators.quadtree import QuadtreeNode

logger = logging.getLogger(__name__)


class QuadtreeLayer(GenerationLayer):
    """Builds the quadtree over the whole dungeon.

    Split points are drawn from the "dungeon.quadtree" stream.
    """

    def apply(self, ctx: GenerationContext) -> None:
        root = QuadtreeNode(ctx.bounds)
        root.build_tree(0, ctx.max_depth, ctx.rng.get("dungeon.quadtree"), ctx.sizing)
        ctx.tree = root
        ctx.stats.leaves = len(root.leaves())
        logger.debug(
            f"Quadtree built: {ctx.stats.leaves} leaves, depth {root.depth()}"
        )


class RoomPlacementLayer(GenerationLayer):
    """Places a random room in every leaf large enough to hold one.

    Requires QuadtreeLayer to have run first.
    """

    def apply(self, ctx: GenerationContext) -> None:
        if ctx.tree is None:
            raise RuntimeError(
                "RoomPlacementLayer needs a quadtree; run QuadtreeLayer first"
            )
        rng = ctx.rng.get("dungeon.rooms")
        ctx.rooms = ctx.tree.add_rooms(ctx.grid, rng, ctx.sizing)
        ctx.stats.rooms_placed = len(ctx.rooms)
        logger.debug(f"Placed {len(ctx.rooms)} rooms in {ctx.stats.leaves} leaves")
