"""Post-processing layers.

- ConnectorLayer: Opens every room onto the corridor network
- DeadEndLayer: Removes dead-end corridors one cell per step
- WallCleanupLayer: Clears walls that border nothing walkable
"""

from __future__ import annotations

from warren import config
from warren.environment.generators.pipeline.context import GenerationContext
from warren.environment.generators.pipeline.layer import (
    GenerationLayer,
    SteppedGenerationLayer,
)
from warren.environment.generators.postprocess import (
    DeadEndRemover,
    find_connectors,
    open_rooms,
    remove_isolated_walls,
)
from warren.util.steps import StepSequence


class ConnectorLayer(GenerationLayer):
    """Finds connectors and opens at least one per room.

    Args:
        extra_chance: Probability that each connector beyond the first is
            also opened.
    """

    def __init__(
        self, extra_chance: float = config.CONNECTOR_EXTRA_OPEN_CHANCE
    ) -> None:
        self.extra_chance = extra_chance

    def apply(self, ctx: GenerationContext) -> None:
        ctx.stats.connectors_found = find_connectors(ctx.grid, ctx.rooms)
        ctx.stats.connectors_opened = open_rooms(
            ctx.grid,
            ctx.rooms,
            ctx.rng.get("dungeon.connectors"),
            extra_chance=self.extra_chance,
        )


class DeadEndLayer(SteppedGenerationLayer):
    def start(self, ctx: GenerationContext) -> DeadEndRemover:
        return DeadEndRemover(ctx.grid)

    def finish(self, ctx: GenerationContext, sequence: StepSequence) -> None:
        assert isinstance(sequence, DeadEndRemover)
        ctx.stats.dead_ends_removed = sequence.removed


class WallCleanupLayer(GenerationLayer):
    def apply(self, ctx: GenerationContext) -> None:
        ctx.stats.walls_cleared = remove_isolated_walls(ctx.grid)
