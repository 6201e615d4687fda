"""Pipeline generator that orchestrates layer-based dungeon generation.

The PipelineGenerator runs a sequence of GenerationLayers, each transforming
a shared GenerationContext. This enables compositional generation where each
layer focuses on one stage of the dungeon.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from warren import config
from warren.environment.generators.base import BaseDungeonGenerator, GeneratedDungeon
from warren.environment.tile_types import Tile
from warren.types import RandomSeed
from warren.util.coordinates import Box
from warren.util.steps import StepSequence, run_steps

from .context import GenerationContext
from .layer import SteppedGenerationLayer

if TYPE_CHECKING:
    from warren.environment.room import RoomSizing
    from warren.view.render import PixelSink

    from .layer import GenerationLayer

logger = logging.getLogger(__name__)


def _layer_finished(ctx: GenerationContext, layer: GenerationLayer) -> None:
    logger.debug(f"{type(layer).__name__} done")
    ctx.grid.flush()


def _log_summary(ctx: GenerationContext) -> None:
    stats = ctx.stats
    grid = ctx.grid
    logger.info(
        f"Generated {grid.width}x{grid.height} dungeon (seed={ctx.seed!r}): "
        f"{stats.rooms_placed} rooms in {stats.leaves} leaves, "
        f"{stats.links_attempted - stats.links_failed}/{stats.links_attempted} "
        f"links, {stats.maze_cells} maze cells, "
        f"{stats.connectors_opened} connectors opened, "
        f"{stats.dead_ends_removed} dead ends removed, "
        f"{grid.count(Tile.FLOOR) + grid.count(Tile.CORRIDOR)} walkable tiles"
    )


class PipelineRun:
    """A pipeline run that can be advanced one step at a time.

    A plain layer takes a single step. A SteppedGenerationLayer takes one
    step per move of its state machine, so a host can animate the maze fill
    or dead-end removal by flushing the grid's sink between steps.

    Example:
        run = generator.start()
        while run.step():
            run.ctx.grid.flush()
        dungeon = run.result()
    """

    def __init__(self, layers: list[GenerationLayer], ctx: GenerationContext) -> None:
        self.ctx = ctx
        self._layers = list(layers)
        self._index = 0
        self._active: StepSequence | None = None
        self.done = not self._layers

    @property
    def current_layer(self) -> GenerationLayer | None:
        if self.done:
            return None
        return self._layers[self._index]

    def step(self) -> bool:
        """Advance the run. Returns True while work remains."""
        if self.done:
            return False

        layer = self._layers[self._index]
        if isinstance(layer, SteppedGenerationLayer):
            if self._active is None:
                self._active = layer.start(self.ctx)
            if self._active.step():
                return True
            layer.finish(self.ctx, self._active)
            self._active = None
        else:
            layer.apply(self.ctx)

        _layer_finished(self.ctx, layer)
        self._index += 1
        if self._index >= len(self._layers):
            self.done = True
            _log_summary(self.ctx)
            return False
        return True

    def run(self) -> GeneratedDungeon:
        """Run every remaining step and return the result."""
        run_steps(self)
        return self.result()

    def result(self) -> GeneratedDungeon:
        if not self.done:
            raise RuntimeError("Pipeline run has not finished yet")
        return self.ctx.to_generated_dungeon()


class PipelineGenerator(BaseDungeonGenerator):
    """Dungeon generator that runs layers sequentially on a shared context.

    The pipeline creates an all-WALL GenerationContext and passes it through
    each layer in order. Layers modify the context in place, building up the
    final dungeon.

    Example:
        generator = PipelineGenerator(
            layers=[
                QuadtreeLayer(),
                RoomPlacementLayer(),
                CorridorLayer(),
                MazeLayer(),
            ],
            bounds=Box.from_size(64, 64),
            seed=12345,
        )
        dungeon = generator.generate()

    Attributes:
        layers: List of GenerationLayer instances to apply.
        seed: Optional master seed for reproducible generation.
    """

    def __init__(
        self,
        layers: list[GenerationLayer],
        bounds: Box,
        max_depth: int = config.QUADTREE_MAX_DEPTH,
        seed: RandomSeed = None,
        sizing: RoomSizing | None = None,
        sink: PixelSink | None = None,
    ) -> None:
        """Initialize the pipeline generator.

        Args:
            layers: List of GenerationLayer instances to apply in order.
            bounds: The dungeon's extent, anchored at the origin.
            max_depth: Depth limit for the quadtree.
            seed: Optional master seed for deterministic generation.
            sizing: Room size limits. Defaults to the values in config.
            sink: Optional pixel sink that mirrors every tile write.
        """
        super().__init__(bounds)
        self.layers = layers
        self.max_depth = max_depth
        self.seed = seed
        self.sizing = sizing
        self.sink = sink

    def create_context(self) -> GenerationContext:
        return GenerationContext.create(
            bounds=self.bounds,
            max_depth=self.max_depth,
            seed=self.seed,
            sizing=self.sizing,
            sink=self.sink,
        )

    def generate(self) -> GeneratedDungeon:
        """Generate a dungeon by running all layers in sequence.

        Returns:
            GeneratedDungeon containing the grid, rooms, quadtree and stats.
        """
        ctx = self.create_context()

        for layer in self.layers:
            layer.apply(ctx)
            _layer_finished(ctx, layer)

        _log_summary(ctx)
        return ctx.to_generated_dungeon()

    def start(self) -> PipelineRun:
        """Begin a run that the caller advances with ``PipelineRun.step()``."""
        return PipelineRun(self.layers, self.create_context())
