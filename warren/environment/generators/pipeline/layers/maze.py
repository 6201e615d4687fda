"""Maze layer: fills the remaining wall mass with a recursive-backtracker maze."""

from __future__ import annotations

from warren.environment.generators.maze import MazeFiller
from warren.environment.generators.pipeline.context import GenerationContext
from warren.environment.generators.pipeline.layer import SteppedGenerationLayer
from warren.util.steps import StepSequence


class MazeLayer(SteppedGenerationLayer):
    """Carves the maze one lattice move per step.

    Carving choices are drawn from the "dungeon.maze" stream.
    """

    def start(self, ctx: GenerationContext) -> MazeFiller:
        return MazeFiller(ctx.grid, ctx.rng.get("dungeon.maze"))

    def finish(self, ctx: GenerationContext, sequence: StepSequence) -> None:
        assert isinstance(sequence, MazeFiller)
        ctx.stats.maze_cells = sequence.cells_carved
