"""Abstract base classes for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
transforms the GenerationContext in some way - partitioning space, placing
rooms, digging corridors, or cleaning up the result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from warren.util.steps import StepSequence, run_steps

if TYPE_CHECKING:
    from .context import GenerationContext


class GenerationLayer(ABC):
    """Abstract base class for dungeon generation layers.

    Layers are applied sequentially by the PipelineGenerator. Each layer
    receives a GenerationContext and modifies it in place.

    Subclasses must implement the apply() method to perform their specific
    generation logic.
    """

    @abstractmethod
    def apply(self, ctx: GenerationContext) -> None:
        """Apply this layer's generation logic to the context.

        This method should modify the context in place. It may:
        - Modify tiles (ctx.grid)
        - Add rooms or the quadtree (ctx.rooms, ctx.tree)
        - Update counters (ctx.stats)
        - Draw from a named stream of ctx.rng

        Args:
            ctx: The generation context to modify.
        """
        raise NotImplementedError


class SteppedGenerationLayer(GenerationLayer):
    """A layer whose work can be advanced one step at a time.

    Subclasses implement start() to build the state machine and may override
    finish() to record results once it is done. apply() runs the whole thing
    in one call; PipelineRun steps it instead.
    """

    @abstractmethod
    def start(self, ctx: GenerationContext) -> StepSequence:
        """Create the step sequence that performs this layer's work."""
        raise NotImplementedError

    def finish(self, ctx: GenerationContext, sequence: StepSequence) -> None:
        """Called once ``sequence`` has reported that it is done."""

    def apply(self, ctx: GenerationContext) -> None:
        sequence = self.start(ctx)
        run_steps(sequence)
        self.finish(ctx, sequence)
