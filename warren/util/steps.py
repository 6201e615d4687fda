"""Driving resumable step sequences.

Long-running generation stages (maze carving, dead-end removal) are written
as explicit state machines rather than as one blocking call. Each exposes
``step() -> bool``: perform one unit of work and report whether more work
remains. A host can animate or interleave them by calling ``step()`` from its
own loop, or hand them to :func:`run_steps` to finish them in one go.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class StepSequence(Protocol):
    """Anything that advances one step at a time."""

    def step(self) -> bool:
        """Do one unit of work. Returns True while work remains."""
        ...


def run_steps(
    sequence: StepSequence,
    on_step: Callable[[int], None] | None = None,
    max_steps: int | None = None,
) -> int:
    """Advance ``sequence`` until it reports that it is finished.

    Args:
        sequence: The state machine to drive.
        on_step: Optional callback invoked after every step with the number
            of steps taken so far (e.g. to flush a pixel sink for animation).
        max_steps: Optional safety limit.

    Returns:
        The number of steps taken, including the final one that reported
        completion.

    Raises:
        RuntimeError: If ``max_steps`` is reached before the sequence ends.
    """
    count = 0
    while True:
        if max_steps is not None and count >= max_steps:
            raise RuntimeError(
                f"Step sequence {type(sequence).__name__} did not finish "
                f"within {max_steps} steps"
            )
        more = sequence.step()
        count += 1
        if on_step is not None:
            on_step(count)
        if not more:
            return count
