"""Deterministic random number generation with isolated streams.

Each generation stage (quadtree splitting, room sizing, maze carving, ...)
draws from its own random stream derived from one master seed. This ensures
that:

1. A dungeon is fully reproducible from the same master seed
2. Changes to one stage's random consumption don't cascade to the others
3. Adding or removing a stage doesn't shift the other stages' sequences

There is no process-wide provider. Each generation run owns an RNGProvider
(see GenerationContext) and hands streams to the code that needs them.

Usage:
    provider = RNGProvider(master_seed=1234)
    quadtree_rng = provider.get("dungeon.quadtree")
    split = quadtree_rng.randrange(2, 10)

Domain naming convention (hierarchical):
    - "dungeon.quadtree", "dungeon.rooms", "dungeon.maze", "dungeon.connectors"
    - "render.colors"
"""

from __future__ import annotations

import zlib
from collections.abc import MutableSequence, Sequence
from random import Random
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar

if TYPE_CHECKING:
    from warren.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    This wrapper allows callers to cache a reference that survives
    RNGProvider.reset(). All method calls are forwarded to the underlying
    Random instance, which is looked up fresh each time from the provider.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    def _rng(self) -> Random:
        """Get the current underlying RNG."""
        return self._provider._get_raw(self._domain)

    # -------------------------------------------------------------------------
    # Random method proxies
    # -------------------------------------------------------------------------

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng().random()

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Return randomly selected element from range(start, stop, step)."""
        return self._rng().randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)

    def shuffle(self, x: MutableSequence[Any]) -> None:
        """Shuffle list x in place."""
        self._rng().shuffle(x)


# Type alias for functions that accept either Random or RNGStream.
# Use this in type hints: `def foo(rng: RNG) -> int:`
RNG: TypeAlias = Random | RNGStream


def range_or_low(rng: RNG, low: int, high: int) -> int:
    """Sample uniformly from ``[low, high)``, or return ``low`` if it is empty.

    Mirrors the half-open integer sampling the generator was tuned with,
    where an empty range collapses to its lower bound instead of failing.
    """
    if high <= low:
        return low
    return rng.randrange(low, high)


class RNGProvider:
    """Provides isolated RNG streams for the stages of one generation run.

    Each domain gets its own Random instance derived deterministically
    from the master seed. Domains are identified by string names.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get an RNG stream for the named domain.

        Returns a proxy object that can be cached. The proxy automatically
        uses the current underlying RNG, even after reset().

        Args:
            domain: Hierarchical name like "dungeon.maze"

        Returns:
            An RNGStream proxy with the same interface as Random
        """
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        """Get the raw Random instance for a domain (internal use)."""
        if domain not in self._streams:
            if self._master_seed is None:
                # No seed: use system entropy for non-deterministic behavior
                self._streams[domain] = Random()
            else:
                # Use crc32 instead of hash() - hash() is randomized per Python
                # session via PYTHONHASHSEED, which would break cross-session
                # determinism
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reset all streams with a new master seed.

        Existing RNGStream proxies remain valid and will use the new streams.

        Args:
            master_seed: New master seed for all streams
        """
        self._master_seed = master_seed
        self._streams.clear()
