"""RNG utilities for deterministic matches.

The simulation draws every random number through a ``RandomSource``: any
object with a ``next()`` method returning a float in ``[0, 1)``. Tests
inject a seeded ``MinStdRandom`` for reproducible runs; production code may
wrap ``random.Random`` with ``StdlibRandom``. Helpers here fail loudly when
no generator was supplied rather than silently creating an unseeded one.
"""

import math
import random
from typing import List, Optional, Protocol, runtime_checkable

_MINSTD_MODULUS = 2147483647
_MINSTD_MULTIPLIER = 48271


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but not available.

    This error indicates a bug in match setup - every component that draws
    random numbers must receive the match's generator explicitly.
    """

    pass


@runtime_checkable
class RandomSource(Protocol):
    """Minimal generator interface used by the simulation."""

    def next(self) -> float:
        """Return a float in [0, 1)."""
        ...


class MinStdRandom:
    """Park-Miller "minimal standard" linear congruential generator.

    Cheap and fully reproducible across platforms for a given seed.

    Example:
        rng = MinStdRandom(42)
        heading = rng.next() * 2 * math.pi
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int = 1) -> None:
        state = int(seed) % _MINSTD_MODULUS
        # Zero is a fixed point of the recurrence
        self._state = state if state > 0 else 1

    def next(self) -> float:
        self._state = (_MINSTD_MULTIPLIER * self._state) % _MINSTD_MODULUS
        return (self._state - 1) / (_MINSTD_MODULUS - 1)

    @property
    def state(self) -> int:
        return self._state


class StdlibRandom:
    """Adapter exposing ``random.Random`` through the ``RandomSource`` interface."""

    __slots__ = ("_random",)

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self._random = rng if rng is not None else random.Random(seed)

    def next(self) -> float:
        return self._random.random()


def require_rng_param(rng: Optional[RandomSource], context: str) -> RandomSource:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The generator that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated generator

    Raises:
        MissingRNGError: If rng is None or lacks a ``next()`` method
    """
    if rng is None:
        raise MissingRNGError(f"RNG required: {context}. Pass the match RNG explicitly.")
    if not isinstance(rng, RandomSource):
        raise MissingRNGError(
            f"RNG for {context} must provide next() -> float, got {type(rng).__name__}"
        )
    return rng


def resolve_rng(rng: Optional[RandomSource] = None, seed: Optional[int] = None) -> RandomSource:
    """Pick the generator for a new match: explicit rng, then seed, then a fresh one."""
    if rng is not None:
        return require_rng_param(rng, "resolve_rng")
    if seed is not None:
        return MinStdRandom(seed)
    return StdlibRandom(random.Random())


def rand_int(rng: RandomSource, low: int, high: int) -> int:
    """Uniform integer in the inclusive range [low, high]."""
    return low + min(high - low, int(math.floor(rng.next() * (high - low + 1))))


def rand_angle(rng: RandomSource) -> float:
    """Uniform angle in [0, 2*pi)."""
    return rng.next() * 2.0 * math.pi



def rand_sample_indices(rng: RandomSource, population: int, k: int) -> List[int]:
    """``k`` distinct indices drawn uniformly from ``range(population)``, ascending.

    Partial Fisher-Yates shuffle: exactly ``k`` draws from ``rng``.
    """
    k = max(0, min(k, population))
    pool = list(range(population))
    for i in range(k):
        remaining = population - i
        j = i + min(remaining - 1, int(rng.next() * remaining))
        pool[i], pool[j] = pool[j], pool[i]
    return sorted(pool[:k])
