"""Utility helpers shared across the royale package."""

from royale.util.rng import (
    MinStdRandom,
    MissingRNGError,
    RandomSource,
    StdlibRandom,
    rand_int,
    require_rng_param,
    resolve_rng,
)

__all__ = [
    "MinStdRandom",
    "MissingRNGError",
    "RandomSource",
    "StdlibRandom",
    "rand_int",
    "require_rng_param",
    "resolve_rng",
]
