"""Random sources used to pick winners."""

from __future__ import annotations

import random
from typing import Callable

RandomSource = Callable[[], float]
"""Zero-argument callable returning a uniform float in ``[0, 1)``."""


def default_random_source() -> RandomSource:
    """Return the module-level Mersenne Twister ``random.random``."""
    return random.random


def seeded_random_source(seed: int) -> RandomSource:
    """Return a reproducible source backed by its own ``random.Random``.

    Two sources built from the same seed yield the same sequence.
    """
    return random.Random(seed).random


def pick_index(random_source: RandomSource, pool_size: int) -> int:
    """Map one draw from ``random_source`` to an index in ``range(pool_size)``.

    Raises
    ------
    ValueError
        If ``pool_size`` is not positive or the source returns a value
        outside ``[0, 1)``.
    """
    if pool_size <= 0:
        raise ValueError("pool_size must be positive")
    value = random_source()
    if not 0.0 <= value < 1.0:
        raise ValueError(f"Random source returned {value!r}, expected a value in [0, 1)")
    # Floating point rounding can push value * size up to size itself.
    return min(int(value * pool_size), pool_size - 1)


__all__ = [
    "RandomSource",
    "default_random_source",
    "pick_index",
    "seeded_random_source",
]
