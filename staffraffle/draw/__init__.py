"""Eligibility tracking and winner selection."""

from .eligibility import PoolSummary, eligible, pool_summary
from .engine import DrawEngine
from .random_source import (
    RandomSource,
    default_random_source,
    pick_index,
    seeded_random_source,
)

__all__ = [
    "DrawEngine",
    "PoolSummary",
    "RandomSource",
    "default_random_source",
    "eligible",
    "pick_index",
    "pool_summary",
    "seeded_random_source",
]
