"""Derive who can still win from the roster and the history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..models.entrant import Entrant
from ..models.history import WinEvent


@dataclass(frozen=True)
class PoolSummary:
    """Counters shown next to the draw stage.

    Attributes
    ----------
    total : int
        Number of entrants on the roster.
    winners : int
        Roster entrants that already appear in the history.
    remaining : int
        Entrants still eligible to win.
    """

    total: int
    winners: int
    remaining: int

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0


def _winner_ids(history: Iterable[WinEvent]) -> set[str]:
    return {event.entrant.id for event in history}


def eligible(roster: Sequence[Entrant], history: Iterable[WinEvent]) -> list[Entrant]:
    """Return roster entrants who have not won yet, in roster order.

    Winner ids that are not on the roster (for example after the roster
    file changed between sessions) are ignored.
    """
    won = _winner_ids(history)
    return [entrant for entrant in roster if entrant.id not in won]


def pool_summary(roster: Sequence[Entrant], history: Iterable[WinEvent]) -> PoolSummary:
    """Count total, already-won and remaining roster entrants."""
    won = _winner_ids(history)
    winners = sum(1 for entrant in roster if entrant.id in won)
    return PoolSummary(
        total=len(roster),
        winners=winners,
        remaining=len(roster) - winners,
    )


__all__ = ["PoolSummary", "eligible", "pool_summary"]
