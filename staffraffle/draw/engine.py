"""Engine that selects a single winner from the eligible pool."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from ..errors import EmptyPoolError
from ..models.entrant import Entrant
from ..models.history import WinEvent
from .random_source import RandomSource, default_random_source, pick_index

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DrawEngine:
    """Selects winners uniformly at random and timestamps the result.

    The engine never touches the history: callers append the returned
    :class:`WinEvent` themselves, which keeps selection and persistence
    apart.
    """

    def __init__(
        self,
        *,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Create a draw engine.

        Parameters
        ----------
        random_source : Optional[RandomSource], default: None
            Callable returning uniform floats in ``[0, 1)``. Typically this
            parameter is omitted, in which case ``random.random`` is used;
            tests pass :func:`seeded_random_source` for reproducible draws.
        clock : Optional[Clock], default: None
            Callable returning the timestamp recorded on each win. Defaults
            to the current time in UTC.
        """

        self._random_source = random_source or default_random_source()
        self._clock = clock or utc_now

    def draw(self, pool: Sequence[Entrant]) -> WinEvent:
        """Pick one winner from ``pool``.

        Parameters
        ----------
        pool : Sequence[Entrant]
            Eligible entrants, usually the result of
            :func:`staffraffle.draw.eligibility.eligible`.

        Returns
        -------
        WinEvent
            The winner together with the time of the draw.

        Raises
        ------
        EmptyPoolError
            If ``pool`` is empty, i.e. every entrant has already won.
        """
        if not pool:
            logger.info("Draw requested but the eligible pool is empty")
            raise EmptyPoolError()

        index = pick_index(self._random_source, len(pool))
        winner = pool[index]
        event = WinEvent(entrant=winner, occurred_at=self._clock())
        logger.info(
            f"Drew {winner.id} at index {index} of {len(pool)} eligible entrants"
        )
        return event


__all__ = ["Clock", "DrawEngine", "utc_now"]
