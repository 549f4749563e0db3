"""Group winners by local calendar day."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Iterable, Optional

from ..models.history import WinEvent


def local_date(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Return the calendar date of ``moment`` in ``tz``.

    ``tz=None`` means the system local time zone, which is the policy used
    throughout the process. Naive datetimes are local wall-clock times, as
    returned by ``datetime.now()``.
    """
    return moment.astimezone(tz).date()


def todays_winners(
    history: Iterable[WinEvent],
    reference: datetime,
    tz: Optional[tzinfo] = None,
) -> list[WinEvent]:
    """Return the events that happened on the same local day as ``reference``.

    The newest-first order of ``history`` is preserved.
    """
    target = local_date(reference, tz)
    return [event for event in history if local_date(event.occurred_at, tz) == target]


__all__ = ["local_date", "todays_winners"]
