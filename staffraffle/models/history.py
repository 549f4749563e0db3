"""Win events and the history log they form."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional

from staffraffle.db.utils import dt_iso, parse_dt

from .entrant import Entrant

if TYPE_CHECKING:
    from staffraffle.errors import CorruptPersistedState


@dataclass(frozen=True)
class WinEvent:
    """Immutable record of one completed draw.

    Attributes
    ----------
    entrant : Entrant
        The winner. The full record is kept so that the history stays
        readable after the roster changes.
    occurred_at : datetime
        When the draw happened. Always timezone-aware; naive values are
        taken to be local time.
    """

    entrant: Entrant
    occurred_at: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.entrant, Entrant):
            raise TypeError("entrant must be an Entrant")
        if not isinstance(self.occurred_at, datetime):
            raise TypeError("occurred_at must be a datetime")
        if self.occurred_at.tzinfo is None:
            object.__setattr__(
                self, "occurred_at", self.occurred_at.astimezone()
            )

    @property
    def entrant_id(self) -> str:
        return self.entrant.id

    def to_json(self) -> dict[str, Any]:
        return {
            "entrant": self.entrant.to_json(),
            "occurred_at": dt_iso(self.occurred_at),
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WinEvent":
        """Decode a persisted event record.

        Besides the native ``{"entrant": ..., "occurred_at": ...}`` shape this
        accepts ``winner``/``timestamp`` keys and an ``entrant_id`` string in
        place of a full entrant record.

        Raises
        ------
        ValueError
            If the record has no entrant or no parseable timestamp.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Win event record must be an object, got {type(data).__name__}")

        raw_entrant = data.get("entrant", data.get("winner"))
        if raw_entrant is not None:
            entrant = Entrant.from_json(raw_entrant)
        elif isinstance(data.get("entrant_id"), str):
            entrant = Entrant(id=data["entrant_id"])
        else:
            raise ValueError("Win event record has no entrant")

        raw_time = data.get("occurred_at", data.get("timestamp"))
        if raw_time is None:
            raise ValueError("Win event record has no timestamp")
        return cls(entrant=entrant, occurred_at=parse_dt(raw_time))


@dataclass(frozen=True)
class HistoryLog:
    """Ordered, immutable sequence of win events, newest first.

    ``recovered_error`` is set when the log was produced by discarding a
    corrupt persisted payload.
    """

    events: tuple[WinEvent, ...] = ()
    recovered_error: Optional["CorruptPersistedState"] = field(
        default=None, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", tuple(self.events))

    def __iter__(self) -> Iterator[WinEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def __bool__(self) -> bool:
        return bool(self.events)

    def __getitem__(self, index: int) -> WinEvent:
        return self.events[index]

    @property
    def newest(self) -> Optional[WinEvent]:
        return self.events[0] if self.events else None

    def winner_ids(self) -> frozenset[str]:
        """Return the ids of every entrant that has won."""
        return frozenset(event.entrant.id for event in self.events)

    def prepend(self, event: WinEvent) -> "HistoryLog":
        """Return a new log with ``event`` as its newest entry."""
        return HistoryLog(events=(event, *self.events))

    def to_json(self) -> list[dict[str, Any]]:
        return [event.to_json() for event in self.events]

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, data: Any) -> "HistoryLog":
        """Decode a persisted list of events, newest first.

        Raises
        ------
        ValueError
            If ``data`` is not a list or any record is invalid.
        """
        if not isinstance(data, list):
            raise ValueError(f"History payload must be a list, got {type(data).__name__}")
        return cls(events=tuple(WinEvent.from_json(item) for item in data))


__all__ = ["WinEvent", "HistoryLog"]
