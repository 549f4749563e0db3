"""Random, non-repeating winner draws over an employee roster."""

from .errors import (
    CorruptPersistedState,
    EmptyPoolError,
    HistoryOrderError,
    RaffleError,
    StorageReadFailure,
    StorageWriteFailure,
)
from .models import Entrant, HistoryLog, WinEvent
from .workflows import (
    append_history,
    clear_history,
    draw,
    draw_and_record,
    eligible,
    load_history,
    load_roster,
    make_draw_engine,
    open_history_store,
    todays_winners,
)

__all__ = [
    "CorruptPersistedState",
    "EmptyPoolError",
    "Entrant",
    "HistoryLog",
    "HistoryOrderError",
    "RaffleError",
    "StorageReadFailure",
    "StorageWriteFailure",
    "WinEvent",
    "append_history",
    "clear_history",
    "draw",
    "draw_and_record",
    "eligible",
    "load_history",
    "load_roster",
    "make_draw_engine",
    "open_history_store",
    "todays_winners",
]
