"""Winner history persistence and views."""

from .backends import FileBackend, InMemoryBackend, SqlBackend, StorageBackend
from .daily import local_date, todays_winners
from .store import DEFAULT_HISTORY_KEY, HistoryStore, decode_history, encode_history

__all__ = [
    "DEFAULT_HISTORY_KEY",
    "FileBackend",
    "HistoryStore",
    "InMemoryBackend",
    "SqlBackend",
    "StorageBackend",
    "decode_history",
    "encode_history",
    "local_date",
    "todays_winners",
]
