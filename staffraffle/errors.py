"""Exception types raised by the raffle engine."""

from __future__ import annotations


class RaffleError(Exception):
    """Base class for every error raised by :mod:`staffraffle`."""


class EmptyPoolError(RaffleError, LookupError):
    """Raised when a draw is attempted and nobody is left to win.

    This is an expected outcome ("all employees have won") rather than a
    failure. Callers usually respond by offering to clear the history.
    """

    def __init__(self, message: str = "All entrants have already won") -> None:
        super().__init__(message)


class CorruptPersistedState(RaffleError, ValueError):
    """The persisted history could not be decoded.

    :meth:`staffraffle.history.store.HistoryStore.load` never raises this;
    it is attached to the returned log as ``recovered_error`` instead.
    """


class HistoryOrderError(RaffleError, ValueError):
    """Appending the event would put the history out of chronological order."""


class StorageWriteFailure(RaffleError, IOError):
    """The storage backend could not persist an append or a clear.

    The in-memory history has already changed when this is raised.
    """


class StorageReadFailure(RaffleError, IOError):
    """The storage backend could not be read at all."""


__all__ = [
    "RaffleError",
    "EmptyPoolError",
    "CorruptPersistedState",
    "HistoryOrderError",
    "StorageWriteFailure",
    "StorageReadFailure",
]
