"""Append-only, write-through history of raffle winners."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..errors import (
    CorruptPersistedState,
    HistoryOrderError,
    StorageReadFailure,
    StorageWriteFailure,
)
from ..models.history import HistoryLog, WinEvent
from .backends import StorageBackend

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "raffle_history"

# Failures a backend may raise while touching its medium.
_BACKEND_ERRORS = (OSError, SQLAlchemyError)


def decode_history(payload: str) -> HistoryLog:
    """Deserialize a persisted payload into a :class:`HistoryLog`.

    Raises
    ------
    CorruptPersistedState
        If the payload is not valid JSON or any record cannot be decoded.
        A payload is either loaded in full or rejected in full.
    """
    try:
        data = json.loads(payload)
        return HistoryLog.from_json(data)
    except (ValueError, TypeError, RecursionError) as exc:
        raise CorruptPersistedState(f"Unreadable history payload: {exc}") from exc


def encode_history(log: HistoryLog) -> str:
    """Serialize ``log`` newest first."""
    return log.to_json_str()


class HistoryStore:
    """Owns the in-memory winner history and mirrors it to a backend.

    The store is the only writer of its slot. Operations are synchronous:
    each returns only after the backend has accepted (or rejected) the
    write, so calls are applied strictly in program order.

    Persistence is best effort. When a write fails the in-memory history
    keeps the change and :class:`StorageWriteFailure` is raised; nothing
    is rolled back.
    """

    def __init__(self, backend: StorageBackend, *, key: str = DEFAULT_HISTORY_KEY) -> None:
        if not key:
            raise ValueError("key must not be empty")
        self.backend = backend
        self.key = key
        self._history = HistoryLog()

    @property
    def history(self) -> HistoryLog:
        """Current in-memory history, newest first."""
        return self._history

    def load(self) -> HistoryLog:
        """Hydrate the in-memory history from the backend.

        Returns
        -------
        HistoryLog
            The persisted history, or an empty log when nothing has been
            stored yet. When the payload is corrupt it is discarded, a
            warning is logged and the empty log carries the error in
            ``recovered_error``.

        Raises
        ------
        StorageReadFailure
            If the backend itself cannot be read.
        """
        try:
            payload = self.backend.read(self.key)
        except UnicodeDecodeError as exc:
            return self._recover(
                CorruptPersistedState(f"History payload is not valid UTF-8: {exc}")
            )
        except _BACKEND_ERRORS as exc:
            raise StorageReadFailure(
                f"Could not read history slot '{self.key}': {exc}"
            ) from exc

        if payload is None or not payload.strip():
            logger.debug(f"No persisted history under '{self.key}'")
            self._history = HistoryLog()
            return self._history

        try:
            log = decode_history(payload)
        except CorruptPersistedState as exc:
            return self._recover(exc)

        logger.info(f"Loaded {len(log)} winners from slot '{self.key}'")
        newest = log.newest
        if newest is not None and newest.occurred_at > datetime.now(timezone.utc):
            logger.warning(
                f"Newest winner in slot '{self.key}' is dated in the future "
                f"({newest.occurred_at.isoformat()}); draws will be refused until "
                f"that time unless the history is cleared"
            )
        self._history = log
        return self._history

    def _recover(self, error: CorruptPersistedState) -> HistoryLog:
        logger.warning(
            f"Discarding corrupt history in slot '{self.key}', starting empty: {error}"
        )
        self._history = HistoryLog(recovered_error=error)
        return self._history

    def append(self, event: WinEvent) -> None:
        """Record ``event`` as the newest winner and persist the full log.

        Raises
        ------
        HistoryOrderError
            If ``event`` is older than the current newest entry. Nothing is
            changed in that case. A history whose newest entry is dated in
            the future (a skewed clock, an imported log) keeps refusing
            appends; :meth:`clear` is the way out.
        StorageWriteFailure
            If the backend rejects the write. The event stays in memory.
        """
        newest = self._history.newest
        if newest is not None and event.occurred_at < newest.occurred_at:
            raise HistoryOrderError(
                f"Event at {event.occurred_at.isoformat()} is older than the newest "
                f"entry at {newest.occurred_at.isoformat()}; clear the history to "
                f"start over"
            )

        self._history = self._history.prepend(event)
        logger.info(f"Recorded winner {event.entrant.id} ({len(self._history)} total)")
        self._persist()

    def clear(self) -> None:
        """Erase the history in memory and in storage.

        This cannot be undone.

        Raises
        ------
        StorageWriteFailure
            If the backend cannot delete the slot. Memory is already empty.
        """
        cleared = len(self._history)
        self._history = HistoryLog()
        try:
            self.backend.delete(self.key)
        except _BACKEND_ERRORS as exc:
            raise StorageWriteFailure(
                f"Could not erase history slot '{self.key}': {exc}"
            ) from exc
        logger.warning(f"Cleared {cleared} winners from slot '{self.key}'")

    def _persist(self) -> None:
        payload = encode_history(self._history)
        try:
            self.backend.write(self.key, payload)
        except _BACKEND_ERRORS as exc:
            raise StorageWriteFailure(
                f"Could not persist history slot '{self.key}': {exc}"
            ) from exc


__all__ = [
    "DEFAULT_HISTORY_KEY",
    "HistoryStore",
    "decode_history",
    "encode_history",
]
