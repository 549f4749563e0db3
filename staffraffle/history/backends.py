"""Storage media for named history slots.

Every backend stores opaque text under a string key. HistoryStore owns the
serialization; backends only move the payload around.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from sqlalchemy.orm import Session, sessionmaker

from ..models.storage_slot import StorageSlot

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    """Minimal persistence interface used by the history store."""

    def read(self, key: str) -> Optional[str]:
        """Return the payload stored under ``key`` or ``None`` when absent."""
        ...

    def write(self, key: str, payload: str) -> None:
        """Replace the payload stored under ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""
        ...


class InMemoryBackend:
    """Dictionary-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def write(self, key: str, payload: str) -> None:
        self._slots[key] = payload

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._slots)


_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileBackend:
    """Stores each slot as ``<directory>/<key>.json``.

    Writes land in a temporary file first and are moved into place with
    :func:`os.replace`, so a crash leaves either the previous payload or
    the new one, never a partial file.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            logger.debug(f"Storage file does not exist: {path}")
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(payload)} characters to {path}")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        path.unlink(missing_ok=True)


class SqlBackend:
    """Stores slots as rows of the ``storage_slots`` table.

    Each call runs in its own transaction, so a write is either committed
    in full or not at all.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            slot = StorageSlot.get_by_key(session, key)
            return slot.payload if slot is not None else None

    def write(self, key: str, payload: str) -> None:
        with self._session_factory.begin() as session:
            slot = StorageSlot.get_by_key(session, key)
            if slot is None:
                session.add(StorageSlot(key=key, payload=payload))
            else:
                slot.payload = payload
        logger.debug(f"Wrote {len(payload)} characters to slot '{key}'")

    def delete(self, key: str) -> None:
        with self._session_factory.begin() as session:
            slot = StorageSlot.get_by_key(session, key)
            if slot is not None:
                session.delete(slot)


__all__ = ["FileBackend", "InMemoryBackend", "SqlBackend", "StorageBackend"]
