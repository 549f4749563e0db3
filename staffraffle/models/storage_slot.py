"""Key/value table backing the SQL storage backend."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base


class StorageSlot(Base):
    """A named slot holding one serialized payload."""

    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    """Slot name, e.g. ``raffle_history``."""

    payload: Mapped[str] = mapped_column(Text, nullable=False)
    """Serialized contents, stored verbatim."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    """Timestamp of the last successful write."""

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<StorageSlot(key={key}, bytes={size})>".format(
            key=self.key,
            size=len(self.payload or ""),
        )

    @classmethod
    def get_by_key(cls, session: Session, key: str) -> Optional["StorageSlot"]:
        """Return the slot named ``key`` if it exists."""
        return session.scalar(select(cls).where(cls.key == key))


__all__ = ["StorageSlot"]
