from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .entrant import Entrant  # noqa: F401
from .history import HistoryLog, WinEvent  # noqa: F401
from .storage_slot import StorageSlot  # noqa: F401

__all__ = [
    "Base",
    "Entrant",
    "HistoryLog",
    "StorageSlot",
    "WinEvent",
]
