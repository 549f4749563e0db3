"""Environment-driven settings for the raffle engine.

Values are read from the process environment after loading a ``.env``
file, so a presentation shell can be configured without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .db.engine import DEFAULT_DB_URL, ROOT_DIR
from .db.utils import resolve_sqlite_url
from .history.store import DEFAULT_HISTORY_KEY

DEFAULT_HISTORY_DIR = "./data"
STORAGE_KINDS = ("sql", "file", "memory")


@dataclass(frozen=True)
class RaffleSettings:
    """Resolved configuration for one process.

    Attributes
    ----------
    db_url : str
        SQLAlchemy URL used by the ``sql`` storage backend.
    storage : str
        Which storage backend to use: ``"sql"``, ``"file"`` or ``"memory"``.
    history_dir : Path
        Directory holding slot files for the ``file`` backend.
    history_key : str
        Name of the storage slot that holds the winner history.
    roster_delimiter : str
        Field delimiter used when parsing the roster.
    seed : Optional[int]
        Seed for the draw engine's random source. ``None`` means unseeded.
    """

    db_url: str = DEFAULT_DB_URL
    storage: str = "sql"
    history_dir: Path = Path(DEFAULT_HISTORY_DIR)
    history_key: str = DEFAULT_HISTORY_KEY
    roster_delimiter: str = ","
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.storage not in STORAGE_KINDS:
            raise ValueError(
                f"Unknown storage backend '{self.storage}'; "
                f"expected one of {', '.join(STORAGE_KINDS)}"
            )
        if not self.history_key:
            raise ValueError("history_key must not be empty")
        if len(self.roster_delimiter) != 1:
            raise ValueError("roster_delimiter must be a single character")

    @classmethod
    def from_env(cls, project_root: Optional[Path] = None) -> "RaffleSettings":
        """Build settings from environment variables.

        Relative SQLite URLs and history directories are resolved against
        ``project_root`` (the repository root by default).
        """
        load_dotenv()
        root = project_root or ROOT_DIR

        seed_raw = os.getenv("RAFFLE_SEED")
        try:
            seed = int(seed_raw) if seed_raw else None
        except ValueError as exc:
            raise ValueError(f"RAFFLE_SEED must be an integer, got {seed_raw!r}") from exc

        history_dir = Path(os.getenv("RAFFLE_HISTORY_DIR", DEFAULT_HISTORY_DIR))
        if not history_dir.is_absolute():
            history_dir = (root / history_dir).resolve()

        return cls(
            db_url=resolve_sqlite_url(os.getenv("DB_URL", DEFAULT_DB_URL), root),
            storage=os.getenv("RAFFLE_STORAGE", "sql").strip().lower(),
            history_dir=history_dir,
            history_key=os.getenv("RAFFLE_HISTORY_KEY", DEFAULT_HISTORY_KEY),
            roster_delimiter=os.getenv("RAFFLE_ROSTER_DELIMITER", ","),
            seed=seed,
        )


__all__ = ["RaffleSettings", "DEFAULT_HISTORY_KEY", "STORAGE_KINDS"]
