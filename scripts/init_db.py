from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from staffraffle.config import RaffleSettings
from staffraffle.db.engine import make_engine


def upgrade_db(target_revision: str = "head") -> None:
    """Apply Alembic migrations up to the requested revision."""
    project_root = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    command.upgrade(alembic_cfg, target_revision)


def print_tables(database_url: str) -> None:
    """List the tables present in the raffle database."""
    insp = inspect(make_engine(database_url))
    print("Current tables:", ", ".join(sorted(insp.get_table_names())))


def main() -> None:
    """Migrate the configured raffle database to head and report its tables."""
    settings = RaffleSettings.from_env()
    upgrade_db()
    print_tables(settings.db_url)


if __name__ == "__main__":
    main()
