from typing import Optional, Sequence
from datetime import datetime

from .config import RaffleSettings
from .db.engine import get_sessionmaker, make_engine
from .draw.eligibility import eligible as _eligible
from .draw.engine import DrawEngine
from .draw.random_source import seeded_random_source
from .history.backends import FileBackend, InMemoryBackend, SqlBackend, StorageBackend
from .history.daily import todays_winners as _todays_winners
from .history.store import HistoryStore
from .models import Base, Entrant, HistoryLog, WinEvent
from .roster.parser import parse_roster


def load_roster(
    raw_text: str,
    *,
    delimiter: Optional[str] = None,
    settings: Optional[RaffleSettings] = None,
) -> list[Entrant]:
    """Parse the roster text supplied by the presentation shell.

    The delimiter is, in order of preference, ``delimiter``, then
    ``settings.roster_delimiter`` (``RAFFLE_ROSTER_DELIMITER``), then a comma.
    Rows with fewer than five fields are skipped; see
    :class:`~staffraffle.roster.parser.RosterParser`.
    """
    if delimiter is None:
        delimiter = settings.roster_delimiter if settings is not None else ","
    return parse_roster(raw_text, delimiter=delimiter)


def open_history_store(settings: Optional[RaffleSettings] = None) -> HistoryStore:
    """Build the history store described by ``settings``.

    The store is an explicit object. The shell creates it once at start-up
    and hands it to every workflow that needs it; nothing is kept at
    module level.

    Parameters
    ----------
    settings : Optional[RaffleSettings]
        Resolved configuration. When omitted, settings are read from the
        environment with :meth:`RaffleSettings.from_env`.

    Returns
    -------
    HistoryStore
        A store whose history has not been loaded yet; call
        :func:`load_history` next.
    """
    settings = settings or RaffleSettings.from_env()

    backend: StorageBackend
    if settings.storage == "memory":
        backend = InMemoryBackend()
    elif settings.storage == "file":
        backend = FileBackend(settings.history_dir)
    else:
        engine = make_engine(settings.db_url)
        # The slot table is the only one we own; creating it is idempotent.
        Base.metadata.create_all(engine)
        backend = SqlBackend(get_sessionmaker(engine))
    return HistoryStore(backend, key=settings.history_key)


def make_draw_engine(settings: Optional[RaffleSettings] = None) -> DrawEngine:
    """Create a draw engine, seeded when ``settings.seed`` is set."""
    if settings is not None and settings.seed is not None:
        return DrawEngine(random_source=seeded_random_source(settings.seed))
    return DrawEngine()


def load_history(store: HistoryStore) -> HistoryLog:
    """Hydrate ``store`` from its backend and return the history.

    A corrupt payload yields an empty log with ``recovered_error`` set; it
    never raises.
    """
    return store.load()


def eligible(roster: Sequence[Entrant], history: HistoryLog) -> list[Entrant]:
    """Return entrants from ``roster`` who have not won yet."""
    return _eligible(roster, history)


def draw(pool: Sequence[Entrant], engine: Optional[DrawEngine] = None) -> WinEvent:
    """Select a winner from ``pool``.

    The returned event is not recorded; pass it to :func:`append_history`.

    Raises
    ------
    EmptyPoolError
        If ``pool`` is empty.
    """
    return (engine or DrawEngine()).draw(pool)


def append_history(store: HistoryStore, event: WinEvent) -> None:
    """Record ``event`` as the newest winner and persist it immediately."""
    store.append(event)


def clear_history(store: HistoryStore) -> None:
    """Erase every recorded winner, in memory and in storage."""
    store.clear()


def todays_winners(history: HistoryLog, now: datetime) -> list[WinEvent]:
    """Return winners drawn on the same local calendar day as ``now``."""
    return _todays_winners(history, now)


def draw_and_record(
    store: HistoryStore,
    roster: Sequence[Entrant],
    engine: Optional[DrawEngine] = None,
) -> WinEvent:
    """Draw from whoever is still eligible and record the result.

    This chains :func:`eligible`, :func:`draw` and :func:`append_history`
    for callers that do not need to act between the steps.

    Raises
    ------
    EmptyPoolError
        If everyone on ``roster`` has already won.
    HistoryOrderError
        If the history's newest entry is later than the engine's clock.
        The drawn winner is not recorded; :func:`clear_history` resets it.
    StorageWriteFailure
        If the win could not be persisted. It is still kept in memory.
    """
    pool = eligible(roster, store.history)
    event = draw(pool, engine)
    append_history(store, event)
    return event
