from __future__ import annotations

import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from staffraffle import (
    EmptyPoolError,
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
from staffraffle.config import RaffleSettings
from staffraffle.draw import DrawEngine, seeded_random_source
from staffraffle.history import FileBackend, InMemoryBackend, SqlBackend

ROSTER_CSV = """Employee ID,Client,Name,Job Title,Manager
A,Acme,"Adams, Ann",Engineer,"Doe, Jane"
B,Acme,"Brown, Bob",Designer,"Doe, Jane"
C,Globex,"Clark, Cy",Analyst,"Khan, Omar"
"""


def _ticking_engine(seed: int = 3) -> DrawEngine:
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    ticks = (start + timedelta(seconds=i) for i in range(10_000))
    return DrawEngine(random_source=seeded_random_source(seed), clock=lambda: next(ticks))


class DrawWorkflowTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = open_history_store(RaffleSettings(storage="memory"))
        load_history(self.store)
        self.roster = load_roster(ROSTER_CSV)

    def test_three_entrants_three_winners_then_empty(self) -> None:
        engine = _ticking_engine()
        for _ in range(3):
            event = draw(eligible(self.roster, self.store.history), engine)
            append_history(self.store, event)

        history = self.store.history
        self.assertEqual(len(history), 3)
        self.assertEqual(len(history.winner_ids()), 3)
        self.assertEqual(history.winner_ids(), {e.id for e in self.roster})
        with self.assertRaises(EmptyPoolError):
            draw(eligible(self.roster, history), engine)

    def test_no_repeat_winners_across_seeds(self) -> None:
        rows = [f'K{i},Acme,"Last{i}, First{i}",Role,Boss' for i in range(25)]
        roster = load_roster("header\n" + "\n".join(rows))
        for seed in range(10):
            with self.subTest(seed=seed):
                clear_history(self.store)
                engine = _ticking_engine(seed)
                for _ in range(len(roster)):
                    draw_and_record(self.store, roster, engine)
                ids = [e.entrant.id for e in self.store.history]
                self.assertEqual(len(ids), len(set(ids)))
                self.assertEqual(eligible(roster, self.store.history), [])
                with self.assertRaises(EmptyPoolError):
                    draw_and_record(self.store, roster, engine)

    def test_history_is_chronological_newest_first(self) -> None:
        engine = _ticking_engine()
        for _ in range(3):
            draw_and_record(self.store, self.roster, engine)
        times = [e.occurred_at for e in self.store.history]
        self.assertEqual(times, sorted(times, reverse=True))

    def test_clear_makes_everyone_eligible_again(self) -> None:
        engine = _ticking_engine()
        for _ in range(3):
            draw_and_record(self.store, self.roster, engine)
        clear_history(self.store)
        self.assertEqual(eligible(self.roster, self.store.history), self.roster)
        self.assertEqual(len(load_history(self.store)), 0)

    def test_empty_pool_leaves_history_untouched(self) -> None:
        with self.assertRaises(EmptyPoolError):
            draw_and_record(self.store, [], _ticking_engine())
        self.assertEqual(len(self.store.history), 0)

    def test_todays_winners_uses_local_day(self) -> None:
        now = datetime.now(timezone.utc)
        ticks = iter([now - timedelta(days=1), now])
        engine = DrawEngine(random_source=lambda: 0.0, clock=lambda: next(ticks))
        draw_and_record(self.store, self.roster, engine)
        draw_and_record(self.store, self.roster, engine)

        winners = todays_winners(self.store.history, now)

        self.assertEqual(len(winners), 1)
        self.assertEqual(winners[0].occurred_at, now)
        self.assertEqual(winners[0].entrant.id, "B-2")


class LoadRosterTests(unittest.TestCase):
    def test_delimiter_comes_from_settings(self) -> None:
        settings = RaffleSettings(storage="memory", roster_delimiter=";")
        roster = load_roster(ROSTER_CSV.replace(",", ";"), settings=settings)
        self.assertEqual([e.id for e in roster], ["A-1", "B-2", "C-3"])
        self.assertEqual(roster[0].manager, "Doe; Jane")

    def test_explicit_delimiter_overrides_settings(self) -> None:
        settings = RaffleSettings(storage="memory", roster_delimiter=";")
        roster = load_roster(ROSTER_CSV, delimiter=",", settings=settings)
        self.assertEqual(len(roster), 3)
        self.assertEqual(roster[0].client_name, "Acme")


class OpenHistoryStoreTests(unittest.TestCase):
    def test_memory_backend(self) -> None:
        store = open_history_store(RaffleSettings(storage="memory", history_key="k"))
        self.assertIsInstance(store.backend, InMemoryBackend)
        self.assertEqual(store.key, "k")

    def test_file_backend_persists_between_sessions(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = RaffleSettings(storage="file", history_dir=Path(tmpdir))
            roster = load_roster(ROSTER_CSV)

            first = open_history_store(settings)
            self.assertIsInstance(first.backend, FileBackend)
            load_history(first)
            event = draw_and_record(first, roster, _ticking_engine())

            second = open_history_store(settings)
            history = load_history(second)
            self.assertEqual(list(history), [event])
            self.assertNotIn(event.entrant, eligible(roster, history))

    def test_sql_backend_creates_its_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            url = f"sqlite:///{Path(tmpdir) / 'raffle.db'}"
            settings = RaffleSettings(storage="sql", db_url=url)
            store = open_history_store(settings)
            self.assertIsInstance(store.backend, SqlBackend)
            load_history(store)
            event = draw_and_record(store, load_roster(ROSTER_CSV), _ticking_engine())

            reopened = open_history_store(settings)
            self.assertEqual(list(load_history(reopened)), [event])

    def test_make_draw_engine_honours_seed(self) -> None:
        roster = load_roster(ROSTER_CSV)
        settings = RaffleSettings(storage="memory", seed=99)
        picks_a = [make_draw_engine(settings).draw(roster).entrant.id for _ in range(5)]
        picks_b = [make_draw_engine(settings).draw(roster).entrant.id for _ in range(5)]
        self.assertEqual(picks_a, picks_b)


if __name__ == "__main__":
    unittest.main()
