from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from staffraffle import EmptyPoolError, Entrant, WinEvent
from staffraffle.draw import (
    DrawEngine,
    eligible,
    pick_index,
    pool_summary,
    seeded_random_source,
)

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _roster(*keys: str) -> list[Entrant]:
    return [Entrant(id=f"{key}-{i}", first_name=key) for i, key in enumerate(keys, 1)]


class EligibilityTests(unittest.TestCase):
    def test_winners_are_removed_in_roster_order(self) -> None:
        roster = _roster("A", "B", "C", "D")
        history = [WinEvent(entrant=roster[2], occurred_at=T0)]
        self.assertEqual(eligible(roster, history), [roster[0], roster[1], roster[3]])

    def test_foreign_history_ids_are_ignored(self) -> None:
        roster = _roster("A", "B")
        history = [WinEvent(entrant=Entrant(id="ghost-9"), occurred_at=T0)]
        self.assertEqual(eligible(roster, history), roster)
        summary = pool_summary(roster, history)
        self.assertEqual((summary.total, summary.winners, summary.remaining), (2, 0, 2))

    def test_inputs_are_not_mutated(self) -> None:
        roster = _roster("A", "B")
        history = [WinEvent(entrant=roster[0], occurred_at=T0)]
        eligible(roster, history)
        eligible(roster, history)
        self.assertEqual(len(roster), 2)
        self.assertEqual(len(history), 1)

    def test_pool_summary_reports_exhaustion(self) -> None:
        roster = _roster("A")
        summary = pool_summary(roster, [WinEvent(entrant=roster[0], occurred_at=T0)])
        self.assertTrue(summary.exhausted)
        self.assertEqual(summary.winners, 1)


class PickIndexTests(unittest.TestCase):
    def test_maps_unit_interval_onto_pool(self) -> None:
        self.assertEqual(pick_index(lambda: 0.0, 3), 0)
        self.assertEqual(pick_index(lambda: 0.34, 3), 1)
        self.assertEqual(pick_index(lambda: 0.9999999999, 3), 2)

    def test_rejects_values_outside_unit_interval(self) -> None:
        with self.assertRaises(ValueError):
            pick_index(lambda: 1.0, 3)
        with self.assertRaises(ValueError):
            pick_index(lambda: -0.1, 3)

    def test_rejects_empty_pool(self) -> None:
        with self.assertRaises(ValueError):
            pick_index(lambda: 0.5, 0)


class DrawEngineTests(unittest.TestCase):
    def test_empty_pool_raises(self) -> None:
        engine = DrawEngine(random_source=lambda: 0.5)
        with self.assertRaises(EmptyPoolError):
            engine.draw([])

    def test_uses_injected_source_and_clock(self) -> None:
        roster = _roster("A", "B", "C", "D")
        engine = DrawEngine(random_source=lambda: 0.6, clock=lambda: T0)
        event = engine.draw(roster)
        self.assertIs(event.entrant, roster[2])
        self.assertEqual(event.occurred_at, T0)

    def test_default_clock_is_timezone_aware(self) -> None:
        event = DrawEngine().draw(_roster("A"))
        self.assertIsNotNone(event.occurred_at.tzinfo)

    def test_seeded_engines_agree(self) -> None:
        roster = _roster(*"ABCDEFGHIJ")
        first = DrawEngine(random_source=seeded_random_source(42))
        second = DrawEngine(random_source=seeded_random_source(42))
        picks_a = [first.draw(roster).entrant.id for _ in range(20)]
        picks_b = [second.draw(roster).entrant.id for _ in range(20)]
        self.assertEqual(picks_a, picks_b)

    def test_every_entrant_can_win(self) -> None:
        roster = _roster("A", "B", "C")
        engine = DrawEngine(random_source=seeded_random_source(1))
        seen = {engine.draw(roster).entrant.id for _ in range(200)}
        self.assertEqual(seen, {e.id for e in roster})

    def test_draw_does_not_touch_pool(self) -> None:
        roster = _roster("A", "B")
        DrawEngine(random_source=lambda: 0.0).draw(roster)
        self.assertEqual(len(roster), 2)

    def test_successive_events_follow_the_clock(self) -> None:
        ticks = iter(T0 + timedelta(seconds=i) for i in range(3))
        engine = DrawEngine(random_source=lambda: 0.0, clock=lambda: next(ticks))
        times = [engine.draw(_roster("A")).occurred_at for _ in range(3)]
        self.assertEqual(times, sorted(times))


if __name__ == "__main__":
    unittest.main()
