from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from staffraffle import EmptyPoolError
from staffraffle.config import RaffleSettings
from staffraffle.draw import DrawEngine, eligible, seeded_random_source
from staffraffle.roster import load_roster_file, parse_roster
from staffraffle.workflows import open_history_store

SAMPLE_ROSTER = """Employee ID,Client,Name,Job Title,Manager
E001,Acme,"Smith, John",Engineer,"Doe, Jane"
E002,Acme,"Nguyen, Linh",Designer,"Doe, Jane"
E003,Globex,"Garcia, Maria",Analyst,"Khan, Omar"
E004,Globex,"Okafor, Chidi",Support Lead,"Khan, Omar"
E005,Initech,"Larsen, Ingrid",Accountant,"Park, Min"
"""


def main() -> None:
    """Replace the development history with a few seeded winners.

    Two winners are back-dated to yesterday and the rest are drawn now, so
    the daily view has something on both sides of midnight.
    """
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("--roster", type=Path, help="Roster file; a small sample is used if omitted")
    parser.add_argument("--winners", type=int, default=4)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    settings = RaffleSettings.from_env()

    if args.roster is not None:
        roster = load_roster_file(args.roster, delimiter=settings.roster_delimiter)
    else:
        roster = parse_roster(SAMPLE_ROSTER)

    store = open_history_store(settings)
    store.load()
    store.clear()

    start = datetime.now(timezone.utc) - timedelta(days=1)
    timestamps = iter(start + timedelta(minutes=i) for i in range(2))
    engine = DrawEngine(
        random_source=seeded_random_source(args.seed),
        clock=lambda: next(timestamps, datetime.now(timezone.utc)),
    )

    for _ in range(args.winners):
        try:
            event = engine.draw(eligible(roster, store.history))
        except EmptyPoolError:
            print("Everyone on the roster has won; stopping early.")
            break
        store.append(event)
        print(f"{event.occurred_at.isoformat()}  {event.entrant.display_name}")

    print(f"Seeded {len(store.history)} winners into '{settings.history_key}'.")


if __name__ == "__main__":
    main()
