"""Roster parsing."""

from .parser import (
    MalformedRow,
    RosterParser,
    load_roster_file,
    parse_roster,
)

__all__ = [
    "MalformedRow",
    "RosterParser",
    "load_roster_file",
    "parse_roster",
]
