"""Parse the employee roster from delimited text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..models.entrant import Entrant

logger = logging.getLogger(__name__)

MIN_FIELDS = 5
QUOTE_CHAR = '"'


@dataclass(frozen=True)
class MalformedRow:
    """A roster line that was skipped because it had too few fields.

    Attributes
    ----------
    line_number : int
        Zero-based index of the line in the raw text (the header is line 0).
    field_count : int
        Number of fields found on the line.
    raw : str
        The trimmed line as it appeared in the input.
    """

    line_number: int
    field_count: int
    raw: str


def split_fields(line: str, delimiter: str = ",") -> list[str]:
    """Split ``line`` on ``delimiter`` while respecting quoted spans.

    A quote character toggles quoted mode and is dropped from the output; a
    delimiter inside quoted mode is kept as text. Every field is trimmed.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def split_name(full_name: str) -> tuple[str, str]:
    """Split a "Last, First" name into ``(first, last)``.

    Missing parts come back as empty strings.
    """
    parts = [part.strip() for part in full_name.split(",")]
    last_name = parts[0] if parts else ""
    first_name = parts[1] if len(parts) > 1 else ""
    return first_name, last_name


class RosterParser:
    """Turns roster text into :class:`Entrant` records.

    The first line is a header. Rows with fewer than five fields are
    skipped and remembered in :attr:`malformed_rows` for the most recent
    :meth:`parse` call.
    """

    def __init__(self, *, delimiter: str = ",") -> None:
        if len(delimiter) != 1 or delimiter == QUOTE_CHAR:
            raise ValueError("delimiter must be a single non-quote character")
        self.delimiter = delimiter
        self.malformed_rows: list[MalformedRow] = []

    def parse(self, raw_table: str) -> list[Entrant]:
        """Parse ``raw_table`` into entrants in input order.

        Parameters
        ----------
        raw_table : str
            Roster text; columns are key, client name, "Last, First" name,
            job title and manager. Extra columns are ignored.

        Returns
        -------
        list[Entrant]
            One entrant per well-formed row. Ids are ``<key>-<line index>``,
            so they change if rows are reordered.
        """
        self.malformed_rows = []
        entrants: list[Entrant] = []

        lines = raw_table.split("\n")
        for index in range(1, len(lines)):
            line = lines[index].strip()
            if not line:
                continue

            fields = split_fields(line, self.delimiter)
            if len(fields) < MIN_FIELDS:
                self.malformed_rows.append(
                    MalformedRow(line_number=index, field_count=len(fields), raw=line)
                )
                logger.warning(
                    f"Skipping roster line {index}: expected at least {MIN_FIELDS} "
                    f"fields, found {len(fields)}"
                )
                continue

            full_name = fields[2].replace(QUOTE_CHAR, "")
            first_name, last_name = split_name(full_name)
            entrants.append(
                Entrant(
                    id=f"{fields[0]}-{index}",
                    client_name=fields[1],
                    full_name=full_name,
                    first_name=first_name,
                    last_name=last_name,
                    job_title=fields[3],
                    manager=fields[4],
                )
            )

        logger.debug(
            f"Parsed {len(entrants)} entrants ({len(self.malformed_rows)} rows skipped)"
        )
        return entrants


def parse_roster(raw_table: str, *, delimiter: str = ",") -> list[Entrant]:
    """Parse roster text with a throwaway :class:`RosterParser`."""
    return RosterParser(delimiter=delimiter).parse(raw_table)


def load_roster_file(
    path: Union[str, Path],
    *,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
) -> list[Entrant]:
    """Read and parse a roster file. A UTF-8 byte order mark is tolerated."""
    text = Path(path).read_text(encoding=encoding)
    entrants = parse_roster(text, delimiter=delimiter)
    logger.info(f"Loaded {len(entrants)} entrants from {path}")
    return entrants


__all__ = [
    "MIN_FIELDS",
    "MalformedRow",
    "RosterParser",
    "load_roster_file",
    "parse_roster",
    "split_fields",
    "split_name",
]
