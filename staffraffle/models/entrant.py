"""Roster entrant value object."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

# Accepted spellings for each field when decoding persisted records. The
# camelCase forms come from histories written by the browser version.
_FIELD_ALIASES = {
    "client_name": ("client_name", "clientName"),
    "full_name": ("full_name", "fullName"),
    "first_name": ("first_name", "firstName"),
    "last_name": ("last_name", "lastName"),
    "job_title": ("job_title", "jobTitle"),
    "manager": ("manager",),
}


@dataclass(frozen=True)
class Entrant:
    """One roster member who can win until they have won once.

    Attributes
    ----------
    id : str
        Identifier synthesized as ``<key>-<line index>``; unique within a
        single roster parse and never empty.
    client_name : str
        Client the employee is assigned to.
    full_name : str
        Name column as written in the roster ("Last, First"), quotes removed.
    first_name : str
        Part of ``full_name`` after the comma.
    last_name : str
        Part of ``full_name`` before the comma.
    job_title : str
        Job title column.
    manager : str
        Manager column.
    """

    id: str
    client_name: str = ""
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    job_title: str = ""
    manager: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Entrant id must be a non-empty string")

    @property
    def display_name(self) -> str:
        """Return "First Last" when both parts are known, else the raw name."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.full_name or self.first_name or self.last_name or self.id

    def to_json(self) -> dict[str, str]:
        return {
            "id": self.id,
            "client_name": self.client_name,
            "full_name": self.full_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "job_title": self.job_title,
            "manager": self.manager,
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Entrant":
        """Build an entrant from a decoded record.

        Unknown keys are ignored and missing text fields default to ``""``.

        Raises
        ------
        ValueError
            If ``data`` is not a mapping, has no usable ``id``, or holds a
            non-string value for a text field.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Entrant record must be an object, got {type(data).__name__}")
        entrant_id = data.get("id")
        if not isinstance(entrant_id, str):
            raise ValueError("Entrant record is missing a string 'id'")

        fields: dict[str, str] = {}
        for name, aliases in _FIELD_ALIASES.items():
            value: Any = ""
            for alias in aliases:
                if data.get(alias) is not None:
                    value = data[alias]
                    break
            if not isinstance(value, str):
                raise ValueError(f"Entrant field '{name}' must be a string")
            fields[name] = value
        return cls(id=entrant_id, **fields)


__all__ = ["Entrant"]
