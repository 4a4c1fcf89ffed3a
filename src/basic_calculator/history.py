"""Calculation log entries and the bounded most-recent-first list."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from basic_calculator.exceptions import InvalidInputError
from basic_calculator.validators import validate_numeric_text

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class HistoryEntry:
    """One completed calculation, immutable once created."""

    id: int
    expression: str
    result: str
    created_at: datetime

    def __str__(self) -> str:
        return f"{self.expression} {self.result}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "expression": self.expression,
            "result": self.result,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """
        Rebuild an entry from its serialized form.

        Accepts the legacy ``timestamp`` key in place of ``createdAt``.

        Raises:
            InvalidInputError: If a required field is missing, has the wrong type,
                or the result is not a finite number
        """
        if not isinstance(data, dict):
            raise InvalidInputError(data, "History entry must be an object")

        entry_id = data.get("id")
        expression = data.get("expression")
        result = data.get("result")
        if isinstance(entry_id, bool) or not isinstance(entry_id, int):
            raise InvalidInputError(entry_id, "History entry id must be an integer")
        if not isinstance(expression, str) or not isinstance(result, str):
            raise InvalidInputError(data, "History entry text fields must be strings")
        validate_numeric_text(result)

        stamp = data.get("createdAt", data.get("timestamp"))
        try:
            created_at = datetime.fromisoformat(stamp)
        except (TypeError, ValueError):
            created_at = datetime.fromtimestamp(0, tz=timezone.utc)

        return cls(id=entry_id, expression=expression, result=result, created_at=created_at)


def new_entry(expression: str, result: str, previous: list[HistoryEntry]) -> HistoryEntry:
    """Create an entry whose id is strictly greater than every id in ``previous``."""
    entry_id = time.time_ns()
    if previous:
        entry_id = max(entry_id, max(entry.id for entry in previous) + 1)
    return HistoryEntry(
        id=entry_id,
        expression=expression,
        result=result,
        created_at=datetime.now(timezone.utc),
    )


def prepend(
    entries: list[HistoryEntry], entry: HistoryEntry, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[HistoryEntry]:
    """Return a new list with ``entry`` first and the oldest entries beyond ``limit`` dropped."""
    return [entry, *entries][:limit]


def find_entry(entries: list[HistoryEntry], entry_id: int) -> HistoryEntry:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    raise InvalidInputError(entry_id, "Unknown history entry")
