"""History persistence adapters.

The engine only hands a store the full history list after each mutation.
Stores own durability and swallow their own I/O failures: a failed save is
logged and the in-memory history stays as it is.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from basic_calculator.config import STORAGE_KEY
from basic_calculator.exceptions import CalculatorError
from basic_calculator.history import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryStore(Protocol):
    def save(self, entries: list[HistoryEntry]) -> None: ...

    def load(self) -> list[HistoryEntry]: ...


def serialize(entries: list[HistoryEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)


def deserialize(payload: Any) -> list[HistoryEntry]:
    """
    Decode a serialized history list.

    Raises:
        CalculatorError: If any entry is malformed
        ValueError: If ``payload`` is not valid JSON
    """
    data = json.loads(payload) if isinstance(payload, str) else payload
    if not isinstance(data, list):
        raise CalculatorError("History payload must be a list", type(data).__name__)
    return [HistoryEntry.from_dict(item) for item in data]


class MemoryHistoryStore:
    """Key-value store kept in a dict; the serialized list lives under one key."""

    def __init__(self, key: str = STORAGE_KEY) -> None:
        self.key = key
        self.data: dict[str, str] = {}

    def save(self, entries: list[HistoryEntry]) -> None:
        self.data[self.key] = serialize(entries)

    def load(self) -> list[HistoryEntry]:
        payload = self.data.get(self.key)
        if payload is None:
            return []
        try:
            return deserialize(payload)
        except (CalculatorError, ValueError) as e:
            logger.warning("Discarding malformed history under %r: %s", self.key, e)
            return []


class JsonFileHistoryStore:
    """
    Persist history in a JSON object file under a single fixed key.

    Other keys in the file are preserved on save.
    """

    def __init__(self, path: Path | str, key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict[str, Any]:
        document = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise ValueError(f"expected a JSON object in {self.path}")
        return document

    def save(self, entries: list[HistoryEntry]) -> None:
        try:
            try:
                document = self._read_document()
            except (FileNotFoundError, ValueError):
                document = {}
            document[self.key] = [entry.to_dict() for entry in entries]
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.warning("Failed to save history to %s: %s", self.path, e)

    def load(self) -> list[HistoryEntry]:
        try:
            document = self._read_document()
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning("Failed to load history from %s: %s", self.path, e)
            return []

        if self.key not in document:
            return []
        try:
            return deserialize(document[self.key])
        except (CalculatorError, ValueError) as e:
            logger.warning("Discarding malformed history in %s: %s", self.path, e)
            return []
