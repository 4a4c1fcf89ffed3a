"""Unit tests for history entries and the bounded log."""

from datetime import datetime, timezone

import pytest

from basic_calculator import HistoryEntry, InvalidInputError
from basic_calculator.history import find_entry, new_entry, prepend


def make_entry(entry_id: int, expression: str = "1 + 1 =", result: str = "2") -> HistoryEntry:
    return HistoryEntry(
        id=entry_id,
        expression=expression,
        result=result,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestNewEntry:
    """Tests for new_entry."""

    def test_ids_increase(self):
        first = new_entry("1 + 1 =", "2", [])
        second = new_entry("2 + 2 =", "4", [first])
        assert second.id > first.id

    def test_id_bumped_past_future_ids(self):
        future = make_entry(2**62)
        assert new_entry("x =", "1", [future]).id == 2**62 + 1

    def test_entry_is_immutable(self):
        entry = new_entry("1 =", "1", [])
        with pytest.raises(AttributeError):
            entry.result = "2"  # type: ignore[misc]


class TestPrepend:
    """Tests for prepend."""

    def test_most_recent_first(self):
        entries = prepend([make_entry(1)], make_entry(2))
        assert [e.id for e in entries] == [2, 1]

    def test_does_not_mutate_input(self):
        original = [make_entry(1)]
        prepend(original, make_entry(2))
        assert len(original) == 1

    def test_evicts_oldest_beyond_limit(self):
        entries = [make_entry(i) for i in range(50, 0, -1)]
        result = prepend(entries, make_entry(51), limit=50)
        assert len(result) == 50
        assert result[0].id == 51
        assert result[-1].id == 2


class TestSerialization:
    """Tests for to_dict / from_dict."""

    def test_to_dict_keys(self):
        data = make_entry(7, "7 + 3 =", "10").to_dict()
        assert data == {
            "id": 7,
            "expression": "7 + 3 =",
            "result": "10",
            "createdAt": "2024-01-01T00:00:00+00:00",
        }

    def test_from_dict_restores_entry(self):
        entry = make_entry(7, "√(9) =", "3")
        assert HistoryEntry.from_dict(entry.to_dict()) == entry

    def test_from_dict_accepts_legacy_timestamp(self):
        entry = HistoryEntry.from_dict(
            {"id": 1, "expression": "5 =", "result": "5", "timestamp": "1/1/2024, 10:00:00 AM"}
        )
        assert entry.result == "5"
        assert entry.created_at.year == 1970

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"expression": "1 =", "result": "1"},
            {"id": "1", "expression": "1 =", "result": "1"},
            {"id": 1, "expression": "1 =", "result": 1},
            {"id": 1, "expression": "1 =", "result": "Cannot divide by zero"},
        ],
    )
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(InvalidInputError):
            HistoryEntry.from_dict(data)


class TestFindEntry:
    """Tests for find_entry."""

    def test_finds_by_id(self):
        entries = [make_entry(2), make_entry(1)]
        assert find_entry(entries, 1) is entries[1]

    def test_unknown_id_raises(self):
        with pytest.raises(InvalidInputError):
            find_entry([make_entry(1)], 99)
