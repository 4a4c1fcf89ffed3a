"""Unit tests for the history persistence adapters."""

import json
import logging

from basic_calculator import CalculatorEngine, JsonFileHistoryStore, MemoryHistoryStore
from basic_calculator.history import new_entry


class TestMemoryHistoryStore:
    """Tests for MemoryHistoryStore."""

    def test_load_empty(self, store):
        assert store.load() == []

    def test_round_trip_under_fixed_key(self, store):
        entry = new_entry("7 + 3 =", "10", [])
        store.save([entry])
        assert list(store.data) == ["calculator-history"]
        assert store.load() == [entry]

    def test_malformed_payload_loads_empty(self, store, caplog):
        store.data[store.key] = "{not json"
        with caplog.at_level(logging.WARNING):
            assert store.load() == []
        assert "malformed" in caplog.text


class TestJsonFileHistoryStore:
    """Tests for JsonFileHistoryStore."""

    def test_missing_file_loads_empty(self, tmp_path):
        assert JsonFileHistoryStore(tmp_path / "history.json").load() == []

    def test_round_trip(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path / "nested" / "history.json")
        entries = [new_entry("√(9) =", "3", [])]
        store.save(entries)
        assert store.load() == entries

    def test_preserves_other_keys(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({"theme": "dark"}))
        JsonFileHistoryStore(path).save([new_entry("5 =", "5", [])])
        document = json.loads(path.read_text())
        assert document["theme"] == "dark"
        assert document["calculator-history"][0]["expression"] == "5 ="

    def test_corrupt_file_loads_empty(self, tmp_path, caplog):
        path = tmp_path / "history.json"
        path.write_text("[1, 2")
        with caplog.at_level(logging.WARNING):
            assert JsonFileHistoryStore(path).load() == []
        assert "Failed to load history" in caplog.text

    def test_malformed_entries_load_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text(json.dumps({"calculator-history": [{"id": "x"}]}))
        assert JsonFileHistoryStore(path).load() == []

    def test_save_failure_is_logged_not_raised(self, tmp_path, caplog):
        # a directory in place of the file makes the write fail
        path = tmp_path / "history.json"
        path.mkdir()
        engine = CalculatorEngine(store=JsonFileHistoryStore(path))
        with caplog.at_level(logging.WARNING):
            engine.input_digit("5").equals()
        assert engine.history[0].result == "5"
        assert "Failed to save history" in caplog.text


class TestEnginePersistence:
    """History flows between the engine and its store."""

    def test_every_append_is_saved(self, persisted_engine, store):
        persisted_engine.input_digit("7").set_operator("add").input_digit("3").equals()
        assert [e.expression for e in store.load()] == ["7 + 3 ="]

    def test_clear_history_is_saved(self, persisted_engine, store):
        persisted_engine.input_digit("4").equals().clear_history()
        assert store.load() == []
        assert json.loads(store.data[store.key]) == []

    def test_history_loaded_at_start(self, store):
        CalculatorEngine(store=store).input_digit("8").equals()
        resumed = CalculatorEngine(store=store)
        assert resumed.history[0].expression == "8 ="

    def test_listener_receives_full_list(self, engine):
        seen = []
        engine.subscribe(seen.append)
        engine.input_digit("1").equals().input_digit("2").equals()
        assert [len(snapshot) for snapshot in seen] == [1, 2]
        assert seen[-1][0].expression == "2 ="
