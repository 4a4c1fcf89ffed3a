"""Unit tests for CalculatorSettings."""

from pathlib import Path

import pytest

from basic_calculator import (
    CalculatorEngine,
    CalculatorSettings,
    InvalidInputError,
    JsonFileHistoryStore,
    OutOfRangeError,
)


class TestCalculatorSettings:
    """Tests for settings defaults and validation."""

    def test_defaults(self):
        settings = CalculatorSettings()
        assert settings.max_input_length == 16
        assert settings.max_fractional_input_length == 18
        assert settings.history_limit == 50
        assert settings.storage_key == "calculator-history"
        assert settings.history_path is None

    def test_rejects_non_positive_limit(self):
        with pytest.raises(InvalidInputError):
            CalculatorSettings(history_limit=0)

    def test_fractional_cap_must_cover_input_cap(self):
        with pytest.raises(OutOfRangeError):
            CalculatorSettings(max_input_length=16, max_fractional_input_length=10)

    def test_rejects_empty_key(self):
        with pytest.raises(InvalidInputError):
            CalculatorSettings(storage_key="")


class TestFromEnv:
    """Tests for CalculatorSettings.from_env."""

    def test_empty_environment(self):
        assert CalculatorSettings.from_env({}) == CalculatorSettings()

    def test_reads_limit_and_path(self, tmp_path):
        settings = CalculatorSettings.from_env(
            {
                "CALCULATOR_HISTORY_LIMIT": "5",
                "CALCULATOR_HISTORY_PATH": str(tmp_path / "h.json"),
            }
        )
        assert settings.history_limit == 5
        assert settings.history_path == Path(tmp_path / "h.json")

    def test_bad_limit_raises(self):
        with pytest.raises(InvalidInputError):
            CalculatorSettings.from_env({"CALCULATOR_HISTORY_LIMIT": "lots"})


class TestFromSettings:
    """Tests for CalculatorEngine.from_settings."""

    def test_history_limit_applies(self):
        engine = CalculatorEngine.from_settings(CalculatorSettings(history_limit=2))
        for digit in "123":
            engine.input_digit(digit).equals()
        assert [e.result for e in engine.history] == ["3", "2"]

    def test_file_store_when_path_set(self, tmp_path):
        path = tmp_path / "history.json"
        engine = CalculatorEngine.from_settings(CalculatorSettings(history_path=path))
        engine.input_digit("9").equals()
        assert JsonFileHistoryStore(path).load()[0].expression == "9 ="
