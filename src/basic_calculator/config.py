"""Engine settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from basic_calculator.exceptions import InvalidInputError
from basic_calculator.history import DEFAULT_HISTORY_LIMIT
from basic_calculator.validators import validate_positive, validate_range

MAX_INPUT_LENGTH = 16
# Entries starting with "0." may grow past MAX_INPUT_LENGTH up to this length
MAX_FRACTIONAL_INPUT_LENGTH = 18
STORAGE_KEY = "calculator-history"


@dataclass(frozen=True)
class CalculatorSettings:
    """
    Tunables for one calculator session.

    Example:
        >>> CalculatorSettings(history_limit=10).history_limit
        10
    """

    max_input_length: int = MAX_INPUT_LENGTH
    max_fractional_input_length: int = MAX_FRACTIONAL_INPUT_LENGTH
    history_limit: int = DEFAULT_HISTORY_LIMIT
    storage_key: str = STORAGE_KEY
    history_path: Path | None = None

    def __post_init__(self) -> None:
        validate_positive(self.max_input_length)
        validate_range(self.max_fractional_input_length, min_val=self.max_input_length)
        validate_positive(self.history_limit)
        if not self.storage_key:
            raise InvalidInputError(self.storage_key, "Storage key must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CalculatorSettings:
        """
        Build settings from ``CALCULATOR_HISTORY_LIMIT`` and ``CALCULATOR_HISTORY_PATH``.

        Raises:
            InvalidInputError: If the history limit is not an integer
        """
        environ = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        limit = environ.get("CALCULATOR_HISTORY_LIMIT")
        if limit:
            try:
                kwargs["history_limit"] = int(limit)
            except ValueError as e:
                raise InvalidInputError(limit, "CALCULATOR_HISTORY_LIMIT must be an integer") from e

        path = environ.get("CALCULATOR_HISTORY_PATH")
        if path:
            kwargs["history_path"] = Path(path).expanduser()

        return cls(**kwargs)  # type: ignore[arg-type]
