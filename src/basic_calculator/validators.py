"""Input validation for engine arguments, settings and stored results."""

import math
from typing import TypeVar

from basic_calculator.exceptions import InvalidInputError, OutOfRangeError

T = TypeVar("T", int, float)

DIGITS = frozenset("0123456789")


def validate_number(value: T) -> T:
    """
    Validate that a value is a finite int or float.

    Raises:
        InvalidInputError: If value is NaN, Inf, a bool or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(value, f"Expected number, got {type(value).__name__}")

    if isinstance(value, float):
        if math.isnan(value):
            raise InvalidInputError(value, "NaN is not allowed")
        if math.isinf(value):
            raise InvalidInputError(value, "Infinity is not allowed")

    return value


def validate_positive(value: T) -> T:
    """
    Validate that a value is strictly positive.

    Raises:
        InvalidInputError: If value is not positive
    """
    validate_number(value)

    if value <= 0:
        raise InvalidInputError(value, "Value must be positive")

    return value


def validate_range(value: T, min_val: float | None = None, max_val: float | None = None) -> T:
    """
    Validate that ``min_val <= value <= max_val``; a None bound is open.

    Raises:
        OutOfRangeError: If value is outside the range
    """
    validate_number(value)

    if (min_val is not None and value < min_val) or (max_val is not None and value > max_val):
        raise OutOfRangeError(value, min_val, max_val)

    return value


def validate_digit(digit: str) -> str:
    """Validate a single keypad digit ("0" through "9")."""
    if not isinstance(digit, str) or digit not in DIGITS:
        raise InvalidInputError(digit, "Expected a single digit 0-9")
    return digit


def validate_numeric_text(text: str) -> str:
    """
    Validate display text that the engine will parse as an operand.

    Raises:
        InvalidInputError: If text is not the rendering of a finite number
    """
    try:
        value = float(text)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(text, "Expected numeric text") from e
    if not math.isfinite(value):
        raise InvalidInputError(text, "Expected a finite number")
    return text
