"""
Basic-mode calculator engine.

Immediate (left-to-right) execution of the four arithmetic operators,
context-sensitive percentage, nested function notation and a bounded
calculation log, with three display layers:

- main display: the live entry or last result
- expression trace: the in-progress expression, e.g. ``5 + √(sqr(3))``
- history: completed calculations, most recent first
"""

from basic_calculator.config import CalculatorSettings
from basic_calculator.core import CalculatorEngine, Event, transition
from basic_calculator.exceptions import (
    CalculatorError,
    DivisionByZeroError,
    InvalidDomainError,
    InvalidInputError,
    OutOfRangeError,
    OverflowError,
)
from basic_calculator.formatting import format_display, format_result, function_notation
from basic_calculator.history import HistoryEntry
from basic_calculator.keypad import dispatch_key, event_for_button, event_for_key, press_button
from basic_calculator.operations import (
    Operator,
    add,
    apply,
    as_fraction,
    divide,
    multiply,
    negate,
    percent_of,
    reciprocal,
    square,
    square_root,
    subtract,
)
from basic_calculator.state import EngineState
from basic_calculator.storage import HistoryStore, JsonFileHistoryStore, MemoryHistoryStore
from basic_calculator.validators import (
    validate_digit,
    validate_number,
    validate_numeric_text,
    validate_positive,
    validate_range,
)

__all__ = [
    "CalculatorEngine",
    "CalculatorError",
    "CalculatorSettings",
    "DivisionByZeroError",
    "EngineState",
    "Event",
    "HistoryEntry",
    "HistoryStore",
    "InvalidDomainError",
    "InvalidInputError",
    "JsonFileHistoryStore",
    "MemoryHistoryStore",
    "Operator",
    "OutOfRangeError",
    "OverflowError",
    "add",
    "apply",
    "as_fraction",
    "dispatch_key",
    "divide",
    "event_for_button",
    "event_for_key",
    "format_display",
    "format_result",
    "function_notation",
    "multiply",
    "negate",
    "percent_of",
    "press_button",
    "reciprocal",
    "square",
    "square_root",
    "subtract",
    "transition",
    "validate_digit",
    "validate_number",
    "validate_numeric_text",
    "validate_positive",
    "validate_range",
]

__version__ = "0.1.0"
