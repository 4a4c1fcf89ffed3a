"""Core arithmetic operations with overflow and domain protection."""

import math
from enum import Enum

from basic_calculator.exceptions import (
    DivisionByZeroError,
    InvalidDomainError,
    InvalidInputError,
    OverflowError,
)
from basic_calculator.validators import validate_number


class Operator(str, Enum):
    """The four binary operators of the keypad."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def parse(cls, value: "Operator | str") -> "Operator":
        """Return the operator named by ``value`` (an Operator or its name)."""
        if isinstance(value, Operator):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidInputError(value, "Unknown operator") from e


_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "−",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}


def _check_finite(result: float, operation: str, *operands: float) -> float:
    if not math.isfinite(result):
        raise OverflowError(operation, *operands)
    return result


def add(a: float, b: float) -> float:
    """
    Add two numbers with overflow protection.

    Properties:
        - Commutative: add(a, b) == add(b, a)
        - Identity: add(a, 0) == a

    Raises:
        InvalidInputError: If inputs are invalid
        OverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)
    return _check_finite(a + b, "addition", a, b)


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a with overflow protection.

    Properties:
        - Anti-commutative: subtract(a, b) == -subtract(b, a)
        - Self-inverse: subtract(a, a) == 0

    Raises:
        InvalidInputError: If inputs are invalid
        OverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)
    return _check_finite(a - b, "subtraction", a, b)


def multiply(a: float, b: float) -> float:
    """
    Multiply two numbers with overflow protection.

    Properties:
        - Commutative: multiply(a, b) == multiply(b, a)
        - Identity: multiply(a, 1) == a
        - Zero: multiply(a, 0) == 0

    Raises:
        InvalidInputError: If inputs are invalid
        OverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)
    return _check_finite(a * b, "multiplication", a, b)


def divide(a: float, b: float) -> float:
    """
    Divide a by b with zero and overflow protection.

    Properties:
        - Identity: divide(a, 1) == a
        - Self-division: divide(a, a) == 1 (for a != 0)

    Args:
        a: Dividend
        b: Divisor

    Returns:
        Quotient of a and b

    Raises:
        InvalidInputError: If inputs are invalid
        DivisionByZeroError: If b is zero
        OverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)

    if b == 0:
        raise DivisionByZeroError(a)

    return _check_finite(a / b, "division", a, b)


def apply(a: float, b: float, operator: Operator | str) -> float:
    """Apply a binary keypad operator to ``a`` and ``b``."""
    operator = Operator.parse(operator)
    if operator is Operator.ADD:
        return add(a, b)
    if operator is Operator.SUBTRACT:
        return subtract(a, b)
    if operator is Operator.MULTIPLY:
        return multiply(a, b)
    return divide(a, b)


def square(value: float) -> float:
    """Square ``value``; large inputs overflow to an OverflowError."""
    validate_number(value)
    return _check_finite(value * value, "square", value)


def square_root(value: float) -> float:
    """
    Square root of a non-negative number.

    Raises:
        InvalidDomainError: If value is negative
    """
    validate_number(value)

    if value < 0:
        raise InvalidDomainError(value, "square root")

    return math.sqrt(value)


def reciprocal(value: float) -> float:
    """
    Calculate 1/x.

    Raises:
        DivisionByZeroError: If value is zero
    """
    return divide(1, value)


def negate(value: float) -> float:
    validate_number(value)
    return -value


def percent_of(base: float, percent: float) -> float:
    """``percent`` percent of ``base``: the add/subtract reading of ``A ± B%``."""
    return multiply(base, as_fraction(percent))


def as_fraction(percent: float) -> float:
    """``percent`` as a plain fraction: the multiply/divide reading of ``A × B%``."""
    return divide(percent, 100)
