"""Result formatting, display grouping and function notation."""

import math
from decimal import Decimal

from basic_calculator.exceptions import (
    DivisionByZeroError,
    InvalidDomainError,
    InvalidInputError,
    OverflowError,
)

# Significant digits kept to absorb binary floating-point noise
RESULT_PRECISION = 15
MAX_DISPLAY_DIGITS = 16

# Magnitudes outside (SCIENTIFIC_LOWER, SCIENTIFIC_UPPER) render in scientific notation
SCIENTIFIC_UPPER = 1e17
SCIENTIFIC_LOWER = 1e-17
SCIENTIFIC_DIGITS = 10

# Below this magnitude plain text switches to shortest exponent form (e.g. 1e-7)
PLAIN_EXPONENT_BELOW = 1e-6

ERROR_MESSAGES = frozenset(
    {
        DivisionByZeroError.display_message,
        InvalidDomainError.display_message,
        InvalidInputError.display_message,
        OverflowError.display_message,
    }
)

FUNCTION_NOTATIONS = {
    "square_root": "√({})",
    "square": "sqr({})",
    "reciprocal": "1/({})",
    "negate": "negate({})",
}


def format_result(value: float) -> str:
    """
    Render a computed value as main-display text.

    The value is rounded to 15 significant digits first. Magnitudes above
    1e17 or below 1e-17 use scientific notation with 10 mantissa digits.
    Other magnitudes below 1e-6 use the shortest exponent form (``1.5e-7``);
    everything else is plain decimal text without trailing zeros.

    Raises:
        OverflowError: If value is NaN or infinite
    """
    if not math.isfinite(value):
        raise OverflowError("formatting", value)

    rounded = float(f"{value:.{RESULT_PRECISION}g}")
    if rounded == 0:
        return "0"

    magnitude = abs(rounded)
    if magnitude > SCIENTIFIC_UPPER or magnitude < SCIENTIFIC_LOWER:
        return f"{rounded:.{SCIENTIFIC_DIGITS}e}"

    text = _plain(rounded)
    if len(text.lstrip("-")) > MAX_DISPLAY_DIGITS:
        text = _plain(float(f"{rounded:.{MAX_DISPLAY_DIGITS}g}"))
    return text


def _plain(value: float) -> str:
    if abs(value) < PLAIN_EXPONENT_BELOW:
        mantissa, _, exponent = repr(value).partition("e")
        return f"{mantissa}e{int(exponent)}"
    return format(Decimal(repr(value)).normalize(), "f")


def is_error_message(text: str) -> bool:
    return text in ERROR_MESSAGES


def format_display(text: str) -> str:
    """
    Insert thousands separators into the integer part of ``text``.

    Presentation only: the engine keeps the ungrouped text for computation.
    Error messages and scientific notation pass through unchanged.

    Example:
        >>> format_display("-1234567.891")
        '-1,234,567.891'
    """
    if is_error_message(text) or "e" in text:
        return text

    sign, body = ("-", text[1:]) if text.startswith("-") else ("", text)
    integer, point, fraction = body.partition(".")
    if integer.isdigit():
        integer = f"{int(integer):,}"
    return f"{sign}{integer}{point}{fraction}"


def function_notation(function: str, inner: str) -> str:
    """Wrap ``inner`` in the trace notation of ``function`` (e.g. ``sqr(9)``)."""
    try:
        template = FUNCTION_NOTATIONS[function]
    except KeyError as e:
        raise InvalidInputError(function, "Unknown function") from e
    return template.format(inner)
