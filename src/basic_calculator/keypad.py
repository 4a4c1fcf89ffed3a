"""Map keyboard keys and keypad buttons onto engine events."""

from __future__ import annotations

from basic_calculator.core import CalculatorEngine, Event
from basic_calculator.exceptions import InvalidInputError
from basic_calculator.validators import DIGITS

KEY_EVENTS = {
    ".": Event("decimal"),
    "+": Event("operator", "add"),
    "-": Event("operator", "subtract"),
    "*": Event("operator", "multiply"),
    "/": Event("operator", "divide"),
    "=": Event("equals"),
    "Enter": Event("equals"),
    "Escape": Event("clear"),
    "Backspace": Event("backspace"),
    "%": Event("percent"),
}

BUTTON_EVENTS = {
    "decimal": Event("decimal"),
    "add": Event("operator", "add"),
    "subtract": Event("operator", "subtract"),
    "multiply": Event("operator", "multiply"),
    "divide": Event("operator", "divide"),
    "equals": Event("equals"),
    "clear": Event("clear"),
    "clear-entry": Event("clear-entry"),
    "backspace": Event("backspace"),
    "negate": Event("negate"),
    "percent": Event("percent"),
    "sqrt": Event("sqrt"),
    "square": Event("square"),
    "reciprocal": Event("reciprocal"),
}


def event_for_key(key: str) -> Event | None:
    """Return the event for a keyboard key, or None if the key is not bound."""
    if key in DIGITS:
        return Event("digit", key)
    return KEY_EVENTS.get(key)


def event_for_button(button_id: str) -> Event:
    """
    Return the event for a keypad button id.

    Raises:
        InvalidInputError: If the button id is unknown
    """
    if button_id in DIGITS:
        return Event("digit", button_id)
    try:
        return BUTTON_EVENTS[button_id]
    except KeyError as e:
        raise InvalidInputError(button_id, "Unknown keypad button") from e


def dispatch_key(engine: CalculatorEngine, key: str) -> bool:
    """Apply a keyboard key to ``engine``; returns False for unbound keys."""
    event = event_for_key(key)
    if event is None:
        return False
    engine.dispatch(event)
    return True


def press_button(engine: CalculatorEngine, button_id: str) -> CalculatorEngine:
    return engine.dispatch(event_for_button(button_id))
