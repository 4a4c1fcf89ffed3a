"""Immediate-execution calculator engine: state machine, trace and history."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from basic_calculator.config import CalculatorSettings
from basic_calculator.exceptions import CalculatorError, InvalidInputError
from basic_calculator.formatting import format_display, format_result, function_notation
from basic_calculator.history import HistoryEntry, find_entry, new_entry, prepend
from basic_calculator.operations import (
    Operator,
    apply,
    as_fraction,
    percent_of,
    reciprocal,
    square,
    square_root,
)
from basic_calculator.operations import negate as negate_value
from basic_calculator.state import EngineState, SettledFunction
from basic_calculator.storage import HistoryStore, JsonFileHistoryStore, MemoryHistoryStore
from basic_calculator.validators import validate_digit, validate_numeric_text

if TYPE_CHECKING:
    from collections.abc import Callable

    HistoryListener = Callable[[list[HistoryEntry]], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """One discrete user intent, e.g. ``Event("digit", "7")``."""

    action: str
    argument: str | int | None = None


class CalculatorEngine:
    """
    Four-function calculator with left-to-right immediate execution.

    Each operation is one synchronous state transition and returns the
    engine so calls can be chained.

    Example:
        >>> engine = CalculatorEngine()
        >>> engine.input_digit("7").set_operator("add").input_digit("3").equals().main_display
        '10'
        >>> engine.history[0].expression
        '7 + 3 ='
    """

    def __init__(
        self,
        store: HistoryStore | None = None,
        settings: CalculatorSettings | None = None,
        state: EngineState | None = None,
    ) -> None:
        """
        Create an engine.

        Args:
            store: Persistence collaborator; its saved history is loaded and
                every later history change is saved to it
            settings: Entry caps and history limit (defaults if omitted)
            state: Existing state to resume instead of a fresh session
        """
        self._settings = settings or CalculatorSettings()
        self._state = state if state is not None else EngineState()
        self._listeners: list[HistoryListener] = []
        if store is not None:
            if state is None:
                self._state.history = store.load()[: self._settings.history_limit]
            self.subscribe(store.save)

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> CalculatorEngine:
        """Build an engine persisting to ``settings.history_path`` (in memory if unset)."""
        store: HistoryStore
        if settings.history_path is not None:
            store = JsonFileHistoryStore(settings.history_path, settings.storage_key)
        else:
            store = MemoryHistoryStore(settings.storage_key)
        return cls(store=store, settings=settings)

    # -- views -------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def settings(self) -> CalculatorSettings:
        return self._settings

    @property
    def main_display(self) -> str:
        return self._state.main_display

    @property
    def display_text(self) -> str:
        """Main display with thousands separators, for rendering only."""
        return format_display(self._state.main_display)

    @property
    def expression_trace(self) -> str:
        return self._state.expression_trace

    @property
    def error_flag(self) -> bool:
        return self._state.error_flag

    @property
    def history(self) -> list[HistoryEntry]:
        """Completed calculations, most recent first."""
        return self._state.history.copy()

    def subscribe(self, listener: HistoryListener) -> None:
        """Call ``listener`` with the full history list after every history change."""
        self._listeners.append(listener)

    # -- entry -------------------------------------------------------------

    def input_digit(self, digit: str) -> CalculatorEngine:
        validate_digit(digit)
        s = self._state
        if self._begin_entry():
            s.main_display = digit
            return self

        if s.awaiting_new_entry or "e" in s.main_display:
            s.main_display = digit
            s.awaiting_new_entry = False
        elif s.main_display == "0":
            s.main_display = digit
        elif len(s.main_display) < self._settings.max_input_length:
            s.main_display += digit
        elif (
            s.main_display.startswith("0.")
            and len(s.main_display) < self._settings.max_fractional_input_length
        ):
            s.main_display += digit
        else:
            logger.debug("Entry is full, ignoring digit %s", digit)
        return self

    def input_decimal(self) -> CalculatorEngine:
        s = self._state
        if self._begin_entry():
            s.main_display = "0."
            return self

        # exponent renderings are results, never extended
        if s.awaiting_new_entry or "e" in s.main_display:
            s.main_display = "0."
            s.awaiting_new_entry = False
        elif "." not in s.main_display:
            s.main_display += "."
        return self

    def backspace(self) -> CalculatorEngine:
        s = self._state
        # exponent renderings are results, never partially edited
        if s.awaiting_new_entry or s.error_flag or "e" in s.main_display:
            return self
        s.main_display = s.main_display[:-1]
        if s.main_display in ("", "-"):
            s.main_display = "0"
        return self

    def clear_entry(self) -> CalculatorEngine:
        """CE: zero the current entry and leave pending arithmetic alone."""
        s = self._state
        if s.pending_function_notation is not None:
            self._drop_function_notation()
        s.main_display = "0"
        s.error_flag = False
        return self

    def clear(self) -> CalculatorEngine:
        """C: reset everything except history."""
        self._state.reset()
        return self

    def _begin_entry(self) -> bool:
        """
        Shared prologue of digit and decimal entry.

        Leaves the error state, settles any standalone function result and,
        when the trace shows a completed expression, starts a new calculation.
        Returns True in that last case.
        """
        s = self._state
        if s.error_flag:
            self.clear()

        self._commit_settled_function()
        if s.pending_function_notation is not None:
            self._drop_function_notation()

        if s.has_completed_expression:
            s.expression_trace = ""
            s.expression_terms = []
            s.accumulator = 0.0
            s.pending_operator = None
            s.last_operator = None
            s.last_operand = None
            s.awaiting_new_entry = False
            return True
        return False

    def _drop_function_notation(self) -> None:
        s = self._state
        s.pending_function_notation = None
        s.settled_function = None
        if s.pending_operator is not None:
            s.expression_trace = f"{s.left_side} {s.pending_operator.symbol}"
        elif not s.has_completed_expression:
            s.expression_trace = ""

    def _commit_settled_function(self) -> None:
        settled = self._state.settled_function
        if settled is not None:
            self._state.settled_function = None
            self._record(f"{settled.notation} =", settled.result)

    # -- unary functions ---------------------------------------------------

    def square_root(self) -> CalculatorEngine:
        return self._apply_function("square_root", square_root)

    def square(self) -> CalculatorEngine:
        return self._apply_function("square", square)

    def reciprocal(self) -> CalculatorEngine:
        return self._apply_function("reciprocal", reciprocal)

    def negate(self) -> CalculatorEngine:
        """
        Negate the displayed value.

        Unlike the other functions an error state blocks negate entirely, and
        the notation always wraps the literal display text, so ``sqr(3)``
        followed by negate traces ``negate(9)``.
        """
        s = self._state
        if s.error_flag:
            return self
        try:
            result = format_result(negate_value(s.operand_value))
        except CalculatorError as e:
            return self._fail(e)
        self._show_function(function_notation("negate", s.raw_operand_text), result)
        return self

    def _apply_function(
        self, name: str, function: Callable[[float], float]
    ) -> CalculatorEngine:
        s = self._state
        if s.error_flag:
            self.clear()
        try:
            result = format_result(function(s.operand_value))
        except CalculatorError as e:
            return self._fail(e)

        inner = s.pending_function_notation or s.raw_operand_text
        self._show_function(function_notation(name, inner), result)
        return self

    def _show_function(self, notation: str, result: str) -> None:
        s = self._state
        s.pending_function_notation = notation
        if s.pending_operator is not None:
            s.expression_trace = f"{s.left_side} {s.pending_operator.symbol} {notation}"
            s.settled_function = None
        else:
            s.expression_trace = notation
            s.settled_function = SettledFunction(notation, result)
        s.main_display = result
        s.awaiting_new_entry = True

    # -- percentage --------------------------------------------------------

    def percentage(self) -> CalculatorEngine:
        """
        Context-sensitive percent.

        ``A + B%`` and ``A − B%`` use B percent of A; ``A × B%`` and
        ``A ÷ B%`` use B/100. With no pending operator the accumulator is
        scaled by the entry.
        """
        s = self._state
        if s.error_flag:
            return self

        operand = s.operand_value
        operator = s.pending_operator
        try:
            if operator in (None, Operator.ADD, Operator.SUBTRACT):
                result = format_result(percent_of(s.accumulator, operand))
            else:
                result = format_result(as_fraction(operand))
        except CalculatorError as e:
            return self._fail(e)

        s.main_display = result
        s.pending_function_notation = None
        s.settled_function = None
        if operator is None:
            s.accumulator = float(result)
            s.expression_trace = result
            s.expression_terms = []
            s.awaiting_new_entry = True
        else:
            s.expression_trace = f"{s.left_side} {operator.symbol} {result}"
            # the next operator press must execute against this value
            s.awaiting_new_entry = False
        return self

    # -- operators and equals ----------------------------------------------

    def set_operator(self, operator: Operator | str) -> CalculatorEngine:
        """
        Select a binary operator, first committing any pending operation.

        Raises:
            InvalidInputError: If ``operator`` is not one of the four operators
        """
        new_operator = Operator.parse(operator)
        s = self._state
        if s.error_flag:
            return self

        operand_text = s.pending_function_notation or s.raw_operand_text
        if s.pending_operator is not None and not s.awaiting_new_entry:
            expression = f"{s.left_side} {s.pending_operator.symbol} {operand_text} ="
            try:
                result = self._evaluate(s.accumulator, s.operand_value, s.pending_operator)
            except CalculatorError as e:
                return self._fail(e)
            s.main_display = result
            s.accumulator = float(result)
            s.expression_terms = [result]
            self._record(expression, result)
        else:
            s.accumulator = s.operand_value
            s.expression_terms = [operand_text]

        s.pending_function_notation = None
        s.settled_function = None
        s.pending_operator = new_operator
        s.awaiting_new_entry = True
        s.last_operator = new_operator
        s.last_operand = None
        s.expression_trace = f"{s.left_side} {new_operator.symbol}"
        return self

    def equals(self) -> CalculatorEngine:
        s = self._state
        if s.error_flag:
            return self

        operand_text = s.pending_function_notation or s.raw_operand_text
        if s.pending_operator is None and not s.has_completed_expression:
            expression = f"{operand_text} ="
            s.expression_trace = expression
            self._record(expression, s.main_display)
        elif s.awaiting_new_entry and s.last_operator is not None and s.last_operand is not None:
            expression = (
                f"{s.raw_operand_text} {s.last_operator.symbol} {format_result(s.last_operand)} ="
            )
            try:
                result = self._evaluate(s.operand_value, s.last_operand, s.last_operator)
            except CalculatorError as e:
                return self._fail(e)
            s.main_display = result
            s.accumulator = float(result)
            s.expression_trace = expression
            self._record(expression, result)
        elif s.pending_operator is not None:
            operator = s.pending_operator
            operand = s.operand_value
            expression = f"{s.left_side} {operator.symbol} {operand_text} ="
            s.last_operator = operator
            s.last_operand = operand
            try:
                result = self._evaluate(s.accumulator, operand, operator)
            except CalculatorError as e:
                return self._fail(e)
            s.main_display = result
            s.accumulator = float(result)
            s.expression_trace = expression
            s.expression_terms = []
            s.pending_operator = None
            self._record(expression, result)

        s.pending_function_notation = None
        s.settled_function = None
        s.awaiting_new_entry = True
        return self

    def _evaluate(self, a: float, b: float, operator: Operator) -> str:
        return format_result(apply(a, b, operator))

    def _fail(self, error: CalculatorError) -> CalculatorEngine:
        """Collapse ``error`` into the error display state."""
        logger.debug("Entering error state: %s", error)
        s = self._state
        s.error_flag = True
        s.main_display = error.display_message
        s.expression_trace = ""
        s.pending_function_notation = None
        s.settled_function = None
        s.awaiting_new_entry = True
        return self

    # -- history -----------------------------------------------------------

    def _record(self, expression: str, result: str) -> None:
        s = self._state
        entry = new_entry(expression, result, s.history)
        s.history = prepend(s.history, entry, self._settings.history_limit)
        self._emit_history()

    def _emit_history(self) -> None:
        snapshot = self._state.history.copy()
        for listener in self._listeners:
            listener(snapshot)

    def clear_history(self) -> CalculatorEngine:
        self._state.history = []
        self._emit_history()
        return self

    def recall_history(self, entry: HistoryEntry | int) -> CalculatorEngine:
        """
        Put a past result back on the main display.

        Accumulator and pending operator are left untouched.

        Raises:
            InvalidInputError: If no entry has the given id or its result is not numeric
        """
        s = self._state
        if not isinstance(entry, HistoryEntry):
            entry = find_entry(s.history, entry)
        validate_numeric_text(entry.result)
        s.error_flag = False
        s.main_display = entry.result
        s.pending_function_notation = None
        s.settled_function = None
        s.awaiting_new_entry = True
        return self

    # -- events ------------------------------------------------------------

    def dispatch(self, event: Event) -> CalculatorEngine:
        """
        Apply one ``Event`` to the engine.

        Raises:
            InvalidInputError: If the action is unknown or lacks its argument
        """
        handler = _ACTIONS.get(event.action)
        if handler is None:
            raise InvalidInputError(event.action, "Unknown action")
        return handler(self, event.argument)

    def __repr__(self) -> str:
        return (
            f"CalculatorEngine(main_display={self._state.main_display!r}, "
            f"trace={self._state.expression_trace!r}, history_len={len(self._state.history)})"
        )


def _require_argument(event_argument: str | int | None, action: str) -> str | int:
    if event_argument is None:
        raise InvalidInputError(action, "Action requires an argument")
    return event_argument


_ACTIONS: dict[str, Callable[[CalculatorEngine, str | int | None], CalculatorEngine]] = {
    "digit": lambda e, arg: e.input_digit(str(_require_argument(arg, "digit"))),
    "decimal": lambda e, _: e.input_decimal(),
    "operator": lambda e, arg: e.set_operator(_require_argument(arg, "operator")),
    "equals": lambda e, _: e.equals(),
    "percent": lambda e, _: e.percentage(),
    "sqrt": lambda e, _: e.square_root(),
    "square": lambda e, _: e.square(),
    "reciprocal": lambda e, _: e.reciprocal(),
    "negate": lambda e, _: e.negate(),
    "backspace": lambda e, _: e.backspace(),
    "clear": lambda e, _: e.clear(),
    "clear-entry": lambda e, _: e.clear_entry(),
    "clear-history": lambda e, _: e.clear_history(),
    "recall": lambda e, arg: e.recall_history(int(_require_argument(arg, "recall"))),
}


def transition(state: EngineState, event: Event) -> EngineState:
    """
    Pure transition: return the state after ``event`` without touching ``state``.

    No store or listener is involved.
    """
    engine = CalculatorEngine(state=copy.deepcopy(state))
    engine.dispatch(event)
    return engine.state
