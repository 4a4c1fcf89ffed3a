"""The single mutable record behind one calculator session."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from basic_calculator.formatting import format_result
from basic_calculator.history import HistoryEntry
from basic_calculator.operations import Operator


@dataclass
class SettledFunction:
    """A standalone function result not yet written to history."""

    notation: str
    result: str


@dataclass
class EngineState:
    """
    Display layers, pending arithmetic and history of one session.

    ``main_display`` is the authoritative entry text; while ``error_flag``
    is set it holds the error message instead of a number.
    """

    main_display: str = "0"
    accumulator: float = 0.0
    pending_operator: Operator | None = None
    awaiting_new_entry: bool = False
    last_operator: Operator | None = None
    last_operand: float | None = None
    expression_trace: str = ""
    expression_terms: list[str] = field(default_factory=list)
    pending_function_notation: str | None = None
    settled_function: SettledFunction | None = None
    error_flag: bool = False
    history: list[HistoryEntry] = field(default_factory=list)

    def reset(self) -> None:
        """Restore every field to its default except history."""
        defaults = EngineState()
        for item in fields(self):
            if item.name != "history":
                setattr(self, item.name, getattr(defaults, item.name))

    @property
    def raw_operand_text(self) -> str:
        """Literal operand text used inside function notation, never a re-rounded float."""
        return "0" if self.error_flag else self.main_display

    @property
    def operand_value(self) -> float:
        return float(self.raw_operand_text)

    @property
    def left_side(self) -> str:
        """Left-hand side of the trace: the recorded terms, else the accumulator."""
        if self.expression_terms:
            return " ".join(self.expression_terms)
        return format_result(self.accumulator)

    @property
    def has_completed_expression(self) -> bool:
        return "=" in self.expression_trace
