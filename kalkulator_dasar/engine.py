"""Calculator input/state machine.

A CalculatorEngine owns one CalculatorState and exposes one method per user
intent. Each method transforms the state atomically and then notifies the
registered listeners, which is how a presentation layer learns that the
display must be refreshed. Calculation failures never escape the engine;
they put it in the error configuration instead.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from . import config
from .arithmetic import evaluate, format_number, parse_display
from .logging_config import get_logger
from .types import (
    CalculationError,
    CalculatorState,
    Operation,
    ParseError,
    ValidationError,
)

logger = get_logger("engine")

Listener = Callable[["CalculatorEngine"], None]

DIGITS = frozenset("0123456789")


class CalculatorEngine:
    """Four-function calculator with a single pending operation."""

    def __init__(
        self,
        max_length: int | None = None,
        decimal_places: int | None = None,
        error_marker: str | None = None,
    ) -> None:
        self.max_length = (
            config.MAX_DISPLAY_LENGTH if max_length is None else max_length
        )
        self.decimal_places = (
            config.RESULT_DECIMAL_PLACES if decimal_places is None else decimal_places
        )
        self.error_marker = (
            config.ERROR_MARKER if error_marker is None else error_marker
        )
        self.state = CalculatorState()
        self._listeners: list[Listener] = []

    # Observers

    def subscribe(self, listener: Listener) -> None:
        """Call listener with the engine after every action."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Queries

    @property
    def display_text(self) -> str:
        return self.state.display

    @property
    def pending_expression_text(self) -> str:
        """Previous operand and operator symbol, e.g. "12 ×"; empty when idle."""
        state = self.state
        if state.previous_value is None or state.operation is None:
            return ""
        return f"{format_number(state.previous_value)} {state.operation.symbol}"

    @property
    def error(self) -> bool:
        return self.state.error

    def snapshot(self) -> CalculatorState:
        """Return an independent copy of the current state."""
        return replace(self.state)

    # Actions

    def input_digit(self, digit: str) -> None:
        if not isinstance(digit, str) or digit not in DIGITS:
            raise ValidationError(f"Not a digit: {digit!r}", code="INVALID_DIGIT")
        if self.state.error:
            self._reset()

        state = self.state
        if state.display == "0" and digit == "0":
            pass
        elif state.start_new_number:
            state.display = digit
            state.start_new_number = False
        elif len(state.display) < self.max_length:
            state.display = digit if state.display == "0" else state.display + digit

        logger.debug("digit %s -> %r", digit, state.display)
        self._notify()

    def input_decimal(self) -> None:
        if self.state.error:
            self._reset()

        state = self.state
        if state.start_new_number:
            state.display = "0."
            state.start_new_number = False
        elif "." not in state.display:
            state.display += "."

        logger.debug("decimal -> %r", state.display)
        self._notify()

    def backspace(self) -> None:
        """Remove the last typed character; clears the error state instead."""
        state = self.state
        if state.error:
            self._reset()
        else:
            state.display = state.display[:-1] or "0"

        logger.debug("backspace -> %r", self.state.display)
        self._notify()

    def set_operation(self, op: Operation | str) -> None:
        """Select the pending operation, applying any already pending one first.

        Pressing an operator while a previous operation is pending computes
        the running total (2 + 3 + shows 5) before the new operator takes
        over. An operator pressed in the error state only clears it.
        """
        operation = Operation.from_key(op)
        if self.state.error:
            self._reset()
            self._notify()
            return

        state = self.state
        try:
            current = parse_display(state.display)
            if state.previous_value is None:
                state.previous_value = current
            elif state.operation is not None:
                result = evaluate(
                    state.previous_value,
                    current,
                    state.operation,
                    self.decimal_places,
                )
                state.display = format_number(result)
                state.previous_value = result
        except (ParseError, CalculationError) as e:
            self._show_error(e)
            self._notify()
            return

        state.operation = operation
        state.start_new_number = True

        logger.debug("operation %s pending on %r", operation.value, state.previous_value)
        self._notify()

    def equals(self) -> None:
        """Apply the pending operation to the displayed value."""
        if self.state.error:
            self._reset()
            self._notify()
            return

        state = self.state
        if state.operation is not None and state.previous_value is not None:
            try:
                current = parse_display(state.display)
                result = evaluate(
                    state.previous_value,
                    current,
                    state.operation,
                    self.decimal_places,
                )
            except (ParseError, CalculationError) as e:
                self._show_error(e)
            else:
                state.display = format_number(result)
                state.previous_value = None
                state.operation = None
                state.start_new_number = True
                logger.debug("equals -> %r", state.display)

        self._notify()

    def toggle_sign(self) -> None:
        self._transform_display(lambda value: -value, "toggle_sign")

    def percentage(self) -> None:
        self._transform_display(lambda value: value / 100, "percentage")

    def clear(self) -> None:
        self._reset()
        logger.debug("clear")
        self._notify()

    # Internals

    def _transform_display(self, func: Callable[[float], float], name: str) -> None:
        if self.state.error:
            self._reset()
            self._notify()
            return

        state = self.state
        try:
            value = parse_display(state.display)
        except ParseError:
            # Display left untouched
            logger.debug("%s ignored for %r", name, state.display)
        else:
            state.display = format_number(func(value))
            logger.debug("%s -> %r", name, state.display)
        self._notify()

    def _reset(self) -> None:
        self.state = CalculatorState()

    def _show_error(self, exc: ParseError | CalculationError) -> None:
        logger.info("calculation error [%s]: %s", exc.code, exc)
        self.state = CalculatorState(display=self.error_marker, error=True)
