"""Public API for Kalkulator Dasar - returns structured objects without side effects."""

from __future__ import annotations

from .engine import CalculatorEngine
from .keymap import dispatch_key, tokenize_keys
from .types import KeyResult, ValidationError


def new_engine() -> CalculatorEngine:
    """Create an engine in the cleared configuration using current config."""
    return CalculatorEngine()


def evaluate_keys(sequence: str, engine: CalculatorEngine | None = None) -> KeyResult:
    """Replay a key sequence and report the resulting display.

    Args:
        sequence: Key sequence (e.g., "2+3=", "12{Backspace}%")
        engine: Engine to drive; a fresh one is used when omitted

    Returns:
        KeyResult with display and pending expression, or the validation error

    Example:
        >>> from kalkulator_dasar.api import evaluate_keys
        >>> evaluate_keys("2+3+4=").display
        '9'
        >>> evaluate_keys("5/0=").ok
        False
    """
    if engine is None:
        engine = new_engine()
    try:
        keys = tokenize_keys(sequence)
    except ValidationError as e:
        return KeyResult(ok=False, error=str(e))

    for key in keys:
        dispatch_key(engine, key)

    if engine.error:
        return KeyResult(ok=False, display=engine.display_text, error=engine.display_text)
    return KeyResult(
        ok=True, display=engine.display_text, pending=engine.pending_expression_text
    )
