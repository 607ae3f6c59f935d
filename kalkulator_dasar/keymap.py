"""Key bindings: translate key names and action names into engine calls.

This is the pure half of an input adapter. A host that listens to a real
keyboard or to buttons forwards each key name to dispatch_key(); nothing in
this module attaches to an event source.
"""

from __future__ import annotations

from typing import Any

from . import config
from .engine import CalculatorEngine
from .types import ValidationError

ACTIONS = (
    "digit",
    "decimal",
    "operation",
    "equals",
    "clear",
    "backspace",
    "toggle_sign",
    "percentage",
)

KEY_BINDINGS: dict[str, str] = {
    **{d: "digit" for d in "0123456789"},
    ".": "decimal",
    **{op: "operation" for op in ("+", "-", "*", "/", "×", "÷", "−")},
    "=": "equals",
    "Enter": "equals",
    "Escape": "clear",
    "c": "clear",
    "C": "clear",
    "Backspace": "backspace",
    "%": "percentage",
    "F9": "toggle_sign",
}

# Named keys written as {Name} inside a key sequence
NAMED_KEYS = frozenset(key for key in KEY_BINDINGS if len(key) > 1)


def action_for_key(key: str) -> str | None:
    """Return the action bound to key, or None if the key is unbound."""
    return KEY_BINDINGS.get(key)


def dispatch_action(engine: CalculatorEngine, action: str, value: Any = None) -> None:
    """Invoke an engine action by name.

    Args:
        engine: Engine to drive
        action: One of ACTIONS
        value: Digit for "digit", operator key for "operation"

    Raises:
        ValidationError: If the action name is unknown or value is invalid.
    """
    if action == "digit":
        engine.input_digit(value)
    elif action == "decimal":
        engine.input_decimal()
    elif action == "operation":
        engine.set_operation(value)
    elif action == "equals":
        engine.equals()
    elif action == "clear":
        engine.clear()
    elif action == "backspace":
        engine.backspace()
    elif action == "toggle_sign":
        engine.toggle_sign()
    elif action == "percentage":
        engine.percentage()
    else:
        raise ValidationError(f"Unknown action: {action!r}", code="UNKNOWN_ACTION")


def dispatch_key(engine: CalculatorEngine, key: str) -> bool:
    """Perform the action bound to key.

    Returns:
        True if the key was handled, False for unbound keys (engine untouched)
    """
    action = action_for_key(key)
    if action is None:
        return False
    dispatch_action(engine, action, key)
    return True


def tokenize_keys(sequence: str) -> list[str]:
    """Split a key sequence into key names.

    Every character is a key except whitespace, which is ignored, and
    braces, which wrap a named key: "12{Backspace}3+4{Enter}".

    Raises:
        ValidationError: EMPTY_INPUT, TOO_LONG, UNBALANCED_BRACE or
            UNKNOWN_KEY.
    """
    if not sequence or not sequence.strip():
        raise ValidationError("Empty key sequence", code="EMPTY_INPUT")
    if len(sequence) > config.MAX_KEY_SEQUENCE_LENGTH:
        raise ValidationError(
            f"Key sequence too long ({len(sequence)} > {config.MAX_KEY_SEQUENCE_LENGTH})",
            code="TOO_LONG",
        )

    keys: list[str] = []
    pos = 0
    while pos < len(sequence):
        char = sequence[pos]
        if char.isspace():
            pos += 1
            continue
        if char == "{":
            match = config.NAMED_KEY_RE.match(sequence, pos)
            if match is None:
                raise ValidationError(
                    f"Unterminated key name at position {pos}",
                    code="UNBALANCED_BRACE",
                )
            key = match.group(1)
            if key not in NAMED_KEYS:
                raise ValidationError(f"Unknown key: {{{key}}}", code="UNKNOWN_KEY")
            keys.append(key)
            pos = match.end()
            continue
        if char not in KEY_BINDINGS:
            raise ValidationError(f"Unknown key: {char!r}", code="UNKNOWN_KEY")
        keys.append(char)
        pos += 1
    return keys
