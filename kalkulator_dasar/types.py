"""Type definitions, state records and result dataclasses."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class Operation(str, Enum):
    """Binary operation awaiting its second operand.

    Values are the keys accepted by the action API.
    """

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        """Symbol used when rendering the pending expression."""
        return _DISPLAY_SYMBOLS[self]

    @classmethod
    def from_key(cls, key: Operation | str) -> Operation:
        """Resolve an operator key or display symbol to an Operation.

        Raises:
            ValidationError: If the key is not an operator.
        """
        if isinstance(key, cls):
            return key
        try:
            return cls(_KEY_ALIASES.get(key, key))
        except ValueError:
            raise ValidationError(
                f"Unknown operator: {key!r}", code="UNKNOWN_OPERATOR"
            ) from None


_DISPLAY_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "-",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}

_KEY_ALIASES = {"×": "*", "÷": "/", "−": "-"}


@dataclass
class CalculatorState:
    """Mutable state of one calculator session."""

    display: str = "0"
    previous_value: float | None = None
    operation: Operation | None = None
    start_new_number: bool = False
    error: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict = asdict(self)
        if self.operation is not None:
            result_dict["operation"] = self.operation.value
        return result_dict


@dataclass
class KeyResult:
    """Result of replaying a key sequence through an engine."""

    ok: bool
    display: str | None = None
    pending: str = ""
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.display is not None:
            result_dict["display"] = self.display
        if self.pending:
            result_dict["pending"] = self.pending
        if self.error is not None:
            result_dict["error"] = self.error
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if self.display is None:
            return f"KeyResult(ok={self.ok}, error={self.error!r})"
        parts = [f"ok={self.ok}", f"display={self.display!r}"]
        if self.pending:
            parts.append(f"pending={self.pending!r}")
        if self.error is not None:
            parts.append(f"error={self.error!r}")
        return f"KeyResult({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when caller input (keys, digits, operators) is invalid."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when the display text is not a number."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class CalculationError(Exception):
    """Raised when an operation has no finite result."""

    def __init__(self, message: str, code: str = "CALCULATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
