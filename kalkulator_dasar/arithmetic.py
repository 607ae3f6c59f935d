"""Number parsing, formatting and the binary operation evaluator."""

from __future__ import annotations

import math
from decimal import Decimal

from . import config
from .types import CalculationError, Operation, ParseError


def parse_display(text: str) -> float:
    """Parse the leading number of display text into a float.

    Like a calculator reading what is on screen, trailing characters that
    cannot extend the number are ignored: "1e-" reads as 1 and "1e-8." as
    1e-8. Words such as "inf" or "nan", a lone sign and the error marker
    are rejected.

    Raises:
        ParseError: If the text does not start with a number.
    """
    match = config.NUMBER_PREFIX_RE.match(text) if isinstance(text, str) else None
    if match is None:
        raise ParseError(f"Not a number: {text!r}")
    return float(match.group(0))


def format_number(value: float) -> str:
    """Format a value for the display.

    Integral values drop the fractional part and negative zero prints as
    "0". Other values use their shortest round-tripping digits, written as
    a plain decimal between PLAIN_NUMBER_MIN and PLAIN_NUMBER_MAX and in
    exponent form ("1e-7", "1e+21") outside that range.

    Examples:
        >>> format_number(5.0)
        '5'
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(1.5e-10)
        '1.5e-10'
    """
    if not math.isfinite(value):
        return repr(float(value))
    magnitude = abs(value)
    if value == int(value) and magnitude < config.PLAIN_NUMBER_MAX:
        return str(int(value))

    text = repr(float(value))
    mantissa, _, exponent = text.partition("e")
    if config.PLAIN_NUMBER_MIN <= magnitude < config.PLAIN_NUMBER_MAX:
        return format(Decimal(text), "f") if exponent else text
    if not exponent:
        return text
    return f"{mantissa}e{int(exponent):+d}"


def round_result(value: float, places: int | None = None) -> float:
    """Round a computed value to the configured number of decimal places."""
    if places is None:
        places = config.RESULT_DECIMAL_PLACES
    return round(value, places)


def evaluate(
    prev: float, current: float, op: Operation, places: int | None = None
) -> float:
    """Apply op to prev and current.

    Args:
        prev: Left operand (the value captured before the operator)
        current: Right operand (the value on the display)
        op: Operation to apply
        places: Decimal places to round to (default: RESULT_DECIMAL_PLACES)

    Returns:
        The rounded result

    Raises:
        CalculationError: DIVISION_BY_ZERO, or NON_FINITE when the result
            overflows or is not a number.
    """
    if op is Operation.DIVIDE and current == 0:
        raise CalculationError("Division by zero", code="DIVISION_BY_ZERO")

    try:
        if op is Operation.ADD:
            result = prev + current
        elif op is Operation.SUBTRACT:
            result = prev - current
        elif op is Operation.MULTIPLY:
            result = prev * current
        elif op is Operation.DIVIDE:
            result = prev / current
        else:
            raise ValueError(f"Unsupported operation: {op!r}")
    except OverflowError:
        result = math.inf

    if not math.isfinite(result):
        raise CalculationError(
            f"Result is not finite: {prev!r} {op.value} {current!r}",
            code="NON_FINITE",
        )
    return round_result(result, places)
