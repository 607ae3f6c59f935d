"""Kalkulator Dasar package: calculator engine, key bindings, API, and CLI."""

from .engine import CalculatorEngine
from .types import CalculatorState, Operation

__all__ = [
    "config",
    "engine",
    "arithmetic",
    "keymap",
    "api",
    "cli",
    "types",
    "logging_config",
    "CalculatorEngine",
    "CalculatorState",
    "Operation",
]

# Public API exports

__api_exports__ = [
    "new_engine",
    "evaluate_keys",
]
