"""Centralized configuration for Kalkulator Dasar.

This module defines:
- Display limits (maximum characters of typed input)
- Result rounding (decimal places kept after each computation)
- The error marker shown while the calculator is in its error state
- Input validation limits for key sequences

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with KALKULATOR_DASAR_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulator-dasar")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Display configuration
MAX_DISPLAY_LENGTH = int(
    os.getenv("KALKULATOR_DASAR_MAX_DISPLAY_LENGTH", "12")
)  # characters, including sign and decimal point
ERROR_MARKER = os.getenv("KALKULATOR_DASAR_ERROR_MARKER", "Error")

# Arithmetic configuration
RESULT_DECIMAL_PLACES = int(
    os.getenv("KALKULATOR_DASAR_RESULT_DECIMAL_PLACES", "8")
)  # suppresses binary floating-point artifacts such as 0.1 + 0.2

# Logging
LOG_LEVEL = os.getenv("KALKULATOR_DASAR_LOG_LEVEL", "WARNING")

# Input validation limits
MAX_KEY_SEQUENCE_LENGTH = int(
    os.getenv("KALKULATOR_DASAR_MAX_KEY_SEQUENCE_LENGTH", "10000")
)  # characters

# Leading decimal literal with optional sign and exponent; trailing text is ignored
NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Magnitudes shown as plain decimals; anything outside uses exponent form
PLAIN_NUMBER_MIN = 1e-6
PLAIN_NUMBER_MAX = 1e21

# Named key inside a key sequence, e.g. {Backspace}
NAMED_KEY_RE = re.compile(r"\{([^{}]*)\}")
