#!/usr/bin/env python3
"""
Kalkulator Dasar - Basic Calculator

Main entry point for the Kalkulator Dasar calculator application.
This file serves as a thin wrapper that delegates all functionality
to the kalkulator_dasar package.

Usage:
    python kalkulator.py                    # Interactive REPL
    python kalkulator.py -e "2+3="          # Replay a key sequence
    python kalkulator.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Kalkulator Dasar.

    Delegates all functionality to the kalkulator_dasar.cli module,
    which handles argument parsing, key replay, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from kalkulator_dasar.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
