"""Run the calculator with ``python -m kalkulator_dasar``.

Accepts the same flags as the ``kalkulator-dasar`` console script, e.g.
``python -m kalkulator_dasar -e "2+3="`` or ``--health-check``; with no
flags it starts the interactive prompt.
"""

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
