import os
import sys

FALLBACK_SIZE = (25, 80)


def get_terminal_size() -> tuple[int, int]:
    """Return (rows, columns) of the terminal, or (25, 80) if not a tty."""
    if not sys.stdout.isatty():
        return FALLBACK_SIZE
    try:
        size = os.get_terminal_size()
    except OSError:
        return FALLBACK_SIZE
    return (size.lines, size.columns)
