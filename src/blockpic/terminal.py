import logging
import os
import sys

logger = logging.getLogger(__name__)

DEFAULT_SIZE = (80, 24)


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, lines) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return DEFAULT_SIZE
    try:
        size = os.get_terminal_size()
    except OSError as e:
        logger.warning("Failed to determine terminal size (%s), defaulting to %dx%d", e, *DEFAULT_SIZE)
        return DEFAULT_SIZE
    if size.columns == 0 or size.lines == 0:
        return DEFAULT_SIZE
    return (size.columns, size.lines)
