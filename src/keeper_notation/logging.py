"""Logging setup for keeper-notation, driven by KEEPER_LOG_LEVEL."""

import logging
import sys
from typing import Final

from keeper_notation.environment import get_log_level

# asyncio logs every subprocess transport at DEBUG, one per ksm call
_CLAMPED_LOGGERS: Final[frozenset[str]] = frozenset({"asyncio"})

FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    """Log to stderr at KEEPER_LOG_LEVEL (default INFO).

    stdout is reserved for resolved values. The clamped loggers never go
    below INFO.
    """
    try:
        level = get_log_level("LOG_LEVEL", logging.INFO)
    except ValueError:
        logging.basicConfig(level=logging.ERROR, stream=sys.stderr)
        logging.getLogger(__name__).exception("Failed to configure logging")
        raise

    logging.basicConfig(level=level, format=FORMAT, stream=sys.stderr)

    for name in _CLAMPED_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).debug(
        "Logging configured at level %s", logging.getLevelName(level)
    )
