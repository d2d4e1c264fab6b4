"""
Logging helpers for JugX.

Library modules only create loggers; handlers are attached by the
application (the CLI calls :func:`configure_logging` once at startup).

Usage:
    from jugx.utils.log import get_logger

    logger = get_logger(__name__)
    logger.debug("Explored %d states", explored)
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "jugx"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_configured = False

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    format_str: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    stream: Optional[object] = None,
) -> None:
    """
    Attach a stream handler to the ``jugx`` logger hierarchy.

    Subsequent calls only update the level.

    Args:
        level: Logging level (default: INFO)
        format_str: Log message format
        date_format: Date format for timestamps
        stream: Output stream (default: sys.stderr)
    """
    global _root_configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    if _root_configured:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_str, date_format))
    root.addHandler(handler)
    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``jugx`` hierarchy.

    Args:
        name: Module name (typically __name__)
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_verbose(verbose: bool) -> None:
    """Switch the ``jugx`` loggers between DEBUG and INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
