"""
Utility functions for JugX.

This module provides rendering helpers and logging setup shared by the puzzle,
the session facade and the command line front end.
"""

from jugx.utils.log import configure_logging, get_logger, set_verbose
from jugx.utils.util import format_amounts, gauge_str, is_integer, to_amounts

__all__ = [
    "configure_logging",
    "format_amounts",
    "gauge_str",
    "get_logger",
    "is_integer",
    "set_verbose",
    "to_amounts",
]
