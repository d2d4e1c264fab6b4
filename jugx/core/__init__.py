"""
Core puzzle framework components.

This module provides the base classes and data structures for creating puzzle
environments, plus the history log that records accepted state changes.
"""

from jugx.core.history import HistoryEntry, HistoryLog
from jugx.core.puzzle_base import Puzzle
from jugx.core.puzzle_state import FieldDescriptor, PuzzleState, state_dataclass

__all__ = [
    "Puzzle",
    "PuzzleState",
    "FieldDescriptor",
    "state_dataclass",
    "HistoryEntry",
    "HistoryLog",
]
