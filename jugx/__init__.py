"""
JugX: liquid-transfer puzzles with JAX

A small puzzle engine for the classic water-jug problem: jars with fixed
capacities, pours that move liquid until the source is empty or the
destination full, a breadth-first solver for shortest pour sequences and an
undoable history of every accepted move.
"""

# Core framework
from jugx.config import JugConfig, parse_config
from jugx.core import FieldDescriptor, HistoryEntry, HistoryLog, Puzzle, PuzzleState, state_dataclass
from jugx.engine import PourResult, TransferEngine
from jugx.puzzles import LiquidTransfer
from jugx.session import JugSession
from jugx.solver import Action, apply_actions, bfs_solve

__version__ = "0.1.0"

__all__ = [
    # Core framework
    "Puzzle",
    "PuzzleState",
    "FieldDescriptor",
    "state_dataclass",
    "HistoryEntry",
    "HistoryLog",
    # Configuration
    "JugConfig",
    "parse_config",
    # Puzzle implementations
    "LiquidTransfer",
    # Engine, solver and session
    "TransferEngine",
    "PourResult",
    "Action",
    "bfs_solve",
    "apply_actions",
    "JugSession",
]
