"""
Session facade exposed to front ends.

A :class:`JugSession` wires the configuration, the transfer engine, the
history log and the solver together. Front ends parse user input, call
these operations and render the returned values; they never touch the live
state directly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Optional

from jugx.config import JugConfig
from jugx.core.history import HistoryEntry, HistoryLog
from jugx.engine import PourResult, TransferEngine
from jugx.solver import Action, bfs_solve
from jugx.utils.log import get_logger

__all__ = ["JugSession"]

logger = get_logger(__name__)


class JugSession:
    """One puzzle session: setup, pours, solving, replay and rollback.

    Args:
        max_states: Optional cap on the number of states the solver may expand.
    """

    def __init__(self, max_states: Optional[int] = None):
        self.max_states = max_states
        self.config: Optional[JugConfig] = None
        self._engine: Optional[TransferEngine] = None
        self._history = HistoryLog()

    @property
    def is_setup(self) -> bool:
        return self._engine is not None

    def _require_setup(self) -> None:
        if self._engine is None:
            raise RuntimeError("Session is not set up; call setup() first")

    @property
    def engine(self) -> TransferEngine:
        self._require_setup()
        return self._engine

    def setup(self, capacities: Sequence[int], target: int) -> JugConfig:
        """Start a new puzzle, replacing any previous configuration and history.

        Raises:
            ValueError: If the configuration is invalid. The session is left
                exactly as it was.
        """
        config = JugConfig.create(capacities, target)
        engine = TransferEngine(config)

        self.config = config
        self._engine = engine
        self._seed_history()
        logger.info("Set up %d jars %s with target %d", config.n_jars, list(config.capacities), config.target)
        return config

    def _seed_history(self) -> None:
        largest = max(self.config.capacities)
        self._history.clear()
        self._history.append(self.engine.amounts, f"Initial state - largest jar ({largest}) filled")

    def pour(self, source: int, destination: int) -> int:
        """Pour between two jars (0-based) and record it; returns the quantity moved."""
        result = self.engine.pour(source, destination)
        if result:
            self._history.append(self.engine.amounts, result.description)
            if self.engine.is_target_reached():
                logger.info("Target quantity %d reached", self.config.target)
        return result.quantity

    def reset(self) -> None:
        """Back to the initial fill with a fresh history."""
        self.engine.reset()
        self._seed_history()

    def solve(self) -> Optional[list[Action]]:
        """Shortest pour sequence from the current state, ``[]`` if already solved, ``None`` if unsolvable."""
        engine = self.engine
        actions = bfs_solve(engine.puzzle, engine.solve_config, engine.state, max_states=self.max_states)
        if actions is None:
            logger.info("No solution found for target %d", self.config.target)
        else:
            logger.info("Found a solution in %d steps", len(actions))
        return actions

    def replay(self, actions: Iterable[Action]) -> Iterator[PourResult]:
        """Apply ``actions`` one at a time, yielding after each recorded pour.

        Closing the generator early leaves the history holding exactly the
        pours applied so far.

        Raises:
            ValueError: If an action no longer moves its recorded quantity; it
                is not applied.
        """
        for action in actions:
            expected = self.engine.pour_quantity(action.source, action.destination)
            if expected <= 0 or expected != action.quantity:
                raise ValueError(f"Cannot replay '{action}': it would move {expected}")
            result = self.engine.pour(action.source, action.destination)
            self._history.append(self.engine.amounts, result.description)
            yield result

    def execute_solution(self) -> Optional[list[Action]]:
        """Solve from the current state and replay the whole solution."""
        actions = self.solve()
        if actions is None:
            return None
        for _ in self.replay(actions):
            pass
        return actions

    def rollback(self, index: int) -> None:
        """Return to ``history()[index]``, discarding every later entry.

        Raises:
            IndexError: If ``index`` is out of range; nothing changes.
        """
        engine = self.engine
        self._history.check_index(index)
        entry = self._history[index]
        engine.restore(entry.amounts)
        self._history.truncate(index)
        logger.debug("Rolled back to step %d: %s", index, entry.description)

    def current_state(self) -> tuple[int, ...]:
        return self.engine.amounts

    def history(self) -> tuple[HistoryEntry, ...]:
        self._require_setup()
        return self._history.entries

    def is_target_reached(self) -> bool:
        return self.engine.is_target_reached()

    def render(self) -> str:
        """Jar gauges for the current state."""
        engine = self.engine
        return engine.puzzle.get_string_parser()(engine.state)

    def format_history(self, tablefmt: str = "simple") -> str:
        self._require_setup()
        return self._history.format_table(tablefmt=tablefmt)
