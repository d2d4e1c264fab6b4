"""Breadth-first search for shortest pour sequences."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import numpy as np

from jugx.puzzles.liquid_transfer import LiquidTransfer, pour_description
from jugx.utils.log import get_logger
from jugx.utils.util import to_amounts

__all__ = ["Action", "apply_actions", "bfs_solve"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class Action:
    """Pour of exactly ``quantity`` units from jar ``source`` to jar ``destination`` (0-based)."""

    source: int
    destination: int
    quantity: int

    def __post_init__(self):
        if self.source == self.destination:
            raise ValueError(f"Action must pour between two different jars, got jar {self.source + 1} twice")
        if self.quantity <= 0:
            raise ValueError(f"Action quantity must be positive, got {self.quantity}")

    def __str__(self) -> str:
        return pour_description(self.quantity, self.source, self.destination)


def bfs_solve(
    puzzle: LiquidTransfer,
    solve_config: LiquidTransfer.SolveConfig,
    start: LiquidTransfer.State,
    max_states: Optional[int] = None,
) -> Optional[list[Action]]:
    """Find a shortest pour sequence from ``start`` to a state holding the target.

    States are expanded in FIFO order and their successors in action-index
    order (source ascending, then destination ascending), so the returned plan
    is the same on every call. Visited states are keyed by their exact amount
    tuple. ``start`` is never modified.

    Args:
        puzzle: Puzzle defining capacities and the pour transition.
        solve_config: Goal configuration (the target quantity).
        start: State to search from.
        max_states: Optional cap on the number of expanded states.

    Returns:
        The list of actions (``[]`` if ``start`` already holds the target), or
        ``None`` when the target is unreachable or ``max_states`` was hit.
    """
    start_key = to_amounts(start.amounts)
    target = int(solve_config.target)

    if target > max(puzzle.capacities):
        logger.debug("Target %d exceeds every capacity %s", target, puzzle.capacities)
        return None

    queue = deque([start_key])
    parents: dict[tuple[int, ...], Optional[tuple[tuple[int, ...], Action]]] = {start_key: None}
    explored = 0

    while queue:
        key = queue.popleft()
        state = puzzle.state_from_amounts(key)
        if bool(puzzle.is_solved(solve_config, state)):
            logger.debug("Reached %s after exploring %d states", key, explored)
            return _reconstruct(parents, key)

        explored += 1
        if max_states is not None and explored > max_states:
            logger.warning("Search stopped after %d states without reaching %d", max_states, target)
            return None
        if puzzle.action_size == 0:
            continue

        neighbours, costs = puzzle.get_neighbours(solve_config, state)
        costs_np = np.asarray(costs)
        amounts_np = np.asarray(neighbours.amounts)
        for action in np.where(np.isfinite(costs_np))[0]:
            next_key = tuple(int(a) for a in amounts_np[action])
            if next_key in parents:
                continue
            source, destination = puzzle.action_to_pair(int(action))
            quantity = key[source] - next_key[source]
            parents[next_key] = (key, Action(source, destination, quantity))
            queue.append(next_key)

    logger.debug("Target %d unreachable; explored %d states", target, explored)
    return None


def _reconstruct(parents, key) -> list[Action]:
    actions = []
    link = parents[key]
    while link is not None:
        key, action = link
        actions.append(action)
        link = parents[key]
    actions.reverse()
    return actions


def apply_actions(
    puzzle: LiquidTransfer,
    solve_config: LiquidTransfer.SolveConfig,
    state: LiquidTransfer.State,
    actions: Sequence[Action],
) -> LiquidTransfer.State:
    """Replay ``actions`` on a copy of ``state`` and return the final state.

    Raises:
        ValueError: If an action does not move exactly its recorded quantity.
    """
    for step, action in enumerate(actions):
        index = puzzle.pair_to_action(action.source, action.destination)
        next_state, cost = puzzle.get_actions(solve_config, state, index)
        moved = int(state.amounts[action.source]) - int(next_state.amounts[action.source])
        if not np.isfinite(np.asarray(cost)) or moved != action.quantity:
            raise ValueError(f"Step {step} ({action}) moves {moved}, not {action.quantity}")
        state = next_state
    return state
