from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import numpy as np

from jugx.config import JugConfig
from jugx.puzzles.liquid_transfer import LiquidTransfer, pour_description
from jugx.utils.log import get_logger
from jugx.utils.util import is_integer, to_amounts

__all__ = ["PourResult", "TransferEngine"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class PourResult:
    """Outcome of :meth:`TransferEngine.pour`. Falsy when nothing was transferred."""

    quantity: int
    description: Optional[str] = None

    def __bool__(self) -> bool:
        return self.quantity > 0


NO_TRANSFER = PourResult(quantity=0)


class TransferEngine:
    """Owner of the live jar state.

    The engine is the only component that changes the live state: through
    :meth:`pour`, :meth:`reset` and :meth:`restore` (used by rollback).
    The state itself is an immutable puzzle ``State``; mutating the engine
    means replacing the reference it holds.

    Args:
        config: Validated puzzle configuration.
    """

    def __init__(self, config: JugConfig):
        self.config = config
        self.puzzle = LiquidTransfer.from_config(config)
        self.solve_config, self._state = self.puzzle.get_inits()

    @property
    def state(self) -> LiquidTransfer.State:
        return self._state

    @property
    def amounts(self) -> tuple[int, ...]:
        return to_amounts(self._state.amounts)

    @property
    def capacities(self) -> tuple[int, ...]:
        return self.config.capacities

    def _check_index(self, index: int, role: str) -> None:
        if not is_integer(index):
            raise ValueError(f"{role} jar index must be an int, got {index!r}")
        if not 0 <= index < self.config.n_jars:
            raise ValueError(
                f"{role} jar index {index} out of range for {self.config.n_jars} jars"
            )

    def _transition(self, source: int, destination: int):
        """Validate indices and compute the next state without committing it.

        Returns ``None`` for a self-pour, otherwise ``(next_state, quantity)``.
        """
        self._check_index(source, "Source")
        self._check_index(destination, "Destination")
        if source == destination:
            return None
        action = self.puzzle.pair_to_action(int(source), int(destination))
        next_state, cost = self.puzzle.get_actions(self.solve_config, self._state, action)
        if not np.isfinite(np.asarray(cost)):
            return next_state, 0
        quantity = int(self._state.amounts[source]) - int(next_state.amounts[source])
        return next_state, quantity

    def pour_quantity(self, source: int, destination: int) -> int:
        """Quantity :meth:`pour` would move right now, without moving it."""
        transition = self._transition(source, destination)
        return 0 if transition is None else transition[1]

    def pour(self, source: int, destination: int) -> PourResult:
        """Pour from ``source`` into ``destination`` (0-based indices).

        Pouring onto the same jar, from an empty jar or into a full jar is a
        no-op and returns a falsy :class:`PourResult` with quantity ``0``.

        Raises:
            ValueError: If either index is out of range.
        """
        transition = self._transition(source, destination)
        if transition is None or transition[1] <= 0:
            logger.debug("No transfer from jar %s to jar %s", source, destination)
            return NO_TRANSFER

        next_state, quantity = transition
        self._state = next_state
        description = pour_description(quantity, int(source), int(destination))
        logger.debug("%s -> %s", description, self.amounts)
        return PourResult(quantity=quantity, description=description)

    def reset(self) -> None:
        """Restore the initial fill. The history log is the caller's concern."""
        self._state = self.puzzle.get_initial_state(self.solve_config)

    def restore(self, amounts: Sequence[int]) -> None:
        """Overwrite the live state with a recorded snapshot.

        Raises:
            ValueError: If ``amounts`` does not fit the jars.
        """
        self._state = self.puzzle.state_from_amounts(amounts)

    def is_target_reached(self) -> bool:
        return bool(self.puzzle.is_solved(self.solve_config, self._state))

    def __repr__(self) -> str:
        return (
            f"TransferEngine(capacities={list(self.capacities)}, "
            f"target={self.config.target}, amounts={list(self.amounts)})"
        )
