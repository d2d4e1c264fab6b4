from collections.abc import Callable, Sequence

import chex
import jax.numpy as jnp
from tabulate import tabulate

from jugx.config import JugConfig
from jugx.core.puzzle_base import Puzzle
from jugx.core.puzzle_state import FieldDescriptor, PuzzleState, state_dataclass
from jugx.utils.util import gauge_str, to_amounts

TYPE = jnp.int32


def enumerate_pour_pairs(n_jars: int) -> list[tuple[int, int]]:
    """
    All ordered ``(source, destination)`` pairs with ``source != destination``.

    Source is the outer loop and destination the inner one, both ascending.
    The position of a pair in this list is its action index, so this order is
    also the expansion order of the search.
    """
    return [(i, j) for i in range(n_jars) for j in range(n_jars) if i != j]


def pour_description(quantity: int, source: int, destination: int) -> str:
    """Canonical history text for a pour; jar numbers are shown 1-based."""
    return f"Pour {quantity} from jar {source + 1} to jar {destination + 1}"


class LiquidTransfer(Puzzle):
    """Liquid-transfer (water-jug) puzzle.

    Jars have fixed integer capacities. Initially the first jar with the
    largest capacity is full and every other jar is empty. The only move is
    pouring from one jar into another until the source is empty or the
    destination is full, whichever comes first. The puzzle is solved as soon
    as some jar holds exactly ``target`` units.

    Actions are indexed over ordered jar pairs (see :func:`enumerate_pour_pairs`);
    a pour that would move nothing has cost ``inf`` and leaves the state unchanged.

    Args:
        capacities: Capacity of each jar, in order.
        target: Quantity that must appear in some jar.
    """

    capacities: tuple[int, ...]
    target: int

    def define_state_class(self) -> PuzzleState:
        str_parser = self.get_string_parser()
        n_jars = self.n_jars

        @state_dataclass
        class State:
            amounts: FieldDescriptor.tensor(dtype=TYPE, shape=(n_jars,))

            def __str__(self, **kwargs):
                return str_parser(self, **kwargs)

        return State

    def define_solve_config_class(self) -> PuzzleState:
        @state_dataclass
        class SolveConfig:
            target: FieldDescriptor.scalar(dtype=TYPE)

            def __str__(self, **kwargs):
                return f"Target: {int(self.target)}"

        return SolveConfig

    def __init__(self, capacities: Sequence[int] = (3, 5, 8), target: int = 4, **kwargs):
        self.config = JugConfig.create(capacities, target)
        self.capacities = self.config.capacities
        self.target = self.config.target
        self.pour_pairs = enumerate_pour_pairs(self.n_jars)
        self._action_lookup = {pair: action for action, pair in enumerate(self.pour_pairs)}
        self._capacity_array = jnp.asarray(self.capacities, dtype=TYPE)
        self._pair_array = jnp.asarray(self.pour_pairs, dtype=TYPE).reshape(-1, 2)
        self.action_size = len(self.pour_pairs)
        super().__init__(**kwargs)

    @classmethod
    def from_config(cls, config: JugConfig, **kwargs) -> "LiquidTransfer":
        return cls(capacities=config.capacities, target=config.target, **kwargs)

    @property
    def n_jars(self) -> int:
        return len(self.capacities)

    def get_string_parser(self) -> Callable:
        capacities = self.capacities
        max_capacity = max(capacities)
        default_target = self.target

        def parser(state: "LiquidTransfer.State", target: int | None = None, **kwargs):
            target = default_target if target is None else target
            rows = []
            for index, (amount, capacity) in enumerate(zip(to_amounts(state.amounts), capacities)):
                gauge = gauge_str(amount, capacity, max_capacity, highlight=amount == target)
                rows.append([f"Jar {index + 1}", gauge, f"{amount}/{capacity}"])
            return tabulate(rows, tablefmt="plain", colalign=("left", "left", "right"))

        return parser

    def get_solve_config(self) -> Puzzle.SolveConfig:
        return self.SolveConfig(target=jnp.asarray(self.target, dtype=TYPE))

    def get_initial_state(self, solve_config: Puzzle.SolveConfig) -> "LiquidTransfer.State":
        return self.state_from_amounts(self.config.initial_amounts())

    def state_from_amounts(self, amounts: Sequence[int]) -> "LiquidTransfer.State":
        """Build a state from host-side amounts, checking length and per-jar bounds."""
        amounts = tuple(int(a) for a in amounts)
        if len(amounts) != self.n_jars:
            raise ValueError(f"Expected {self.n_jars} amounts, got {len(amounts)}")
        for index, (amount, capacity) in enumerate(zip(amounts, self.capacities)):
            if not 0 <= amount <= capacity:
                raise ValueError(
                    f"Amount {amount} in jar {index + 1} is outside [0, {capacity}]"
                )
        return self.State(amounts=jnp.asarray(amounts, dtype=TYPE))

    def get_actions(
        self,
        solve_config: Puzzle.SolveConfig,
        state: "LiquidTransfer.State",
        action: chex.Array,
        filled: bool = True,
    ) -> tuple["LiquidTransfer.State", chex.Array]:
        """
        Pour from the action's source jar into its destination jar.

        The poured quantity is ``min(amounts[source], capacity[destination] - amounts[destination])``.
        A pour that moves nothing costs ``inf`` and returns the state unchanged.
        """
        pair = self._pair_array[action]
        source, destination = pair[0], pair[1]
        amounts = state.amounts

        space = self._capacity_array[destination] - amounts[destination]
        quantity = jnp.minimum(amounts[source], space)
        valid = jnp.logical_and(quantity > 0, filled)

        poured = amounts.at[source].add(-quantity).at[destination].add(quantity)
        next_amounts = jnp.where(valid, poured, amounts)
        cost = jnp.where(valid, 1.0, jnp.inf)
        return self.State(amounts=next_amounts), cost

    def is_solved(self, solve_config: Puzzle.SolveConfig, state: "LiquidTransfer.State") -> bool:
        return jnp.any(state.amounts == solve_config.target)

    def action_to_pair(self, action: int) -> tuple[int, int]:
        if not 0 <= action < self.action_size:
            raise ValueError(f"Invalid action: {action}")
        return self.pour_pairs[action]

    def pair_to_action(self, source: int, destination: int) -> int:
        try:
            return self._action_lookup[(source, destination)]
        except KeyError:
            raise ValueError(
                f"No pour action from jar {source + 1} to jar {destination + 1}"
            ) from None

    def action_to_string(self, action: int) -> str:
        source, destination = self.action_to_pair(action)
        return f"Pour from jar {source + 1} to jar {destination + 1}"
