from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

import chex
import jax
import jax.numpy as jnp

from jugx.core.puzzle_state import PuzzleState

T = TypeVar("T")


class Puzzle(ABC):
    """Abstract base class for JugX puzzle environments.

    Every concrete puzzle subclass must:

    1. Set ``action_size`` (number of possible actions).
    2. Implement :meth:`define_state_class` to return a ``@state_dataclass``-decorated class.
    3. Implement :meth:`get_actions`, :meth:`is_solved`, :meth:`get_solve_config`,
       :meth:`get_initial_state` and :meth:`get_string_parser`.

    The base class handles JIT compilation of the transition methods and
    provides the default neighbour expansion used by the search.

    Attributes:
        action_size: Number of discrete actions available in this puzzle.
        State: The ``@state_dataclass`` class representing states (set during ``__init__``).
        SolveConfig: The ``@state_dataclass`` class representing goal configurations
            (set during ``__init__``).
    """

    action_size: int = None

    class State(PuzzleState):
        pass

    class SolveConfig(PuzzleState):
        pass

    @abstractmethod
    def define_solve_config_class(self) -> PuzzleState:
        """Return the ``@state_dataclass`` class used for goal/solve configuration.

        Returns:
            A ``@state_dataclass`` class describing the solve configuration.
        """
        pass

    @abstractmethod
    def define_state_class(self) -> PuzzleState:
        """Return the ``@state_dataclass`` class used for puzzle states.

        Subclasses **must** implement this method.  The returned class should
        use :class:`FieldDescriptor` to declare its fields.

        Returns:
            A ``@state_dataclass`` class describing the puzzle state.
        """
        pass

    def __init__(self, **kwargs):
        """Initialise the puzzle.

        Subclass constructors **must** call ``super().__init__(**kwargs)``
        after setting ``action_size`` and any instance attributes needed by
        :meth:`define_state_class`.

        This method:

        1. Builds ``State`` and ``SolveConfig`` classes.
        2. JIT-compiles the transition methods (``get_actions``,
           ``get_neighbours``, ``is_solved``).
        3. Validates ``action_size``.

        Raises:
            ValueError: If ``action_size`` is still ``None`` after subclass init.
        """
        super().__init__()

        self.State = self.define_state_class()
        self.SolveConfig = self.define_solve_config_class()

        self.get_actions = jax.jit(self.get_actions)
        self.get_neighbours = jax.jit(self.get_neighbours)
        self.is_solved = jax.jit(self.is_solved)

        if self.action_size is None:
            raise ValueError(
                f"{self.__class__.__name__} must define `action_size` before calling Puzzle.__init__"
            )

    @abstractmethod
    def get_string_parser(self) -> Callable:
        """Return a callable that renders a ``State`` as a human-readable string.

        Returns:
            A function ``(state: State, **kwargs) -> str``.
        """
        pass

    @abstractmethod
    def get_solve_config(self) -> SolveConfig:
        """Build and return the goal / solve configuration.

        Returns:
            A ``SolveConfig`` instance describing the puzzle objective.
        """
        pass

    @abstractmethod
    def get_initial_state(self, solve_config: SolveConfig) -> State:
        """Build and return the initial state for a given goal.

        Args:
            solve_config: The goal configuration for this session.

        Returns:
            A ``State`` instance representing the starting position.
        """
        pass

    def get_inits(self) -> tuple[SolveConfig, State]:
        """Convenience method returning ``(solve_config, initial_state)``."""
        solve_config = self.get_solve_config()
        return solve_config, self.get_initial_state(solve_config)

    @abstractmethod
    def get_actions(
        self,
        solve_config: SolveConfig,
        state: State,
        action: chex.Array,
        filled: bool = True,
    ) -> tuple[State, chex.Array]:
        """Apply a single action to a state and return the result.

        Args:
            solve_config: Current goal configuration.
            state: Current puzzle state.
            action: Scalar action index.
            filled: If ``False`` the action is treated as inapplicable.

        Returns:
            ``(next_state, cost)`` where ``cost`` is ``jnp.inf`` and
            ``next_state`` is ``state`` for inapplicable moves.
        """
        pass

    def get_neighbours(
        self, solve_config: SolveConfig, state: State, filled: bool = True
    ) -> tuple[State, chex.Array]:
        """Compute all successor states for every action.

        Equivalent to calling :meth:`get_actions` for each action index and
        stacking the results.  Inapplicable actions produce ``cost = jnp.inf``
        and the original state.

        Args:
            solve_config: Current goal configuration.
            state: Current puzzle state.
            filled: If ``False``, every action is treated as inapplicable.

        Returns:
            ``(neighbour_states, costs)`` where ``neighbour_states`` has
            shape ``(action_size, ...)`` and ``costs`` has shape
            ``(action_size,)``.
        """
        actions = jnp.arange(self.action_size)
        states, costs = jax.vmap(
            self.get_actions, in_axes=(None, None, 0, None), out_axes=(0, 0)
        )(solve_config, state, actions, filled)
        return states, costs

    @abstractmethod
    def is_solved(self, solve_config: SolveConfig, state: State) -> bool:
        """
        This function should return True if the state satisfies the goal.
        Goals need not be a single state: a liquid-transfer puzzle is solved
        as soon as the target quantity appears in any jar.
        """
        pass

    def action_to_string(self, action: int) -> str:
        """Return a human-readable name for the given action index.

        Override in subclasses to provide meaningful names.

        Args:
            action: Integer action index in ``[0, action_size)``.

        Returns:
            String representation of the action.
        """
        return f"action {action}"

    def __repr__(self):
        state_fields = list(self.State.__annotations__.keys())
        solve_config_fields = list(self.SolveConfig.__annotations__.keys())
        return (
            f"Puzzle({self.__class__.__name__}, "
            f"action_size={self.action_size}, "
            f"state_fields={state_fields}, "
            f"solve_config_fields={solve_config_fields})"
        )
