import jax.numpy as jnp
import numpy as np
import pytest

from jugx.core.puzzle_base import Puzzle
from jugx.puzzles.liquid_transfer import LiquidTransfer, enumerate_pour_pairs
from jugx.utils.util import to_amounts


class TestLiquidTransfer:
    """Transition model tests for the liquid-transfer puzzle."""

    def test_instantiation(self, three_jars):
        assert isinstance(three_jars, Puzzle)
        assert three_jars.capacities == (3, 5, 8)
        assert three_jars.target == 4
        assert three_jars.action_size == 6
        assert "amounts" in repr(three_jars)

    def test_pour_pairs_order(self):
        assert enumerate_pour_pairs(3) == [(0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1)]
        assert enumerate_pour_pairs(1) == []

    def test_action_pair_round_trip(self, three_jars):
        for action, pair in enumerate(three_jars.pour_pairs):
            assert three_jars.action_to_pair(action) == pair
            assert three_jars.pair_to_action(*pair) == action

    def test_invalid_action_lookups(self, three_jars):
        with pytest.raises(ValueError):
            three_jars.pair_to_action(1, 1)
        with pytest.raises(ValueError):
            three_jars.pair_to_action(0, 3)
        with pytest.raises(ValueError):
            three_jars.action_to_pair(6)

    def test_action_to_string(self, three_jars):
        assert three_jars.action_to_string(5) == "Pour from jar 3 to jar 2"

    def test_initial_state(self, three_jars):
        solve_config, state = three_jars.get_inits()
        assert to_amounts(state.amounts) == (0, 0, 8)
        assert int(solve_config.target) == 4

    def test_initial_state_tie_break(self):
        puzzle = LiquidTransfer(capacities=(5, 3, 5), target=1)
        _, state = puzzle.get_inits()
        assert to_amounts(state.amounts) == (5, 0, 0)

    def test_pour_moves_min_of_available_and_space(self, three_jars):
        solve_config, state = three_jars.get_inits()
        next_state, cost = three_jars.get_actions(solve_config, state, three_jars.pair_to_action(2, 1))
        assert to_amounts(next_state.amounts) == (0, 5, 3)
        assert float(cost) == 1.0

        next_state, cost = three_jars.get_actions(solve_config, next_state, three_jars.pair_to_action(1, 0))
        assert to_amounts(next_state.amounts) == (3, 2, 3)
        assert float(cost) == 1.0

    def test_empty_source_is_inapplicable(self, three_jars):
        solve_config, state = three_jars.get_inits()
        next_state, cost = three_jars.get_actions(solve_config, state, three_jars.pair_to_action(0, 1))
        assert to_amounts(next_state.amounts) == (0, 0, 8)
        assert np.isinf(float(cost))

    def test_full_destination_is_inapplicable(self, three_jars):
        solve_config, _ = three_jars.get_inits()
        state = three_jars.state_from_amounts((3, 5, 0))
        next_state, cost = three_jars.get_actions(solve_config, state, three_jars.pair_to_action(0, 1))
        assert to_amounts(next_state.amounts) == (3, 5, 0)
        assert np.isinf(float(cost))

    def test_unfilled_action_is_inapplicable(self, three_jars):
        solve_config, state = three_jars.get_inits()
        next_state, cost = three_jars.get_actions(solve_config, state, 4, False)
        assert to_amounts(next_state.amounts) == (0, 0, 8)
        assert np.isinf(float(cost))

    def test_neighbours(self, three_jars):
        solve_config, state = three_jars.get_inits()
        neighbours, costs = three_jars.get_neighbours(solve_config, state)
        assert neighbours.amounts.shape == (6, 3)
        assert costs.shape == (6,)
        assert np.isfinite(np.asarray(costs)).tolist() == [False, False, False, False, True, True]
        assert np.asarray(neighbours.amounts)[4].tolist() == [3, 0, 5]
        assert np.asarray(neighbours.amounts)[5].tolist() == [0, 5, 3]

    @pytest.mark.parametrize(
        "amounts", [(0, 0, 8), (3, 2, 3), (1, 5, 2), (2, 0, 6), (3, 5, 0)]
    )
    def test_neighbours_conserve_volume_and_bounds(self, three_jars, amounts):
        solve_config, _ = three_jars.get_inits()
        state = three_jars.state_from_amounts(amounts)
        neighbours, _ = three_jars.get_neighbours(solve_config, state)
        capacities = np.asarray(three_jars.capacities)
        for row in np.asarray(neighbours.amounts):
            assert row.sum() == sum(amounts)
            assert np.all(row >= 0)
            assert np.all(row <= capacities)

    def test_is_solved_checks_any_jar(self, three_jars):
        solve_config, state = three_jars.get_inits()
        assert not bool(three_jars.is_solved(solve_config, state))
        assert bool(three_jars.is_solved(solve_config, three_jars.state_from_amounts((3, 4, 1))))
        assert bool(three_jars.is_solved(solve_config, three_jars.state_from_amounts((0, 4, 4))))

    @pytest.mark.parametrize("amounts", [(0, 0), (0, 0, 9), (-1, 1, 8), (4, 0, 4)])
    def test_state_from_amounts_rejects_invalid(self, three_jars, amounts):
        with pytest.raises(ValueError):
            three_jars.state_from_amounts(amounts)

    def test_state_equality_is_order_sensitive(self, three_jars):
        a = three_jars.state_from_amounts((3, 5, 0))
        b = three_jars.state_from_amounts((3, 5, 0))
        c = three_jars.state_from_amounts((0, 5, 3))
        assert bool(jnp.all(a.amounts == b.amounts))
        assert not bool(jnp.all(a.amounts == c.amounts))

    def test_single_jar(self):
        puzzle = LiquidTransfer(capacities=(6,), target=6)
        solve_config, state = puzzle.get_inits()
        assert puzzle.action_size == 0
        assert to_amounts(state.amounts) == (6,)
        assert bool(puzzle.is_solved(solve_config, state))

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            LiquidTransfer(capacities=(), target=4)
        with pytest.raises(ValueError):
            LiquidTransfer(capacities=(3, 5), target=0)

    def test_string_parser(self, three_jars):
        _, state = three_jars.get_inits()
        text = three_jars.get_string_parser()(state)
        assert "Jar 1" in text and "Jar 3" in text
        assert "8/8" in text
        assert "0/3" in text
