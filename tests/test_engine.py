import random

import numpy as np
import pytest

from jugx.config import JugConfig
from jugx.engine import PourResult, TransferEngine


class TestTransferEngine:
    def test_initial_fill(self, engine):
        assert engine.amounts == (0, 0, 8)
        assert engine.capacities == (3, 5, 8)
        assert not engine.is_target_reached()

    def test_pour(self, engine):
        result = engine.pour(2, 1)
        assert result == PourResult(quantity=5, description="Pour 5 from jar 3 to jar 2")
        assert result
        assert engine.amounts == (0, 5, 3)

    def test_pour_is_limited_by_destination_space(self, engine):
        engine.pour(2, 1)
        result = engine.pour(1, 0)
        assert result.quantity == 3
        assert result.description == "Pour 3 from jar 2 to jar 1"
        assert engine.amounts == (3, 2, 3)

    @pytest.mark.parametrize("source, destination", [(0, 1), (1, 2), (2, 2)])
    def test_noop_pours(self, engine, source, destination):
        result = engine.pour(source, destination)
        assert not result
        assert result.quantity == 0
        assert result.description is None
        assert engine.amounts == (0, 0, 8)

    def test_pour_into_full_jar_is_noop(self, engine):
        engine.restore((3, 5, 0))
        assert engine.pour(0, 1).quantity == 0
        assert engine.amounts == (3, 5, 0)

    @pytest.mark.parametrize("source, destination", [(3, 0), (0, 3), (-1, 0), (0, -1), (True, 0)])
    def test_out_of_range_indices_rejected(self, engine, source, destination):
        with pytest.raises(ValueError):
            engine.pour(source, destination)
        assert engine.amounts == (0, 0, 8)

    def test_numpy_integer_indices(self, engine):
        assert engine.pour(np.int64(2), np.int32(1)).quantity == 5
        assert engine.amounts == (0, 5, 3)

    def test_pour_quantity_does_not_mutate(self, engine):
        assert engine.pour_quantity(2, 0) == 3
        assert engine.pour_quantity(0, 1) == 0
        assert engine.pour_quantity(1, 1) == 0
        assert engine.amounts == (0, 0, 8)

    def test_target_reached(self):
        engine = TransferEngine(JugConfig.create([3, 5], 2))
        engine.pour(1, 0)
        assert engine.amounts == (3, 2)
        assert engine.is_target_reached()

    def test_reset(self, engine):
        engine.pour(2, 0)
        engine.pour(0, 1)
        engine.reset()
        assert engine.amounts == (0, 0, 8)

    def test_restore_validates_amounts(self, engine):
        with pytest.raises(ValueError):
            engine.restore((0, 0, 9))
        with pytest.raises(ValueError):
            engine.restore((0, 8))
        assert engine.amounts == (0, 0, 8)

    @pytest.mark.parametrize("capacities", [[3, 5, 8], [4, 9], [2, 3, 7, 11]])
    def test_random_pours_preserve_invariants(self, capacities):
        engine = TransferEngine(JugConfig.create(capacities, 1))
        total = sum(engine.amounts)
        rng = random.Random(0)
        n_jars = len(capacities)
        for _ in range(40):
            before = engine.amounts
            source, destination = rng.randrange(n_jars), rng.randrange(n_jars)
            result = engine.pour(source, destination)
            after = engine.amounts
            assert sum(after) == total
            assert all(0 <= a <= c for a, c in zip(after, capacities))
            if result:
                assert after[source] == before[source] - result.quantity
                assert after[destination] == before[destination] + result.quantity
            else:
                assert after == before
