"""
Unit tests for the bounded random walk.
"""

import random
import pytest

from conftest import ScriptedRandom
from models.dashboard import Metric, round_half_up
from services.walk_generator import WalkGenerator, random_walk


class TestRandomWalk:
    """Tests for random_walk()."""

    def test_midpoint_draw_keeps_value(self):
        assert random_walk(40, 12, 5, 220, ScriptedRandom([0.5])) == 40

    def test_perturbation_bounds(self):
        # 0.0 -> -variance/2, 0.999... -> just under +variance/2
        assert random_walk(100, 10, 0, 200, ScriptedRandom([0.0])) == 95.0
        assert random_walk(100, 10, 0, 200, ScriptedRandom([0.99])) == 104.9

    def test_clamps_to_maximum(self):
        assert random_walk(219, 12, 5, 220, ScriptedRandom([0.99])) == 220

    def test_clamps_to_minimum(self):
        assert random_walk(6, 12, 5, 220, ScriptedRandom([0.0])) == 5

    def test_rounds_to_one_decimal(self):
        value = random_walk(10, 1, 0, 100, ScriptedRandom([0.6234]))
        assert value == 10.1

    @pytest.mark.parametrize("previous", [-1000.0, -1.0, 0.0, 50.0, 99.0, 5000.0])
    def test_always_within_bounds(self, previous):
        rng = random.Random(1234)
        for _ in range(500):
            value = random_walk(previous, 30, 2, 99, rng)
            assert 2 <= value <= 99


class TestWalkGenerator:
    """Tests for WalkGenerator."""

    def test_step_updates_metric(self):
        metric = Metric("cpu", 20.0, 8.0, 2.0, 99.0)
        walk = WalkGenerator(ScriptedRandom([1.0]))
        assert walk.step(metric) == 24.0
        assert metric.value == 24.0

    def test_step_keeps_metric_in_bounds(self):
        metric = Metric("mem", 97.5, 4.0, 8.0, 98.0)
        walk = WalkGenerator(random.Random(99))
        for _ in range(1000):
            walk.step(metric)
            assert metric.minimum <= metric.value <= metric.maximum

    def test_next_uses_injected_source(self):
        rng = ScriptedRandom([0.25])
        walk = WalkGenerator(rng)
        assert walk.next(10, 4, 0, 20) == 9.0
        assert rng.calls == 1

    def test_default_source(self):
        walk = WalkGenerator()
        assert isinstance(walk.rng, random.Random)


class TestNonFiniteAndTies:
    """Tests for degenerate walk input and tie rounding."""

    @pytest.mark.parametrize("previous", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_previous_restarts_from_minimum(self, previous):
        value = random_walk(previous, 6, 1, 500, ScriptedRandom([0.5]))
        assert value == 1

    def test_non_finite_previous_stays_in_bounds(self):
        rng = random.Random(5)
        for _ in range(200):
            value = random_walk(float("nan"), 30, 2, 99, rng)
            assert 2 <= value <= 99

    def test_ties_round_up(self):
        # 0.25 would round to even (0.2) with the builtin
        assert random_walk(0.25, 0, 0, 1, ScriptedRandom([0.5])) == 0.3

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (0.5, 1), (57.6, 58), (78.4, 78), (12.0, 12)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected
