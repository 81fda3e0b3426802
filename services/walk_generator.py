"""
Bounded random walk generator for synthetic metrics.
"""

import math
import random
from typing import Optional

from models.dashboard import Metric, round_half_up


def random_walk(
    previous: float,
    variance: float,
    minimum: float,
    maximum: float,
    rng: random.Random,
) -> float:
    """
    Next value of a bounded random walk.

    Applies a uniform perturbation in [-variance/2, +variance/2] to
    `previous`, clamps into [minimum, maximum] and rounds to one decimal
    (ties up). A non-finite `previous` restarts the walk from `minimum`.
    """
    if not math.isfinite(previous):
        previous = minimum
    value = previous + (rng.random() - 0.5) * variance
    value = min(max(value, minimum), maximum)
    return round_half_up(value, 1)


class WalkGenerator:
    """Random walk bound to one random source."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def next(self, previous: float, variance: float, minimum: float, maximum: float) -> float:
        return random_walk(previous, variance, minimum, maximum, self._rng)

    def step(self, metric: Metric) -> float:
        """Advance a metric in place and return its new value."""
        metric.value = self.next(metric.value, metric.variance, metric.minimum, metric.maximum)
        return metric.value
