"""Inertia weight schedules w(t, T)."""

import math
from abc import ABC, abstractmethod

from pso_engine.algorithm.constants import INERTIA_WEIGHT, W_MAX, W_MIN
from pso_engine.errors import InvalidArgumentError


class InertiaSchedule(ABC):
    name = "inertia"

    @abstractmethod
    def weight(self, iteration: int, max_iterations: int) -> float:
        """Inertia weight for iteration ``iteration`` of ``max_iterations``."""


class ConstantInertia(InertiaSchedule):
    name = "constant"

    def __init__(self, value: float = INERTIA_WEIGHT):
        if not math.isfinite(value) or value <= 0:
            raise InvalidArgumentError(f"inertia weight must be positive and finite, got {value}.")
        self.value = float(value)

    def weight(self, iteration: int, max_iterations: int) -> float:
        return self.value

    def __repr__(self):
        return f"ConstantInertia(value={self.value})"


class LinearDecreasingInertia(InertiaSchedule):
    """w = w_max - (w_max - w_min) * t / T.

    Exactly ``w_max`` at t = 0 and exactly ``w_min`` at t = T.
    """

    name = "linear"

    def __init__(self, w_max: float = W_MAX, w_min: float = W_MIN):
        if not (math.isfinite(w_max) and math.isfinite(w_min)):
            raise InvalidArgumentError(f"w_max and w_min must be finite, got w_min={w_min}, w_max={w_max}.")
        if w_min < 0 or w_max < w_min:
            raise InvalidArgumentError(f"Need 0 <= w_min <= w_max, got w_min={w_min}, w_max={w_max}.")
        self.w_max = float(w_max)
        self.w_min = float(w_min)

    def weight(self, iteration: int, max_iterations: int) -> float:
        if max_iterations <= 0:
            raise InvalidArgumentError(f"max_iterations must be > 0, got {max_iterations}.")
        if iteration >= max_iterations:
            return self.w_min
        if iteration <= 0:
            return self.w_max
        return self.w_max - (self.w_max - self.w_min) * iteration / max_iterations

    def __repr__(self):
        return f"LinearDecreasingInertia(w_max={self.w_max}, w_min={self.w_min})"
