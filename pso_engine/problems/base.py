"""Objective abstraction shared by every benchmark problem."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from pso_engine.errors import InvalidArgumentError


class Problem(ABC):
    """A bounded, single-objective, real-valued function to optimize.

    Subclasses implement ``_evaluate`` on an already validated 1-D float array
    and ``global_optimum_position``. Bounds are one symmetric box applied to
    every dimension.

    Args:
        dimensionality: number of decision variables (> 0).
        bounds: (low, high) box per dimension, low < high.
        optimum_value: known optimal fitness, used for reporting only.
    """

    def __init__(self, dimensionality: int, bounds: Tuple[float, float], optimum_value: float = 0.0):
        if isinstance(dimensionality, bool) or not isinstance(dimensionality, (int, np.integer)):
            raise InvalidArgumentError("dimensionality must be an int.")
        if dimensionality <= 0:
            raise InvalidArgumentError(f"dimensionality must be positive, got {dimensionality}.")
        lo, hi = float(bounds[0]), float(bounds[1])
        if not lo < hi:
            raise InvalidArgumentError(f"bounds must satisfy low < high, got ({lo}, {hi}).")
        self._dim = int(dimensionality)
        self._bounds = (lo, hi)
        self._optimum_value = float(optimum_value)

    @property
    def name(self) -> str:
        return type(self).__name__.lower()

    @property
    def dimensionality(self) -> int:
        return self._dim

    @property
    def bounds(self) -> Tuple[float, float]:
        return self._bounds

    @property
    def global_optimum_value(self) -> float:
        return self._optimum_value

    @property
    @abstractmethod
    def global_optimum_position(self) -> np.ndarray:
        """Known optimal position (for tests and reports, never for the search)."""

    @abstractmethod
    def _evaluate(self, x: np.ndarray) -> float:
        ...

    def evaluate(self, position) -> float:
        """Fitness of ``position``; raises if its length is not ``dimensionality``."""
        x = np.asarray(position, dtype=np.float64)
        if x.ndim != 1 or x.size != self._dim:
            raise InvalidArgumentError(
                f"{self.name}: expected a position of length {self._dim}, got shape {x.shape}."
            )
        return float(self._evaluate(x))

    def is_within_bounds(self, position) -> bool:
        x = np.asarray(position, dtype=np.float64)
        if x.size != self._dim:
            return False
        lo, hi = self._bounds
        return bool(np.all((x >= lo) & (x <= hi)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimensionality={self._dim}, bounds={self._bounds})"
