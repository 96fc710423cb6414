"""Boundary policies: repair a particle that left the search box.

Each dimension is handled independently; coordinates already inside
[low, high] keep their position and velocity.

- absorbing : clamp to the violated bound, zero that velocity component
- reflecting: clamp to the violated bound, negate that velocity component
- periodic  : wrap into the box, low + ((x - low) mod (high - low))
"""

from abc import ABC, abstractmethod

import numpy as np

from pso_engine.algorithm.components.particle import Particle
from pso_engine.problems.base import Problem


class BoundaryPolicy(ABC):
    """Stateless repair strategy, safe to share between particles."""

    name = "boundary"

    def repair(self, particle: Particle, problem: Problem) -> None:
        lo, hi = problem.bounds
        x = particle.position
        below = x < lo
        above = x > hi
        if not (below.any() or above.any()):
            return
        self._repair(particle, below, above, lo, hi)

    @abstractmethod
    def _repair(self, particle: Particle, below: np.ndarray, above: np.ndarray, lo: float, hi: float) -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AbsorbingBoundary(BoundaryPolicy):
    name = "absorbing"

    def _repair(self, particle, below, above, lo, hi):
        particle.position[below] = lo
        particle.position[above] = hi
        out = below | above
        particle.velocity[out] = 0.0


class ReflectingBoundary(BoundaryPolicy):
    name = "reflecting"

    def _repair(self, particle, below, above, lo, hi):
        particle.position[below] = lo
        particle.position[above] = hi
        out = below | above
        particle.velocity[out] = -particle.velocity[out]


class PeriodicBoundary(BoundaryPolicy):
    """Toroidal search space; velocity is left as is."""

    name = "periodic"

    def _repair(self, particle, below, above, lo, hi):
        out = below | above
        span = hi - lo
        # np.mod takes the sign of the divisor, so the offset is never negative
        wrapped = lo + np.mod(particle.position[out] - lo, span)
        # float rounding of a tiny negative offset can land exactly on span
        particle.position[out] = np.minimum(wrapped, hi)


BOUNDARY_POLICIES = {
    "absorbing": AbsorbingBoundary,
    "reflecting": ReflectingBoundary,
    "periodic": PeriodicBoundary,
}
