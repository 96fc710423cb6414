from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import Optional

from pso_engine.algorithm import constants as C
from pso_engine.errors import InvalidArgumentError

"""
Dataclass definition for PSO hyperparameters.

Every field has a working default, so an empty `PSOParams()` is a complete
configuration. Instances are frozen and validated on construction; derive
variants with `with_overrides` or start from a named preset in
`constants.PRESETS`.
"""


@dataclass(frozen=True)
class PSOParams:
    swarm_size: int = C.SWARM_SIZE
    max_iterations: int = C.MAX_ITERATIONS
    inertia_weight: float = C.INERTIA_WEIGHT
    cognitive_coeff: float = C.COGNITIVE_COEFF
    social_coeff: float = C.SOCIAL_COEFF
    velocity_clamp_factor: float = C.VELOCITY_CLAMP_FACTOR
    fitness_threshold: Optional[float] = C.FITNESS_THRESHOLD  # None disables early stop
    stagnation_iterations: int = C.STAGNATION_ITERATIONS
    inertia_schedule: str = "constant"
    w_max: float = C.W_MAX
    w_min: float = C.W_MIN
    topology: str = "gbest"
    ring_k: int = C.RING_K
    boundary: str = "absorbing"
    seed: Optional[int] = None
    maximize: bool = False

    def __post_init__(self):
        _require_int("swarm_size", self.swarm_size)
        _require_int("max_iterations", self.max_iterations)
        _require_int("stagnation_iterations", self.stagnation_iterations)
        _require_int("ring_k", self.ring_k)

        for name in ("swarm_size", "max_iterations", "stagnation_iterations"):
            if getattr(self, name) <= 0:
                raise InvalidArgumentError(f"{name} must be > 0, got {getattr(self, name)}.")
        for name in ("inertia_weight", "cognitive_coeff", "social_coeff", "velocity_clamp_factor", "w_max", "w_min"):
            _require_finite(name, getattr(self, name))
        for name in ("inertia_weight", "cognitive_coeff", "social_coeff"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive finite number, got {value}.")
        if not 0.0 < self.velocity_clamp_factor <= 1.0:
            raise InvalidArgumentError(
                f"velocity_clamp_factor must lie in (0, 1], got {self.velocity_clamp_factor}."
            )
        if self.fitness_threshold is not None:
            _require_real("fitness_threshold", self.fitness_threshold)
            if math.isnan(self.fitness_threshold):
                raise InvalidArgumentError("fitness_threshold must not be NaN.")
        if self.w_min < 0 or self.w_min > self.w_max:
            raise InvalidArgumentError(f"Need 0 <= w_min <= w_max, got w_min={self.w_min}, w_max={self.w_max}.")

        if self.inertia_schedule not in C.INERTIA_SCHEDULES:
            raise InvalidArgumentError(
                f"Unknown inertia_schedule '{self.inertia_schedule}'. Choose from: {', '.join(C.INERTIA_SCHEDULES)}."
            )
        if self.topology not in C.TOPOLOGIES:
            raise InvalidArgumentError(f"Unknown topology '{self.topology}'. Choose from: {', '.join(C.TOPOLOGIES)}.")
        if self.boundary not in C.BOUNDARY_POLICIES:
            raise InvalidArgumentError(
                f"Unknown boundary '{self.boundary}'. Choose from: {', '.join(C.BOUNDARY_POLICIES)}."
            )
        if self.ring_k < 2 or self.ring_k % 2 != 0:
            raise InvalidArgumentError(f"ring_k must be even and >= 2, got {self.ring_k}.")
        if self.topology == "ring" and self.ring_k >= self.swarm_size:
            raise InvalidArgumentError("ring_k must be less than swarm_size for a ring topology.")

        if self.seed is not None:
            _require_int("seed", self.seed)
            if self.seed < 0:
                raise InvalidArgumentError(f"seed must be non-negative, got {self.seed}.")

    def with_overrides(self, **changes) -> "PSOParams":
        """Return a validated copy with ``changes`` applied; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise InvalidArgumentError(f"Unknown PSOParams fields: {sorted(unknown)}")
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "PSOParams":
        key = name.upper()
        if key not in C.PRESETS:
            raise InvalidArgumentError(f"Unknown preset '{name}'. Choose from: {', '.join(sorted(C.PRESETS))}.")
        return cls(**C.PRESETS[key]).with_overrides(**overrides)

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


def _require_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an int, got {value!r}.")


def _require_real(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a real number, got {value!r}.")


def _require_finite(name: str, value) -> None:
    _require_real(name, value)
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value}.")


def constriction_factor(c1: float, c2: float) -> float:
    """Clerc's constriction coefficient chi for phi = c1 + c2 > 4.

        chi = 2 / |2 - phi - sqrt(phi^2 - 4 phi)|

    phi = 4.1 gives the familiar 0.7298. The engine never calls this; it is
    here so callers can build a consistent (w, c1, c2) triple explicitly.
    """
    phi = float(c1) + float(c2)
    if phi <= 4.0:
        raise InvalidArgumentError(f"constriction requires c1 + c2 > 4, got {phi}.")
    return 2.0 / abs(2.0 - phi - math.sqrt(phi * phi - 4.0 * phi))
