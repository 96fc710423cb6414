"""Run outcome: termination reasons, engine states and the result record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np


class ConvergenceReason(str, Enum):
    MAX_ITERATIONS = "max iterations reached"
    FITNESS_THRESHOLD = "fitness threshold met"
    STAGNATION = "stagnation limit reached"

    def __str__(self) -> str:
        return self.value


class EngineState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class OptimizationResult:
    """Immutable outcome of one `optimize()` call.

    ``history`` holds the global best fitness after each completed iteration.
    ``best_position`` is a read-only array.
    """

    best_position: np.ndarray
    best_fitness: float
    iterations: int
    evaluations: int
    history: Tuple[float, ...]
    converged: bool
    reason: ConvergenceReason
    runtime: float = 0.0

    def __post_init__(self):
        position = np.array(self.best_position, dtype=np.float64)
        position.setflags(write=False)
        object.__setattr__(self, "best_position", position)
        object.__setattr__(self, "history", tuple(float(v) for v in self.history))

    def to_dict(self) -> dict:
        return {
            "best_x": [float(v) for v in self.best_position],
            "best_f": float(self.best_fitness),
            "iters_run": int(self.iterations),
            "evals_used": int(self.evaluations),
            "gbest_curve": list(self.history),
            "converged": bool(self.converged),
            "reason": self.reason.value,
            "runtime": float(self.runtime),
        }
