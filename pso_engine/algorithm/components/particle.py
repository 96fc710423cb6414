"""Particle and swarm state.

A `Particle` holds its own position/velocity/personal-best arrays; nothing is
shared between particles. The `Swarm` is the ordered particle list plus the
engine's global best, which is written once per iteration after every
particle has been evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass
class Particle:
    position: np.ndarray
    velocity: np.ndarray
    personal_best: np.ndarray
    personal_best_fitness: float
    current_fitness: float

    @classmethod
    def create(cls, position: np.ndarray, velocity: np.ndarray, fitness: float) -> "Particle":
        """New particle whose personal best is its starting point."""
        position = np.array(position, dtype=np.float64)
        return cls(
            position=position,
            velocity=np.array(velocity, dtype=np.float64),
            personal_best=position.copy(),
            personal_best_fitness=float(fitness),
            current_fitness=float(fitness),
        )

    @property
    def dimensionality(self) -> int:
        return int(self.position.size)


@dataclass
class Swarm:
    particles: List[Particle] = field(default_factory=list)
    global_best: Optional[np.ndarray] = None
    global_best_fitness: float = float("inf")
    maximize: bool = False

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def __getitem__(self, index: int) -> Particle:
        return self.particles[index]

    def improves(self, candidate: float, incumbent: float) -> bool:
        """Strict improvement in the swarm's optimisation sense."""
        return candidate > incumbent if self.maximize else candidate < incumbent

    def best_index(self, indices=None) -> int:
        """Index of the best personal best among ``indices`` (all particles by default).

        Ties go to the lowest index: the scan only replaces the incumbent on a
        strict improvement.
        """
        if indices is None:
            indices = range(len(self.particles))
        best = None
        for i in sorted(indices):
            if best is None or self.improves(self.particles[i].personal_best_fitness,
                                             self.particles[best].personal_best_fitness):
                best = i
        if best is None:
            raise ValueError("best_index() on an empty swarm or neighbourhood.")
        return best

    def mean_fitness(self) -> float:
        return float(np.mean([p.current_fitness for p in self.particles]))
