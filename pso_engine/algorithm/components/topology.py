"""Neighbourhood topologies: which personal best a particle learns from."""

from abc import ABC, abstractmethod
from typing import List

import numpy as np

from pso_engine.algorithm.components.particle import Swarm
from pso_engine.errors import InvalidArgumentError


def ring_lbest_neighbors(n_particles: int, k: int = 2) -> np.ndarray:
    """
    Symmetric ring neighborhood (lbest PSO).

    Each particle i is connected to itself and k/2 neighbors on each side in a ring.
    For example, with k=4, i sees {i-2, i-1, i, i+1, i+2} (mod n).

    Parameters
    ----------
    n_particles : int
        Number of particles in the swarm (must be >= 2).
    k : int, default=2
        Even neighborhood size (must satisfy 2 <= k < n_particles and be even).

    Returns
    -------
    nb : (n_particles, n_particles) bool ndarray
        nb[i, j] == True iff j is in i's local neighborhood.
    """
    if n_particles < 2:
        raise InvalidArgumentError("n_particles must be >= 2 for a ring topology.")
    if k % 2 != 0:
        raise InvalidArgumentError("k must be even (neighbors are k/2 on each side).")
    if k < 2:
        raise InvalidArgumentError("k must be >= 2.")
    if k >= n_particles:
        raise InvalidArgumentError("k must be less than n_particles to avoid a fully connected graph.")

    nb = np.zeros((n_particles, n_particles), dtype=bool)
    half = k // 2
    for i in range(n_particles):
        nb[i, i] = True
        # wrap-around neighbors
        for d in range(1, half + 1):
            nb[i, (i - d) % n_particles] = True
            nb[i, (i + d) % n_particles] = True
    return nb


class Topology(ABC):
    """Maps a particle index to the position it pulls toward in the social term."""

    name = "topology"

    @abstractmethod
    def best_neighbor(self, index: int, swarm: Swarm) -> np.ndarray:
        ...

    def neighbor_bests(self, swarm: Swarm) -> List[np.ndarray]:
        """Snapshot of every particle's neighbour best, taken before anyone moves.

        Copies are returned so personal-best updates later in the same
        iteration cannot leak into another particle's social term.
        """
        return [self.best_neighbor(i, swarm).copy() for i in range(len(swarm))]


class GlobalBestTopology(Topology):
    """Star topology: every particle sees the swarm-wide best personal best."""

    name = "gbest"

    def best_neighbor(self, index: int, swarm: Swarm) -> np.ndarray:
        return swarm[swarm.best_index()].personal_best

    def neighbor_bests(self, swarm: Swarm) -> List[np.ndarray]:
        best = swarm[swarm.best_index()].personal_best.copy()
        return [best] * len(swarm)

    def __repr__(self):
        return "GlobalBestTopology()"


class RingTopology(Topology):
    """lbest ring: itself plus k/2 neighbours on each side.

    Holds only ``k``; the neighbour matrix is rebuilt per call, so one instance
    can be shared between engines of any swarm size.
    """

    name = "ring"

    def __init__(self, k: int = 2):
        if k < 2 or k % 2 != 0:
            raise InvalidArgumentError(f"k must be even and >= 2, got {k}.")
        self.k = int(k)

    def neighbors(self, n_particles: int) -> np.ndarray:
        return ring_lbest_neighbors(n_particles, k=self.k)

    def best_neighbor(self, index: int, swarm: Swarm) -> np.ndarray:
        nb = self.neighbors(len(swarm))
        return swarm[swarm.best_index(np.flatnonzero(nb[index]))].personal_best

    def neighbor_bests(self, swarm: Swarm) -> List[np.ndarray]:
        nb = self.neighbors(len(swarm))
        return [swarm[swarm.best_index(np.flatnonzero(row))].personal_best.copy() for row in nb]

    def __repr__(self):
        return f"RingTopology(k={self.k})"
