"""Particle Swarm Optimization engine.

This module orchestrates one PSO run:
- scatters and evaluates the initial swarm (initialize phase)
- moves every particle against a snapshot of neighbourhood bests (move phase)
- promotes the global best once per iteration and tracks stagnation (update phase)
- stops on fitness threshold, stagnation or the iteration cap (termination phase)

The policies (boundary repair, inertia schedule, topology) are injected and
only used through their small interfaces, so any variant can be swapped in
without touching the loop. The main entry point is ParticleSwarmOptimizer.
"""

import time
from typing import Any, Dict, List, Optional, Tuple

from pso_engine.algorithm import steps as steps
from pso_engine.algorithm.components.boundary import BOUNDARY_POLICIES, BoundaryPolicy
from pso_engine.algorithm.components.inertia import ConstantInertia, InertiaSchedule, LinearDecreasingInertia
from pso_engine.algorithm.components.particle import Swarm
from pso_engine.algorithm.components.topology import GlobalBestTopology, RingTopology, Topology
from pso_engine.algorithm.params import PSOParams
from pso_engine.algorithm.result import ConvergenceReason, EngineState, OptimizationResult
from pso_engine.errors import InvalidArgumentError
from pso_engine.logging import RunLogger
from pso_engine.problems.base import Problem
from pso_engine.random_source import RandomSource


def build_components(params: PSOParams) -> Tuple[BoundaryPolicy, InertiaSchedule, Topology]:
    """Instantiate the policies named in ``params``."""
    boundary = BOUNDARY_POLICIES[params.boundary]()
    if params.inertia_schedule == "linear":
        inertia = LinearDecreasingInertia(w_max=params.w_max, w_min=params.w_min)
    else:
        inertia = ConstantInertia(params.inertia_weight)
    if params.topology == "ring":
        topology = RingTopology(k=params.ring_k)
    else:
        topology = GlobalBestTopology()
    return boundary, inertia, topology


class ParticleSwarmOptimizer:
    """Single-shot PSO engine over a bounded `Problem`.

    Explicit policy instances take precedence over the names in ``params``.
    ``rng`` defaults to a `RandomSource` seeded with ``params.seed`` (None
    gives a non-deterministic run). Each instance runs `optimize` once.
    """

    def __init__(self,
                 problem: Problem,
                 params: Optional[PSOParams] = None,
                 boundary: Optional[BoundaryPolicy] = None,
                 inertia: Optional[InertiaSchedule] = None,
                 topology: Optional[Topology] = None,
                 rng: Optional[RandomSource] = None,
                 log_every: int = 0):
        self.problem = problem
        self.params = params if params is not None else PSOParams()

        lo, hi = problem.bounds
        if not lo < hi:
            raise InvalidArgumentError(f"problem bounds must satisfy low < high, got ({lo}, {hi}).")

        default_boundary, default_inertia, default_topology = build_components(self.params)
        self.boundary = boundary if boundary is not None else default_boundary
        self.inertia = inertia if inertia is not None else default_inertia
        self.topology = topology if topology is not None else default_topology
        if isinstance(self.topology, RingTopology):
            # rejects k >= swarm_size before the run starts
            self.topology.neighbors(self.params.swarm_size)

        self.rng = rng if rng is not None else RandomSource(self.params.seed)
        # Progress print frequency in iterations (0 = silent).
        self.log_every = int(log_every)

        self.state = EngineState.UNINITIALIZED
        self.swarm: Optional[Swarm] = None
        self.evaluations = 0
        self.stagnation = 0
        self.history: List[float] = []

    @property
    def vmax(self) -> float:
        lo, hi = self.problem.bounds
        return self.params.velocity_clamp_factor * (hi - lo)

    def optimize(self,
                 logger: Optional[RunLogger] = None,
                 logger_metadata: Optional[Dict[str, Any]] = None,
                 verbose: bool = False) -> OptimizationResult:
        if self.state is not EngineState.UNINITIALIZED:
            raise RuntimeError(f"optimize() already called on this engine (state={self.state.value}).")

        start_time = time.time()
        params = self.params
        problem = self.problem

        if logger is not None:
            metadata = {
                "problem": problem.name,
                "dim": problem.dimensionality,
                "swarm_size": params.swarm_size,
                "max_iterations": params.max_iterations,
                "c1": params.cognitive_coeff,
                "c2": params.social_coeff,
                "inertia": getattr(self.inertia, "name", type(self.inertia).__name__),
                "boundary": getattr(self.boundary, "name", type(self.boundary).__name__),
                "topology": getattr(self.topology, "name", type(self.topology).__name__),
                "seed": self.rng.seed,
            }
            if logger_metadata:
                metadata.update(logger_metadata)
            logger.update_metadata(**metadata)

        # 1) Initialization
        swarm = steps.initialize_phase(self, problem, self.rng)
        self.swarm = swarm
        self.state = EngineState.INITIALIZED

        reason: Optional[ConvergenceReason] = None
        iteration = 0
        while reason is None:
            self.state = EngineState.RUNNING

            # 2) Move + evaluate every particle against last iteration's bests
            w = steps.move_phase(self, swarm, problem, iteration)

            # 3) Serialized global best / stagnation update
            steps.update_phase(self, swarm)
            iteration += 1
            self.history.append(swarm.global_best_fitness)

            current = [p.current_fitness for p in swarm]
            iteration_best = max(current) if params.maximize else min(current)

            if logger is not None:
                logger.log_iteration(
                    iteration=iteration,
                    best_fitness=swarm.global_best_fitness,
                    iteration_best=iteration_best,
                    mean_fitness=swarm.mean_fitness(),
                    inertia=w,
                    stagnation=self.stagnation,
                    evaluations=self.evaluations,
                    runtime_ms=(time.time() - start_time) * 1000,
                )

            if self.log_every > 0 and iteration % self.log_every == 0:
                print(f"Iter {iteration}/{params.max_iterations}: Best={swarm.global_best_fitness:.6g}, "
                      f"IterBest={iteration_best:.6g}, w={w:.4f}")

            # 4) Termination
            reason = steps.termination_phase(self, swarm, iteration)

        converged = reason is not ConvergenceReason.MAX_ITERATIONS
        self.state = EngineState.CONVERGED if converged else EngineState.EXHAUSTED
        runtime = time.time() - start_time

        if verbose:
            print(f"{problem.name} (n={problem.dimensionality}): best={swarm.global_best_fitness:.6g} "
                  f"after {iteration} iterations, {self.evaluations} evaluations ({reason.value})")

        return OptimizationResult(
            best_position=swarm.global_best,
            best_fitness=swarm.global_best_fitness,
            iterations=iteration,
            evaluations=self.evaluations,
            history=self.history,
            converged=converged,
            reason=reason,
            runtime=runtime,
        )
