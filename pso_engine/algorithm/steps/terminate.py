"""Termination check, in priority order: threshold, stagnation, iteration cap."""

from typing import Optional

from pso_engine.algorithm.components.particle import Swarm
from pso_engine.algorithm.result import ConvergenceReason


def termination_phase(pso, swarm: Swarm, iterations_done: int) -> Optional[ConvergenceReason]:
    params = pso.params
    threshold = params.fitness_threshold
    if threshold is not None:
        best = swarm.global_best_fitness
        if (best >= threshold) if params.maximize else (best <= threshold):
            return ConvergenceReason.FITNESS_THRESHOLD
    if pso.stagnation >= params.stagnation_iterations:
        return ConvergenceReason.STAGNATION
    if iterations_done >= params.max_iterations:
        return ConvergenceReason.MAX_ITERATIONS
    return None
