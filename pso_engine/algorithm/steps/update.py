"""Update phase: the single serialized global-best / stagnation step.

Runs once per iteration, after every particle has moved and been evaluated.
"""

from pso_engine.algorithm.components.particle import Swarm


def update_phase(pso, swarm: Swarm) -> bool:
    """Promote the best personal best to global best if it strictly improves.

    Resets the stagnation counter on improvement, increments it otherwise.
    Returns True when the global best changed.
    """
    best = swarm[swarm.best_index()]
    if swarm.improves(best.personal_best_fitness, swarm.global_best_fitness):
        swarm.global_best = best.personal_best.copy()
        swarm.global_best_fitness = best.personal_best_fitness
        pso.stagnation = 0
        return True
    pso.stagnation += 1
    return False
