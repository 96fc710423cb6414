"""Move phase: velocity update, clamping, position update, repair, evaluation.

For each particle i (in index order):

    v_i <- w * v_i + c1 * r1 * (pbest_i - x_i) + c2 * r2 * (nbest_i - x_i)
    v_i <- clip(v_i, -vmax, vmax)
    x_i <- x_i + v_i, then boundary repair

r1 and r2 are scalars drawn once per particle and shared by all of its
dimensions. nbest_i comes from a snapshot taken before the first particle
moves, so no particle sees another's same-iteration improvement.
"""

import numpy as np

from pso_engine.algorithm.components.particle import Swarm


def move_phase(pso, swarm: Swarm, problem, iteration: int) -> float:
    """Advance every particle one step; returns the inertia weight used."""
    params = pso.params
    w = pso.inertia.weight(iteration, params.max_iterations)
    c1, c2 = params.cognitive_coeff, params.social_coeff
    vmax = pso.vmax
    guides = pso.topology.neighbor_bests(swarm)

    for i, particle in enumerate(swarm):
        r1 = pso.rng.uniform(0.0, 1.0)
        r2 = pso.rng.uniform(0.0, 1.0)

        cognitive = c1 * r1 * (particle.personal_best - particle.position)
        social = c2 * r2 * (guides[i] - particle.position)
        particle.velocity = np.clip(w * particle.velocity + cognitive + social, -vmax, vmax)
        particle.position = particle.position + particle.velocity
        pso.boundary.repair(particle, problem)

        fitness = problem.evaluate(particle.position)
        pso.evaluations += 1
        particle.current_fitness = fitness
        if swarm.improves(fitness, particle.personal_best_fitness):
            particle.personal_best = particle.position.copy()
            particle.personal_best_fitness = fitness

    return w
