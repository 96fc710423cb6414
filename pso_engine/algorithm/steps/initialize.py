"""Initialization phase: scatter the swarm over the search box.

Positions are drawn uniformly in the problem bounds and velocities uniformly
in [-vmax, vmax]. Each particle is evaluated once and its personal best set
to its starting point; the initial global best is the best of those (lowest
index on ties).
"""

from pso_engine.algorithm.components.particle import Particle, Swarm


def initialize_phase(pso, problem, rng) -> Swarm:
    """Build and evaluate the initial swarm.

    Draw order per particle is position (all dimensions) then velocity (all
    dimensions), which fixes the random stream for replay.
    """
    lo, hi = problem.bounds
    dim = problem.dimensionality
    vmax = pso.vmax

    particles = []
    for _ in range(pso.params.swarm_size):
        position = rng.uniform(lo, hi, size=dim)
        velocity = rng.uniform(-vmax, vmax, size=dim)
        fitness = problem.evaluate(position)
        pso.evaluations += 1
        particles.append(Particle.create(position, velocity, fitness))

    swarm = Swarm(particles=particles, maximize=pso.params.maximize)
    best = swarm[swarm.best_index()]
    swarm.global_best = best.personal_best.copy()
    swarm.global_best_fitness = best.personal_best_fitness
    return swarm
