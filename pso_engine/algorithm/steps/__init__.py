"""Phases of one PSO run, called in order by `ParticleSwarmOptimizer.optimize`."""

from pso_engine.algorithm.steps.initialize import initialize_phase
from pso_engine.algorithm.steps.move import move_phase
from pso_engine.algorithm.steps.terminate import termination_phase
from pso_engine.algorithm.steps.update import update_phase
