from pso_engine.algorithm.params import PSOParams, constriction_factor
from pso_engine.algorithm.pso import ParticleSwarmOptimizer, build_components
from pso_engine.algorithm.result import ConvergenceReason, EngineState, OptimizationResult
