"""Particle Swarm Optimization engine with pluggable boundary, inertia and topology policies."""

__version__ = "0.1.0"

from pso_engine.algorithm import (
    ConvergenceReason,
    EngineState,
    OptimizationResult,
    ParticleSwarmOptimizer,
    PSOParams,
    build_components,
    constriction_factor,
)
from pso_engine.algorithm.components import (
    AbsorbingBoundary,
    BoundaryPolicy,
    ConstantInertia,
    GlobalBestTopology,
    InertiaSchedule,
    LinearDecreasingInertia,
    Particle,
    PeriodicBoundary,
    ReflectingBoundary,
    RingTopology,
    Swarm,
    Topology,
)
from pso_engine.errors import InvalidArgumentError
from pso_engine.logging import RunLogger
from pso_engine.problems import FUNCTIONS, Problem, Sphere, make_problem
from pso_engine.random_source import RandomSource
