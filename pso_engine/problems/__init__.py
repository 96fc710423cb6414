from pso_engine.problems.base import Problem
from pso_engine.problems.functions import (
    FUNCTIONS,
    SUCCESS_THRESHOLDS,
    Ackley,
    Rastrigin,
    Rosenbrock,
    Sphere,
    make_problem,
)

__all__ = [
    "Problem",
    "Sphere",
    "Rosenbrock",
    "Rastrigin",
    "Ackley",
    "FUNCTIONS",
    "SUCCESS_THRESHOLDS",
    "make_problem",
]
