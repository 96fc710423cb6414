"""Plain-text rendering of an optimization result."""

import numpy as np

from pso_engine.algorithm.result import OptimizationResult
from pso_engine.problems.base import Problem


def format_report(result: OptimizationResult, problem: Problem, precision: int = 6) -> str:
    position = ", ".join(f"{v:.{precision}f}" for v in result.best_position)
    distance = float(np.linalg.norm(result.best_position - problem.global_optimum_position))
    gap = result.best_fitness - problem.global_optimum_value
    lines = [
        f"Problem     : {problem.name} (n={problem.dimensionality}, bounds={problem.bounds})",
        f"Best fitness: {result.best_fitness:.{precision}e}",
        f"Best x      : [{position}]",
        f"Iterations  : {result.iterations}",
        f"Evaluations : {result.evaluations}",
        f"Converged   : {'yes' if result.converged else 'no'} ({result.reason.value})",
        f"Known optimum {problem.global_optimum_value:g}: gap={gap:.{precision}e}, distance={distance:.{precision}e}",
        f"Runtime     : {result.runtime:.2f}s",
    ]
    return "\n".join(lines)
