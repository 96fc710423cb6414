import numpy as np

from pso_engine.errors import InvalidArgumentError
from pso_engine.problems.base import Problem


def sphere(x):
    x = np.asarray(x, dtype=np.float64)
    return float(np.dot(x, x))  # stable and fast

def rosenbrock(x: np.ndarray) -> float:
    return float(np.sum(100.0*(x[1:] - x[:-1]**2)**2 + (1.0 - x[:-1])**2))

def rastrigin(x: np.ndarray) -> float:
    n = x.size
    return float(10*n + np.sum(x**2 - 10*np.cos(2*np.pi*x)))

def ackley(x):
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    a, b, c = 20.0, 0.2, 2*np.pi
    mean_sq = np.dot(x, x) / n
    mean_cos = np.mean(np.cos(c * x))
    # sqrt guard against FP roundoff
    return float(-a * np.exp(-b * np.sqrt(max(mean_sq, 0.0)))
                 - np.exp(mean_cos) + a + np.e)


class Sphere(Problem):
    """Unimodal separable sum of squares, f(x) = sum(x_i^2), optimum 0 at the origin."""

    def __init__(self, dimensionality: int):
        super().__init__(dimensionality, (-5.12, 5.12))

    @property
    def global_optimum_position(self) -> np.ndarray:
        return np.zeros(self.dimensionality)

    def _evaluate(self, x: np.ndarray) -> float:
        return sphere(x)


class Rosenbrock(Problem):
    """Narrow curved valley; optimum 0 at the all-ones vector."""

    def __init__(self, dimensionality: int):
        super().__init__(dimensionality, (-5.0, 10.0))

    @property
    def global_optimum_position(self) -> np.ndarray:
        return np.ones(self.dimensionality)

    def _evaluate(self, x: np.ndarray) -> float:
        return rosenbrock(x)


class Rastrigin(Problem):
    """Highly multimodal, regular grid of local minima; optimum 0 at the origin."""

    def __init__(self, dimensionality: int):
        super().__init__(dimensionality, (-5.12, 5.12))

    @property
    def global_optimum_position(self) -> np.ndarray:
        return np.zeros(self.dimensionality)

    def _evaluate(self, x: np.ndarray) -> float:
        return rastrigin(x)


class Ackley(Problem):
    def __init__(self, dimensionality: int):
        super().__init__(dimensionality, (-32.768, 32.768))

    @property
    def global_optimum_position(self) -> np.ndarray:
        return np.zeros(self.dimensionality)

    def _evaluate(self, x: np.ndarray) -> float:
        return ackley(x)


FUNCTIONS = {
    "sphere": Sphere,
    "rosenbrock": Rosenbrock,
    "rastrigin": Rastrigin,
    "ackley": Ackley,
}

SUCCESS_THRESHOLDS = {
    "sphere": 1e-8,
    "rosenbrock": 1e-8,
    "rastrigin": 1e-4,
    "ackley": 1e-4,
}


def make_problem(name: str, dimensionality: int) -> Problem:
    """Instantiate a registered benchmark by name (case-insensitive)."""
    key = name.lower()
    if key not in FUNCTIONS:
        raise InvalidArgumentError(f"Unknown function '{name}'. Choose from: {', '.join(FUNCTIONS)}.")
    return FUNCTIONS[key](dimensionality)
