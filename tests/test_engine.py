"""
Tests for the PSO engine: determinism, invariants, termination and counting.
"""

import numpy as np
import pytest

from pso_engine import (
    AbsorbingBoundary,
    ConvergenceReason,
    EngineState,
    LinearDecreasingInertia,
    ParticleSwarmOptimizer,
    PeriodicBoundary,
    Problem,
    PSOParams,
    RandomSource,
    ReflectingBoundary,
    RingTopology,
    Sphere,
)
from pso_engine.algorithm.pso import build_components
from pso_engine.errors import InvalidArgumentError


class CheckedSphere(Sphere):
    """Sphere that asserts every evaluated position is full length and in bounds."""

    def __init__(self, dimensionality):
        super().__init__(dimensionality)
        self.calls = 0

    def _evaluate(self, x):
        self.calls += 1
        assert x.shape == (self.dimensionality,)
        assert self.is_within_bounds(x), f"out of bounds: {x}"
        return super()._evaluate(x)


class FlatProblem(Problem):
    """Constant objective: nothing ever strictly improves."""

    def __init__(self, dimensionality=2):
        super().__init__(dimensionality, (-1.0, 1.0))

    @property
    def global_optimum_position(self):
        return np.zeros(self.dimensionality)

    def _evaluate(self, x):
        return 1.0


class NegatedSphere(Sphere):
    def _evaluate(self, x):
        return -super()._evaluate(x)


class FailingProblem(Sphere):
    def __init__(self, dimensionality, fail_after):
        super().__init__(dimensionality)
        self.fail_after = fail_after
        self.calls = 0

    def _evaluate(self, x):
        self.calls += 1
        if self.calls > self.fail_after:
            raise RuntimeError("objective failed")
        return super()._evaluate(x)


def run(problem=None, **kwargs):
    problem = problem if problem is not None else Sphere(2)
    params = PSOParams(**kwargs)
    pso = ParticleSwarmOptimizer(problem, params)
    return pso, pso.optimize()


class TestEndToEnd:
    def test_sphere_2d_converges(self):
        pso, result = run(Sphere(2), swarm_size=30, max_iterations=1000, seed=42)
        assert result.converged is True
        assert result.best_fitness < 0.01
        assert np.all(np.abs(result.best_position) < 0.1)
        assert result.iterations < 1000
        assert result.reason in (ConvergenceReason.FITNESS_THRESHOLD, ConvergenceReason.STAGNATION)
        assert pso.state is EngineState.CONVERGED

    def test_sphere_5d_with_linear_inertia(self):
        _, result = run(Sphere(5), seed=7, inertia_schedule="linear", cognitive_coeff=1.5,
                        social_coeff=1.5, max_iterations=500, stagnation_iterations=500)
        assert result.best_fitness < 0.01

    def test_maximization(self):
        _, result = run(NegatedSphere(2), seed=5, maximize=True, fitness_threshold=-1e-6)
        assert result.best_fitness > -0.01
        assert all(b >= a for a, b in zip(result.history, result.history[1:]))


class TestDeterminism:
    @pytest.mark.parametrize("seed", [0, 1, 42, 2**31])
    def test_same_seed_same_trajectory(self, seed):
        _, a = run(Sphere(3), seed=seed, max_iterations=200)
        _, b = run(Sphere(3), seed=seed, max_iterations=200)
        assert a.history == b.history
        np.testing.assert_array_equal(a.best_position, b.best_position)
        assert a.best_fitness == b.best_fitness
        assert a.evaluations == b.evaluations

    def test_injected_rng_matches_params_seed(self):
        params = PSOParams(seed=11, max_iterations=50)
        a = ParticleSwarmOptimizer(Sphere(2), params).optimize()
        b = ParticleSwarmOptimizer(Sphere(2), params.with_overrides(seed=999), rng=RandomSource(11)).optimize()
        assert a.history == b.history

    def test_different_seeds_differ(self):
        _, a = run(Sphere(3), seed=1, max_iterations=50, fitness_threshold=None)
        _, b = run(Sphere(3), seed=2, max_iterations=50, fitness_threshold=None)
        assert a.history != b.history

    @pytest.mark.parametrize("boundary", ["absorbing", "reflecting", "periodic"])
    @pytest.mark.parametrize("topology", ["gbest", "ring"])
    def test_every_policy_combination_replays(self, boundary, topology):
        kwargs = dict(seed=3, max_iterations=60, boundary=boundary, topology=topology,
                      inertia_schedule="linear")
        _, a = run(Sphere(4), **kwargs)
        _, b = run(Sphere(4), **kwargs)
        assert a.history == b.history


class TestInvariants:
    @pytest.mark.parametrize("boundary", [AbsorbingBoundary(), ReflectingBoundary(), PeriodicBoundary()])
    def test_positions_stay_in_bounds(self, boundary):
        problem = CheckedSphere(3)
        params = PSOParams(seed=8, max_iterations=150, velocity_clamp_factor=1.0, fitness_threshold=None,
                           inertia_weight=1.2)
        pso = ParticleSwarmOptimizer(problem, params, boundary=boundary)
        result = pso.optimize()
        assert problem.calls == result.evaluations
        for particle in pso.swarm:
            assert particle.dimensionality == 3
            assert particle.position.shape == (3,)
            assert particle.velocity.shape == (3,)
            assert particle.personal_best.shape == (3,)
            assert particle.personal_best_fitness <= particle.current_fitness

    def test_velocity_clamped(self):
        params = PSOParams(seed=4, max_iterations=40, fitness_threshold=None, boundary="periodic")
        pso = ParticleSwarmOptimizer(Sphere(2), params)
        pso.optimize()
        for particle in pso.swarm:
            assert np.all(np.abs(particle.velocity) <= pso.vmax)
        assert pso.vmax == pytest.approx(0.2 * 10.24)

    def test_history_is_monotone(self):
        _, result = run(Sphere(4), seed=21, max_iterations=300, topology="ring")
        assert len(result.history) == result.iterations
        assert all(b <= a for a, b in zip(result.history, result.history[1:]))
        assert result.history[-1] == result.best_fitness

    @pytest.mark.parametrize("swarm_size,seed", [(5, 1), (30, 2), (17, 3)])
    def test_evaluation_count(self, swarm_size, seed):
        _, result = run(Sphere(2), swarm_size=swarm_size, seed=seed, max_iterations=400)
        assert result.evaluations == swarm_size * (1 + result.iterations)

    def test_result_is_immutable(self):
        _, result = run(Sphere(2), seed=1, max_iterations=10)
        with pytest.raises(AttributeError):
            result.best_fitness = 0.0
        with pytest.raises(ValueError):
            result.best_position[0] = 1.0
        assert isinstance(result.history, tuple)


class TestTermination:
    def test_max_iterations(self):
        pso, result = run(Sphere(2), seed=1, max_iterations=5, fitness_threshold=None,
                          stagnation_iterations=1000)
        assert result.iterations == 5
        assert len(result.history) == 5
        assert result.converged is False
        assert result.reason is ConvergenceReason.MAX_ITERATIONS
        assert str(result.reason) == "max iterations reached"
        assert pso.state is EngineState.EXHAUSTED

    def test_threshold_checked_first(self):
        _, result = run(Sphere(2), seed=1, fitness_threshold=1e9, stagnation_iterations=1, max_iterations=1)
        assert result.iterations == 1
        assert result.converged is True
        assert result.reason is ConvergenceReason.FITNESS_THRESHOLD
        assert result.reason.value == "fitness threshold met"

    def test_stagnation_before_iteration_cap(self):
        pso, result = run(FlatProblem(), seed=1, fitness_threshold=None, stagnation_iterations=1,
                          max_iterations=1)
        assert result.reason is ConvergenceReason.STAGNATION
        assert result.reason.value == "stagnation limit reached"
        assert result.converged is True
        assert pso.stagnation == 1

    def test_stagnation_limit_counts_consecutive_iterations(self):
        _, result = run(FlatProblem(), seed=1, fitness_threshold=None, stagnation_iterations=7)
        assert result.iterations == 7
        assert result.reason is ConvergenceReason.STAGNATION

    def test_ties_keep_lowest_index_global_best(self):
        pso, result = run(FlatProblem(), seed=9, fitness_threshold=None, stagnation_iterations=3,
                          swarm_size=6)
        # nothing improves strictly, so the initial particle 0 position is kept
        rng = RandomSource(9)
        first_position = rng.uniform(-1.0, 1.0, size=2)
        np.testing.assert_array_equal(result.best_position, first_position)


class TestEngineContract:
    def test_state_machine(self):
        pso = ParticleSwarmOptimizer(Sphere(2), PSOParams(seed=1, max_iterations=3))
        assert pso.state is EngineState.UNINITIALIZED
        pso.optimize()
        assert pso.state in (EngineState.CONVERGED, EngineState.EXHAUSTED)

    def test_single_shot(self):
        pso = ParticleSwarmOptimizer(Sphere(2), PSOParams(seed=1, max_iterations=3))
        pso.optimize()
        with pytest.raises(RuntimeError):
            pso.optimize()

    def test_objective_errors_propagate(self):
        problem = FailingProblem(2, fail_after=45)
        pso = ParticleSwarmOptimizer(problem, PSOParams(seed=1, swarm_size=10, fitness_threshold=None))
        with pytest.raises(RuntimeError, match="objective failed"):
            pso.optimize()
        assert pso.state is EngineState.RUNNING

    def test_explicit_policies_override_params(self):
        params = PSOParams(seed=1, boundary="absorbing", inertia_schedule="constant")
        inertia = LinearDecreasingInertia()
        pso = ParticleSwarmOptimizer(Sphere(2), params, boundary=PeriodicBoundary(), inertia=inertia)
        assert isinstance(pso.boundary, PeriodicBoundary)
        assert pso.inertia is inertia

    def test_build_components(self):
        boundary, inertia, topology = build_components(
            PSOParams(boundary="reflecting", inertia_schedule="linear", topology="ring", ring_k=4)
        )
        assert isinstance(boundary, ReflectingBoundary)
        assert isinstance(inertia, LinearDecreasingInertia)
        assert isinstance(topology, RingTopology) and topology.k == 4

    def test_undersized_ring_rejected_at_construction(self):
        with pytest.raises(InvalidArgumentError):
            ParticleSwarmOptimizer(Sphere(2), PSOParams(swarm_size=3), topology=RingTopology(k=4))

    def test_progress_printing(self, capsys):
        pso = ParticleSwarmOptimizer(Sphere(2), PSOParams(seed=1, max_iterations=4, fitness_threshold=None),
                                     log_every=2)
        pso.optimize(verbose=True)
        out = capsys.readouterr().out
        assert "Iter 2/4" in out
        assert "Iter 4/4" in out
        assert "max iterations reached" in out
