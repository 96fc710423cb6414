"""
Tests for the per-iteration CSV logger and its use by the engine.
"""

import csv

import pytest

from pso_engine import ParticleSwarmOptimizer, PSOParams, RunLogger, Sphere
from pso_engine.logging import ITERATION_FIELDS


class TestRunLogger:
    def test_flush_without_records_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            RunLogger(base_dir=tmp_path).flush()

    def test_metadata_and_column_order(self, tmp_path):
        logger = RunLogger(base_dir=tmp_path / "logs", filename="run.csv", metadata={"runner": "test"})
        logger.log_iteration(iteration=1, best_fitness=2.0)
        logger.update_metadata(preset="DEFAULT")
        logger.log_iteration(iteration=2, best_fitness=1.0)
        path = logger.flush()

        assert path == tmp_path / "logs" / "run.csv"
        with path.open() as fh:
            rows = list(csv.DictReader(fh))
        assert len(rows) == 2
        assert list(rows[0])[:3] == ["timestamp", "iteration", "best_fitness"]
        assert rows[0]["runner"] == "test"
        assert rows[0]["preset"] == ""
        assert rows[1]["preset"] == "DEFAULT"
        assert rows[0]["timestamp"].endswith("Z")

    def test_explicit_field_order(self, tmp_path):
        logger = RunLogger(base_dir=tmp_path, filename="x.csv", field_order=["iteration"])
        logger.log_iteration(iteration=1, best_fitness=2.0)
        with logger.flush().open() as fh:
            assert fh.readline().strip() == "iteration"


class TestEngineLogging:
    def test_one_row_per_iteration(self, tmp_path):
        logger = RunLogger(base_dir=tmp_path, filename="sphere.csv")
        pso = ParticleSwarmOptimizer(Sphere(2), PSOParams(seed=3, swarm_size=8, max_iterations=25,
                                                         fitness_threshold=None))
        result = pso.optimize(logger=logger, logger_metadata={"experiment": "unit"})
        rows = logger.records

        assert len(rows) == result.iterations == 25
        assert [r["iteration"] for r in rows] == list(range(1, 26))
        assert [r["best_fitness"] for r in rows] == list(result.history)
        assert rows[-1]["evaluations"] == result.evaluations
        assert rows[0]["problem"] == "sphere"
        assert rows[0]["seed"] == 3
        assert rows[0]["experiment"] == "unit"
        assert all(r["iteration_best"] >= r["best_fitness"] for r in rows)

        with logger.flush().open() as fh:
            header = fh.readline().strip().split(",")
        assert header[:len(ITERATION_FIELDS)] == list(ITERATION_FIELDS)

    def test_linear_inertia_starts_at_w_max(self, tmp_path):
        logger = RunLogger(base_dir=tmp_path, filename="linear.csv")
        params = PSOParams(seed=5, swarm_size=6, max_iterations=20, fitness_threshold=None,
                           inertia_schedule="linear", w_max=0.9, w_min=0.4)
        ParticleSwarmOptimizer(Sphere(2), params).optimize(logger=logger)
        weights = [r["inertia"] for r in logger.records]

        assert weights[0] == 0.9
        assert all(b <= a for a, b in zip(weights, weights[1:]))
        # row i carries the weight for 0-based iteration i
        assert weights[10] == pytest.approx(0.9 - 0.5 * 10 / 20)
        assert weights[-1] == pytest.approx(0.9 - 0.5 * 19 / 20)
