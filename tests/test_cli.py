"""
Tests for the command-line runner.
"""

import pytest

from pso_engine.cli import build_parser, main


class TestCLI:
    def test_run_prints_report(self, tmp_path, capsys):
        code = main([
            "run", "--function", "sphere", "--dim", "2", "--seed", "1",
            "--iters", "60", "--swarm", "10",
            "--log-dir", str(tmp_path / "logs"), "--plot", str(tmp_path / "conv.png"),
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Best fitness" in out
        assert (tmp_path / "logs" / "sphere_n2_pso_log.csv").exists()
        assert (tmp_path / "conv.png").exists()

    def test_run_without_threshold_hits_iteration_cap(self, capsys):
        main(["run", "--seed", "2", "--iters", "15", "--swarm", "5", "--no-threshold", "--stagnation", "100"])
        assert "max iterations reached" in capsys.readouterr().out

    def test_grid(self, tmp_path, capsys):
        outdir = tmp_path / "results"
        code = main([
            "grid", "--outdir", str(outdir), "--runs", "1", "--dims", "2",
            "--functions", "sphere", "--iters", "20", "--swarm", "6", "--topologies", "both",
        ])
        assert code == 0
        for topo in ("gbest", "ring"):
            assert (outdir / f"runs_{topo}.csv").exists()
            assert (outdir / f"summary_{topo}.csv").exists()
            assert (outdir / f"boxplot_{topo}.png").exists()

    def test_unknown_preset_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["run", "--preset", "turbo"])
