# experiment.py
from __future__ import annotations
import csv, json, os
from typing import Callable, Iterable, Mapping, Optional, Sequence
import numpy as np

from pso_engine.algorithm.params import PSOParams
from pso_engine.algorithm.pso import ParticleSwarmOptimizer
from pso_engine.errors import InvalidArgumentError
from pso_engine.problems.functions import FUNCTIONS
from pso_engine.random_source import derive_seed

"""
This file orchestrates repeated PSO runs and persists results in a reproducible way.
"""

RUN_COLUMNS = [
    "func", "n", "run", "seed", "best_f", "best_x_json", "iterations",
    "evals", "converged", "reason", "success", "time_s",
]


def run_suite(
    *,
    outdir: str,
    dims: Iterable[int],
    runs: int,
    seed0: int,
    thresholds: Mapping[str, Optional[float]],
    param_factory: Callable[[int, str], PSOParams],
    functions: Optional[Sequence[str]] = None,
    label: str = "gbest",
):
    """
    Args:
      outdir: output directory for CSVs and curves.
      dims: iterable of dimensions to test (e.g., [2, 10, 30]).
      runs: number of independent runs per (function, n).
      seed0: base integer seed; per-run seeds are derived from it and
             (function, n, run, label) so the suite replays exactly.
      thresholds: dict mapping function name -> success threshold or None.
                  None means success is not computed (0 in CSV).
      param_factory: callable (n, function_name) -> PSOParams. The derived
                     seed overrides whatever seed the factory sets.
      functions: subset of registered function names (default: all).
      label: tag used in output file names (e.g. the topology).
    Returns:
      (log_csv_path, summary_csv_path)
    """
    if not isinstance(outdir, str) or not outdir:
        raise InvalidArgumentError("outdir must be a non-empty string.")
    dims = list(dims)
    if not dims or not all(isinstance(n, int) and n > 0 for n in dims):
        raise InvalidArgumentError("dims must be a non-empty iterable of positive ints.")
    if not isinstance(runs, int) or runs <= 0:
        raise InvalidArgumentError("runs must be a positive int.")
    if not isinstance(seed0, int) or seed0 < 0:
        raise InvalidArgumentError("seed0 must be a non-negative int.")
    names = list(functions) if functions is not None else list(FUNCTIONS)
    for fname in names:
        if fname not in FUNCTIONS:
            raise InvalidArgumentError(f"Unknown function '{fname}'.")
        if fname not in thresholds:
            raise InvalidArgumentError(f"Missing threshold for function '{fname}' in thresholds.")

    os.makedirs(outdir, exist_ok=True)
    curves_dir = os.path.join(outdir, f"curves_{label}")
    os.makedirs(curves_dir, exist_ok=True)

    log_path = os.path.join(outdir, f"runs_{label}.csv")
    with open(log_path, "w", newline="") as fh:
        w = csv.writer(fh)
        w.writerow(RUN_COLUMNS)

        for fname in names:
            thr = thresholds.get(fname)
            for n in dims:
                problem = FUNCTIONS[fname](n)
                for r in range(runs):
                    run_seed = derive_seed(seed0, fname, n, r, label)
                    params = param_factory(n, fname).with_overrides(seed=run_seed)

                    res = ParticleSwarmOptimizer(problem, params).optimize()

                    curve_path = os.path.join(curves_dir, f"{fname}_n{n}_run{r}.npy")
                    np.save(curve_path, np.asarray(res.history, dtype=float))

                    success = int(res.best_fitness <= thr) if thr is not None else 0
                    w.writerow([
                        fname,
                        n,
                        r,
                        run_seed,
                        float(res.best_fitness),
                        json.dumps([float(v) for v in res.best_position]),
                        res.iterations,
                        res.evaluations,
                        int(res.converged),
                        res.reason.value,
                        success,
                        float(res.runtime),
                    ])

    agg_path = os.path.join(outdir, f"summary_{label}.csv")
    _aggregate(log_path, agg_path)
    return log_path, agg_path


def _aggregate(log_csv: str, out_csv: str):
    import pandas as pd
    df = pd.read_csv(log_csv)
    g = df.groupby(["func", "n"], as_index=False)
    summ = g["best_f"].agg(mean="mean", median="median", min="min", max="max", std="std")
    sr = g["success"].mean().rename(columns={"success": "success_rate"})
    it = g["iterations"].mean().rename(columns={"iterations": "mean_iterations"})
    out = summ.merge(sr, on=["func", "n"]).merge(it, on=["func", "n"])
    out.to_csv(out_csv, index=False)
    return out
