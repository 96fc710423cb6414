"""Matplotlib figures for single runs and experiment suites."""

import os
from typing import Mapping, Sequence, Union

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from pso_engine.algorithm.result import OptimizationResult

Curve = Union[OptimizationResult, Sequence[float]]


def _as_curve(curve: Curve) -> np.ndarray:
    history = curve.history if isinstance(curve, OptimizationResult) else curve
    return np.asarray(history, dtype=float)


def plot_convergence(curves: Mapping[str, Curve], outpath: str, title: str = "PSO convergence") -> str:
    """Best fitness per iteration, one line per labelled run.

    The y axis is logarithmic when every value is positive.
    """
    fig, ax = plt.subplots()
    all_positive = True
    for label, curve in curves.items():
        y = _as_curve(curve)
        all_positive = all_positive and bool(np.all(y > 0))
        ax.plot(np.arange(1, y.size + 1), y, linewidth=1.5, label=label)
    if all_positive:
        ax.set_yscale("log")
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Global best fitness")
    ax.set_title(title)
    ax.legend()
    os.makedirs(os.path.dirname(os.path.abspath(outpath)), exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return outpath


def boxplot_from_runs(runs_csv: str, outpath: str) -> str:
    """Create a compact boxplot of final best fitness per (function, n)."""
    df = pd.read_csv(runs_csv)
    df["combo"] = df["func"] + "_n" + df["n"].astype(str)
    order = sorted(df["combo"].unique())
    data = [df.loc[df["combo"] == c, "best_f"].values for c in order]
    fig, ax = plt.subplots()
    ax.boxplot(data, showfliers=False)
    ax.set_xticks(range(1, len(order) + 1))
    ax.set_xticklabels(order, rotation=30, ha="right")
    ax.set_ylabel("Final best fitness")
    ax.set_title("PSO final fitness across runs")
    os.makedirs(os.path.dirname(os.path.abspath(outpath)), exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight")
    plt.close(fig)
    return outpath
