from __future__ import annotations
import argparse
from pathlib import Path

from pso_engine.algorithm.constants import BOUNDARY_POLICIES, INERTIA_SCHEDULES, PRESETS, TOPOLOGIES
from pso_engine.algorithm.params import PSOParams
from pso_engine.algorithm.pso import ParticleSwarmOptimizer
from pso_engine.experiment import run_suite
from pso_engine.logging import RunLogger
from pso_engine.plots import boxplot_from_runs, plot_convergence
from pso_engine.problems.functions import FUNCTIONS, SUCCESS_THRESHOLDS
from pso_engine.report import format_report


def _parse_preset(value: str) -> str:
    """Return an uppercase preset name if it exists, else raise."""
    name = value.upper()
    if name not in PRESETS:
        valid = ", ".join(sorted(PRESETS))
        raise argparse.ArgumentTypeError(f"Unknown preset '{value}'. Choose from: {valid}.")
    return name


def _add_param_overrides(p: argparse.ArgumentParser) -> None:
    # Optional manual overrides: None so they only apply if explicitly set
    p.add_argument("--preset", type=_parse_preset, default="DEFAULT",
                   help=f"Parameter profile ({', '.join(sorted(PRESETS))}).")
    p.add_argument("--iters", type=int, default=None)
    p.add_argument("--swarm", type=int, default=None)
    p.add_argument("--w", type=float, default=None, help="constant inertia weight")
    p.add_argument("--c1", type=float, default=None)
    p.add_argument("--c2", type=float, default=None)
    p.add_argument("--vmax", type=float, default=None, help="velocity clamp as fraction of range (0, 1]")
    p.add_argument("--stagnation", type=int, default=None)
    p.add_argument("--inertia", choices=INERTIA_SCHEDULES, default=None)
    p.add_argument("--w-max", dest="w_max", type=float, default=None)
    p.add_argument("--w-min", dest="w_min", type=float, default=None)
    p.add_argument("--boundary", choices=BOUNDARY_POLICIES, default=None)
    p.add_argument("--ringk", type=int, default=None, help="ring neighbourhood size (even)")


def _params_from_args(args, **extra) -> PSOParams:
    overrides = dict(
        max_iterations=args.iters,
        swarm_size=args.swarm,
        inertia_weight=args.w,
        cognitive_coeff=args.c1,
        social_coeff=args.c2,
        velocity_clamp_factor=args.vmax,
        stagnation_iterations=args.stagnation,
        inertia_schedule=args.inertia,
        w_max=args.w_max,
        w_min=args.w_min,
        boundary=args.boundary,
        ring_k=args.ringk,
    )
    overrides.update(extra)
    return PSOParams.from_preset(args.preset, **overrides)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pso-engine", description="Particle Swarm Optimization runner.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # ---- RUN ----
    p_run = sub.add_parser("run", help="Optimize one benchmark function and print the result")
    p_run.add_argument("--function", choices=sorted(FUNCTIONS), default="sphere")
    p_run.add_argument("--dim", type=int, default=2)
    p_run.add_argument("--seed", type=int, default=None)
    p_run.add_argument("--topology", choices=TOPOLOGIES, default=None)
    p_run.add_argument("--threshold", type=float, default=None, help="early-stop fitness threshold")
    p_run.add_argument("--no-threshold", action="store_true", help="disable the fitness threshold")
    p_run.add_argument("--log-dir", type=Path, default=None, help="directory for the iteration CSV log")
    p_run.add_argument("--plot", type=Path, default=None, help="write a convergence plot to this file")
    p_run.add_argument("--log-every", type=int, default=0, help="print progress every N iterations")
    _add_param_overrides(p_run)

    # ---- GRID ----
    p_grid = sub.add_parser("grid", help="Repeated runs over functions x dimensions, CSV + boxplots")
    p_grid.add_argument("--outdir", type=Path, default=Path("results"))
    p_grid.add_argument("--runs", type=int, default=30)
    p_grid.add_argument("--dims", type=int, nargs="+", default=[2, 10, 30])
    p_grid.add_argument("--functions", nargs="+", choices=sorted(FUNCTIONS), default=None)
    p_grid.add_argument("--seed", type=int, default=123)
    p_grid.add_argument("--topologies", choices=["gbest", "ring", "both"], default="both")
    p_grid.add_argument("--no-boxplots", dest="no_boxplots", action="store_true")
    _add_param_overrides(p_grid)
    return parser


def _cmd_run(args) -> int:
    problem = FUNCTIONS[args.function](args.dim)
    extra = dict(seed=args.seed, topology=args.topology, fitness_threshold=args.threshold)
    params = _params_from_args(args, **extra)
    if args.no_threshold:
        params = PSOParams(**{**params.as_dict(), "fitness_threshold": None})

    logger = None
    if args.log_dir is not None:
        logger = RunLogger(base_dir=args.log_dir, filename=f"{problem.name}_n{args.dim}_pso_log.csv",
                           metadata={"runner": "cli", "preset": args.preset})

    pso = ParticleSwarmOptimizer(problem, params, log_every=args.log_every)
    result = pso.optimize(logger=logger)
    print(format_report(result, problem))

    if logger is not None:
        print(f"Log  : {logger.flush()}")
    if args.plot is not None:
        print(f"Plot : {plot_convergence({problem.name: result}, str(args.plot))}")
    return 0


def _cmd_grid(args) -> int:
    args.outdir.mkdir(parents=True, exist_ok=True)
    topos = ["gbest", "ring"] if args.topologies == "both" else [args.topologies]

    for topo in topos:
        def factory(n: int, fname: str, topo=topo) -> PSOParams:
            return _params_from_args(args, topology=topo, fitness_threshold=SUCCESS_THRESHOLDS[fname])

        runs_csv, summary_csv = run_suite(
            outdir=str(args.outdir),
            dims=tuple(args.dims),
            runs=args.runs,
            seed0=args.seed,
            thresholds=SUCCESS_THRESHOLDS,
            param_factory=factory,
            functions=args.functions,
            label=topo,
        )
        if not args.no_boxplots:
            boxplot_from_runs(runs_csv, str(args.outdir / f"boxplot_{topo}.png"))
        print(f"[{topo}] wrote:", runs_csv, summary_csv)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.cmd == "run":
        return _cmd_run(args)
    return _cmd_grid(args)


if __name__ == "__main__":
    raise SystemExit(main())
