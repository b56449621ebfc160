"""
src/assignment/benchmark.py
──────────────────────────────────────────────────────────────────────────────
Benchmark: assignment solvers head-to-head.

Runs every selected solver on the same random cost matrices and compares
them. The first solver listed is the baseline for cost agreement.

Metrics per scenario:
  • Total assigned cost
  • Solve time            (wall-clock, ms)
  • Cost agreement        (|cost − baseline cost| ≤ tolerance)

Scenario distributions:
  uniform   floats in [0, 1)
  integer   integers in [0, 100)
  product   cost[i][j] = (i+1)(j+1); optimum is the anti-diagonal

Usage:
    python -m src.assignment.benchmark                    # defaults from config
    python -m src.assignment.benchmark --scenarios 200
    python -m src.assignment.benchmark --workers 50 --jobs 30
    python -m src.assignment.benchmark --solvers hungarian scipy
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

import numpy as np

from src.assignment.config import AssignmentConfig, BenchmarkConfig, SolverConfig, load_config
from src.assignment.solver import SOLVER_NAMES, create_solver


# ── Scenario generation ───────────────────────────────────────────────────────


def generate_matrix(
    n_workers: int,
    n_jobs: int,
    distribution: str,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw one n_workers × n_jobs cost matrix."""
    if distribution == "uniform":
        return rng.random((n_workers, n_jobs))
    if distribution == "integer":
        return rng.integers(0, 100, size=(n_workers, n_jobs)).astype(np.float64)
    if distribution == "product":
        return np.outer(np.arange(1, n_workers + 1), np.arange(1, n_jobs + 1)).astype(np.float64)
    raise ValueError(
        f"Unknown distribution {distribution!r}. Valid options: 'uniform', 'integer', 'product'."
    )


# ── Main benchmark loop ───────────────────────────────────────────────────────


def run_benchmark(
    bench: BenchmarkConfig,
    solver_config: SolverConfig | None = None,
    tolerance: float = 1e-6,
) -> dict[str, dict[str, list]]:
    """Run scenarios, print a comparison table and return the raw samples."""

    active = list(bench.solvers)

    print("=" * 80)
    print("  Assignment Solver Benchmark")
    print("=" * 80)
    print(
        f"  Scenarios: {bench.n_scenarios}  |  Workers: {bench.n_workers}  |  "
        f"Jobs: {bench.n_jobs}  |  Seed: {bench.seed}  |  {bench.distribution}"
    )
    print(f"  Solvers:   {', '.join(active)}")
    print()

    solver_instances = {name: create_solver(name, solver_config) for name in active}
    rng = np.random.default_rng(bench.seed)

    results: dict[str, dict[str, list]] = {
        name: {"cost": [], "time_ms": [], "agree": [], "status": []} for name in active
    }

    for _ in range(bench.n_scenarios):
        cost = generate_matrix(bench.n_workers, bench.n_jobs, bench.distribution, rng)
        baseline = None
        for name in active:
            r = solver_instances[name].solve_with_diagnostics(cost)
            if baseline is None:
                baseline = r.total_cost
            results[name]["cost"].append(r.total_cost)
            results[name]["time_ms"].append(r.solve_time_ms)
            results[name]["agree"].append(abs(r.total_cost - baseline) <= tolerance)
            results[name]["status"].append(r.solver_status.name)

    if bench.n_scenarios == 0:
        print("  No scenarios run.")
        return results

    # ── Print results ─────────────────────────────────────────────────────────
    col_w = 16

    def hdr(label: str) -> str:
        return f"{label:>{col_w}}"

    def val(v: float, fmt: str = ".1f") -> str:
        return f"{v:{col_w}{fmt}}"

    print(f"  {'Metric':<30}" + "".join(hdr(n) for n in active))
    print("  " + "─" * (30 + col_w * len(active)))

    fn_map = [
        ("Avg total cost", lambda d: np.mean(d["cost"]), ".3f"),
        ("Avg solve time (ms)", lambda d: np.mean(d["time_ms"]), ".2f"),
        ("P95 solve time (ms)", lambda d: np.percentile(d["time_ms"], 95), ".2f"),
        ("Max solve time (ms)", lambda d: np.max(d["time_ms"]), ".2f"),
        (f"Agrees with {active[0]} (%)", lambda d: 100.0 * np.mean(d["agree"]), ".1f"),
    ]

    for label, fn, fmt in fn_map:
        row = f"  {label:<30}"
        for name in active:
            row += val(fn(results[name]), fmt)
        print(row)

    print()
    print("  Solver status distribution:")
    for name in active:
        counts: dict[str, int] = {}
        for s in results[name]["status"]:
            counts[s] = counts.get(s, 0) + 1
        dist_str = "  ".join(f"{s}={c}" for s, c in sorted(counts.items()))
        print(f"    {name:<12}: {dist_str}")

    print("\n" + "=" * 80)
    return results


# ── CLI entry point ───────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    """Parse CLI overrides on top of the YAML config and run the benchmark."""

    parser = argparse.ArgumentParser(description="Benchmark assignment solvers")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to config YAML",
    )
    parser.add_argument("--scenarios", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--jobs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--distribution", choices=["uniform", "integer", "product"], default=None
    )
    parser.add_argument(
        "--solvers",
        nargs="+",
        choices=list(SOLVER_NAMES),
        default=None,
        help="Subset of solvers to benchmark; the first is the cost baseline",
    )
    args = parser.parse_args(argv)

    config_path = Path(args.config)
    config = load_config(config_path) if config_path.exists() else AssignmentConfig()

    overrides = {
        "n_scenarios": args.scenarios,
        "n_workers": args.workers,
        "n_jobs": args.jobs,
        "seed": args.seed,
        "distribution": args.distribution,
        "solvers": tuple(args.solvers) if args.solvers else None,
    }
    bench = replace(config.benchmark, **{k: v for k, v in overrides.items() if v is not None})
    run_benchmark(bench, config.solver)


if __name__ == "__main__":
    main()
