"""
run_assignment.py
──────────────────────────────────────────────────────────────────────────────
Solve one assignment problem from the command line.

Usage:
    python scripts/run_assignment.py --csv costs.csv
    python scripts/run_assignment.py --yaml problem.yaml        # key: cost_matrix
    python scripts/run_assignment.py --n 100 --seed 7           # random n×n
    python scripts/run_assignment.py --csv costs.csv --strategy scipy
    python scripts/run_assignment.py --csv profits.csv --maximize

Strategy options:
    hungarian Kuhn-Munkres with dual labels, O(n³)      [default]
    scipy     scipy.optimize.linear_sum_assignment      reference
    cpsat     OR-Tools CP-SAT, integer-scaled costs     cross-check
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import yaml

from src.assignment.config import AssignmentConfig, load_config
from src.assignment.errors import CostMatrixError
from src.assignment.solver import SOLVER_NAMES, create_solver


def read_matrix(args: argparse.Namespace) -> np.ndarray:
    """Load the cost matrix named on the command line, or draw a random one."""

    if args.csv:
        return np.loadtxt(args.csv, delimiter=",", dtype=float, ndmin=2)
    if args.yaml:
        with open(args.yaml, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        return raw["cost_matrix"]
    rng = np.random.default_rng(args.seed)
    return rng.random((args.n, args.n))


def main(argv: list[str] | None = None):
    """Main"""

    parser = argparse.ArgumentParser(description="Solve a min-cost assignment problem")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--csv", type=str, default=None, help="Comma-separated cost matrix")
    source.add_argument("--yaml", type=str, default=None, help="YAML file with a cost_matrix key")
    parser.add_argument("--n", type=int, default=100, help="Size of a random matrix")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for --n")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to config YAML",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        default="hungarian",
        choices=list(SOLVER_NAMES),
    )
    parser.add_argument(
        "--maximize",
        action="store_true",
        help="Maximise total value by negating the matrix before solving",
    )
    args = parser.parse_args(argv)

    config_path = Path(args.config)
    config = load_config(config_path) if config_path.exists() else AssignmentConfig()

    matrix = read_matrix(args)
    if args.maximize:
        matrix = -np.asarray(matrix, dtype=float)

    solver = create_solver(args.strategy, config.solver)
    try:
        result = solver.solve_with_diagnostics(matrix)
    except CostMatrixError as e:
        print(f"Invalid cost matrix: {e}")
        sys.exit(2)

    total = -result.total_cost if args.maximize else result.total_cost
    n_workers = len(result.assignment)
    print(f"status={result.solver_status.name} workers={n_workers} cost={total:.6f} "
          f"elapsed={result.solve_time_ms:.2f}ms")
    if n_workers <= 20:
        print("assignment:", result.assignment)
    if result.unassigned_workers:
        print("unassigned workers:", result.unassigned_workers)


if __name__ == "__main__":
    main()
