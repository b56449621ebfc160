"""
Solver and benchmark configuration dataclasses and YAML loader.

All tunable parameters live here as typed, frozen dataclasses.
Load from YAML with `load_config()` or construct directly for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml


@dataclass(frozen=True)
class SolverConfig:
    """Parameters shared by all solver front-ends.

    Hungarian
    ─────────
    reduce_matrix      : subtract row then column minima before labeling
    greedy_warm_start  : match tight edges greedily before the phase loop

    Both are speed heuristics; turning them off never changes the optimal cost.

    CP-SAT
    ──────
    cost_scale         : float costs are multiplied by this and rounded
    time_limit_ms      : wall-clock budget before falling back to Hungarian
    """

    reduce_matrix: bool = True
    greedy_warm_start: bool = True

    cost_scale: int = 1000
    time_limit_ms: int = 10_000


@dataclass(frozen=True)
class BenchmarkConfig:
    """Random scenario generation for the benchmark driver."""

    n_scenarios: int = 50
    n_workers: int = 30
    n_jobs: int = 30
    seed: int = 42
    distribution: Literal["uniform", "integer", "product"] = "uniform"
    solvers: tuple[str, ...] = ("hungarian", "scipy", "cpsat")


@dataclass(frozen=True)
class AssignmentConfig:
    """Top-level configuration aggregating all sub-configs."""

    solver: SolverConfig = field(default_factory=SolverConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)


def load_config(path: str | Path) -> AssignmentConfig:
    """Load an AssignmentConfig from a YAML file.

    Args:
        path: Path to a YAML config file. Missing sections use defaults.

    Returns:
        Fully constructed AssignmentConfig.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    bench_raw = dict(raw.get("benchmark", {}))
    if "solvers" in bench_raw:
        bench_raw["solvers"] = tuple(bench_raw["solvers"])

    return AssignmentConfig(
        solver=SolverConfig(**raw.get("solver", {})),
        benchmark=BenchmarkConfig(**bench_raw),
    )
