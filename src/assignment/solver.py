"""
Assignment solver front-ends.

Three solvers share one public interface, so callers, the benchmark and the
CLI can swap them freely:

Solver menu
───────────
  HungarianSolver        pure-Python/numpy Kuhn-Munkres, O(n³)   ← DEFAULT
  ScipyLAPSolver         scipy.optimize.linear_sum_assignment     reference
  CPSATAssignmentSolver  OR-Tools CP-SAT on integer-scaled costs  cross-check

Every solver validates its input through CostMatrix.from_rows, so the same
IrregularCostMatrixError / InfiniteCostError / NaNCostError surface from all
of them. Results are worker-indexed with -1 for an unassigned worker.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence, Union

import numpy as np
from ortools.sat.python import cp_model
from scipy.optimize import linear_sum_assignment

from src.assignment.config import SolverConfig
from src.assignment.cost_matrix import (
    UNMATCHED,
    CostMatrix,
    assignment_cost,
    unassigned_jobs,
    unassigned_workers,
)
from src.assignment.hungarian import HungarianAlgorithm

logger = logging.getLogger(__name__)

Matrix = Union[Sequence[Sequence[float]], np.ndarray]


# ─────────────────────────────────────────────────────────────────────────────
# Public types
# ─────────────────────────────────────────────────────────────────────────────


class SolverStatus(Enum):
    """Valid Solver status"""

    OPTIMAL = auto()  # proven optimal (Hungarian / LAP / CP-SAT)
    FEASIBLE = auto()  # CP-SAT hit its time limit with a solution in hand
    FALLBACK = auto()  # CP-SAT gave up; Hungarian answered instead


@dataclass
class AssignmentResult:
    """Unified output — returned by all three solver variants."""

    assignment: list[int]  # job per worker, -1 = unassigned
    total_cost: float
    solver_status: SolverStatus
    solve_time_ms: float
    unassigned_workers: list[int]
    unassigned_jobs: list[int]


# ─────────────────────────────────────────────────────────────────────────────
# Private helpers (shared by all solvers)
# ─────────────────────────────────────────────────────────────────────────────


def _make_result(
    assignment: list[int],
    matrix: CostMatrix,
    status: SolverStatus,
    ms: float,
) -> AssignmentResult:
    return AssignmentResult(
        assignment=assignment,
        total_cost=assignment_cost(matrix.values, assignment),
        solver_status=status,
        solve_time_ms=ms,
        unassigned_workers=unassigned_workers(assignment),
        unassigned_jobs=unassigned_jobs(assignment, matrix.n_jobs),
    )


def _pairs_to_assignment(pairs: list[tuple[int, int]], n_workers: int) -> list[int]:
    assignment = [UNMATCHED] * n_workers
    for w, j in pairs:
        assignment[w] = j
    return assignment


# ─────────────────────────────────────────────────────────────────────────────
# Solver 1 — HungarianSolver
# ─────────────────────────────────────────────────────────────────────────────


class HungarianSolver:
    """Kuhn-Munkres with dual labels, slack caches and augmenting paths.

    Rectangular matrices are zero-padded inside HungarianAlgorithm; matches
    to padding jobs come back as -1.
    """

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_fallbacks: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost_matrix: Matrix) -> list[int]:
        """Solve Hungarian Optimization"""

        return self.solve_with_diagnostics(cost_matrix).assignment

    def solve_with_diagnostics(self, cost_matrix: Matrix) -> AssignmentResult:
        """Solve Hungarian Optimization with Diagnostics"""

        t0 = time.perf_counter()
        matrix = CostMatrix.from_rows(cost_matrix)
        assignment = HungarianAlgorithm(matrix, self.config).execute()

        ms = (time.perf_counter() - t0) * 1e3
        self.total_solves += 1
        self.total_solve_time_ms += ms
        return _make_result(assignment, matrix, SolverStatus.OPTIMAL, ms)


# ─────────────────────────────────────────────────────────────────────────────
# Solver 2 — ScipyLAPSolver
# ─────────────────────────────────────────────────────────────────────────────


class ScipyLAPSolver:
    """Reference solver: scipy.optimize.linear_sum_assignment.

    Handles rectangular matrices natively. Used to cross-check the Hungarian
    solver's optimal cost; on ties the chosen matching may differ.
    """

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_fallbacks: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost_matrix: Matrix) -> list[int]:
        """Drop-in for HungarianSolver.solve. Identical signature."""

        return self.solve_with_diagnostics(cost_matrix).assignment

    def solve_with_diagnostics(self, cost_matrix: Matrix) -> AssignmentResult:
        """Solve with diagnostics"""

        t0 = time.perf_counter()
        matrix = CostMatrix.from_rows(cost_matrix)

        pairs: list[tuple[int, int]] = []
        if matrix.n_workers and matrix.n_jobs:
            row_ind, col_ind = linear_sum_assignment(matrix.values)
            pairs = [(int(r), int(c)) for r, c in zip(row_ind, col_ind)]
        assignment = _pairs_to_assignment(pairs, matrix.n_workers)

        ms = (time.perf_counter() - t0) * 1e3
        self.total_solves += 1
        self.total_solve_time_ms += ms
        return _make_result(assignment, matrix, SolverStatus.OPTIMAL, ms)


# ─────────────────────────────────────────────────────────────────────────────
# Solver 3 — CPSATAssignmentSolver
# ─────────────────────────────────────────────────────────────────────────────


class CPSATAssignmentSolver:
    """Constraint-programming cross-check on integer-scaled costs.

    Model
        x[w, j] ∈ {0, 1}
        Σ_j x[w, j] ≤ 1 for every worker, Σ_w x[w, j] ≤ 1 for every job
        Σ x = min(rows, cols)
        minimise Σ round(cost[w, j] · cost_scale) · x[w, j]

    Optimal for the scaled costs, so costs with more decimals than
    cost_scale resolves can differ from the exact optimum by rounding.
    Timeout without a solution → HungarianSolver fallback.
    """

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_fallbacks: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost_matrix: Matrix) -> list[int]:
        """Drop-in for HungarianSolver.solve. Identical signature."""
        return self.solve_with_diagnostics(cost_matrix).assignment

    def solve_with_diagnostics(self, cost_matrix: Matrix) -> AssignmentResult:
        """Solve with diagnostics"""

        t0 = time.perf_counter()
        matrix = CostMatrix.from_rows(cost_matrix)
        n_w, n_j = matrix.n_workers, matrix.n_jobs
        if not n_w or not n_j:
            ms = (time.perf_counter() - t0) * 1e3
            self.total_solves += 1
            self.total_solve_time_ms += ms
            return _make_result([UNMATCHED] * n_w, matrix, SolverStatus.OPTIMAL, ms)

        model = cp_model.CpModel()
        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.config.time_limit_ms / 1000.0
        solver.parameters.num_workers = 1  # deterministic

        cost_i = np.rint(matrix.values * self.config.cost_scale).astype(np.int64)
        x = {(w, j): model.NewBoolVar(f"x_{w}_{j}") for w in range(n_w) for j in range(n_j)}

        for w in range(n_w):
            model.AddAtMostOne([x[(w, j)] for j in range(n_j)])
        for j in range(n_j):
            model.AddAtMostOne([x[(w, j)] for w in range(n_w)])
        model.Add(sum(x.values()) == min(n_w, n_j))
        model.Minimize(sum(int(cost_i[w, j]) * var for (w, j), var in x.items()))

        status_code = solver.Solve(model)
        ms = (time.perf_counter() - t0) * 1e3
        self.total_solves += 1
        self.total_solve_time_ms += ms

        if status_code in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            pairs = [(w, j) for (w, j), var in x.items() if solver.Value(var) == 1]
            status = SolverStatus.OPTIMAL if status_code == cp_model.OPTIMAL else SolverStatus.FEASIBLE
            return _make_result(_pairs_to_assignment(pairs, n_w), matrix, status, ms)

        # Timeout / unknown → Hungarian fallback
        logger.warning(
            "CP-SAT returned %s for %dx%d matrix, falling back to Hungarian",
            solver.StatusName(status_code),
            n_w,
            n_j,
        )
        self.total_fallbacks += 1
        r = HungarianSolver(self.config).solve_with_diagnostics(matrix.values)
        r.solver_status = SolverStatus.FALLBACK
        return r


# ─────────────────────────────────────────────────────────────────────────────
# Factory
# ─────────────────────────────────────────────────────────────────────────────


SOLVER_NAMES = ("hungarian", "scipy", "cpsat")


def create_solver(
    strategy: str = "hungarian",
    solver_config: SolverConfig | None = None,
) -> HungarianSolver | ScipyLAPSolver | CPSATAssignmentSolver:
    """Instantiate and return the requested solver.

    strategy options
    ─────────────────
    "hungarian" → HungarianSolver        default, O(n³), numpy only
    "scipy"     → ScipyLAPSolver         reference, requires scipy
    "cpsat"     → CPSATAssignmentSolver  cross-check, requires or-tools
    """
    if strategy == "hungarian":
        return HungarianSolver(solver_config)
    if strategy == "scipy":
        return ScipyLAPSolver(solver_config)
    if strategy == "cpsat":
        return CPSATAssignmentSolver(solver_config)
    raise ValueError(
        f"Unknown strategy {strategy!r}. Valid options: 'hungarian', 'scipy', 'cpsat'."
    )
