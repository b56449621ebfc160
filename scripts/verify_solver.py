"""
Solver diagnostic tool.

Runs the Hungarian solver through staged checks, from fixed reference
scenarios up to randomized cross-checks, so a regression points at the
stage that broke.

Usage:
    python scripts/verify_solver.py

Each check is independent. If check N fails, the bug is in that stage.
"""

import itertools
import sys

import numpy as np

from src.assignment.cost_matrix import UNMATCHED, assignment_cost
from src.assignment.errors import (
    InfiniteCostError,
    IrregularCostMatrixError,
    NaNCostError,
)
from src.assignment.hungarian import HungarianAlgorithm, solve
from src.assignment.solver import ScipyLAPSolver

FAILURES = 0


def section(title: str) -> None:
    """Creates a section in the CLI display"""

    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def check(label: str, condition: bool, detail: str = "") -> bool:
    """Checks if a condition is passed."""

    global FAILURES  # pylint: disable=global-statement
    status = "✅ PASS" if condition else "❌ FAIL"
    msg = f"  {status}: {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)
    if not condition:
        FAILURES += 1
    return condition


def brute_force_cost(cost: np.ndarray) -> float:
    """Best total over every injective mapping of the smaller side."""
    n_w, n_j = cost.shape
    if n_w <= n_j:
        return min(
            sum(cost[w, j] for w, j in enumerate(perm))
            for perm in itertools.permutations(range(n_j), n_w)
        )
    return min(
        sum(cost[w, j] for j, w in enumerate(perm))
        for perm in itertools.permutations(range(n_w), n_j)
    )


# ─────────────────────────────────────────────────────────────
# STAGE 1: Reference scenarios
# ─────────────────────────────────────────────────────────────
def verify_reference_scenarios() -> None:
    """Known matrices with known answers."""

    section("STAGE 1: Reference Scenarios")

    cases = [
        ([[4.0, 1.5, 4.0], [4.0, 4.5, 6.0], [3.0, 2.25, 3.0]], [1, 0, 2], 8.5),
        ([[1.0, 1.0, 0.8], [0.9, 0.8, 0.1], [0.9, 0.7, 0.4]], [0, 2, 1], 1.8),
        (
            [[6.0, 0.0, 7.0, 5.0], [2.0, 6.0, 2.0, 6.0], [2.0, 7.0, 2.0, 1.0], [9.0, 4.0, 7.0, 1.0]],
            [1, 0, 2, 3],
            5.0,
        ),
    ]
    for matrix, expected, expected_cost in cases:
        got = solve(matrix)
        cost = assignment_cost(matrix, got)
        check(f"{len(matrix)}x{len(matrix[0])} → {expected}", got == expected, f"got {got}")
        check("  cost", abs(cost - expected_cost) < 1e-9, f"{cost:.4f}")

    check("Empty matrix → []", solve([]) == [])
    check("One row, zero columns → [-1]", solve([[]]) == [UNMATCHED])


# ─────────────────────────────────────────────────────────────
# STAGE 2: Construction errors
# ─────────────────────────────────────────────────────────────
def verify_errors() -> None:
    """Each malformed matrix raises its own error kind."""

    section("STAGE 2: Construction Errors")

    cases = [
        ("Irregular rows", [[1.0, 2.0], [3.0]], IrregularCostMatrixError),
        ("Infinite entry", [[1.0, 2.0], [3.0, float("inf")]], InfiniteCostError),
        ("NaN entry", [[1.0, 2.0], [3.0, float("nan")]], NaNCostError),
    ]
    for label, matrix, error in cases:
        try:
            HungarianAlgorithm(matrix)
        except error as e:
            check(label, True, str(e))
        else:
            check(label, False, f"{error.__name__} not raised")


# ─────────────────────────────────────────────────────────────
# STAGE 3: Brute-force optimality on small matrices
# ─────────────────────────────────────────────────────────────
def verify_brute_force(rng: np.random.Generator, trials: int = 200) -> None:
    """Compare against exhaustive search for shapes up to 5x5."""

    section("STAGE 3: Brute-force Optimality")

    mismatches = 0
    for _ in range(trials):
        n_w, n_j = int(rng.integers(1, 6)), int(rng.integers(1, 6))
        cost = rng.integers(-5, 10, size=(n_w, n_j)).astype(float)
        got = assignment_cost(cost, solve(cost))
        if abs(got - brute_force_cost(cost)) > 1e-9:
            mismatches += 1
    check(f"{trials} random matrices match brute force", mismatches == 0, f"{mismatches} mismatches")


# ─────────────────────────────────────────────────────────────
# STAGE 4: Rectangular cardinality
# ─────────────────────────────────────────────────────────────
def verify_cardinality(rng: np.random.Generator) -> None:
    """Unassigned counts follow from the shape alone."""

    section("STAGE 4: Rectangular Cardinality")

    for n_w, n_j in [(7, 4), (4, 7), (6, 6)]:
        result = solve(rng.random((n_w, n_j)))
        assigned = [j for j in result if j != UNMATCHED]
        check(
            f"{n_w}x{n_j}: {max(n_w - n_j, 0)} unassigned",
            result.count(UNMATCHED) == max(n_w - n_j, 0),
            f"got {result.count(UNMATCHED)}",
        )
        check(f"{n_w}x{n_j}: distinct jobs", len(assigned) == len(set(assigned)))


# ─────────────────────────────────────────────────────────────
# STAGE 5: Agreement with scipy
# ─────────────────────────────────────────────────────────────
def verify_against_scipy(rng: np.random.Generator, trials: int = 50) -> None:
    """Optimal cost must match scipy's linear_sum_assignment."""

    section("STAGE 5: Agreement with scipy")

    reference = ScipyLAPSolver()
    worst = 0.0
    for _ in range(trials):
        cost = rng.random((int(rng.integers(5, 40)), int(rng.integers(5, 40))))
        ours = assignment_cost(cost, solve(cost))
        worst = max(worst, abs(ours - reference.solve_with_diagnostics(cost).total_cost))
    check(f"{trials} random matrices agree with scipy", worst < 1e-9, f"max gap {worst:.2e}")


# ─────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    print("Hungarian Solver — Verification")
    print("=" * 60)

    generator = np.random.default_rng(42)
    verify_reference_scenarios()
    verify_errors()
    verify_brute_force(generator)
    verify_cardinality(generator)
    verify_against_scipy(generator)

    section("VERIFICATION COMPLETE")
    if FAILURES:
        print(f"  {FAILURES} check(s) failed. The stage label tells you where to look.")
        sys.exit(1)
    print("  All checks passed.")
