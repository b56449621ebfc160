"""
Minimum-cost assignment of workers to jobs (Hungarian / Kuhn-Munkres).

Provides an O(n³) Hungarian solver over a dual-feasible labeling, plus
scipy and CP-SAT front-ends sharing the same interface for cross-checking.

Quick start:
    from src.assignment import solve
    solve([[4, 1.5, 4], [4, 4.5, 6], [3, 2.25, 3]])  # → [1, 0, 2]
"""

from src.assignment.config import AssignmentConfig, SolverConfig, load_config
from src.assignment.cost_matrix import (
    UNMATCHED,
    CostMatrix,
    assignment_cost,
    unassigned_jobs,
    unassigned_workers,
)
from src.assignment.errors import (
    CostMatrixError,
    InfiniteCostError,
    IrregularCostMatrixError,
    NaNCostError,
)
from src.assignment.hungarian import HungarianAlgorithm, solve
from src.assignment.solver import (
    AssignmentResult,
    CPSATAssignmentSolver,
    HungarianSolver,
    ScipyLAPSolver,
    SolverStatus,
    create_solver,
)

__all__ = [
    "HungarianAlgorithm",
    "solve",
    "CostMatrix",
    "UNMATCHED",
    "assignment_cost",
    "unassigned_jobs",
    "unassigned_workers",
    "CostMatrixError",
    "IrregularCostMatrixError",
    "InfiniteCostError",
    "NaNCostError",
    "AssignmentConfig",
    "SolverConfig",
    "load_config",
    "AssignmentResult",
    "SolverStatus",
    "HungarianSolver",
    "ScipyLAPSolver",
    "CPSATAssignmentSolver",
    "create_solver",
]
