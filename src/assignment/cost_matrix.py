"""
Cost matrix validation and realized-cost helpers.

A CostMatrix is the validated, non-aliased copy of a caller's
workers × jobs table. All solvers build one before touching any state,
so the same three error kinds surface no matter which solver is used.

Usage:
    matrix = CostMatrix.from_rows([[4.0, 1.5], [2.0, 3.0]])
    # matrix.values[w, j] = cost of giving job j to worker w
    padded = matrix.padded()  # square, zero-cost padding cells
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from src.assignment.errors import (
    InfiniteCostError,
    IrregularCostMatrixError,
    NaNCostError,
)


UNMATCHED = -1  # worker/job has no partner


@dataclass(frozen=True)
class CostMatrix:
    """Validated rectangular cost table.

    Attributes:
        n_workers: Number of rows.
        n_jobs: Number of columns.
        values: float64 array of shape (n_workers, n_jobs), owned by this object.
    """

    n_workers: int
    n_jobs: int
    values: np.ndarray

    @property
    def dim(self) -> int:
        """Side of the square the solvers pad to."""
        return max(self.n_workers, self.n_jobs)

    @classmethod
    def from_rows(cls, matrix: Sequence[Sequence[float]] | np.ndarray) -> CostMatrix:
        """Validate and copy a cost matrix.

        Rows are checked in order; within a row the length is checked first,
        then each entry (infinity before NaN). The first violation is raised.

        Raises:
            IrregularCostMatrixError: a row's length differs from the first row's.
            InfiniteCostError: an entry is +/-inf.
            NaNCostError: an entry is NaN.
        """
        rows: list[np.ndarray] = []
        n_jobs = 0
        for w, row in enumerate(matrix):
            values = np.array(row, dtype=np.float64)
            if w == 0:
                n_jobs = values.size
            if values.ndim != 1 or values.size != n_jobs:
                raise IrregularCostMatrixError(w, n_jobs, values.size)
            bad = np.flatnonzero(~np.isfinite(values))
            if bad.size:
                j = int(bad[0])
                if np.isnan(values[j]):
                    raise NaNCostError(w, j)
                raise InfiniteCostError(w, j, float(values[j]))
            rows.append(values)

        if not rows:
            return cls(n_workers=0, n_jobs=0, values=np.zeros((0, 0), dtype=np.float64))
        return cls(n_workers=len(rows), n_jobs=n_jobs, values=np.vstack(rows))

    def padded(self) -> np.ndarray:
        """Square dim × dim copy; padding cells cost 0 so dummy slots are free."""
        out = np.zeros((self.dim, self.dim), dtype=np.float64)
        out[: self.n_workers, : self.n_jobs] = self.values
        return out


def assignment_cost(
    cost_matrix: Sequence[Sequence[float]] | np.ndarray,
    assignment: Sequence[int],
) -> float:
    """Total cost of a worker-indexed assignment; unassigned workers are skipped.

    Raises:
        ValueError: two workers were given the same job.
    """
    total = 0.0
    owner: dict[int, int] = {}
    for w, j in enumerate(assignment):
        if j == UNMATCHED:
            continue
        if j in owner:
            raise ValueError(f"workers {owner[j]} and {w} have the same job {j}")
        owner[j] = w
        total += float(cost_matrix[w][j])
    return total


def unassigned_workers(assignment: Sequence[int]) -> list[int]:
    """Workers left without a job."""
    return [w for w, j in enumerate(assignment) if j == UNMATCHED]


def unassigned_jobs(assignment: Sequence[int], n_jobs: int) -> list[int]:
    """Job-indexed complement of a worker-indexed assignment."""
    taken = {j for j in assignment if j != UNMATCHED}
    return [j for j in range(n_jobs) if j not in taken]
