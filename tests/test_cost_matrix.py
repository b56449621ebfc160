"""
Tests for cost matrix validation and realized-cost helpers.

Tests cover:
1. Validation order and error context (row / col / lengths)
2. Copy semantics and zero-cost padding
3. assignment_cost duplicate-job detection
4. Unassigned worker / job complements

Run with: pytest tests/test_cost_matrix.py -v
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

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


# ── Test: Validation ──────────────────────────────────────────────


class TestValidation:
    """CostMatrix.from_rows rejects malformed input with structured errors."""

    def test_irregular_reports_row_and_lengths(self):
        with pytest.raises(IrregularCostMatrixError) as exc:
            CostMatrix.from_rows([[1.0, 2.0], [3.0, 4.0], [5.0]])
        assert (exc.value.row, exc.value.expected, exc.value.actual) == (2, 2, 1)

    def test_longer_row_is_irregular(self):
        with pytest.raises(IrregularCostMatrixError):
            CostMatrix.from_rows([[1.0], [2.0, 3.0]])

    def test_infinite_reports_position(self):
        with pytest.raises(InfiniteCostError) as exc:
            CostMatrix.from_rows([[1.0, 2.0], [3.0, float("inf")]])
        assert (exc.value.row, exc.value.col) == (1, 1)
        assert exc.value.value == float("inf")

    def test_nan_reports_position(self):
        with pytest.raises(NaNCostError) as exc:
            CostMatrix.from_rows([[float("nan"), 2.0]])
        assert (exc.value.row, exc.value.col) == (0, 0)

    def test_first_violation_in_row_wins(self):
        """Entries are checked left to right, so the NaN at col 0 beats inf at col 1."""
        with pytest.raises(NaNCostError):
            CostMatrix.from_rows([[float("nan"), float("inf")]])

    def test_earlier_row_wins(self):
        """Rows are checked in order: row 0's inf is found before row 1's bad length."""
        with pytest.raises(InfiniteCostError):
            CostMatrix.from_rows([[1.0, float("-inf")], [1.0]])

    def test_all_kinds_share_base_class(self):
        for matrix in ([[1.0], []], [[float("inf")]], [[float("nan")]]):
            with pytest.raises(CostMatrixError):
                CostMatrix.from_rows(matrix)

    def test_numpy_input(self):
        matrix = CostMatrix.from_rows(np.arange(6, dtype=float).reshape(2, 3))
        assert (matrix.n_workers, matrix.n_jobs, matrix.dim) == (2, 3, 3)

    def test_integer_input_becomes_float(self):
        matrix = CostMatrix.from_rows([[1, 2], [3, 4]])
        assert matrix.values.dtype == np.float64

    def test_empty(self):
        matrix = CostMatrix.from_rows([])
        assert (matrix.n_workers, matrix.n_jobs, matrix.dim) == (0, 0, 0)

    def test_one_empty_row(self):
        matrix = CostMatrix.from_rows([[]])
        assert (matrix.n_workers, matrix.n_jobs, matrix.dim) == (1, 0, 1)


# ── Test: Copy and padding ────────────────────────────────────────


class TestPadding:
    """Padded copies are square with zero-cost dummy cells."""

    def test_values_are_copied(self):
        source = np.ones((2, 2))
        matrix = CostMatrix.from_rows(source)
        source[0, 0] = 99.0
        assert matrix.values[0, 0] == 1.0

    def test_pad_columns(self):
        padded = CostMatrix.from_rows([[1.0, 2.0, 3.0]]).padded()
        np.testing.assert_array_equal(padded, [[1.0, 2.0, 3.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])

    def test_pad_rows(self):
        padded = CostMatrix.from_rows([[1.0], [2.0]]).padded()
        np.testing.assert_array_equal(padded, [[1.0, 0.0], [2.0, 0.0]])

    def test_padded_is_fresh_copy(self):
        matrix = CostMatrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
        padded = matrix.padded()
        padded[0, 0] = -5.0
        assert matrix.values[0, 0] == 1.0


# ── Test: Realized cost helpers ───────────────────────────────────


class TestAssignmentCost:
    """Helpers consumers use to score a returned matching."""

    def test_sum_skips_unassigned(self):
        matrix = [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
        assert assignment_cost(matrix, [1, UNMATCHED, 0]) == pytest.approx(7.0)

    def test_duplicate_job_raises(self):
        with pytest.raises(ValueError, match="workers 0 and 2 have the same job 1"):
            assignment_cost([[1.0, 2.0]] * 3, [1, 0, 1])

    def test_empty_assignment(self):
        assert assignment_cost([], []) == 0.0

    def test_unassigned_workers(self):
        assert unassigned_workers([2, UNMATCHED, 0, UNMATCHED]) == [1, 3]

    def test_unassigned_jobs(self):
        assert unassigned_jobs([3, 0], 5) == [1, 2, 4]
