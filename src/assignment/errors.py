"""
Construction errors for the assignment solvers.

Every failure is detected while the cost matrix is being validated, before
any solver state is built. Callers can branch on the exception class instead
of parsing messages:

    try:
        algorithm = HungarianAlgorithm(rows)
    except IrregularCostMatrixError:
        ...  # malformed input
    except (InfiniteCostError, NaNCostError):
        ...  # unsupported cost values
"""

from __future__ import annotations


class CostMatrixError(ValueError):
    """Base class for all cost matrix validation failures."""


class IrregularCostMatrixError(CostMatrixError):
    """A row's length differs from the first row's length."""

    def __init__(self, row: int, expected: int, actual: int) -> None:
        self.row = row
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Irregular cost matrix: row {row} has {actual} entries, expected {expected}"
        )


class InfiniteCostError(CostMatrixError):
    """An entry is +inf or -inf."""

    def __init__(self, row: int, col: int, value: float) -> None:
        self.row = row
        self.col = col
        self.value = value
        super().__init__(f"Infinite cost {value} at ({row}, {col})")


class NaNCostError(CostMatrixError):
    """An entry is not-a-number."""

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        super().__init__(f"NaN cost at ({row}, {col})")
