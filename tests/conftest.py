"""Shared helpers for the test suite."""

import itertools

import numpy as np
import pytest


def _brute_force_cost(cost) -> float:
    """Minimum total over every injective mapping of the smaller side."""
    cost = np.asarray(cost, dtype=float)
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


@pytest.fixture
def brute_force_cost():
    """Exhaustive optimum, usable for matrices up to about 5 × 5."""
    return _brute_force_cost
