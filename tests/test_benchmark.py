"""Tests for the benchmark driver.

Runs tiny benchmarks end to end; the printed table is checked loosely.

Run with: pytest tests/test_benchmark.py -v
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.assignment.benchmark import generate_matrix, main, run_benchmark
from src.assignment.config import BenchmarkConfig


class TestGenerateMatrix:
    """Scenario distributions."""

    def test_uniform_shape_and_range(self):
        m = generate_matrix(4, 6, "uniform", np.random.default_rng(0))
        assert m.shape == (4, 6)
        assert ((m >= 0.0) & (m < 1.0)).all()

    def test_integer_values(self):
        m = generate_matrix(5, 5, "integer", np.random.default_rng(0))
        assert m.dtype == np.float64
        np.testing.assert_array_equal(m, np.round(m))

    def test_product(self):
        m = generate_matrix(2, 3, "product", np.random.default_rng(0))
        np.testing.assert_array_equal(m, [[1, 2, 3], [2, 4, 6]])

    def test_unknown_distribution(self):
        with pytest.raises(ValueError, match="Unknown distribution"):
            generate_matrix(2, 2, "gaussian", np.random.default_rng(0))


class TestRunBenchmark:
    """End-to-end runs on small scenarios."""

    def test_hungarian_agrees_with_scipy(self, capsys):
        bench = BenchmarkConfig(
            n_scenarios=5, n_workers=8, n_jobs=6, seed=1, solvers=("scipy", "hungarian")
        )
        results = run_benchmark(bench)
        assert all(results["hungarian"]["agree"])
        assert len(results["scipy"]["cost"]) == 5
        out = capsys.readouterr().out
        assert "Assignment Solver Benchmark" in out
        assert "Agrees with scipy (%)" in out

    def test_product_matrix_with_cpsat(self):
        bench = BenchmarkConfig(
            n_scenarios=1,
            n_workers=6,
            n_jobs=6,
            distribution="product",
            solvers=("hungarian", "cpsat"),
        )
        results = run_benchmark(bench)
        expected = sum((i + 1) * (6 - i) for i in range(6))
        assert results["hungarian"]["cost"] == [pytest.approx(expected)]
        assert all(results["cpsat"]["agree"])

    def test_zero_scenarios(self, capsys):
        results = run_benchmark(BenchmarkConfig(n_scenarios=0, solvers=("hungarian",)))
        assert results["hungarian"]["cost"] == []
        assert "No scenarios run." in capsys.readouterr().out

    def test_cli_overrides(self, capsys, tmp_path):
        main(
            [
                "--config",
                str(tmp_path / "missing.yaml"),
                "--scenarios",
                "2",
                "--workers",
                "4",
                "--jobs",
                "4",
                "--solvers",
                "hungarian",
                "scipy",
            ]
        )
        out = capsys.readouterr().out
        assert "Scenarios: 2" in out
        assert "Solvers:   hungarian, scipy" in out
