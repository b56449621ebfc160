"""Tests for the run_assignment command-line script.

Run with: pytest tests/test_run_assignment.py -v
"""

import argparse
import sys
from pathlib import Path

import numpy as np

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
sys.path.insert(0, str(REPO_ROOT / "scripts"))

import run_assignment  # noqa: E402


def _args(**overrides) -> argparse.Namespace:
    defaults = {"csv": None, "yaml": None, "n": 3, "seed": 42}
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


class TestReadMatrix:
    """Every input source yields workers as rows."""

    def test_one_row_csv(self, tmp_path):
        path = tmp_path / "row.csv"
        path.write_text("1,2,3\n", encoding="utf-8")
        matrix = run_assignment.read_matrix(_args(csv=str(path)))
        assert matrix.shape == (1, 3)

    def test_one_column_csv(self, tmp_path):
        path = tmp_path / "column.csv"
        path.write_text("1\n2\n3\n", encoding="utf-8")
        matrix = run_assignment.read_matrix(_args(csv=str(path)))
        assert matrix.shape == (3, 1)
        np.testing.assert_array_equal(matrix[:, 0], [1.0, 2.0, 3.0])

    def test_yaml(self, tmp_path):
        path = tmp_path / "problem.yaml"
        path.write_text("cost_matrix:\n  - [4, 1]\n  - [2, 3]\n", encoding="utf-8")
        assert run_assignment.read_matrix(_args(yaml=str(path))) == [[4, 1], [2, 3]]

    def test_random(self):
        matrix = run_assignment.read_matrix(_args(n=5, seed=7))
        assert matrix.shape == (5, 5)


class TestMain:
    """End-to-end runs through argument parsing and printing."""

    def test_one_column_csv_assigns_one_worker(self, capsys, tmp_path):
        path = tmp_path / "column.csv"
        path.write_text("5\n1\n3\n", encoding="utf-8")
        run_assignment.main(["--csv", str(path), "--config", str(tmp_path / "missing.yaml")])
        out = capsys.readouterr().out
        assert "workers=3" in out
        assert "assignment: [-1, 0, -1]" in out
        assert "unassigned workers: [0, 2]" in out

    def test_maximize(self, capsys, tmp_path):
        path = tmp_path / "profit.csv"
        path.write_text("7,1\n8,6\n", encoding="utf-8")
        run_assignment.main(
            ["--csv", str(path), "--maximize", "--config", str(tmp_path / "missing.yaml")]
        )
        out = capsys.readouterr().out
        assert "cost=13.000000" in out
        assert "assignment: [0, 1]" in out
