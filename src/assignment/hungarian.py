"""
Hungarian (Kuhn-Munkres) algorithm with dual labels and augmenting paths.

Given a workers × jobs cost matrix, find a matching in which no worker gets
more than one job and no job more than one worker, minimising the total cost.

More workers than jobs leaves exactly rows − cols workers unassigned (-1);
more jobs than workers leaves cols − rows jobs unused. A square matrix always
yields a permutation.

Runs in O(n³) where n = max(rows, cols):

  Pre     : pad to n × n with zero-cost cells
  Reduce  : row-min subtraction → column-min subtraction
  Labels  : job label = column minimum, worker label = 0 (dual feasible)
  Greedy  : match tight edges row-major as a warm start
  Phases  : per unmatched worker, grow an alternating tree over tight edges,
            relabel by the minimum slack when stuck, augment on reaching a
            free job. Each phase is O(n²) because the minimum slack per
            unreached job is cached, so relabeling costs O(n).

Invariants between steps:
  • label_by_worker[w] + label_by_job[j] ≤ cost[w, j] for all w, j
  • every matched edge has zero slack
  • match_job_by_worker and match_worker_by_job are mutual inverses
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from src.assignment.config import SolverConfig
from src.assignment.cost_matrix import UNMATCHED, CostMatrix

logger = logging.getLogger(__name__)


class HungarianAlgorithm:
    """Single-use solver instance for one cost matrix.

    All arrays are allocated at construction, sized to dim = max(rows, cols),
    and mutated in place by `execute()`. Independent problems need
    independent instances; nothing is shared between them.

    A CostMatrix is used as-is; any other input is validated first.

    Raises (from the constructor):
        IrregularCostMatrixError, InfiniteCostError, NaNCostError
    """

    def __init__(
        self,
        cost_matrix: CostMatrix | Sequence[Sequence[float]] | np.ndarray,
        config: SolverConfig | None = None,
    ) -> None:
        if isinstance(cost_matrix, CostMatrix):
            matrix = cost_matrix
        else:
            matrix = CostMatrix.from_rows(cost_matrix)
        self.config = config or SolverConfig()
        self.rows = matrix.n_workers
        self.cols = matrix.n_jobs
        self.dim = matrix.dim

        dim = self.dim
        self._cost = matrix.padded()
        self._label_by_worker = np.zeros(dim, dtype=np.float64)
        self._label_by_job = np.zeros(dim, dtype=np.float64)
        self._min_slack_worker_by_job = np.zeros(dim, dtype=np.int64)
        self._min_slack_value_by_job = np.zeros(dim, dtype=np.float64)
        self._committed_workers = np.zeros(dim, dtype=bool)
        self._parent_worker_by_committed_job = np.full(dim, UNMATCHED, dtype=np.int64)
        self._match_job_by_worker = np.full(dim, UNMATCHED, dtype=np.int64)
        self._match_worker_by_job = np.full(dim, UNMATCHED, dtype=np.int64)

        self.phase_count: int = 0
        self.relabel_count: int = 0
        self._result: list[int] | None = None

    # ── Public interface ──────────────────────────────────────────────────────

    def execute(self) -> list[int]:
        """Run the algorithm.

        Returns:
            Minimum-cost matching, indexed by worker: result[w] is the job
            given to worker w, or -1 if w is unassigned. Calling again returns
            a copy of the first result.
        """
        if self._result is not None:
            return list(self._result)

        if self.dim > 0:
            if self.config.reduce_matrix:
                self._reduce()
            self._compute_initial_feasible_solution()
            if self.config.greedy_warm_start:
                self._greedy_match()

            w = self._fetch_unmatched_worker()
            while w < self.dim:
                self._initialize_phase(w)
                self._execute_phase()
                self.phase_count += 1
                w = self._fetch_unmatched_worker()

        self._result = [
            int(j) if j < self.cols else UNMATCHED
            for j in self._match_job_by_worker[: self.rows]
        ]
        logger.debug(
            "Hungarian %dx%d solved: %d phases, %d relabels",
            self.rows,
            self.cols,
            self.phase_count,
            self.relabel_count,
        )
        return list(self._result)

    # ── Heuristics ────────────────────────────────────────────────────────────

    def _reduce(self) -> None:
        """Subtract each row's minimum, then each column's minimum.

        An optimal assignment for the reduced matrix is optimal for the
        original one; the reduction only creates more zero-cost edges.
        """
        self._cost -= self._cost.min(axis=1, keepdims=True)
        self._cost -= self._cost.min(axis=0, keepdims=True)

    def _compute_initial_feasible_solution(self) -> None:
        """Worker labels 0, job labels = cheapest incident edge."""
        self._label_by_worker[:] = 0.0
        self._label_by_job[:] = self._cost.min(axis=0)

    def _greedy_match(self) -> None:
        """Match tight edges row-major: first free tight job for each free worker."""
        for w in range(self.dim):
            if self._match_job_by_worker[w] != UNMATCHED:
                continue
            slack = self._cost[w] - self._label_by_worker[w] - self._label_by_job
            free_tight = np.flatnonzero(
                (slack == 0) & (self._match_worker_by_job == UNMATCHED)
            )
            if free_tight.size:
                self._match(w, int(free_tight[0]))

    # ── Phase loop ────────────────────────────────────────────────────────────

    def _fetch_unmatched_worker(self) -> int:
        """First unmatched worker, or dim if every worker is matched."""
        free = np.flatnonzero(self._match_job_by_worker == UNMATCHED)
        return int(free[0]) if free.size else self.dim

    def _initialize_phase(self, w: int) -> None:
        """Reset the tree to the root worker w and seed slack caches from its row."""
        self._committed_workers[:] = False
        self._parent_worker_by_committed_job[:] = UNMATCHED
        self._committed_workers[w] = True
        self._min_slack_value_by_job[:] = (
            self._cost[w] - self._label_by_worker[w] - self._label_by_job
        )
        self._min_slack_worker_by_job[:] = w

    def _execute_phase(self) -> None:
        """Grow the alternating tree until an augmenting path is found.

        Each round picks the unreached job with the smallest cached slack.
        If that slack is positive, no tight edge leaves the tree, so labels
        are shifted by it first. The job then joins the tree; a free job ends
        the phase with an augmentation, a matched one pulls its worker into
        the tree and refreshes the slack caches from that worker's row.
        """
        while True:
            unreached = self._parent_worker_by_committed_job == UNMATCHED
            slack = np.where(unreached, self._min_slack_value_by_job, np.inf)
            min_slack_job = int(np.argmin(slack))
            min_slack_value = float(slack[min_slack_job])
            min_slack_worker = int(self._min_slack_worker_by_job[min_slack_job])

            if min_slack_value > 0:
                self._update_labeling(min_slack_value)
            self._parent_worker_by_committed_job[min_slack_job] = min_slack_worker

            if self._match_worker_by_job[min_slack_job] == UNMATCHED:
                self._augment(min_slack_job)
                return

            worker = int(self._match_worker_by_job[min_slack_job])
            self._committed_workers[worker] = True
            unreached = self._parent_worker_by_committed_job == UNMATCHED
            row_slack = self._cost[worker] - self._label_by_worker[worker] - self._label_by_job
            better = unreached & (row_slack < self._min_slack_value_by_job)
            self._min_slack_value_by_job[better] = row_slack[better]
            self._min_slack_worker_by_job[better] = worker

    def _update_labeling(self, slack: float) -> None:
        """Raise committed workers and lower reached jobs by `slack`.

        Edges between committed workers and reached jobs keep their slack;
        edges from committed workers to unreached jobs lose exactly `slack`,
        so the cached minima drop by the same amount and at least one hits 0.
        """
        reached = self._parent_worker_by_committed_job != UNMATCHED
        self._label_by_worker[self._committed_workers] += slack
        self._label_by_job[reached] -= slack
        self._min_slack_value_by_job[~reached] -= slack
        self.relabel_count += 1

    def _augment(self, job: int) -> None:
        """Flip matched/unmatched edges along the tree path ending at a free job."""
        committed_job = job
        parent_worker = int(self._parent_worker_by_committed_job[committed_job])
        while True:
            previous_job = int(self._match_job_by_worker[parent_worker])
            self._match(parent_worker, committed_job)
            committed_job = previous_job
            if committed_job == UNMATCHED:
                break
            parent_worker = int(self._parent_worker_by_committed_job[committed_job])

    def _match(self, w: int, j: int) -> None:
        self._match_job_by_worker[w] = j
        self._match_worker_by_job[j] = w


def solve(
    cost_matrix: Sequence[Sequence[float]] | np.ndarray,
    config: SolverConfig | None = None,
) -> list[int]:
    """Construct a HungarianAlgorithm and execute it in one call."""
    return HungarianAlgorithm(cost_matrix, config).execute()
