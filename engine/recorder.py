"""
recorder.py — Run Metrics & Comparison
======================================
Keeps the latest metrics card per search algorithm, so two algorithms run
on the same board can be put side by side.

Live recording (the run controller does this for every search):
    rec.start_run("astar", "A* Search")
    rec.record_visit()                  # once per VISIT step
    rec.set_path_length(14)
    metrics = rec.end_run(found=True)

Offline measurement:
    metrics = rec.measure("bfs", grid, (0, 0), (4, 4))

Comparison Mode:
    compare(rec.get_metrics("astar"), rec.get_metrics("dijkstra"))
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from grid import Grid, UnknownAlgorithm
from algorithms import REGISTRY, get_algorithm, run_to_completion


# ---------------------------------------------------------------------------
# Metrics dataclass — what an analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm:     str   = ""
    label:         str   = ""
    nodes_visited: int   = 0
    path_length:   int   = 0          # moves on the final path (cells - 1)
    path_found:    bool  = False
    duration_ms:   float = 0.0
    total_steps:   int   = 0          # Steps yielded, terminal step included
    timestamp:     float = 0.0        # wall clock when the run ended


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: the label of the better run, or "tie"
    winner_nodes: str = ""   # fewer cells visited
    winner_path:  str = ""   # shorter path (a found path beats no path)
    winner_time:  str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        current : RunMetrics of the run in progress, or None.
    """

    def __init__(self):
        self.current: Optional[RunMetrics] = None
        self._metrics: Dict[str, RunMetrics] = {}
        self._started: float = 0.0

    # ------------------------------------------------------------------
    # Live recording
    # ------------------------------------------------------------------
    def start_run(self, algorithm: str, label: str = "") -> None:
        self.current  = RunMetrics(algorithm=algorithm, label=label or algorithm)
        self._started = time.perf_counter()

    def record_visit(self) -> None:
        if self.current is not None:
            self.current.nodes_visited += 1

    def record_step(self) -> None:
        if self.current is not None:
            self.current.total_steps += 1

    def set_path_length(self, length: int) -> None:
        if self.current is not None:
            self.current.path_length = length

    def end_run(self, found: bool = False) -> Optional[RunMetrics]:
        """Close the current run and store it as the latest for its algorithm."""
        run = self.current
        if run is None:
            return None
        run.path_found  = found
        run.duration_ms = round((time.perf_counter() - self._started) * 1000, 3)
        run.timestamp   = time.time()
        self._metrics[run.algorithm] = run
        self.current = None
        return run

    def discard_run(self) -> None:
        """Drop an unfinished run without storing anything."""
        self.current = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_metrics(self, algorithm: str) -> Optional[RunMetrics]:
        return self._metrics.get(algorithm)

    def comparison(self) -> List[RunMetrics]:
        """Latest metrics of every algorithm recorded so far, oldest first."""
        return sorted(self._metrics.values(), key=lambda m: m.timestamp)

    def clear(self) -> None:
        self._metrics.clear()
        self.current = None

    # ------------------------------------------------------------------
    # Offline measurement
    # ------------------------------------------------------------------
    def measure(self, algorithm: str, grid: Grid, start, end) -> RunMetrics:
        """Run a search to completion on a copy of `grid` and record it."""
        info = get_algorithm(algorithm)
        if info is None:
            raise UnknownAlgorithm(algorithm, tuple(REGISTRY))

        work = grid.copy()
        self.start_run(info.key, info.label)
        try:
            result = run_to_completion(info.fn, work, start, end)
        except Exception:
            self.discard_run()
            raise
        self.current.nodes_visited = result.nodes_visited
        self.current.total_steps   = result.steps
        self.set_path_length(result.path_length)
        return self.end_run(found=result.found)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Optional[RunMetrics], right: Optional[RunMetrics]) -> ComparisonResult:
    """Given two finished runs, produce a ComparisonResult."""
    l = left  or RunMetrics()
    r = right or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.label if l_val < r_val else r.label

    # an unfound path ranks behind any found one
    def path_rank(m: RunMetrics):
        return (not m.path_found, m.path_length)

    return ComparisonResult(
        left=l,
        right=r,
        winner_nodes=winner(l.nodes_visited, r.nodes_visited),
        winner_path=winner(path_rank(l), path_rank(r)),
        winner_time=winner(l.duration_ms, r.duration_ms),
    )
