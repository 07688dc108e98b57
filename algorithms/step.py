"""
step.py — Search Step Snapshot
==============================
Every search algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of one event:

    • VISIT      – a cell was settled / expanded (its coordinate is `current`)
    • PATH       – terminal: end reached, `path` holds start → end inclusive
    • EXHAUSTED  – terminal: frontier empty, end unreachable

plus the teaching metadata the side panels read (frontier contents,
pseudocode line, plain-English explanation, running metrics).

Design decisions:
  - Step holds coordinates, never Cell references.  The run controller
    resolves coordinates against the run's working grid when it calls
    the caller's sinks.
  - Step is immutable; StepBuilder is the algorithm-side scratch pad.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from grid import Coordinate


class StepKind(Enum):
    VISIT     = "visit"
    PATH      = "path"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        kind            : StepKind.
        current         : Coordinate settled by a VISIT step (None on terminal steps).
        frontier        : Coordinates still waiting in the queue / stack / heap.
                          Heap frontiers are listed in heap order, not sorted.
        path            : Reconstructed path (PATH steps only).
        found           : True / False on terminal steps, None otherwise.
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        explanation     : Human-readable "why" text for learning mode.
        metrics         : Running tally: nodes_visited, path_length.
        is_final        : True on the terminal step.
    """

    step_number:     int                       = 0
    kind:            StepKind                  = StepKind.VISIT
    current:         Optional[Coordinate]      = None
    frontier:        Tuple[Coordinate, ...]    = ()
    path:            Tuple[Coordinate, ...]    = ()
    found:           Optional[bool]            = None
    pseudocode_line: int                       = 0
    explanation:     str                       = ""
    metrics:         Dict[str, Any]            = field(default_factory=dict)
    is_final:        bool                      = False

    @property
    def path_length(self) -> int:
        """Number of moves on the path (cells - 1)."""
        return max(len(self.path) - 1, 0)


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps.

    Usage inside an algorithm generator:
        sb = StepBuilder()
        ...
        sb.visit(coord)
        sb.set_frontier(queue)
        sb.explanation = "Dequeue (2, 3): discovered earliest."
        yield sb.build(pseudocode_line=5)
    """

    def __init__(self):
        self.step_number:   int                  = 0
        self.nodes_visited: int                  = 0
        self.current:       Optional[Coordinate] = None
        self.frontier:      Tuple[Coordinate, ...] = ()
        self.explanation:   str                  = ""

    # -- helpers --
    def visit(self, coord: Coordinate) -> None:
        self.current = coord
        self.nodes_visited += 1

    def set_frontier(self, coords: Iterable[Coordinate]) -> None:
        self.frontier = tuple(coords)

    def _metrics(self, path_length: int = 0) -> Dict[str, Any]:
        return {"nodes_visited": self.nodes_visited, "path_length": path_length}

    def _next_number(self) -> int:
        number = self.step_number
        self.step_number += 1
        return number

    def build(self, pseudocode_line: int = 0) -> Step:
        """A VISIT step for the cell passed to the last visit() call."""
        return Step(
            step_number=self._next_number(),
            kind=StepKind.VISIT,
            current=self.current,
            frontier=self.frontier,
            pseudocode_line=pseudocode_line,
            explanation=self.explanation,
            metrics=self._metrics(),
        )

    def build_path(self, path: Iterable[Coordinate], pseudocode_line: int = 0) -> Step:
        path = tuple(path)
        return Step(
            step_number=self._next_number(),
            kind=StepKind.PATH,
            frontier=self.frontier,
            path=path,
            found=True,
            pseudocode_line=pseudocode_line,
            explanation=self.explanation,
            metrics=self._metrics(max(len(path) - 1, 0)),
            is_final=True,
        )

    def build_exhausted(self, pseudocode_line: int = 0) -> Step:
        return Step(
            step_number=self._next_number(),
            kind=StepKind.EXHAUSTED,
            found=False,
            pseudocode_line=pseudocode_line,
            explanation=self.explanation,
            metrics=self._metrics(),
            is_final=True,
        )
