"""
common.py — Shared plumbing for the search generators
=====================================================
Endpoint validation, per-run reset, parent-map path reconstruction and a
run-to-completion helper.  Parent links live in per-run dicts keyed by
Coordinate; cells only ever receive a coordinate copy of them.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Generator, List, Optional, Tuple

from grid import Coordinate, Grid, InvalidEndpoint, as_coordinate
from algorithms.step import Step, StepKind


ParentMap = Dict[Coordinate, Optional[Coordinate]]
SearchFn  = Callable[[Grid, Coordinate, Coordinate], Generator[Step, None, None]]


def validate_endpoints(grid: Grid, start, end) -> Tuple[Coordinate, Coordinate]:
    """Normalise start / end and fail before any side effect."""
    start = as_coordinate(start)
    end   = as_coordinate(end)
    for role, coord in (("start", start), ("end", end)):
        # get_cell raises OutOfBounds for us
        if grid.get_cell(coord.row, coord.col).is_wall:
            raise InvalidEndpoint(role, coord)
    return start, end


def begin_search(grid: Grid, start, end) -> Tuple[Coordinate, Coordinate]:
    """Validate, then wipe every transient field so reruns start clean."""
    start, end = validate_endpoints(grid, start, end)
    grid.reset_run_state()
    return start, end


def reconstruct(parent: ParentMap, end: Coordinate) -> List[Coordinate]:
    path: List[Coordinate] = []
    cur: Optional[Coordinate] = end
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path


def publish_path(grid: Grid, path: List[Coordinate]) -> None:
    """Flag path cells and record each one's predecessor on the cell."""
    prev: Optional[Coordinate] = None
    for coord in path:
        cell = grid.cell_at(coord)
        cell.is_path = True
        if prev is not None:
            cell.previous_node = prev
        prev = coord


def mark_visited(grid: Grid, coord: Coordinate) -> None:
    grid.cell_at(coord).is_visited = True


# ---------------------------------------------------------------------------
# Run to completion
# ---------------------------------------------------------------------------
@dataclass
class SearchResult:
    found:   bool              = False
    visited: List[Coordinate]  = field(default_factory=list)
    path:    List[Coordinate]  = field(default_factory=list)
    steps:   int               = 0

    @property
    def nodes_visited(self) -> int:
        return len(self.visited)

    @property
    def path_length(self) -> int:
        return max(len(self.path) - 1, 0)


def run_to_completion(fn: SearchFn, grid: Grid, start, end) -> SearchResult:
    """Exhaust a search generator and collect its visit order and path."""
    result = SearchResult()
    for step in fn(grid, as_coordinate(start), as_coordinate(end)):
        result.steps += 1
        if step.kind is StepKind.VISIT:
            result.visited.append(step.current)
        elif step.kind is StepKind.PATH:
            result.found = True
            result.path  = list(step.path)
    return result
