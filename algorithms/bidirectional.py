"""
bidirectional.py — Bidirectional BFS
=====================================
Two BFS frontiers, one from the start and one from the end, advance one
dequeue each per iteration (forward first).  The search stops the instant
a dequeued cell is already known to the opposite search.

Path = forward parent chain (start → meeting cell) followed by the
backward parent chain (meeting cell → end).  Backward links are mirrored
onto Cell.previous_node_reverse.

Optimality is best-effort: meeting on the first dequeued intersection is
usually, but not provably, the shortest combined route.

The emptiness check runs once per forward/backward pair; the loop ends as
soon as EITHER queue is empty, since one side having exhausted its
component means the other side can never reach it.
"""

from collections import deque
from typing import Generator, List

from grid import Coordinate, Grid, orthogonal_neighbors
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def BidiBFS(grid, start, end):",              # 0
    "    qF ← [start];  seenF ← {start}",         # 1
    "    qB ← [end];    seenB ← {end}",           # 2
    "    while qF and qB:",                        # 3
    "        cell ← qF.dequeue(); visit(cell)",    # 4
    "        if cell in seenB: return splice(cell)", # 5
    "        expand cell into qF / seenF",         # 6
    "        cell ← qB.dequeue(); visit(cell)",    # 7
    "        if cell in seenF: return splice(cell)", # 8
    "        expand cell into qB / seenB",         # 9
    "    return NOT FOUND",                        # 10
]


def bidirectional(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    start, end = begin_search(grid, start, end)

    sb = StepBuilder()

    # forward state
    q_fwd:      deque     = deque([start])
    seen_fwd              = {start}
    parent_fwd: ParentMap = {start: None}

    # backward state
    q_bwd:      deque     = deque([end])
    seen_bwd              = {end}
    parent_bwd: ParentMap = {end: None}

    visited = set()

    def frontier():
        return tuple(q_fwd) + tuple(q_bwd)

    while q_fwd and q_bwd:
        for forward in (True, False):
            queue, seen, parent, other_seen = (
                (q_fwd, seen_fwd, parent_fwd, seen_bwd) if forward
                else (q_bwd, seen_bwd, parent_bwd, seen_fwd)
            )
            label = "Forward" if forward else "Backward"

            cell = queue.popleft()
            if cell not in visited:
                visited.add(cell)
                mark_visited(grid, cell)
                sb.visit(cell)
                sb.set_frontier(frontier())
                sb.explanation = f"[{label}] Expand {cell}."
                yield sb.build(pseudocode_line=4 if forward else 7)

            if cell in other_seen:
                path = _splice(parent_fwd, parent_bwd, cell)
                publish_path(grid, path)
                sb.explanation = (
                    f"Frontiers met at {cell}! Path has {len(path) - 1} move(s); "
                    f"{len(visited)} cells expanded across both searches."
                )
                yield sb.build_path(path, pseudocode_line=5 if forward else 8)
                return

            for nbr in orthogonal_neighbors(grid, cell):
                coord = nbr.coord
                if coord in seen:
                    continue
                seen.add(coord)
                parent[coord] = cell
                if forward:
                    nbr.previous_node = cell
                else:
                    nbr.previous_node_reverse = cell
                queue.append(coord)

    sb.set_frontier(())
    sb.explanation = "One frontier ran dry before they met; end not reachable."
    yield sb.build_exhausted(pseudocode_line=10)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _splice(parent_fwd: ParentMap, parent_bwd: ParentMap, meeting: Coordinate) -> List[Coordinate]:
    # start → meeting
    path = reconstruct(parent_fwd, meeting)
    # meeting → end, skipping the meeting cell itself
    cur = parent_bwd.get(meeting)
    while cur is not None:
        path.append(cur)
        cur = parent_bwd.get(cur)
    return path
