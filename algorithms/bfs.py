"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the 4-connected grid.  Yields:
  1. One VISIT step per dequeued cell (FIFO order)
  2. A final PATH step with the shortest (move-count) path,
     or an EXHAUSTED step when the queue runs dry.

Neighbours are enqueued in the fixed up / down / left / right order, so
the visit sequence is fully deterministic.
"""

from collections import deque
from typing import Generator, List

from grid import Coordinate, Grid, orthogonal_neighbors
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",               # 0
    "    queue ← [start]",                      # 1
    "    seen ← {start}",                       # 2
    "    while queue is not empty:",             # 3
    "        cell ← queue.dequeue()",           # 4
    "        visit(cell)",                      # 5
    "        if cell == end: return path",      # 6
    "        for nbr in neighbours(cell):",     # 7
    "            if nbr not in seen:",          # 8
    "                seen.add(nbr)",            # 9
    "                parent[nbr] = cell",       # 10
    "                queue.enqueue(nbr)",       # 11
    "    return NOT FOUND",                     # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    """
    Args:
        grid  : The grid to search (transient fields are reset first).
        start : Starting coordinate.
        end   : Goal coordinate.

    Yields:
        Step – one VISIT per dequeued cell, then a terminal PATH / EXHAUSTED.
    """
    start, end = begin_search(grid, start, end)

    sb     = StepBuilder()
    queue  = deque([start])
    seen   = {start}
    parent: ParentMap = {start: None}

    while queue:
        cell = queue.popleft()
        mark_visited(grid, cell)

        sb.visit(cell)
        sb.set_frontier(queue)
        sb.explanation = (
            f"Dequeue {cell}: BFS always expands the cell discovered earliest (FIFO)."
        )
        yield sb.build(pseudocode_line=5)

        if cell == end:
            path = reconstruct(parent, end)
            publish_path(grid, path)
            sb.explanation = (
                f"Target {end} reached! Shortest path has {len(path) - 1} move(s)."
            )
            yield sb.build_path(path, pseudocode_line=6)
            return

        for nbr in orthogonal_neighbors(grid, cell):
            coord = nbr.coord
            if coord not in seen:
                seen.add(coord)
                parent[coord] = cell
                nbr.previous_node = cell
                queue.append(coord)

    sb.set_frontier(())
    sb.explanation = f"Queue is empty. {end} is NOT reachable from {start}."
    yield sb.build_exhausted(pseudocode_line=12)
