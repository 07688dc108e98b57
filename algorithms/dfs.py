"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Neighbours are pushed in REVERSED up / down / left / right order so the
first-declared direction ("up") sits on top of the stack and is explored
first.  Cells are marked visited when popped; a cell pushed several times
keeps the parent of its most recent push, which is exactly the cell that
will be on top of it when it is finally popped.

Does NOT guarantee a shortest path.
"""

from typing import Generator, List

from grid import Coordinate, Grid, orthogonal_neighbors
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",               # 0
    "    stack ← [start]",                      # 1
    "    visited ← {}",                         # 2
    "    while stack is not empty:",             # 3
    "        cell ← stack.pop()",               # 4
    "        if cell in visited: continue",     # 5
    "        visited.add(cell)",                # 6
    "        if cell == end: return path",      # 7
    "        for nbr in reversed(neighbours):", # 8
    "            if nbr not in visited:",       # 9
    "                parent[nbr] = cell",       # 10
    "                stack.push(nbr)",          # 11
    "    return NOT FOUND",                     # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    start, end = begin_search(grid, start, end)

    sb      = StepBuilder()
    stack   = [start]
    visited = set()
    parent: ParentMap = {start: None}

    while stack:
        cell = stack.pop()
        if cell in visited:
            continue

        visited.add(cell)
        mark_visited(grid, cell)

        sb.visit(cell)
        sb.set_frontier(reversed(stack))
        sb.explanation = (
            f"Pop {cell} and mark it VISITED. DFS dives through its first "
            f"open direction before coming back here."
        )
        yield sb.build(pseudocode_line=6)

        if cell == end:
            path = reconstruct(parent, end)
            publish_path(grid, path)
            sb.explanation = f"Target {end} found! Path has {len(path) - 1} move(s) (not necessarily shortest)."
            yield sb.build_path(path, pseudocode_line=7)
            return

        for nbr in reversed(orthogonal_neighbors(grid, cell)):
            coord = nbr.coord
            if coord not in visited:
                parent[coord] = cell
                nbr.previous_node = cell
                stack.append(coord)

    sb.set_frontier(())
    sb.explanation = f"Stack empty. {end} not reachable from {start}."
    yield sb.build_exhausted(pseudocode_line=12)
