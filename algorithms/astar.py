"""
astar.py — A* Search
=====================
Generator-based A* with the Manhattan heuristic, which never overestimates
on a uniform-cost 4-connected grid, so the first time the end cell is
popped its g-score is optimal.

Open set: heap of (f, insertion_seq, coord).  Equal f-scores pop in
insertion order.  Improving a queued cell pushes a fresh entry; the stale
one is skipped when it surfaces (the cell is already closed by then).

Writes g_score / f_score onto the grid cells so a renderer can show them.
"""

import heapq
from itertools import count
from typing import Generator, List

from grid import Coordinate, Grid, manhattan_distance, orthogonal_neighbors
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end):",                # 0
    "    g[start] ← 0",                            # 1
    "    f[start] ← h(start, end)",                # 2
    "    open_set ← [(f[start], start)]",          # 3
    "    while open_set:",                          # 4
    "        cell ← open_set.pop_min()",           # 5
    "        if cell == end: return path",         # 6
    "        closed.add(cell)",                    # 7
    "        for nbr in neighbours(cell):",        # 8
    "            if nbr in closed: continue",      # 9
    "            tentative_g ← g[cell] + 1",       # 10
    "            if tentative_g < g[nbr]:",        # 11
    "                parent[nbr] = cell",          # 12
    "                g[nbr] ← tentative_g",        # 13
    "                f[nbr] ← g[nbr] + h(nbr)",    # 14
    "                open_set.push((f[nbr], nbr))",# 15
    "    return NOT FOUND",                        # 16
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    start, end = begin_search(grid, start, end)

    sb     = StepBuilder()
    seq    = count()
    closed = set()
    parent: ParentMap = {start: None}

    src = grid.cell_at(start)
    src.g_score = 0
    src.f_score = manhattan_distance(start, end)
    open_set = [(src.f_score, next(seq), start)]

    while open_set:
        f, _, cell = heapq.heappop(open_set)
        if cell in closed:
            continue

        closed.add(cell)
        mark_visited(grid, cell)
        current = grid.cell_at(cell)

        sb.visit(cell)
        sb.set_frontier(c for _, _, c in open_set if c not in closed)
        sb.explanation = (
            f"Pop {cell}: g={current.g_score}, h={f - current.g_score}, f={f}. "
            f"Lowest f in the open set."
        )
        yield sb.build(pseudocode_line=5)

        if cell == end:
            path = reconstruct(parent, end)
            publish_path(grid, path)
            sb.explanation = f"Target {end} reached! Optimal cost = {current.g_score}."
            yield sb.build_path(path, pseudocode_line=6)
            return

        for nbr in orthogonal_neighbors(grid, cell):
            coord = nbr.coord
            if coord in closed:
                continue
            tentative_g = current.g_score + nbr.weight
            if tentative_g < nbr.g_score:
                nbr.g_score       = tentative_g
                nbr.f_score       = tentative_g + manhattan_distance(coord, end)
                nbr.previous_node = cell
                parent[coord]     = cell
                heapq.heappush(open_set, (nbr.f_score, next(seq), coord))

    sb.set_frontier(())
    sb.explanation = f"Open set empty. {end} not reachable."
    yield sb.build_exhausted(pseudocode_line=16)
