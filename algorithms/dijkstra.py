"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Every open cell starts at distance ∞ (the grid reset does that); the heap
is filled lazily, so cells still at ∞ are simply never popped.  Same
outcome as scanning all cells and stopping at the first ∞.

Heap entries are (distance, insertion_seq, coord): equal distances pop in
the order they were pushed.  A neighbour is only relaxed on STRICT
improvement; equal-or-worse offers leave it untouched.

Every step costs 1 (uniform grid), so Dijkstra settles cells in the same
layers as BFS, but it is written as the general algorithm on purpose.
"""

import heapq
from itertools import count
from typing import Generator, List

from grid import Coordinate, Grid, orthogonal_neighbors
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, end):",             # 0
    "    dist ← {c: ∞ for c in cells}",            # 1
    "    dist[start] ← 0",                         # 2
    "    pq ← [(0, start)]",                       # 3
    "    while pq is not empty:",                   # 4
    "        (d, cell) ← pq.pop_min()",            # 5
    "        if cell settled: continue",           # 6
    "        visit(cell)",                         # 7
    "        if cell == end: return path",         # 8
    "        for nbr in neighbours(cell):",        # 9
    "            new_dist ← dist[cell] + 1",       # 10
    "            if new_dist < dist[nbr]:",        # 11
    "                dist[nbr] ← new_dist",        # 12
    "                parent[nbr] = cell",          # 13
    "                pq.push((new_dist, nbr))",    # 14
    "    return NOT FOUND",                        # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    start, end = begin_search(grid, start, end)

    sb      = StepBuilder()
    seq     = count()
    settled = set()
    parent: ParentMap = {start: None}

    grid.cell_at(start).distance = 0
    pq = [(0, next(seq), start)]     # min-heap: (distance, seq, coord)

    while pq:
        d, _, cell = heapq.heappop(pq)
        if cell in settled:
            continue

        settled.add(cell)
        mark_visited(grid, cell)

        sb.visit(cell)
        sb.set_frontier(c for _, _, c in pq if c not in settled)
        sb.explanation = (
            f"Pop {cell} with distance {d}, the smallest tentative distance left."
        )
        yield sb.build(pseudocode_line=7)

        if cell == end:
            path = reconstruct(parent, end)
            publish_path(grid, path)
            sb.explanation = f"Target {end} settled at distance {d}. This is optimal."
            yield sb.build_path(path, pseudocode_line=8)
            return

        for nbr in orthogonal_neighbors(grid, cell):
            coord = nbr.coord
            if coord in settled:
                continue
            new_dist = d + nbr.weight
            if new_dist < nbr.distance:
                nbr.distance      = new_dist
                nbr.previous_node = cell
                parent[coord]     = cell
                heapq.heappush(pq, (new_dist, next(seq), coord))

    sb.set_frontier(())
    sb.explanation = f"Priority queue empty. {end} is unreachable."
    yield sb.build_exhausted(pseudocode_line=15)
