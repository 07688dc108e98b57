"""
greedy.py — Greedy Best-First Search
=====================================
Pops whichever open cell LOOKS closest to the end (Manhattan h only, no
accumulated cost).  Fast, but NOT optimal.  Compare with A* on a maze to
see it walk into dead ends.

h never changes for a cell, so a cell is pushed once.  While it waits in
the open set its parent is re-pointed to the most recent expander.
"""

import heapq
from itertools import count
from typing import Generator, List

from grid import Coordinate, Grid, manhattan_distance, orthogonal_neighbors
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def GreedyBestFirst(grid, start, end):",      # 0
    "    open_set ← [(h(start), start)]",          # 1
    "    while open_set:",                          # 2
    "        cell ← open_set.pop_min()",           # 3
    "        closed.add(cell); visit(cell)",       # 4
    "        if cell == end: return path",         # 5
    "        for nbr in neighbours(cell):",        # 6
    "            if nbr not in closed:",           # 7
    "                parent[nbr] = cell",          # 8
    "                if nbr not in open_set:",     # 9
    "                    open_set.push((h(nbr), nbr))", # 10
    "    return NOT FOUND",                        # 11
]


def greedy(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    start, end = begin_search(grid, start, end)

    sb      = StepBuilder()
    seq     = count()
    closed  = set()
    in_open = {start}
    parent: ParentMap = {start: None}

    open_set = [(manhattan_distance(start, end), next(seq), start)]

    while open_set:
        h, _, cell = heapq.heappop(open_set)
        in_open.discard(cell)
        closed.add(cell)
        mark_visited(grid, cell)

        sb.visit(cell)
        sb.set_frontier(c for _, _, c in open_set)
        sb.explanation = (
            f"Pop {cell} (h={h}). Chosen purely because it looks closest; "
            f"the cost already paid is ignored."
        )
        yield sb.build(pseudocode_line=4)

        if cell == end:
            path = reconstruct(parent, end)
            publish_path(grid, path)
            sb.explanation = (
                f"Target {end} reached with {len(path) - 1} move(s). "
                f"Greedy gives no optimality guarantee."
            )
            yield sb.build_path(path, pseudocode_line=5)
            return

        for nbr in orthogonal_neighbors(grid, cell):
            coord = nbr.coord
            if coord in closed:
                continue
            parent[coord]     = cell
            nbr.previous_node = cell
            if coord not in in_open:
                in_open.add(coord)
                heapq.heappush(open_set, (manhattan_distance(coord, end), next(seq), coord))

    sb.set_frontier(())
    sb.explanation = f"Open set empty. {end} not reachable."
    yield sb.build_exhausted(pseudocode_line=11)
