"""
recursive.py — Recursive Backtracking Maze
==========================================
Depth-first carve with an explicit stack (no Python recursion).

From (1, 1): look at the unvisited lattice neighbours of the cell on top
of the stack.  None left → pop (backtrack).  Otherwise pick one at random,
open it and the wall between, push it.

Produces a perfect maze with long winding corridors.
"""

import random
from typing import Generator, Optional

from grid import Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import between, finish, has_lattice, lattice_neighbors, make_rng
from mazes.step import CarveBuilder, CarveStep


def recursive_backtracking(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    rng: Optional[random.Random] = None,
) -> Generator[CarveStep, None, None]:
    start, end = validate_endpoints(grid, start, end)
    rng = make_rng(rng)
    sb  = CarveBuilder(grid)

    if not has_lattice(grid):
        sb.fill(False)
        yield finish(sb, start, end, structured=True)
        return

    sb.fill(True)
    yield sb.build(explanation="Fill the grid with walls.")

    origin = Coordinate(1, 1)
    sb.open(origin)
    visited = {origin}
    stack   = [origin]

    while stack:
        current = stack[-1]
        options = [n for n in lattice_neighbors(grid, current) if n not in visited]
        if not options:
            stack.pop()
            continue

        nxt = rng.choice(options)
        sb.open(between(current, nxt))
        sb.open(nxt)
        visited.add(nxt)
        stack.append(nxt)
        yield sb.build(current=nxt, explanation=f"Carve {current} → {nxt}.")

    yield finish(sb, start, end, structured=True)
