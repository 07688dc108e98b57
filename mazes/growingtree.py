"""
growingtree.py — Growing Tree Maze
==================================
Keep an ACTIVE list of carved cells.  Each step picks one: the newest
with probability `newest_bias`, otherwise a uniformly random one.  If it
has an unvisited lattice neighbour, carve to it and make it active; if
not, evict it.  Done when the list is empty.

newest_bias = 1.0 behaves like recursive backtracking, 0.0 like Prim's;
the default 0.5 mixes the two textures.
"""

import random
from typing import Generator, List, Optional

from grid import Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import between, finish, has_lattice, lattice_neighbors, make_rng
from mazes.step import CarveBuilder, CarveStep


def growing_tree(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    rng: Optional[random.Random] = None,
    newest_bias: float = 0.5,
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
    active: List[Coordinate] = [origin]

    while active:
        if rng.random() < newest_bias:
            idx = len(active) - 1
        else:
            idx = rng.randrange(len(active))
        cell = active[idx]

        options = [n for n in lattice_neighbors(grid, cell) if n not in visited]
        if not options:
            active.pop(idx)
            continue

        nxt = rng.choice(options)
        sb.open(between(cell, nxt))
        sb.open(nxt)
        visited.add(nxt)
        active.append(nxt)
        yield sb.build(current=nxt, explanation=f"Grow {cell} → {nxt} ({len(active)} active).")

    yield finish(sb, start, end, structured=True)
