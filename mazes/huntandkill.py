"""
huntandkill.py — Hunt-and-Kill Maze
===================================
KILL: random walk from (1, 1) through unvisited lattice cells until the
walker is boxed in.

HUNT: scan the lattice row-major for the first unvisited cell that has a
visited neighbour, join it to one of those neighbours at random, and
resume the walk from there.  A hunt that finds nothing ends the run.
"""

import random
from typing import Generator, Optional

from grid import Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import between, finish, has_lattice, lattice_cells, lattice_neighbors, make_rng
from mazes.step import CarveBuilder, CarveStep


def hunt_and_kill(
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

    scan_order = lattice_cells(grid)
    current: Optional[Coordinate] = Coordinate(1, 1)
    sb.open(current)
    visited = {current}

    while current is not None:
        options = [n for n in lattice_neighbors(grid, current) if n not in visited]
        if options:
            nxt = rng.choice(options)
            sb.open(between(current, nxt))
            sb.open(nxt)
            visited.add(nxt)
            yield sb.build(current=nxt, explanation=f"Walk {current} → {nxt}.")
            current = nxt
            continue

        # hunt
        current = None
        for cell in scan_order:
            if cell in visited:
                continue
            anchors = [n for n in lattice_neighbors(grid, cell) if n in visited]
            if anchors:
                joined = rng.choice(anchors)
                sb.open(cell)
                sb.open(between(cell, joined))
                visited.add(cell)
                yield sb.build(current=cell, explanation=f"Hunt found {cell}; join it to {joined}.")
                current = cell
                break

    yield finish(sb, start, end, structured=True)
