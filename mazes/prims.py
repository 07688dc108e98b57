"""
prims.py — Randomised Prim's Maze
=================================
Grow a single tree from a seed cell.  The frontier is a set of WALLS
bordering the tree; each step removes a random one, and opens it only if
it separates a visited lattice cell from an unvisited one.  The newly
reached cell then contributes its own walls.

Seed: the lattice cell nearest (rows // 2, cols // 4).
"""

import random
from typing import Generator, List, Optional

from grid import Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import between, finish, has_lattice, lattice_neighbors, make_rng, nearest_lattice_cell
from mazes.step import CarveBuilder, CarveStep


def prims(
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

    seed = nearest_lattice_cell(grid, Coordinate(grid.rows // 2, grid.cols // 4))
    sb.open(seed)
    visited = {seed}

    # frontier kept as a list + membership set so random picks are reproducible
    frontier: List[Coordinate] = []
    in_frontier = set()

    def add_walls(cell: Coordinate) -> None:
        for nbr in lattice_neighbors(grid, cell):
            wall = between(cell, nbr)
            if grid.is_wall(wall.row, wall.col) and wall not in in_frontier:
                in_frontier.add(wall)
                frontier.append(wall)

    add_walls(seed)
    yield sb.build(current=seed, explanation=f"Seed the tree at {seed}.")

    while frontier:
        idx = rng.randrange(len(frontier))
        frontier[idx], frontier[-1] = frontier[-1], frontier[idx]
        wall = frontier.pop()
        in_frontier.discard(wall)

        # a wall between lattice cells is even on exactly one axis
        if wall.row % 2 == 0:
            a, b = wall.offset(-1, 0), wall.offset(1, 0)
        else:
            a, b = wall.offset(0, -1), wall.offset(0, 1)

        if (a in visited) == (b in visited):
            continue

        fresh = b if a in visited else a
        sb.open(wall)
        sb.open(fresh)
        visited.add(fresh)
        add_walls(fresh)
        yield sb.build(current=fresh, explanation=f"Open wall {wall}; {fresh} joins the tree.")

    yield finish(sb, start, end, structured=True)
