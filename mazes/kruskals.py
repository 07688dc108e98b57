"""
kruskals.py — Randomised Kruskal's Maze
=======================================
Every lattice cell starts open and in its own set.  Candidate walls (the
cell between two lattice neighbours) are shuffled once; each one is
knocked down only if the two cells it separates are in different sets,
which are then merged.  Cycles are impossible, so the result is a
spanning tree.

Disjoint sets use path compression + union by size.
"""

import random
from typing import Dict, Generator, List, Optional, Tuple

from grid import Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import between, finish, has_lattice, lattice_cells, make_rng, on_lattice
from mazes.step import CarveBuilder, CarveStep


# ---------------------------------------------------------------------------
# Union-find
# ---------------------------------------------------------------------------
class DisjointSet:
    def __init__(self, items):
        self.parent: Dict[Coordinate, Coordinate] = {x: x for x in items}
        self.size:   Dict[Coordinate, int]        = {x: 1 for x in items}

    def find(self, x: Coordinate) -> Coordinate:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: Coordinate, b: Coordinate) -> bool:
        """Merge the sets of a and b.  False when they were already one set."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra]  += self.size[rb]
        return True


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kruskals(
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

    cells = lattice_cells(grid)
    for cell in cells:
        sb.open(cell)
    yield sb.build(explanation=f"Open all {len(cells)} lattice cells, each its own set.")

    # (wall, cell_a, cell_b): only right / down so each wall appears once
    walls: List[Tuple[Coordinate, Coordinate, Coordinate]] = []
    for cell in cells:
        for d_row, d_col in ((2, 0), (0, 2)):
            other = cell.offset(d_row, d_col)
            if on_lattice(grid, other.row, other.col):
                walls.append((between(cell, other), cell, other))
    rng.shuffle(walls)

    sets = DisjointSet(cells)
    for wall, a, b in walls:
        if sets.union(a, b):
            sb.open(wall)
            yield sb.build(current=wall, explanation=f"Join {a} and {b}: different sets.")

    yield finish(sb, start, end, structured=True)
