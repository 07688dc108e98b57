"""
noise.py — Unstructured generators
==================================
Neither generator carves a lattice and neither promises that start and end
stay connected; a search over the result may well come back EXHAUSTED.

random_walls   Each non-endpoint cell is a wall with probability
               `wall_probability`.  One step per cell, row-major.

cellular       Seed non-endpoint cells as walls with probability
               `fill_probability`, then run `generations` rounds of the
               cave rule on interior cells:
                   wall  ⇔  at least `birth_limit` of its 8 neighbours are walls
               Each round reads the previous round's walls only.  One step
               per generation.
"""

import random
from typing import Generator, List, Optional

from grid import DIAGONAL_DIRECTIONS, ORTHOGONAL_DIRECTIONS, Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import finish, make_rng
from mazes.step import CarveBuilder, CarveStep


EIGHT_NEIGHBOURS = ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS


def random_walls(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    rng: Optional[random.Random] = None,
    wall_probability: float = 0.3,
) -> Generator[CarveStep, None, None]:
    start, end = validate_endpoints(grid, start, end)
    rng = make_rng(rng)
    sb  = CarveBuilder(grid)

    sb.fill(False)
    for coord in grid.coordinates():
        if coord == start or coord == end:
            continue
        sb.set(coord, rng.random() < wall_probability)
        yield sb.build(current=coord)

    yield finish(sb, start, end, structured=False)


def cellular(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    rng: Optional[random.Random] = None,
    fill_probability: float = 0.45,
    generations: int = 4,
    birth_limit: int = 5,
) -> Generator[CarveStep, None, None]:
    start, end = validate_endpoints(grid, start, end)
    rng = make_rng(rng)
    sb  = CarveBuilder(grid)

    sb.fill(False)
    for coord in grid.coordinates():
        if coord != start and coord != end and rng.random() < fill_probability:
            sb.close(coord)
    yield sb.build(explanation=f"Seed walls at density {fill_probability:.0%}.")

    for generation in range(1, generations + 1):
        before = grid.walls()
        decisions: List[bool] = []
        interior = [
            Coordinate(r, c)
            for r in range(1, grid.rows - 1)
            for c in range(1, grid.cols - 1)
        ]
        for coord in interior:
            count = sum(
                1 for d_row, d_col in EIGHT_NEIGHBOURS
                if Coordinate(coord.row + d_row, coord.col + d_col) in before
            )
            decisions.append(count >= birth_limit)
        for coord, wall in zip(interior, decisions):
            sb.set(coord, wall)
        yield sb.build(explanation=f"Generation {generation}: {sb.walls} walls.")

    yield finish(sb, start, end, structured=False)
