"""
sidewinder.py — Sidewinder Maze
===============================
Row 1 is one long open corridor.  Every later lattice row is processed
west → east, building a RUN of cells joined eastward.  After each cell the
run is closed with probability `close_probability` (always at the east
edge): one random cell of the run gets a passage north, and a new run
starts.

Perfect maze with a tell-tale unbroken top corridor and a north bias.
"""

import random
from typing import Generator, Optional

from grid import Coordinate, Grid
from algorithms.common import validate_endpoints
from mazes.common import finish, has_lattice, make_rng
from mazes.step import CarveBuilder, CarveStep


def sidewinder(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
    rng: Optional[random.Random] = None,
    close_probability: float = 0.5,
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

    for col in range(1, grid.cols - 1):
        sb.open(Coordinate(1, col))
    yield sb.build(explanation="Open the whole top corridor.")

    east_edge = grid.cols - 1
    for row in range(3, grid.rows - 1, 2):
        run_start = 1
        for col in range(1, east_edge, 2):
            cell = Coordinate(row, col)
            sb.open(cell)

            if col + 2 >= east_edge or rng.random() < close_probability:
                # close the run: one passage north from a random member
                connect = run_start + 2 * rng.randrange((col - run_start) // 2 + 1)
                sb.open(Coordinate(row - 1, connect))
                yield sb.build(
                    current=cell,
                    explanation=f"Close run {run_start}..{col} on row {row}; go north at column {connect}.",
                )
                run_start = col + 2
            else:
                sb.open(Coordinate(row, col + 1))
                yield sb.build(current=cell, explanation=f"Extend the run east from {cell}.")

    yield finish(sb, start, end, structured=True)
