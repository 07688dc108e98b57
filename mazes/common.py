"""
common.py — Lattice helpers shared by the maze generators
=========================================================
Structured generators carve on the ODD lattice: cells (r, c) with r and c
odd, 0 < r < rows-1 and 0 < c < cols-1.  Two lattice cells two apart are
joined by opening the cell between them.

Finalisation is the same for every generator:
  1. structured generators open a short L-shaped corridor from each
     endpoint to its nearest lattice cell, so an endpoint sitting off the
     lattice (e.g. the last row of an even-sized grid) still connects;
  2. start, end and their 4-neighbours are cleared;
  3. a final CarveStep is yielded.
"""

import random
from typing import Iterator, List, Optional, Tuple

from grid import Coordinate, Grid, clear_around
from mazes.step import CarveBuilder, CarveStep


LATTICE_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-2, 0),   # up
    (2, 0),    # down
    (0, -2),   # left
    (0, 2),    # right
)


def make_rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def has_lattice(grid: Grid) -> bool:
    return grid.rows >= 3 and grid.cols >= 3


def on_lattice(grid: Grid, row: int, col: int) -> bool:
    return (
        0 < row < grid.rows - 1 and 0 < col < grid.cols - 1
        and row % 2 == 1 and col % 2 == 1
    )


def lattice_cells(grid: Grid) -> List[Coordinate]:
    """Row-major list of every lattice cell."""
    return [
        Coordinate(r, c)
        for r in range(1, grid.rows - 1, 2)
        for c in range(1, grid.cols - 1, 2)
    ]


def lattice_neighbors(grid: Grid, cell: Coordinate) -> List[Coordinate]:
    """Lattice cells two steps away, in up / down / left / right order."""
    result = []
    for d_row, d_col in LATTICE_DIRECTIONS:
        r, c = cell.row + d_row, cell.col + d_col
        if on_lattice(grid, r, c):
            result.append(Coordinate(r, c))
    return result


def between(a: Coordinate, b: Coordinate) -> Coordinate:
    """The wall cell separating two lattice neighbours."""
    return Coordinate((a.row + b.row) // 2, (a.col + b.col) // 2)


def nearest_lattice_cell(grid: Grid, where: Coordinate) -> Coordinate:
    return Coordinate(
        _nearest_odd(where.row, grid.rows),
        _nearest_odd(where.col, grid.cols),
    )


def _nearest_odd(value: int, size: int) -> int:
    top = size - 2 if (size - 2) % 2 == 1 else size - 3
    if value % 2 == 1 and value <= top:
        return value
    return max(1, min(value - 1 if value > top else value + 1, top))


def anchor_corridor(grid: Grid, endpoint: Coordinate) -> Iterator[Coordinate]:
    """
    Cells from `endpoint` to its nearest lattice cell.  Walks the row index
    to the target row first, then the column index to the target column.
    """
    target = nearest_lattice_cell(grid, endpoint)
    row, col = endpoint
    yield Coordinate(row, col)
    while row != target.row:
        row += 1 if target.row > row else -1
        yield Coordinate(row, col)
    while col != target.col:
        col += 1 if target.col > col else -1
        yield Coordinate(row, col)


def finish(
    sb: CarveBuilder,
    start: Coordinate,
    end: Coordinate,
    structured: bool,
) -> CarveStep:
    grid = sb.grid
    if structured and has_lattice(grid):
        for endpoint in (start, end):
            for coord in anchor_corridor(grid, endpoint):
                sb.open(coord)
    for endpoint in (start, end):
        sb.note_carved(clear_around(grid, endpoint))
    return sb.build(
        explanation=f"Done. Cleared around start {start} and end {end}.",
        is_final=True,
    )
