"""
neighbors.py — Neighbour Enumeration & Distances
================================================
The enumeration order of ORTHOGONAL_DIRECTIONS (up, down, left, right)
is the tie-break order of every 4-connected search.  Changing it changes
visit sequences, so tests pin it.
"""

from typing import List, Tuple, Union

from grid.cell import Cell, Coordinate, as_coordinate
from grid.grid import Grid


CellLike = Union[Cell, Coordinate, Tuple[int, int]]

ORTHOGONAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),   # up
    (1, 0),    # down
    (0, -1),   # left
    (0, 1),    # right
)

DIAGONAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)


def is_walkable(grid: Grid, row: int, col: int) -> bool:
    return grid.in_bounds(row, col) and not grid.is_wall(row, col)


def _neighbors(grid: Grid, where: CellLike, directions) -> List[Cell]:
    row, col = as_coordinate(where)
    result = []
    for d_row, d_col in directions:
        r, c = row + d_row, col + d_col
        if is_walkable(grid, r, c):
            result.append(grid.get_cell(r, c))
    return result


def orthogonal_neighbors(grid: Grid, where: CellLike) -> List[Cell]:
    """In-bounds, non-wall cells sharing an edge with `where`: up, down, left, right."""
    return _neighbors(grid, where, ORTHOGONAL_DIRECTIONS)


def diagonal_neighbors(grid: Grid, where: CellLike) -> List[Cell]:
    return _neighbors(grid, where, DIAGONAL_DIRECTIONS)


def manhattan_distance(a: CellLike, b: CellLike) -> int:
    """|Δrow| + |Δcol|, admissible on a uniform-cost 4-connected grid."""
    ar, ac = as_coordinate(a)
    br, bc = as_coordinate(b)
    return abs(ar - br) + abs(ac - bc)


def has_forced_neighbor(grid: Grid, row: int, col: int, d_row: int, d_col: int) -> bool:
    """
    True when (row, col), entered by moving along (d_row, d_col), has a side
    cell that could not have been reached as cheaply from the previous cell
    on the line, i.e. the cell diagonally behind it is blocked.
    """
    if d_row == 0 and d_col != 0:
        for side in (-1, 1):
            if is_walkable(grid, row + side, col) and not is_walkable(grid, row + side, col - d_col):
                return True
        return False
    if d_col == 0 and d_row != 0:
        for side in (-1, 1):
            if is_walkable(grid, row, col + side) and not is_walkable(grid, row - d_row, col + side):
                return True
        return False
    raise ValueError(f"forced-neighbour test needs an orthogonal direction, got ({d_row}, {d_col})")


def clear_around(grid: Grid, where: CellLike) -> List[Coordinate]:
    """Open `where` and its in-bounds 4-neighbours.  Returns the cells that changed."""
    centre = as_coordinate(where)
    changed = []
    for d_row, d_col in ((0, 0),) + ORTHOGONAL_DIRECTIONS:
        r, c = centre.row + d_row, centre.col + d_col
        if grid.in_bounds(r, c) and grid.is_wall(r, c):
            grid.set_wall(r, c, False)
            changed.append(Coordinate(r, c))
    return changed
