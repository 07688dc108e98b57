"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, Coordinate, CellState
    from grid import create_grid, get_cell, set_wall
    from grid import orthogonal_neighbors, manhattan_distance
    from grid import OutOfBounds, InvalidEndpoint, AlreadyRunning
"""

from grid.cell      import Cell, CellState, Coordinate, INFINITY, as_coordinate
from grid.errors    import (
    PathfinderError, OutOfBounds, InvalidEndpoint, AlreadyRunning, UnknownAlgorithm,
)
from grid.grid      import Grid, create_grid, get_cell, set_wall
from grid.neighbors import (
    ORTHOGONAL_DIRECTIONS,
    DIAGONAL_DIRECTIONS,
    is_walkable,
    orthogonal_neighbors,
    diagonal_neighbors,
    manhattan_distance,
    has_forced_neighbor,
    clear_around,
)

__all__ = [
    "Cell",             "CellState",
    "Coordinate",       "INFINITY",        "as_coordinate",
    "Grid",             "create_grid",     "get_cell",      "set_wall",
    "PathfinderError",  "OutOfBounds",     "InvalidEndpoint",
    "AlreadyRunning",   "UnknownAlgorithm",
    "ORTHOGONAL_DIRECTIONS", "DIAGONAL_DIRECTIONS",
    "is_walkable",      "orthogonal_neighbors", "diagonal_neighbors",
    "manhattan_distance", "has_forced_neighbor", "clear_around",
]
