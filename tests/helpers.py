"""Reference checks shared by the test modules."""

import random
from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from grid import Coordinate, Grid


def reachable_from(grid: Grid, origin) -> Dict[Coordinate, int]:
    """Plain BFS over open cells: coordinate → move count from `origin`."""
    origin = Coordinate(*origin)
    dist = {origin: 0}
    queue = deque([origin])
    while queue:
        cur = queue.popleft()
        for d_row, d_col in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            r, c = cur.row + d_row, cur.col + d_col
            nxt = Coordinate(r, c)
            if grid.in_bounds(r, c) and not grid.is_wall(r, c) and nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return dist


def shortest_length(grid: Grid, start, end) -> Optional[int]:
    return reachable_from(grid, start).get(Coordinate(*end))


def assert_valid_path(grid: Grid, path: List[Coordinate], start, end) -> None:
    assert path[0] == tuple(start)
    assert path[-1] == tuple(end)
    for a, b in zip(path, path[1:]):
        assert abs(a.row - b.row) + abs(a.col - b.col) == 1, f"{a} → {b} is not a single move"
    for coord in path:
        assert not grid.is_wall(coord.row, coord.col), f"path crosses wall at {coord}"


def open_cells(grid: Grid) -> Set[Coordinate]:
    return {cell.coord for cell in grid.cells() if not cell.is_wall}


def scatter_walls(rows: int, cols: int, density: float, seed: int, keep: Iterable = ()) -> Grid:
    """Random board with `keep` coordinates guaranteed open."""
    rng = random.Random(seed)
    grid = Grid(rows, cols)
    keep = {Coordinate(*k) for k in keep}
    for coord in grid.coordinates():
        if coord not in keep and rng.random() < density:
            grid.set_wall(coord.row, coord.col)
    return grid
