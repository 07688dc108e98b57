"""
jps.py — Jump Point Search (4-connected)
=========================================
A* over JUMP POINTS only.  From each expanded point the search scans in
straight lines, skipping every free cell that cannot change the answer,
and only stops at:

  • the end cell (always a jump point, no other checks),
  • a cell with a forced neighbour (a side cell whose diagonal-behind
    cell is blocked, so the side cell is not reachable as cheaply any
    other way),
  • for vertical scans only: a cell from which a horizontal side scan
    finds a jump point.

Pruned successor directions: from the start all four; after a
horizontal arrival up / down / onward; after a vertical arrival
left / right / onward.

Scanning is a loop, and the horizontal side scans of a vertical scan are
driven from a small explicit direction stack, so Python's call stack
never grows with the grid size.

Yields one VISIT per expanded jump point, then the full cell-by-cell
path (segments between jump points are straight and get interpolated).
"""

import heapq
from itertools import count
from typing import Generator, List, Optional, Tuple

from grid import (
    ORTHOGONAL_DIRECTIONS, Coordinate, Grid,
    has_forced_neighbor, is_walkable, manhattan_distance,
)
from algorithms.common import ParentMap, begin_search, mark_visited, publish_path, reconstruct
from algorithms.step import Step, StepBuilder


Direction = Tuple[int, int]

SIDE_SCANS: Tuple[Direction, ...] = ((0, -1), (0, 1))


PSEUDOCODE: List[str] = [
    "def JPS(grid, start, end):",                     # 0
    "    open_set ← [(h(start), start)]",             # 1
    "    while open_set:",                             # 2
    "        point ← open_set.pop_min()",             # 3
    "        if point == end: return expand(path)",   # 4
    "        for dir in pruned_directions(point):",   # 5
    "            jp ← jump(point, dir)",              # 6
    "            if jp and g[point] + |point-jp| < g[jp]:", # 7
    "                parent[jp] = point",             # 8
    "                open_set.push((g[jp] + h(jp), jp))", # 9
    "    return NOT FOUND",                           # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def jps(
    grid: Grid,
    start: Coordinate,
    end: Coordinate,
) -> Generator[Step, None, None]:
    start, end = begin_search(grid, start, end)

    sb     = StepBuilder()
    seq    = count()
    closed = set()
    parent: ParentMap = {start: None}

    src = grid.cell_at(start)
    src.g_score = 0
    src.f_score = manhattan_distance(start, end)
    open_set = [(src.f_score, next(seq), start)]

    while open_set:
        f, _, point = heapq.heappop(open_set)
        if point in closed:
            continue

        closed.add(point)
        mark_visited(grid, point)
        here = grid.cell_at(point)

        sb.visit(point)
        sb.set_frontier(c for _, _, c in open_set if c not in closed)
        sb.explanation = f"Expand jump point {point}: g={here.g_score}, f={f}."
        yield sb.build(pseudocode_line=3)

        if point == end:
            path = expand_jump_path(reconstruct(parent, end))
            publish_path(grid, path)
            sb.explanation = (
                f"Target {end} reached through {sb.nodes_visited} jump point(s); "
                f"path has {len(path) - 1} move(s)."
            )
            yield sb.build_path(path, pseudocode_line=4)
            return

        for direction in pruned_directions(grid, point, parent.get(point)):
            jp = jump(grid, point, direction, end)
            if jp is None or jp in closed:
                continue
            new_g = here.g_score + manhattan_distance(point, jp)
            target = grid.cell_at(jp)
            if new_g < target.g_score:
                target.g_score       = new_g
                target.f_score       = new_g + manhattan_distance(jp, end)
                target.previous_node = point
                parent[jp]           = point
                heapq.heappush(open_set, (target.f_score, next(seq), jp))

    sb.set_frontier(())
    sb.explanation = f"No jump points left. {end} not reachable."
    yield sb.build_exhausted(pseudocode_line=10)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------
def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def pruned_directions(grid: Grid, point: Coordinate, came_from: Optional[Coordinate]) -> List[Direction]:
    if came_from is None:
        candidates = list(ORTHOGONAL_DIRECTIONS)
    else:
        d_row = _sign(point.row - came_from.row)
        d_col = _sign(point.col - came_from.col)
        if d_row == 0:
            candidates = [(-1, 0), (1, 0), (0, d_col)]
        else:
            candidates = [(0, -1), (0, 1), (d_row, 0)]
    return [
        (d_row, d_col) for d_row, d_col in candidates
        if is_walkable(grid, point.row + d_row, point.col + d_col)
    ]


def _scan_horizontal(grid: Grid, origin: Coordinate, d_col: int, end: Coordinate) -> Optional[Coordinate]:
    row, col = origin
    while True:
        col += d_col
        if not is_walkable(grid, row, col):
            return None
        here = Coordinate(row, col)
        if here == end or has_forced_neighbor(grid, row, col, 0, d_col):
            return here


def jump(grid: Grid, origin: Coordinate, direction: Direction, end: Coordinate) -> Optional[Coordinate]:
    """First jump point strictly beyond `origin` along `direction`, or None."""
    d_row, d_col = direction
    if d_row == 0:
        return _scan_horizontal(grid, origin, d_col, end)

    row, col = origin
    while True:
        row += d_row
        if not is_walkable(grid, row, col):
            return None
        here = Coordinate(row, col)
        if here == end or has_forced_neighbor(grid, row, col, d_row, 0):
            return here
        pending = list(SIDE_SCANS)
        while pending:
            _, side = pending.pop()
            if _scan_horizontal(grid, here, side, end) is not None:
                return here


def expand_jump_path(points: List[Coordinate]) -> List[Coordinate]:
    """Fill in the straight runs between consecutive jump points."""
    if not points:
        return []
    path = [points[0]]
    for a, b in zip(points, points[1:]):
        d_row = _sign(b.row - a.row)
        d_col = _sign(b.col - a.col)
        cur = a
        while cur != b:
            cur = cur.offset(d_row, d_col)
            path.append(cur)
    return path
