"""
grid.py — Grid Container
========================
Single source of truth for the board.  Searches, maze generators and the
run controller all go through these accessors; nothing else indexes the
raw storage.

Responsibilities:
  1. Coordinate-addressed access           (get_cell / set_wall / is_wall)
  2. Whole-board helpers                   (fill_walls, walls, cells)
  3. Per-run reset & publish               (reset_run_state / merge_run_state)
  4. Copying                               (copy — private working copies)
  5. Text round-trip for tests / debugging (from_rows / to_rows)

Design decisions:
  - Storage is a row-major list of lists; rows × cols is fixed for the
    lifetime of the object, so every coordinate always has exactly one Cell.
  - Out-of-range access raises OutOfBounds.  Only `is_wall` is lenient
    (outside the board counts as wall) because jump-point scanning probes
    past the edges constantly.
"""

from typing import FrozenSet, Iterable, Iterator, List

from grid.cell import Cell, Coordinate
from grid.errors import OutOfBounds


WALL_CHAR = "#"
OPEN_CHAR = "."


class Grid:
    """
    Attributes:
        rows   : Number of rows.
        cols   : Number of columns.
        _cells : [[Cell]] indexed [row][col].
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows: int = rows
        self.cols: int = cols
        self._cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

    # ==================================================================
    # ACCESSORS
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)

    def get_cell(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return self._cells[row][col]

    def cell_at(self, coord: Coordinate) -> Cell:
        return self.get_cell(coord[0], coord[1])

    def set_wall(self, row: int, col: int, is_wall: bool = True) -> None:
        self._check(row, col)
        self._cells[row][col].is_wall = bool(is_wall)

    def is_wall(self, row: int, col: int) -> bool:
        """Out-of-bounds counts as wall."""
        if not self.in_bounds(row, col):
            return True
        return self._cells[row][col].is_wall

    # ==================================================================
    # WHOLE-BOARD HELPERS
    # ==================================================================
    def cells(self) -> Iterator[Cell]:
        """Row-major iteration."""
        for row in self._cells:
            yield from row

    def coordinates(self) -> Iterator[Coordinate]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield Coordinate(r, c)

    def fill_walls(self, is_wall: bool = True) -> None:
        for cell in self.cells():
            cell.is_wall = is_wall

    def walls(self) -> FrozenSet[Coordinate]:
        return frozenset(cell.coord for cell in self.cells() if cell.is_wall)

    def wall_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_wall)

    # ==================================================================
    # RUN STATE (keep walls, wipe / publish transient fields)
    # ==================================================================
    def reset_run_state(self) -> None:
        for cell in self.cells():
            cell.reset_run_state()

    def merge_run_state(self, other: "Grid") -> None:
        """Publish the transient fields of a run's working copy into this grid."""
        if (other.rows, other.cols) != (self.rows, self.cols):
            raise ValueError(
                f"cannot merge a {other.rows}x{other.cols} run into a {self.rows}x{self.cols} grid"
            )
        for mine, theirs in zip(self.cells(), other.cells()):
            mine.copy_run_state_from(theirs)

    def copy(self) -> "Grid":
        twin = Grid.__new__(Grid)
        twin.rows   = self.rows
        twin.cols   = self.cols
        twin._cells = [[cell.copy() for cell in row] for row in self._cells]
        return twin

    # ==================================================================
    # TEXT ROUND-TRIP
    # ==================================================================
    @classmethod
    def from_rows(cls, lines: Iterable[str]) -> "Grid":
        """
        Build a grid from strings, one per row: '#' is a wall, anything
        else is open floor.

            Grid.from_rows([
                "..#",
                "..#",
                "...",
            ])
        """
        lines = [line.strip() for line in lines if line.strip()]
        if not lines:
            raise ValueError("from_rows needs at least one non-empty row")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("all rows must have the same width")
        grid = cls(len(lines), width)
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                if ch == WALL_CHAR:
                    grid._cells[r][c].is_wall = True
        return grid

    def to_rows(self) -> List[str]:
        return [
            "".join(WALL_CHAR if cell.is_wall else OPEN_CHAR for cell in row)
            for row in self._cells
        ]

    # ==================================================================
    # DUNDER
    # ==================================================================
    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.rows, self.cols) == (other.rows, other.cols) and self.to_rows() == other.to_rows()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, walls={self.wall_count()})"


# ---------------------------------------------------------------------------
# Functional façade — mirrors the method API
# ---------------------------------------------------------------------------
def create_grid(rows: int, cols: int) -> Grid:
    return Grid(rows, cols)


def get_cell(grid: Grid, row: int, col: int) -> Cell:
    return grid.get_cell(row, col)


def set_wall(grid: Grid, row: int, col: int, is_wall: bool = True) -> None:
    grid.set_wall(row, col, is_wall)
