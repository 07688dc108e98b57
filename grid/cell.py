from enum import Enum
from typing import NamedTuple, Optional


INFINITY = float("inf")


# ---------------------------------------------------------------------------
# Coordinate — value-typed (row, col) pair
# ---------------------------------------------------------------------------
class Coordinate(NamedTuple):
    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> "Coordinate":
        return Coordinate(self.row + d_row, self.col + d_col)

    def __repr__(self) -> str:
        return f"({self.row}, {self.col})"


def as_coordinate(value) -> Coordinate:
    """Accept a Coordinate, a Cell, or any (row, col) pair."""
    if isinstance(value, Coordinate):
        return value
    if isinstance(value, Cell):
        return value.coord
    row, col = value
    return Coordinate(int(row), int(col))


# ---------------------------------------------------------------------------
# Cell State Enum — what a renderer should paint
# ---------------------------------------------------------------------------
class CellState(Enum):
    EMPTY   = "empty"     # open floor
    WALL    = "wall"      # impassable
    VISITED = "visited"   # settled by the current run
    PATH    = "path"      # on the reconstructed path


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Immutable identity (row, col), mutable wall flag and per-run state.

    Attributes:
        row, col              : Grid position. Read-only.
        is_wall               : Impassable when True.
        is_visited            : Settled by the current run.
        is_path               : On the current run's reconstructed path.
        distance              : Dijkstra distance from start.
        g_score, f_score      : A* / JPS scores.
        previous_node         : Coordinate of the forward predecessor.
        previous_node_reverse : Coordinate of the backward predecessor
                                (bidirectional search only).
        weight                : Step cost. Always 1.
    """

    __slots__ = (
        "_row", "_col", "is_wall",
        "is_visited", "is_path",
        "distance", "g_score", "f_score",
        "previous_node", "previous_node_reverse",
        "weight",
    )

    def __init__(self, row: int, col: int, is_wall: bool = False):
        self._row: int      = row
        self._col: int      = col
        self.is_wall: bool  = is_wall
        self.weight: int    = 1
        self.reset_run_state()

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def coord(self) -> Coordinate:
        return Coordinate(self._row, self._col)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def reset_run_state(self) -> None:
        """Wipe everything a run writes; keep the wall flag."""
        self.is_visited: bool                          = False
        self.is_path: bool                             = False
        self.distance: float                           = INFINITY
        self.g_score: float                            = INFINITY
        self.f_score: float                            = INFINITY
        self.previous_node: Optional[Coordinate]         = None
        self.previous_node_reverse: Optional[Coordinate] = None

    def copy_run_state_from(self, other: "Cell") -> None:
        self.is_visited            = other.is_visited
        self.is_path               = other.is_path
        self.distance              = other.distance
        self.g_score               = other.g_score
        self.f_score               = other.f_score
        self.previous_node         = other.previous_node
        self.previous_node_reverse = other.previous_node_reverse

    def copy(self) -> "Cell":
        twin = Cell(self._row, self._col, is_wall=self.is_wall)
        twin.copy_run_state_from(self)
        return twin

    @property
    def state(self) -> CellState:
        if self.is_wall:
            return CellState.WALL
        if self.is_path:
            return CellState.PATH
        if self.is_visited:
            return CellState.VISITED
        return CellState.EMPTY

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell(row={self._row}, col={self._col}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Cell)
            and self._row == other._row
            and self._col == other._col
        )

    def __hash__(self) -> int:
        return hash((self._row, self._col))
