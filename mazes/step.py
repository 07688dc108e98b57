"""
step.py — Maze Carving Snapshot
===============================
Maze generators are generators too.  Each yield is a CarveStep: the
coordinates whose wall flag changed since the previous yield, plus a
running wall count so a renderer (or a test) can follow along without
diffing the whole grid.

The grid itself is mutated in place; CarveStep only describes the delta.
CarveBuilder is the single place a generator writes wall flags through,
which keeps the delta lists and the wall count honest.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from grid import Coordinate, Grid


@dataclass(frozen=True)
class CarveStep:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        carved          : Coordinates opened since the previous step.
        walled          : Coordinates closed since the previous step.
        current         : The lattice cell the generator is working on, if any.
        explanation     : Human-readable note for learning mode.
        is_final        : True on the last step (endpoints already cleared).
        walls_remaining : Wall count of the grid after this step.
    """

    step_number:     int                    = 0
    carved:          Tuple[Coordinate, ...] = ()
    walled:          Tuple[Coordinate, ...] = ()
    current:         Optional[Coordinate]   = None
    explanation:     str                    = ""
    is_final:        bool                   = False
    walls_remaining: int                    = 0


class CarveBuilder:
    """
    Wall writer + step factory for one generator run.

        sb = CarveBuilder(grid)
        sb.fill(True)
        yield sb.build(explanation="Start from solid rock.")
        sb.open(cell); sb.open(wall_between)
        yield sb.build(current=cell)
    """

    def __init__(self, grid: Grid):
        self.grid        = grid
        self.step_number = 0
        self.walls       = grid.wall_count()
        self._carved: List[Coordinate] = []
        self._walled: List[Coordinate] = []

    # -- writes --
    def open(self, coord: Coordinate) -> bool:
        """Clear a wall.  Returns True when the cell actually changed."""
        if not self.grid.is_wall(coord.row, coord.col):
            return False
        self.grid.set_wall(coord.row, coord.col, False)
        self._carved.append(coord)
        self.walls -= 1
        return True

    def close(self, coord: Coordinate) -> bool:
        if self.grid.get_cell(coord.row, coord.col).is_wall:
            return False
        self.grid.set_wall(coord.row, coord.col, True)
        self._walled.append(coord)
        self.walls += 1
        return True

    def set(self, coord: Coordinate, is_wall: bool) -> bool:
        return self.close(coord) if is_wall else self.open(coord)

    def fill(self, is_wall: bool) -> None:
        """Set every cell at once (the delta lists record what changed)."""
        for cell in self.grid.cells():
            if cell.is_wall != is_wall:
                (self._walled if is_wall else self._carved).append(cell.coord)
        self.grid.fill_walls(is_wall)
        self.walls = self.grid.rows * self.grid.cols if is_wall else 0

    def note_carved(self, coords: Iterable[Coordinate]) -> None:
        """Account for cells that were opened directly on the grid."""
        for coord in coords:
            self._carved.append(coord)
            self.walls -= 1

    # -- snapshots --
    def build(
        self,
        current: Optional[Coordinate] = None,
        explanation: str = "",
        is_final: bool = False,
    ) -> CarveStep:
        step = CarveStep(
            step_number=self.step_number,
            carved=tuple(self._carved),
            walled=tuple(self._walled),
            current=current,
            explanation=explanation,
            is_final=is_final,
            walls_remaining=self.walls,
        )
        self.step_number += 1
        self._carved = []
        self._walled = []
        return step
