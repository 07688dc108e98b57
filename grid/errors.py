"""
errors.py — Engine Error Taxonomy
=================================
Every failure the engine reports is a precondition failure detected at
call entry.  Running out of frontier (no path) is NOT an error; it is a
normal terminal outcome and never shows up here.

Each class also inherits the closest builtin so callers that only know
about IndexError / ValueError / RuntimeError still catch them.
"""

from typing import Optional, Tuple


class PathfinderError(Exception):
    """Base class for everything the engine raises on purpose."""


class OutOfBounds(PathfinderError, IndexError):
    def __init__(self, row: int, col: int, rows: int, cols: int):
        self.row  = row
        self.col  = col
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"({row}, {col}) is outside the {rows}x{cols} grid"
        )


class InvalidEndpoint(PathfinderError, ValueError):
    def __init__(self, role: str, coord: Tuple[int, int]):
        self.role  = role
        self.coord = coord
        super().__init__(f"{role} cell {tuple(coord)} is a wall")


class AlreadyRunning(PathfinderError, RuntimeError):
    def __init__(self, active_run_id: Optional[str] = None):
        self.active_run_id = active_run_id
        super().__init__(
            f"run {active_run_id!r} is still in flight; wait for it to finish"
        )


class UnknownAlgorithm(PathfinderError, KeyError):
    def __init__(self, key: str, known: Tuple[str, ...] = ()):
        self.key   = key
        self.known = known
        super().__init__(f"unknown id {key!r} (expected one of: {', '.join(known)})")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]
