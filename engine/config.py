"""
config.py — Engine Defaults
===========================
One dataclass holds every knob the engine exposes: board size and
default endpoints, the seed for maze generators, and the tunables of the
probabilistic generators.  The run controller looks tunables up by the
names each generator declares in the maze registry.

    cfg = EngineConfig(rows=15, cols=31, seed=7)
    cfg = DEFAULT_CONFIG.with_overrides(wall_probability=0.2)
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from grid import Coordinate, Grid


@dataclass(frozen=True)
class EngineConfig:
    rows:  int             = 25
    cols:  int             = 50
    start: Tuple[int, int] = (13, 5)
    end:   Tuple[int, int] = (13, 45)

    # None → a fresh seed per maze run (recorded on the outcome)
    seed:  Optional[int]   = None

    # maze tunables
    wall_probability:  float = 0.3     # random
    fill_probability:  float = 0.45    # cellular: initial density
    generations:       int   = 4       # cellular: smoothing rounds
    birth_limit:       int   = 5       # cellular: wall iff ≥ this many wall neighbours
    newest_bias:       float = 0.5     # growing tree: P(pick newest)
    close_probability: float = 0.5     # sidewinder: P(close run)

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"rows and cols must be positive, got {self.rows}x{self.cols}")
        for name in ("wall_probability", "fill_probability", "newest_bias", "close_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.generations < 0:
            raise ValueError(f"generations must be >= 0, got {self.generations}")

    @property
    def start_coord(self) -> Coordinate:
        return Coordinate(*self.start)

    @property
    def end_coord(self) -> Coordinate:
        return Coordinate(*self.end)

    def new_grid(self) -> Grid:
        return Grid(self.rows, self.cols)

    def with_overrides(self, **changes) -> "EngineConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = EngineConfig()
