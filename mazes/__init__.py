"""
mazes/__init__.py — Maze Generator Registry
===========================================
    from mazes import REGISTRY, get_generator

Every generator has the signature

    fn(grid, start, end, rng=None, **tunables) -> Generator[CarveStep]

`tunables` lists the keyword arguments a generator accepts; the run
controller fills them from EngineConfig by name.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from mazes.recursive   import recursive_backtracking
from mazes.kruskals    import kruskals
from mazes.huntandkill import hunt_and_kill
from mazes.sidewinder  import sidewinder
from mazes.prims       import prims
from mazes.growingtree import growing_tree
from mazes.noise       import random_walls, cellular
from mazes.step        import CarveStep, CarveBuilder


@dataclass
class MazeInfo:
    key:         str
    label:       str
    fn:          Callable
    structured:  bool      = True      # perfect maze on the odd lattice?
    tunables:    List[str] = field(default_factory=list)
    description: str       = ""


REGISTRY: Dict[str, MazeInfo] = {

    "recursive": MazeInfo(
        key="recursive", label="Recursive Backtracking", fn=recursive_backtracking,
        description="Depth-first carve. Long, winding corridors.",
    ),

    "kruskals": MazeInfo(
        key="kruskals", label="Kruskal's", fn=kruskals,
        description="Random walls removed whenever they join two separate regions.",
    ),

    "huntandkill": MazeInfo(
        key="huntandkill", label="Hunt-and-Kill", fn=hunt_and_kill,
        description="Random walk until stuck, then hunt for the next starting point.",
    ),

    "sidewinder": MazeInfo(
        key="sidewinder", label="Sidewinder", fn=sidewinder,
        tunables=["close_probability"],
        description="Row-by-row eastward runs, each closed by one passage north.",
    ),

    "prims": MazeInfo(
        key="prims", label="Prim's", fn=prims,
        description="Grows one tree outward from a seed through a random frontier.",
    ),

    "growingtree": MazeInfo(
        key="growingtree", label="Growing Tree", fn=growing_tree,
        tunables=["newest_bias"],
        description="Mix of backtracker and Prim's: newest or random active cell.",
    ),

    "random": MazeInfo(
        key="random", label="Random Walls", fn=random_walls, structured=False,
        tunables=["wall_probability"],
        description="Independent coin flip per cell. No connectivity guarantee.",
    ),

    "cellular": MazeInfo(
        key="cellular", label="Cellular Automaton", fn=cellular, structured=False,
        tunables=["fill_probability", "generations", "birth_limit"],
        description="Random noise smoothed into caves. No connectivity guarantee.",
    ),
}


def get_generator(key: str) -> Optional[MazeInfo]:
    return REGISTRY.get(key)


def list_generators() -> List[MazeInfo]:
    return list(REGISTRY.values())


__all__ = [
    "MazeInfo",
    "REGISTRY",
    "get_generator",
    "list_generators",
    "CarveStep",
    "CarveBuilder",
]
