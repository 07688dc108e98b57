"""
algorithms/__init__.py — Search Registry
========================================
Single source of truth for every search the engine knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "astar": AlgoInfo(key, label, fn, pseudocode, tags, optimal, …),
        …
    }

Keys are exact selectors.  An unknown key is simply absent; the run
controller turns that into UnknownAlgorithm.  Adding a search means
writing the generator and adding one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.astar         import astar         as _astar,    PSEUDOCODE as _ast_pc
from algorithms.dijkstra      import dijkstra      as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.bfs           import bfs           as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs           import dfs           as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.greedy        import greedy        as _greedy,   PSEUDOCODE as _gr_pc
from algorithms.bidirectional import bidirectional as _bidi,     PSEUDOCODE as _bidi_pc
from algorithms.jps           import jps           as _jps,      PSEUDOCODE as _jps_pc

from algorithms.common import SearchResult, run_to_completion
from algorithms.step   import Step, StepBuilder, StepKind


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    tags:             List[str] = field(default_factory=list)
    optimal:          bool     = False       # shortest path guaranteed?
    has_heuristic:    bool     = False       # uses Manhattan h?
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        tags=["shortest-path", "heuristic"],
        optimal=True, has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Dijkstra + Manhattan guidance. Optimal because h never overestimates.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        tags=["shortest-path"],
        optimal=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Settles the closest cell first. Optimal for non-negative costs.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["shortest-path", "traversal"],
        optimal=True,
        complexity_time="O(V)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds the shortest path by move count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["traversal"],
        complexity_time="O(V)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee the shortest path.",
    ),

    "greedy": AlgoInfo(
        key="greedy", label="Greedy Best-First", fn=_greedy, pseudocode=_gr_pc,
        tags=["heuristic", "suboptimal"],
        has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Pure heuristic. Fast but NOT optimal; compare it with A* on a maze.",
    ),

    "bidirectional": AlgoInfo(
        key="bidirectional", label="Bidirectional BFS", fn=_bidi, pseudocode=_bidi_pc,
        tags=["traversal", "bidirectional"],
        complexity_time="O(b^(d/2))", complexity_space="O(b^(d/2))",
        description="Two BFS frontiers from start and end that meet in the middle.",
    ),

    "jps": AlgoInfo(
        key="jps", label="Jump Point Search", fn=_jps, pseudocode=_jps_pc,
        tags=["shortest-path", "heuristic", "pruning"],
        optimal=True, has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="A* that skips straight runs of open floor and only expands jump points.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "Step",
    "StepBuilder",
    "StepKind",
    "SearchResult",
    "run_to_completion",
]
