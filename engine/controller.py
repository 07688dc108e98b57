"""
controller.py — Run Controller
==============================
Dispatches one search or maze run at a time and hands the caller an
iterator of its steps.

Pull API (the caller paces everything):
    run = controller.start_search("astar", grid, start, end)
    for step in run: ...
    grid.merge_run_state(run.grid)          # publish when ready

    run = controller.start_maze("kruskals", grid, start, end, seed=7)
    for carve in run: ...

Push API (sinks called synchronously, returns when the run is over):
    outcome = controller.run_search("bfs", grid, start, end, on_visit, on_path)
    outcome = controller.run_maze_generator("prims", grid, start, end, on_grid_snapshot)

Rules:
  - Everything that can be wrong with a request (unknown id, endpoint
    out of bounds or on a wall, another run in flight) raises at call
    entry, before any state changes.
  - Searches run on a private copy of the grid.  Maze runs carve the
    grid they were given.
  - The active slot is claimed under a lock and freed when the run
    yields its final step, is closed, raises, or is garbage collected.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable, Iterator, List, Optional

from grid import AlreadyRunning, Cell, Coordinate, Grid, PathfinderError, UnknownAlgorithm
from algorithms import REGISTRY as SEARCHES, AlgoInfo, Step, StepKind, get_algorithm
from algorithms.common import validate_endpoints
from mazes import REGISTRY as GENERATORS, CarveStep, MazeInfo, get_generator
from engine.config import DEFAULT_CONFIG, EngineConfig
from engine.recorder import Recorder


log = logging.getLogger(__name__)

SEED_BITS = 32


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------
@dataclass
class SearchOutcome:
    found:         bool              = False
    nodes_visited: int               = 0
    path_length:   int               = 0     # moves, i.e. len(path) - 1
    path:          List[Coordinate]  = field(default_factory=list)
    grid:          Optional[Grid]    = None  # the run's working copy


@dataclass
class MazeOutcome:
    steps: int           = 0
    walls: int           = 0
    seed:  Optional[int] = None


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------
class Run:
    """
    Iterator over one run's steps that owns the controller's active slot.

    Attributes:
        run_id     : Identifier reported by AlreadyRunning while this run is active.
        grid       : The grid this run writes to.
        steps_seen : Steps handed out so far.
        finished   : True once the final step has been yielded.
    """

    def __init__(self, controller: "RunController", run_id: str, grid: Grid, steps: Iterator[Any]):
        self.run_id     = run_id
        self.grid       = grid
        self.steps_seen = 0
        self.finished   = False
        self._controller = controller
        self._steps      = steps
        self._open       = True

    def __iter__(self) -> "Run":
        return self

    def __next__(self):
        if not self._open:
            raise StopIteration
        try:
            step = next(self._steps)
        except StopIteration:
            self._finish()
            raise
        except Exception:
            log.error("run %s raised after %d step(s)", self.run_id, self.steps_seen)
            self._abort()
            raise
        self.steps_seen += 1
        self._observe(step)
        if step.is_final:
            self._finish()
        return step

    def close(self) -> None:
        """Stop early.  Safe to call on a finished run."""
        if self._open:
            log.warning("run %s abandoned after %d step(s)", self.run_id, self.steps_seen)
            self._abort()

    @property
    def is_open(self) -> bool:
        return self._open

    def __del__(self):
        if getattr(self, "_open", False):
            self.close()

    # -- hooks --
    def _observe(self, step) -> None:
        pass

    def _completed(self) -> None:
        pass

    def _abandoned(self) -> None:
        pass

    # -- internal --
    def _finish(self) -> None:
        if not self._open:
            return
        self._open    = False
        self.finished = True
        self._completed()
        self._controller._release(self.run_id)

    def _abort(self) -> None:
        self._open = False
        self._steps.close()
        self._abandoned()
        self._controller._release(self.run_id)


class SearchRun(Run):
    """A search over a private working copy (`grid`) of the caller's board."""

    def __init__(self, controller, run_id, info: AlgoInfo, grid, start, end, recorder: Recorder):
        super().__init__(controller, run_id, grid, info.fn(grid, start, end))
        self.info      = info
        self._recorder = recorder
        self._found    = False
        self._visited  = 0
        self._path: List[Coordinate] = []
        recorder.start_run(info.key, info.label)

    def _observe(self, step: Step) -> None:
        self._recorder.record_step()
        if step.kind is StepKind.VISIT:
            self._visited += 1
            self._recorder.record_visit()
        elif step.kind is StepKind.PATH:
            self._found = True
            self._path  = list(step.path)
            self._recorder.set_path_length(step.path_length)

    def _completed(self) -> None:
        self._recorder.end_run(found=self._found)
        log.info(
            "search %s finished: found=%s visited=%d path_length=%d",
            self.run_id, self._found, self._visited, self.outcome.path_length,
        )

    def _abandoned(self) -> None:
        self._recorder.discard_run()

    @property
    def outcome(self) -> SearchOutcome:
        return SearchOutcome(
            found=self._found,
            nodes_visited=self._visited,
            path_length=max(len(self._path) - 1, 0),
            path=list(self._path),
            grid=self.grid,
        )


class MazeRun(Run):
    """A generator carving the caller's grid in place."""

    def __init__(self, controller, run_id, info: MazeInfo, grid, start, end, seed: int, tunables):
        rng = random.Random(seed)
        super().__init__(controller, run_id, grid, info.fn(grid, start, end, rng, **tunables))
        self.info  = info
        self.seed  = seed
        self._walls = grid.wall_count()

    def _observe(self, step: CarveStep) -> None:
        self._walls = step.walls_remaining

    def _completed(self) -> None:
        log.info("maze %s finished: %d step(s), %d wall(s), seed=%d",
                 self.run_id, self.steps_seen, self._walls, self.seed)

    @property
    def outcome(self) -> MazeOutcome:
        return MazeOutcome(steps=self.steps_seen, walls=self._walls, seed=self.seed)


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class RunController:
    """
    Attributes:
        config   : EngineConfig supplying seeds and maze tunables.
        recorder : Receives the metrics of every search run.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG, recorder: Optional[Recorder] = None):
        self.config   = config
        self.recorder = recorder if recorder is not None else Recorder()
        self._lock    = threading.RLock()
        self._active: Optional[str] = None
        self._ids     = count(1)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self._active is not None

    @property
    def active_run_id(self) -> Optional[str]:
        return self._active

    # ------------------------------------------------------------------
    # Pull API
    # ------------------------------------------------------------------
    def start_search(self, algorithm_id: str, grid: Grid, start, end) -> SearchRun:
        info = get_algorithm(algorithm_id)
        if info is None:
            log.debug("rejected search: unknown algorithm %r", algorithm_id)
            raise UnknownAlgorithm(algorithm_id, tuple(SEARCHES))
        start, end = self._validate(grid, start, end, algorithm_id)

        run_id = self._claim(f"search:{info.key}")
        log.info("search %s started on %dx%d grid, %s → %s", run_id, grid.rows, grid.cols, start, end)
        return SearchRun(self, run_id, info, grid.copy(), start, end, self.recorder)

    def start_maze(self, generator_id: str, grid: Grid, start, end, seed: Optional[int] = None) -> MazeRun:
        info = get_generator(generator_id)
        if info is None:
            log.debug("rejected maze: unknown generator %r", generator_id)
            raise UnknownAlgorithm(generator_id, tuple(GENERATORS))
        start, end = self._validate(grid, start, end, generator_id)

        if seed is None:
            seed = self.config.seed
        if seed is None:
            seed = random.getrandbits(SEED_BITS)
        tunables = {name: getattr(self.config, name) for name in info.tunables}

        run_id = self._claim(f"maze:{info.key}")
        grid.reset_run_state()
        log.info("maze %s started on %dx%d grid with seed %d", run_id, grid.rows, grid.cols, seed)
        return MazeRun(self, run_id, info, grid, start, end, seed, tunables)

    # ------------------------------------------------------------------
    # Push API
    # ------------------------------------------------------------------
    def run_search(
        self,
        algorithm_id: str,
        grid: Grid,
        start,
        end,
        on_visit: Optional[Callable[[Cell], None]] = None,
        on_path: Optional[Callable[[List[Cell]], None]] = None,
    ) -> SearchOutcome:
        """
        Run a search to completion.  `on_visit(cell)` fires once per settled
        cell in order; `on_path(cells)` fires once, only when a path exists.
        Cells belong to the run's working copy, returned as outcome.grid.
        """
        run = self.start_search(algorithm_id, grid, start, end)
        try:
            for step in run:
                if step.kind is StepKind.VISIT:
                    if on_visit is not None:
                        on_visit(run.grid.cell_at(step.current))
                elif step.kind is StepKind.PATH:
                    if on_path is not None:
                        on_path([run.grid.cell_at(c) for c in step.path])
        finally:
            run.close()
        return run.outcome

    def run_maze_generator(
        self,
        generator_id: str,
        grid: Grid,
        start,
        end,
        on_grid_snapshot: Optional[Callable[[Grid], None]] = None,
        seed: Optional[int] = None,
    ) -> MazeOutcome:
        """Carve `grid` to completion; `on_grid_snapshot(grid)` fires after each step."""
        run = self.start_maze(generator_id, grid, start, end, seed=seed)
        try:
            for _ in run:
                if on_grid_snapshot is not None:
                    on_grid_snapshot(grid)
        finally:
            run.close()
        return run.outcome

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _validate(self, grid: Grid, start, end, key: str):
        try:
            return validate_endpoints(grid, start, end)
        except PathfinderError as exc:
            log.debug("rejected %s: %s", key, exc)
            raise

    def _claim(self, label: str) -> str:
        with self._lock:
            if self._active is not None:
                log.debug("rejected %s: run %s is active", label, self._active)
                raise AlreadyRunning(self._active)
            run_id = f"{label}#{next(self._ids)}"
            self._active = run_id
        return run_id

    def _release(self, run_id: str) -> None:
        with self._lock:
            if self._active == run_id:
                self._active = None
