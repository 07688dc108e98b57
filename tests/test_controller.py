import gc
import logging
import threading

import pytest

from algorithms import StepKind
from engine import EngineConfig, RunController
from grid import AlreadyRunning, Coordinate, Grid, InvalidEndpoint, OutOfBounds, UnknownAlgorithm
from tests.helpers import reachable_from


# ---------------------------------------------------------------------------
# Push API: searches
# ---------------------------------------------------------------------------
def test_run_search_calls_sinks(controller, open_5x5):
    visited, paths = [], []
    outcome = controller.run_search("bfs", open_5x5, (0, 0), (4, 4), visited.append, paths.append)

    assert outcome.found
    assert outcome.path_length == 8
    assert outcome.nodes_visited == len(visited)
    assert len(paths) == 1
    assert [c.coord for c in paths[0]] == outcome.path
    assert all(cell.is_visited for cell in visited)
    assert not controller.is_running


def test_run_search_leaves_callers_grid_alone_until_published(controller, open_5x5):
    outcome = controller.run_search("astar", open_5x5, (0, 0), (4, 4))
    assert not any(cell.is_visited for cell in open_5x5.cells())

    open_5x5.merge_run_state(outcome.grid)
    assert all(open_5x5.cell_at(c).is_path for c in outcome.path)
    assert open_5x5.get_cell(4, 4).previous_node is not None


def test_no_path_never_calls_on_path(controller, walled_off):
    paths = []
    outcome = controller.run_search("dijkstra", walled_off, (0, 0), (0, 4), on_path=paths.append)
    assert not outcome.found
    assert outcome.path == [] and outcome.path_length == 0
    assert paths == []


def test_start_equals_end_through_controller(controller, open_5x5):
    outcome = controller.run_search("jps", open_5x5, (3, 3), (3, 3))
    assert outcome.found
    assert outcome.path == [(3, 3)]
    assert outcome.nodes_visited >= 1


def test_each_id_dispatches_to_its_own_algorithm(controller):
    grid = Grid(7, 7)
    seen = {}
    for key in ("astar", "dijkstra", "bfs", "dfs", "greedy", "bidirectional", "jps"):
        seen[key] = controller.run_search(key, grid, (0, 0), (6, 6)).nodes_visited
    # JPS expands jump points only; BFS floods the board
    assert seen["jps"] < seen["bfs"]
    assert seen["bfs"] == 49


# ---------------------------------------------------------------------------
# Validation happens at call entry
# ---------------------------------------------------------------------------
def test_unknown_id(controller, open_5x5):
    with pytest.raises(UnknownAlgorithm):
        controller.run_search("bogus", open_5x5, (0, 0), (1, 1))
    with pytest.raises(UnknownAlgorithm):
        controller.start_maze("bogus", open_5x5, (0, 0), (1, 1))
    assert not controller.is_running


def test_bad_endpoints(controller):
    grid = Grid.from_rows(["..#"])
    with pytest.raises(InvalidEndpoint):
        controller.start_search("bfs", grid, (0, 0), (0, 2))
    with pytest.raises(OutOfBounds):
        controller.start_search("bfs", grid, (0, 0), (5, 5))
    with pytest.raises(InvalidEndpoint):
        controller.start_maze("recursive", grid, (0, 2), (0, 0))
    assert not controller.is_running
    assert grid.to_rows() == ["..#"]


# ---------------------------------------------------------------------------
# Single-run enforcement
# ---------------------------------------------------------------------------
def test_second_run_rejected_while_first_in_flight(controller, open_5x5):
    run = controller.start_search("bfs", open_5x5, (0, 0), (4, 4))
    first = next(run)
    assert controller.is_running
    assert controller.active_run_id == run.run_id

    with pytest.raises(AlreadyRunning) as info:
        controller.start_search("dfs", open_5x5, (0, 0), (4, 4))
    assert info.value.active_run_id == run.run_id
    with pytest.raises(AlreadyRunning):
        controller.run_maze_generator("kruskals", Grid(9, 9), (1, 1), (7, 7))

    # the active run carries on untouched
    rest = list(run)
    assert first.kind is StepKind.VISIT
    assert rest[-1].kind is StepKind.PATH
    assert not controller.is_running
    assert run.outcome.path_length == 8


def test_slot_released_on_final_step(controller, open_5x5):
    run = controller.start_search("bfs", open_5x5, (0, 0), (0, 1))
    steps = []
    for step in run:
        steps.append(step)
        if step.is_final:
            break
    assert run.finished
    assert not controller.is_running


def test_close_releases_and_warns(controller, open_5x5, caplog):
    run = controller.start_search("bfs", open_5x5, (0, 0), (4, 4))
    next(run)
    with caplog.at_level(logging.WARNING, logger="engine.controller"):
        run.close()
    assert not controller.is_running
    assert "abandoned" in caplog.text
    assert list(run) == []
    assert controller.recorder.get_metrics("bfs") is None


def test_dropping_a_run_releases_the_slot(controller, open_5x5):
    run = controller.start_search("bfs", open_5x5, (0, 0), (4, 4))
    next(run)
    del run
    gc.collect()
    assert not controller.is_running
    controller.start_search("dfs", open_5x5, (0, 0), (4, 4)).close()


def test_run_dropped_while_the_slot_lock_is_held(controller, open_5x5):
    run = controller.start_search("bfs", open_5x5, (0, 0), (4, 4))
    next(run)
    with controller._lock:
        del run
        gc.collect()
    assert not controller.is_running


def test_sink_error_propagates_and_frees_the_slot(controller, open_5x5):
    def explode(cell):
        raise RuntimeError("renderer crashed")

    with pytest.raises(RuntimeError, match="renderer crashed"):
        controller.run_search("bfs", open_5x5, (0, 0), (4, 4), on_visit=explode)
    assert not controller.is_running


def test_concurrent_claims_admit_exactly_one(open_5x5):
    controller = RunController()
    barrier = threading.Barrier(8)
    runs, rejected = [], []
    lock = threading.Lock()

    def attempt():
        barrier.wait()
        try:
            run = controller.start_search("bfs", open_5x5, (0, 0), (4, 4))
        except AlreadyRunning:
            with lock:
                rejected.append(1)
        else:
            with lock:
                runs.append(run)

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(runs) == 1
    assert len(rejected) == 7
    runs[0].close()
    assert not controller.is_running


# ---------------------------------------------------------------------------
# Mazes
# ---------------------------------------------------------------------------
def test_run_maze_generator_snapshots_live_grid(controller):
    grid = Grid(11, 21)
    snapshots = []
    outcome = controller.run_maze_generator("recursive", grid, (1, 1), (9, 19), snapshots.append)

    assert outcome.steps == len(snapshots) > 0
    assert all(s is grid for s in snapshots)
    assert outcome.walls == grid.wall_count()
    assert outcome.seed == 1234
    assert Coordinate(9, 19) in reachable_from(grid, (1, 1))
    assert not controller.is_running


def test_maze_seed_reproducible(controller):
    a, b = Grid(11, 21), Grid(11, 21)
    controller.run_maze_generator("prims", a, (1, 1), (9, 19), seed=99)
    controller.run_maze_generator("prims", b, (1, 1), (9, 19), seed=99)
    assert a == b


def test_maze_without_configured_seed_reports_the_one_used():
    controller = RunController(EngineConfig(seed=None))
    a = Grid(11, 21)
    outcome = controller.run_maze_generator("growingtree", a, (1, 1), (9, 19))
    assert isinstance(outcome.seed, int)

    b = Grid(11, 21)
    controller.run_maze_generator("growingtree", b, (1, 1), (9, 19), seed=outcome.seed)
    assert a == b


def test_maze_tunables_come_from_config():
    controller = RunController(EngineConfig(wall_probability=1.0, seed=3))
    grid = Grid(6, 6)
    controller.run_maze_generator("random", grid, (0, 0), (5, 5))
    assert grid.wall_count() == 36 - 6


def test_pull_maze_then_search(controller):
    grid = Grid(11, 21)
    for _ in controller.start_maze("kruskals", grid, (1, 1), (9, 19)):
        pass
    outcome = controller.run_search("astar", grid, (1, 1), (9, 19))
    assert outcome.found


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------
def test_every_search_is_recorded(controller, open_5x5):
    bfs_outcome = controller.run_search("bfs", open_5x5, (2, 0), (2, 4))
    controller.run_search("astar", open_5x5, (2, 0), (2, 4))

    bfs = controller.recorder.get_metrics("bfs")
    astar = controller.recorder.get_metrics("astar")
    assert bfs.nodes_visited == bfs_outcome.nodes_visited
    assert bfs.path_length == 4 and bfs.path_found
    assert bfs.total_steps == bfs.nodes_visited + 1
    # only the straight row has f = 4
    assert astar.nodes_visited == 5
    assert astar.nodes_visited < bfs.nodes_visited
    assert [m.algorithm for m in controller.recorder.comparison()] == ["bfs", "astar"]
