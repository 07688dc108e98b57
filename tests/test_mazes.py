import random

import pytest

from grid import Coordinate, Grid, InvalidEndpoint
from mazes import REGISTRY, get_generator, list_generators
from mazes.common import anchor_corridor, between, lattice_cells, lattice_neighbors, nearest_lattice_cell
from mazes.kruskals import DisjointSet
from engine.config import DEFAULT_CONFIG
from tests.helpers import open_cells, reachable_from


STRUCTURED = ["recursive", "kruskals", "huntandkill", "sidewinder", "prims", "growingtree"]
ALL_IDS    = STRUCTURED + ["random", "cellular"]

# (rows, cols, start, end) on odd, even and default-sized boards
BOARDS = [
    (11, 21, (1, 1), (9, 19)),
    (12, 20, (0, 0), (11, 19)),
    (10, 15, (4, 6), (9, 0)),
    (25, 50, (13, 5), (13, 45)),
]


def generate(key, grid, start, end, seed=0, **tunables):
    info = get_generator(key)
    return list(info.fn(grid, Coordinate(*start), Coordinate(*end), random.Random(seed), **tunables))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_ids():
    assert list(REGISTRY) == ALL_IDS
    assert [m.key for m in list_generators() if m.structured] == STRUCTURED
    assert get_generator("binarytree") is None


def test_declared_tunables_are_accepted():
    for info in list_generators():
        tunables = {name: getattr(DEFAULT_CONFIG, name) for name in info.tunables}
        generate(info.key, Grid(7, 9), (1, 1), (5, 7), **tunables)


# ---------------------------------------------------------------------------
# Lattice helpers
# ---------------------------------------------------------------------------
def test_lattice_cells_are_odd_and_interior():
    grid = Grid(6, 8)
    assert lattice_cells(grid) == [(1, 1), (1, 3), (1, 5), (3, 1), (3, 3), (3, 5)]


def test_lattice_neighbors_and_between():
    grid = Grid(7, 7)
    assert lattice_neighbors(grid, Coordinate(1, 1)) == [(3, 1), (1, 3)]
    assert between(Coordinate(3, 1), Coordinate(3, 3)) == (3, 2)


@pytest.mark.parametrize("where,expected", [
    ((0, 0), (1, 1)),
    ((3, 3), (3, 3)),
    ((5, 7), (3, 5)),
    ((2, 4), (3, 5)),
])
def test_nearest_lattice_cell_on_even_board(where, expected):
    assert nearest_lattice_cell(Grid(6, 8), Coordinate(*where)) == expected


def test_anchor_corridor_is_contiguous():
    cells = list(anchor_corridor(Grid(6, 8), Coordinate(5, 7)))
    # rows first along the endpoint's column, then along the target row
    assert cells == [(5, 7), (4, 7), (3, 7), (3, 6), (3, 5)]
    assert cells[0] == (5, 7) and cells[-1] == (3, 5)
    for a, b in zip(cells, cells[1:]):
        assert abs(a.row - b.row) + abs(a.col - b.col) == 1


def test_disjoint_set():
    cells = [Coordinate(1, c) for c in (1, 3, 5)]
    sets = DisjointSet(cells)
    assert sets.union(cells[0], cells[1])
    assert not sets.union(cells[1], cells[0])
    assert sets.find(cells[0]) == sets.find(cells[1]) != sets.find(cells[2])


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("rows,cols,start,end", BOARDS)
@pytest.mark.parametrize("key", ALL_IDS)
def test_endpoints_and_their_neighbours_stay_open(key, rows, cols, start, end):
    grid = Grid(rows, cols)
    generate(key, grid, start, end, seed=rows * cols)
    for r0, c0 in (start, end):
        for d_row, d_col in ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)):
            r, c = r0 + d_row, c0 + d_col
            if grid.in_bounds(r, c):
                assert not grid.is_wall(r, c), f"{key}: wall at {(r, c)}"


@pytest.mark.parametrize("rows,cols,start,end", BOARDS)
@pytest.mark.parametrize("key", STRUCTURED)
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_structured_mazes_are_connected(key, rows, cols, start, end, seed):
    grid = Grid(rows, cols)
    generate(key, grid, start, end, seed=seed)
    reached = reachable_from(grid, start)
    assert Coordinate(*end) in reached
    assert set(reached) == open_cells(grid)
    for cell in lattice_cells(grid):
        assert cell in reached


@pytest.mark.parametrize("key", ALL_IDS)
def test_same_seed_same_steps(key):
    a, b = Grid(15, 25), Grid(15, 25)
    steps_a = generate(key, a, (1, 1), (13, 23), seed=42)
    steps_b = generate(key, b, (1, 1), (13, 23), seed=42)
    assert steps_a == steps_b
    assert a == b


@pytest.mark.parametrize("key", STRUCTURED)
def test_different_seeds_differ(key):
    a, b = Grid(15, 25), Grid(15, 25)
    generate(key, a, (1, 1), (13, 23), seed=1)
    generate(key, b, (1, 1), (13, 23), seed=2)
    assert a != b


@pytest.mark.parametrize("key", ALL_IDS)
def test_step_bookkeeping(key):
    grid = Grid(9, 13)
    info = get_generator(key)
    steps = []
    for step in info.fn(grid, Coordinate(1, 1), Coordinate(7, 11), random.Random(3)):
        assert step.walls_remaining == grid.wall_count()
        steps.append(step)
    assert [s.step_number for s in steps] == list(range(len(steps)))
    assert steps[-1].is_final
    assert not any(s.is_final for s in steps[:-1])


@pytest.mark.parametrize("key", ALL_IDS)
def test_wall_endpoint_rejected_before_carving(key):
    grid = Grid(7, 7)
    grid.set_wall(5, 5)
    with pytest.raises(InvalidEndpoint):
        generate(key, grid, (1, 1), (5, 5))
    assert grid.wall_count() == 1


@pytest.mark.parametrize("key", STRUCTURED)
def test_boards_without_a_lattice_stay_open(key):
    grid = Grid.from_rows(["#..#", "...."])
    steps = generate(key, grid, (0, 1), (1, 3))
    assert grid.wall_count() == 0
    assert len(steps) == 1 and steps[0].is_final


@pytest.mark.parametrize("key", STRUCTURED)
def test_structured_start_from_solid_rock(key):
    grid = Grid(9, 9)
    steps = generate(key, grid, (1, 1), (7, 7))
    assert steps[0].walls_remaining == 81
    assert steps[0].current is None


# ---------------------------------------------------------------------------
# Per-generator behaviour
# ---------------------------------------------------------------------------
def test_kruskals_removes_exactly_a_spanning_tree():
    grid = Grid(11, 11)
    steps = generate("kruskals", grid, (1, 1), (9, 9), seed=8)
    joins = [s for s in steps if s.current is not None]
    assert len(joins) == len(lattice_cells(grid)) - 1


@pytest.mark.parametrize("key", ["recursive", "huntandkill", "prims", "growingtree"])
def test_tree_growers_carve_a_perfect_maze(key):
    grid = Grid(11, 15)
    steps = generate(key, grid, (1, 1), (9, 13), seed=5)
    carved = [c for s in steps[1:-1] for c in s.carved]
    lattice = set(lattice_cells(grid))
    # every lattice cell plus one passage fewer than lattice cells
    assert lattice <= set(carved)
    assert len(carved) == 2 * len(lattice) - 1


def test_sidewinder_top_corridor_is_open():
    grid = Grid(11, 21)
    generate("sidewinder", grid, (5, 5), (9, 19), seed=4)
    assert all(not grid.is_wall(1, c) for c in range(1, 20))


def test_random_walls_probability_extremes():
    grid = Grid(6, 6)
    generate("random", grid, (0, 0), (5, 5), wall_probability=0.0)
    assert grid.wall_count() == 0

    grid = Grid(6, 6)
    generate("random", grid, (0, 0), (5, 5), wall_probability=1.0)
    # everything except the two endpoints and their neighbours
    assert grid.wall_count() == 36 - 6


def test_random_walls_one_step_per_cell():
    grid = Grid(4, 5)
    steps = generate("random", grid, (0, 0), (3, 4))
    assert len(steps) == 20 - 2 + 1


def test_cellular_one_step_per_generation():
    grid = Grid(12, 16)
    steps = generate("cellular", grid, (1, 1), (10, 14), generations=3)
    # seeding + 3 generations + final
    assert len(steps) == 5


def test_cellular_rule_on_a_single_generation():
    grid = Grid(5, 5)
    steps = generate("cellular", grid, (0, 0), (4, 4), fill_probability=1.0, generations=1)
    # fully seeded except the endpoints, so every interior cell has >= 5 wall neighbours
    assert all(grid.is_wall(r, c) for r in range(1, 4) for c in range(1, 4))
    assert steps[-1].is_final
