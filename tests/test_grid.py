import pytest

from grid import (
    INFINITY, AlreadyRunning, Cell, CellState, Coordinate, Grid, InvalidEndpoint,
    OutOfBounds, PathfinderError, UnknownAlgorithm, as_coordinate, create_grid,
    get_cell, set_wall,
)


# ---------------------------------------------------------------------------
# Construction & access
# ---------------------------------------------------------------------------
def test_create_grid_initialises_every_cell():
    grid = create_grid(3, 4)
    cells = list(grid.cells())
    assert len(cells) == 12
    for cell in cells:
        assert not cell.is_wall
        assert not cell.is_visited and not cell.is_path
        assert cell.distance == INFINITY
        assert cell.g_score == INFINITY and cell.f_score == INFINITY
        assert cell.previous_node is None and cell.previous_node_reverse is None
        assert cell.weight == 1


@pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, 2)])
def test_non_positive_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        Grid(rows, cols)


def test_get_cell_returns_position():
    grid = Grid(3, 3)
    cell = get_cell(grid, 2, 1)
    assert (cell.row, cell.col) == (2, 1)
    assert cell.coord == Coordinate(2, 1)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 4)])
def test_get_cell_out_of_bounds(row, col):
    grid = Grid(3, 4)
    with pytest.raises(OutOfBounds) as info:
        grid.get_cell(row, col)
    assert (info.value.row, info.value.col) == (row, col)
    assert (info.value.rows, info.value.cols) == (3, 4)


def test_set_wall_in_place_and_bounds():
    grid = Grid(2, 2)
    set_wall(grid, 0, 1, True)
    assert grid.get_cell(0, 1).is_wall
    set_wall(grid, 0, 1, False)
    assert not grid.get_cell(0, 1).is_wall
    with pytest.raises(OutOfBounds):
        set_wall(grid, 2, 0, True)


def test_is_wall_treats_outside_as_wall():
    grid = Grid(2, 2)
    assert grid.is_wall(-1, 0)
    assert grid.is_wall(0, 2)
    assert not grid.is_wall(1, 1)


def test_cell_position_is_read_only():
    cell = Cell(1, 2)
    with pytest.raises(AttributeError):
        cell.row = 5


def test_cell_state():
    cell = Cell(0, 0)
    assert cell.state is CellState.EMPTY
    cell.is_visited = True
    assert cell.state is CellState.VISITED
    cell.is_path = True
    assert cell.state is CellState.PATH
    cell.is_wall = True
    assert cell.state is CellState.WALL


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------
def test_coordinates_compare_by_value():
    assert Coordinate(1, 2) == Coordinate(1, 2)
    assert Coordinate(1, 2) == (1, 2)
    assert len({Coordinate(1, 2), Coordinate(1, 2), (1, 2)}) == 1
    assert Coordinate(1, 2).offset(1, -1) == Coordinate(2, 1)


def test_as_coordinate_accepts_cells_and_pairs():
    assert as_coordinate((3, 4)) == Coordinate(3, 4)
    assert as_coordinate(Cell(3, 4)) == Coordinate(3, 4)
    assert isinstance(as_coordinate([3, 4]), Coordinate)


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------
def test_reset_run_state_keeps_walls():
    grid = Grid(2, 2)
    grid.set_wall(0, 1)
    cell = grid.get_cell(1, 1)
    cell.is_visited = True
    cell.is_path = True
    cell.distance = 3
    cell.previous_node = Coordinate(1, 0)

    grid.reset_run_state()

    assert grid.get_cell(0, 1).is_wall
    assert not cell.is_visited and not cell.is_path
    assert cell.distance == INFINITY
    assert cell.previous_node is None


def test_copy_is_independent():
    grid = Grid(2, 3)
    twin = grid.copy()
    twin.set_wall(0, 0)
    twin.get_cell(1, 1).is_visited = True
    assert not grid.get_cell(0, 0).is_wall
    assert not grid.get_cell(1, 1).is_visited


def test_merge_run_state_publishes_flags_only():
    grid = Grid(2, 2)
    work = grid.copy()
    work.get_cell(0, 1).is_visited = True
    work.get_cell(0, 1).previous_node = Coordinate(0, 0)
    work.set_wall(1, 1)

    grid.merge_run_state(work)

    assert grid.get_cell(0, 1).is_visited
    assert grid.get_cell(0, 1).previous_node == (0, 0)
    assert not grid.get_cell(1, 1).is_wall


def test_merge_run_state_dimension_mismatch():
    with pytest.raises(ValueError):
        Grid(2, 2).merge_run_state(Grid(3, 2))


# ---------------------------------------------------------------------------
# Text round-trip & equality
# ---------------------------------------------------------------------------
def test_from_rows_and_to_rows():
    rows = ["..#", "#..", "..."]
    grid = Grid.from_rows(rows)
    assert (grid.rows, grid.cols) == (3, 3)
    assert grid.to_rows() == rows
    assert grid.walls() == {Coordinate(0, 2), Coordinate(1, 0)}
    assert grid.wall_count() == 2


def test_from_rows_rejects_ragged_input():
    with pytest.raises(ValueError):
        Grid.from_rows(["...", ".."])


def test_grid_equality_is_dimensions_and_walls():
    a = Grid.from_rows([".#", ".."])
    b = Grid.from_rows([".#", ".."])
    b.get_cell(0, 0).is_visited = True
    assert a == b
    assert a != Grid.from_rows(["..", ".."])


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
def test_errors_share_a_base_and_builtin_parents():
    assert issubclass(OutOfBounds, IndexError)
    assert issubclass(InvalidEndpoint, ValueError)
    assert issubclass(AlreadyRunning, RuntimeError)
    assert issubclass(UnknownAlgorithm, KeyError)
    for cls in (OutOfBounds, InvalidEndpoint, AlreadyRunning, UnknownAlgorithm):
        assert issubclass(cls, PathfinderError)


def test_unknown_algorithm_message_is_readable():
    err = UnknownAlgorithm("nope", ("bfs", "dfs"))
    assert str(err) == "unknown id 'nope' (expected one of: bfs, dfs)"
