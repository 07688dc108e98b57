import pytest

from grid import Grid
from engine import EngineConfig, RunController


@pytest.fixture
def open_5x5():
    return Grid(5, 5)


@pytest.fixture
def split_3x3():
    # wall column at col 1 except row 0
    return Grid.from_rows([
        "...",
        ".#.",
        ".#.",
    ])


@pytest.fixture
def walled_off():
    return Grid.from_rows([
        "..#..",
        "..#..",
        "..#..",
    ])


@pytest.fixture
def controller():
    return RunController(EngineConfig(rows=11, cols=21, start=(1, 1), end=(9, 19), seed=1234))
