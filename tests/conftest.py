import pytest

from pipe_maze.core.grid import TileGrid

from pipe_grids import SQUARE, TWO_ROOMS


@pytest.fixture
def square_grid():
    return TileGrid.parse(SQUARE)


@pytest.fixture
def two_rooms_grid():
    return TileGrid.parse(TWO_ROOMS)
