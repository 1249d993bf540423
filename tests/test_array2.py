import numpy as np
import pytest

from nurbsobj.array2 import Array2


def test_resize_and_extents():
    grid = Array2(item_size=3)
    assert (grid.rows(), grid.cols()) == (0, 0)
    grid.resize(2, 3)
    assert (grid.rows(), grid.cols()) == (2, 3)
    assert len(grid) == 6
    np.testing.assert_array_equal(grid[1, 2], [0.0, 0.0, 0.0])


def test_scalar_grid_fill_and_access():
    grid = Array2(2, 2, fill=1.0)
    assert grid[0, 1] == 1.0
    grid[0, 1] = 0.5
    assert grid[0, 1] == 0.5
    assert isinstance(grid[0, 1], float)


def test_vector_cells_are_copies():
    grid = Array2(1, 1, item_size=2)
    grid[0, 0] = [1.0, 2.0]
    cell = grid[0, 0]
    cell[0] = 99.0
    np.testing.assert_array_equal(grid[0, 0], [1.0, 2.0])


def test_out_of_range_access():
    grid = Array2(2, 3)
    with pytest.raises(IndexError):
        grid[2, 0]
    with pytest.raises(IndexError):
        grid[0, -1]
    with pytest.raises(TypeError):
        grid[0]


def test_iteration_order_is_column_major():
    grid = Array2(2, 2)
    grid[0, 0], grid[1, 0], grid[0, 1], grid[1, 1] = 1.0, 2.0, 3.0, 4.0
    assert list(grid) == [1.0, 2.0, 3.0, 4.0]


def test_from_array_and_equality():
    data = np.arange(12, dtype=float).reshape(2, 2, 3)
    grid = Array2.from_array(data)
    assert grid.item_size == 3
    assert grid == grid.copy()
    assert grid != Array2(2, 2, item_size=3)
    with pytest.raises(ValueError):
        Array2.from_array([1.0, 2.0])
