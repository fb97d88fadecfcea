import pytest
import numpy as np

from pestrisk.economy.grids import InputGrid, generate_input_grid
from pestrisk.errors import InvalidArgument


def test_linear_grid_excludes_zero():
    grid = generate_input_grid(x_max=600.0, n_points=600)

    assert grid.size == 600
    assert grid[0] == pytest.approx(1.0)
    assert grid[-1] == pytest.approx(600.0)
    np.testing.assert_allclose(np.diff(grid.points), 1.0)


def test_power_grid_is_denser_near_zero():
    grid = generate_input_grid(x_max=100.0, n_points=10, grid_type="power")
    steps = np.diff(grid.points)

    assert grid[0] > 0
    assert grid[-1] == pytest.approx(100.0)
    assert np.all(np.diff(steps) > 0)


@pytest.mark.parametrize("points", [[0.0, 1.0, 2.0], [-1.0, 2.0], [1.0, 1.0, 2.0], [3.0, 2.0], []])
def test_invalid_grid_points_rejected(points):
    with pytest.raises(InvalidArgument):
        InputGrid(points=points)


def test_invalid_generator_arguments():
    with pytest.raises(InvalidArgument, match="x_max"):
        generate_input_grid(x_max=0.0, n_points=10)

    with pytest.raises(InvalidArgument, match="grid_type"):
        generate_input_grid(x_max=10.0, n_points=10, grid_type="delta_rule")


def test_grid_is_immutable():
    grid = generate_input_grid(10.0, 10)
    with pytest.raises(ValueError):
        grid.points[0] = 0.5


def test_lower_bound_is_excluded():
    grid = generate_input_grid(x_max=600.0, n_points=580, x_min=20.0)

    assert grid.size == 580
    assert grid[0] == pytest.approx(21.0)
    assert grid[-1] == pytest.approx(600.0)
    np.testing.assert_allclose(np.diff(grid.points), 1.0)


def test_power_grid_with_lower_bound():
    grid = generate_input_grid(x_max=100.0, n_points=10, grid_type="power", x_min=10.0)

    assert grid[0] == pytest.approx(10.0 + 90.0 * 0.01)
    assert grid[-1] == pytest.approx(100.0)


@pytest.mark.parametrize("x_min", [-1.0, 600.0, 700.0])
def test_invalid_lower_bound(x_min):
    with pytest.raises(InvalidArgument, match="x_min"):
        generate_input_grid(x_max=600.0, n_points=10, x_min=x_min)
