"""
pestrisk/economy/grids.py

Candidate input levels for the grid search.

The lower endpoint is always excluded: the risk term b * x^beta is singular at
x = 0 whenever beta < 0.
"""

from dataclasses import dataclass

import numpy as np

from pestrisk._defaults import DEFAULT_GRID_TYPE, DEFAULT_N_GRID, DEFAULT_X_MAX
from pestrisk.errors import InvalidArgument

VALID_GRID_TYPES = ("linear", "power")


@dataclass(frozen=True, eq=False)
class InputGrid:
    """
    Immutable, strictly increasing grid of positive input levels.

    Attributes:
        points: 1D array of input levels, shape (n_grid,)
    """
    points: np.ndarray

    def __post_init__(self):
        points = np.array(self.points, dtype=np.float64).reshape(-1)

        if points.size == 0:
            raise InvalidArgument("InputGrid needs at least one point")
        if not np.all(np.isfinite(points)):
            raise InvalidArgument("Input grid entries must be finite")
        if np.any(points <= 0):
            raise InvalidArgument(f"Input grid entries must be > 0. Got min {points.min()}")
        if np.any(np.diff(points) <= 0):
            raise InvalidArgument("Input grid must be strictly increasing")

        points.setflags(write=False)
        object.__setattr__(self, "points", points)

    @property
    def size(self) -> int:
        return int(self.points.size)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, idx):
        return self.points[idx]


def generate_input_grid(
    x_max: float = DEFAULT_X_MAX,
    n_points: int = DEFAULT_N_GRID,
    grid_type: str = DEFAULT_GRID_TYPE,
    x_min: float = 0.0
) -> InputGrid:
    """
    Generate the input grid on (x_min, x_max].

    The lower end x_min is excluded. With the default x_min = 0 the linear
    grid is x_max * k / n_points, k = 1..n_points. A positive x_min drops
    tiny inputs that are never optimal but can push tail profits below zero,
    where CRRA utility is undefined.

    Args:
        x_max: Largest input level considered
        n_points: Number of grid points (Ns)
        grid_type: "linear" (uniform steps of (x_max - x_min) / n_points) or
            "power" (quadratic spacing, denser near x_min)
        x_min: Lower bound of the grid, 0 <= x_min < x_max

    Returns:
        InputGrid
    """
    if not x_max > 0:
        raise InvalidArgument(f"x_max must be > 0. Got {x_max}")
    if not 0 <= x_min < x_max:
        raise InvalidArgument(f"x_min must satisfy 0 <= x_min < x_max. Got x_min={x_min}, x_max={x_max}")
    if n_points < 1:
        raise InvalidArgument(f"n_points must be >= 1. Got {n_points}")

    steps = np.arange(1, n_points + 1) / n_points
    width = x_max - x_min

    if grid_type == "linear":
        points = x_min + width * steps
    elif grid_type == "power":
        points = x_min + width * steps ** 2
    else:
        raise InvalidArgument(f"Unknown grid_type: {grid_type}. Valid options: {VALID_GRID_TYPES}")

    return InputGrid(points=points)
