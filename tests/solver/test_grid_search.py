import pytest
import numpy as np

from pestrisk.errors import DomainError, EmptyInput
from pestrisk.solver.grid_search import argmax


def test_ties_broken_by_first_occurrence():
    assert argmax([1, 5, 3, 5, 0]) == (1, 5.0)


def test_argmax_on_array():
    curve = np.array([-3.0, -1.0, -2.0])
    idx, value = argmax(curve)

    assert idx == 1
    assert value == -1.0
    assert isinstance(idx, int)


def test_single_point_curve():
    assert argmax([42.0]) == (0, 42.0)


def test_empty_curve_rejected():
    with pytest.raises(EmptyInput):
        argmax([])


def test_nan_curve_rejected():
    with pytest.raises(DomainError, match="NaN"):
        argmax([1.0, float("nan"), 2.0])
