import pytest
import numpy as np

from pestrisk.economy.grids import generate_input_grid
from pestrisk.economy.logic import expected_profit_curve
from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.economy.shocks import discretize_shock
from pestrisk.errors import DomainError, InvalidArgument
from pestrisk.preferences.crra import crra_utility, expected_utility_curve
from pestrisk.preferences.types import CRRAPreference


@pytest.fixture
def setup():
    grid = generate_input_grid(x_max=600.0, n_points=60)
    dist = discretize_shock(100)
    return grid, dist, ProductionParams(), ProfitParams(w0=1500.0)


def test_utility_closed_forms():
    assert crra_utility(100.0, 0.0) == pytest.approx(100.0)
    assert crra_utility(100.0, 1.0) == pytest.approx(np.log(100.0))
    assert crra_utility(100.0, 2.0) == pytest.approx(-0.01)
    assert crra_utility(100.0, 0.5) == pytest.approx(20.0)


def test_utility_is_increasing_and_concave():
    pi = np.linspace(100.0, 1000.0, 50)
    for r in (0.5, 1.0, 2.0, 4.0):
        u = crra_utility(pi, r)
        assert np.all(np.diff(u) > 0)
        assert np.all(np.diff(u, n=2) < 0)


def test_risk_neutral_accepts_negative_profit():
    np.testing.assert_allclose(crra_utility(np.array([-5.0, 0.0, 5.0]), 0.0), [-5.0, 0.0, 5.0])


@pytest.mark.parametrize("r", [0.5, 1.0, 2.0])
def test_non_positive_profit_fails_fast(r):
    with pytest.raises(DomainError, match="non-positive profit"):
        crra_utility(np.array([10.0, 0.0, 20.0]), r)


def test_risk_neutral_curve_equals_expected_profit(setup):
    grid, dist, production, prices = setup

    eu = expected_utility_curve(grid, dist, production, prices, r=0.0)
    ep = expected_profit_curve(grid, dist, production, prices)

    np.testing.assert_array_equal(eu, ep)


def test_risk_averse_curve_below_utility_of_mean(setup):
    """Jensen: E[U(pi)] <= U(E[pi]) pointwise for concave U."""
    grid, dist, production, prices = setup
    ep = expected_profit_curve(grid, dist, production, prices)

    for r in (1.0, 2.0, 4.0):
        eu = expected_utility_curve(grid, dist, production, prices, r=r)
        assert np.all(eu <= crra_utility(ep, r))


def test_preference_validation():
    assert CRRAPreference().is_risk_neutral
    assert not CRRAPreference(r=2.0).is_risk_neutral

    with pytest.raises(InvalidArgument, match="r must be"):
        CRRAPreference(r=-1.0)
