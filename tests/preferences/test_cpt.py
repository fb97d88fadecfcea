"""
Unit tests for the Cumulative Prospect Theory evaluator.
"""

import pytest
import numpy as np

from pestrisk.economy.grids import generate_input_grid
from pestrisk.economy.logic import profit_matrix
from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.economy.shocks import discretize_shock
from pestrisk.errors import DomainError, InvalidArgument
from pestrisk.preferences.cpt import (
    decision_weights,
    expected_cpt_curve,
    expected_cpt_from_matrix,
    probability_weight,
    value_function,
)
from pestrisk.preferences.types import CPTPreference


# --- Fixtures ---

@pytest.fixture
def prospect():
    """Synthetic 5-point prospect around a reference point of 0."""
    outcomes = np.array([30.0, -20.0, 0.0, -5.0, 50.0])
    probs = np.array([0.2, 0.1, 0.3, 0.25, 0.15])
    return outcomes, probs


# --- 1. Value function ---

def test_value_function_branches():
    assert value_function(16.0, 0.5, 0.5, 2.0) == pytest.approx(4.0)
    assert value_function(-16.0, 0.5, 0.5, 2.0) == pytest.approx(-8.0)
    assert value_function(0.0, 0.88, 0.88, 2.25) == 0.0


def test_value_function_has_no_nan_for_losses():
    z = np.linspace(-100.0, 100.0, 41)
    v = value_function(z, 0.88, 0.7, 2.25)

    assert np.all(np.isfinite(v))
    assert np.all(np.diff(v) > 0)
    # Loss aversion: a loss hurts more than an equal gain helps
    assert -value_function(-10.0, 0.88, 0.88, 2.25) > value_function(10.0, 0.88, 0.88, 2.25)


# --- 2. Weighting function ---

def test_probability_weight_endpoints_and_shape():
    assert probability_weight(0.0, 0.61) == 0.0
    assert probability_weight(1.0, 0.61) == pytest.approx(1.0)
    # Inverse-S: small probabilities overweighted, large ones underweighted
    assert probability_weight(0.05, 0.61) > 0.05
    assert probability_weight(0.9, 0.61) < 0.9


def test_probability_weight_identity_for_unit_curvature():
    p = np.linspace(0.0, 1.0, 11)
    np.testing.assert_allclose(probability_weight(p, 1.0), p)


@pytest.mark.parametrize("p", [-0.1, 1.5, float("nan")])
def test_probability_weight_domain(p):
    with pytest.raises(DomainError, match="outside"):
        probability_weight(p, 0.61)


# --- 3. Decision weights ---

def test_side_sums_equal_probability_mass(prospect):
    """With unit curvature the weights on each side add up to that side's mass."""
    outcomes, probs = prospect
    weights = decision_weights(outcomes, probs, gamma=1.0, delta=1.0)

    gains = outcomes >= 0
    assert weights[gains].sum() == pytest.approx(probs[gains].sum())
    assert weights[~gains].sum() == pytest.approx(probs[~gains].sum())
    np.testing.assert_allclose(weights, probs)


def test_side_sums_equal_weighted_mass(prospect):
    """In general each side sums to the weighted probability of that side."""
    outcomes, probs = prospect
    gamma, delta = 0.61, 0.69
    weights = decision_weights(outcomes, probs, gamma=gamma, delta=delta)

    gains = outcomes >= 0
    assert np.all(weights >= 0)
    assert weights[gains].sum() == pytest.approx(probability_weight(probs[gains].sum(), gamma))
    assert weights[~gains].sum() == pytest.approx(probability_weight(probs[~gains].sum(), delta))


def test_rank_dependent_weights_by_hand(prospect):
    outcomes, probs = prospect
    gamma, delta = 0.61, 0.69
    w_g = lambda p: probability_weight(p, gamma)
    w_l = lambda p: probability_weight(p, delta)
    weights = decision_weights(outcomes, probs, gamma=gamma, delta=delta)

    # Gains ranked best first: 50 (0.15), 30 (0.2), 0 (0.3)
    assert weights[4] == pytest.approx(w_g(0.15))
    assert weights[0] == pytest.approx(w_g(0.35) - w_g(0.15))
    assert weights[2] == pytest.approx(w_g(0.65) - w_g(0.35))
    # Losses ranked worst first: -20 (0.1), -5 (0.25)
    assert weights[1] == pytest.approx(w_l(0.1))
    assert weights[3] == pytest.approx(w_l(0.35) - w_l(0.1))


def test_all_gains_gives_zero_loss_weight(prospect):
    outcomes, probs = prospect
    weights = decision_weights(outcomes, probs, gamma=0.61, delta=0.69, reference_point=-1e6)

    assert weights.sum() == pytest.approx(1.0)
    assert np.all(np.isfinite(weights))


def test_all_losses_gives_zero_gain_weight(prospect):
    outcomes, probs = prospect
    weights = decision_weights(outcomes, probs, gamma=0.61, delta=0.69, reference_point=1e6)

    assert weights.sum() == pytest.approx(1.0)
    value = expected_cpt_from_matrix(outcomes, probs, 1e6, 0.88, 0.88, 2.25, 0.61, 0.69)
    assert value[0] < 0


def test_matrix_rows_match_single_prospects(prospect):
    outcomes, probs = prospect
    rows = np.vstack([outcomes, outcomes[::-1] * 2.0, outcomes - 10.0])

    weights = decision_weights(rows, probs, gamma=0.61, delta=0.69)
    for i, row in enumerate(rows):
        np.testing.assert_allclose(weights[i], decision_weights(row, probs, gamma=0.61, delta=0.69))


def test_shape_mismatch_rejected(prospect):
    outcomes, _ = prospect
    with pytest.raises(InvalidArgument, match="columns"):
        decision_weights(outcomes, np.array([0.5, 0.5]), gamma=0.61, delta=0.69)


# --- 4. Expected CPT curve ---

def test_expected_cpt_with_unit_parameters_is_expected_gain():
    """rr=1, lam=1 and linear weighting reduce CPT to E[pi] - wref."""
    grid = generate_input_grid(600.0, 30)
    dist = discretize_shock(50)
    production, prices = ProductionParams(), ProfitParams()

    curve = expected_cpt_curve(grid, dist, production, prices, wref=500.0,
                               rr_plus=1.0, rr_minus=1.0, lam=1.0, gamma=1.0, delta=1.0)
    expected = profit_matrix(grid, dist, production, prices) @ dist.probs - 500.0

    np.testing.assert_allclose(curve, expected, rtol=1e-10, atol=1e-8)


def test_reference_below_all_profits_is_gain_only():
    grid = generate_input_grid(600.0, 30)
    dist = discretize_shock(50)
    production, prices = ProductionParams(), ProfitParams()

    curve = expected_cpt_curve(grid, dist, production, prices, wref=-1e6,
                               rr_plus=0.88, rr_minus=0.88, lam=2.25, gamma=0.61, delta=0.69)

    assert curve.shape == (30,)
    assert np.all(np.isfinite(curve))
    assert np.all(curve > 0)


def test_preference_reference_resolution():
    prices = ProfitParams(w0=750.0)
    assert CPTPreference().resolve_reference(prices) == 750.0
    assert CPTPreference(reference_point=100.0).resolve_reference(prices) == 100.0

    with pytest.raises(InvalidArgument, match="lam"):
        CPTPreference(lam=0.0)
