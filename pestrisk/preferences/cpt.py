"""
pestrisk/preferences/cpt.py

Cumulative Prospect Theory (Tversky & Kahneman, 1992).

Outcomes are coded as gains or losses relative to a reference point wref:

    v(z) = z^rr_plus                 z >= 0   (gain; z == 0 counts as a gain)
    v(z) = -lam * (-z)^rr_minus      z < 0    (loss)

Probabilities are transformed rank by rank. On the gain side the weighting
function is applied to the decumulative probability of an outcome at least
as good, on the loss side to the cumulative probability of an outcome at
least as bad. Differencing consecutive weighted probabilities gives one
decision weight per outcome.
"""

from typing import Union

import numpy as np

from pestrisk._defaults import DEFAULT_PROB_SLACK
from pestrisk.economy.grids import InputGrid
from pestrisk.economy.logic import profit_matrix
from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.economy.shocks import ShockDistribution
from pestrisk.errors import DomainError, InvalidArgument

Numeric = Union[float, np.ndarray]


# --- 1. Value function ---

def value_function(z: Numeric, rr_plus: float, rr_minus: float, lam: float) -> Numeric:
    """
    Sign-dependent power value function over gains/losses z = pi - wref.

    Powers are always taken of |z|, so no NaN appears for negative z even
    with non-integer curvatures.
    """
    z = np.asarray(z, dtype=np.float64)
    magnitude = np.abs(z)
    out = np.where(z >= 0, magnitude ** rr_plus, -lam * magnitude ** rr_minus)
    return float(out) if out.ndim == 0 else out


# --- 2. Probability weighting ---

def probability_weight(p: Numeric, curvature: float) -> Numeric:
    """
    Tversky-Kahneman weighting function w(p) = p^c / (p^c + (1-p)^c)^(1/c).

    Raises:
        DomainError: If p lies outside [0, 1] by more than float slack.
    """
    p = np.asarray(p, dtype=np.float64)
    if np.any(~np.isfinite(p)) or np.any(p < -DEFAULT_PROB_SLACK) or np.any(p > 1.0 + DEFAULT_PROB_SLACK):
        raise DomainError(
            "Probability weighting evaluated outside [0, 1]",
            context={"min_p": float(np.min(p)), "max_p": float(np.max(p))},
        )
    p = np.clip(p, 0.0, 1.0)

    num = p ** curvature
    # p^c + (1-p)^c >= min(1, 2^(1-c)) > 0 on [0, 1]
    den = (num + (1.0 - p) ** curvature) ** (1.0 / curvature)
    out = num / den
    return float(out) if out.ndim == 0 else out


def decision_weights(
    outcomes: np.ndarray,
    probs: np.ndarray,
    gamma: float,
    delta: float,
    reference_point: float = 0.0
) -> np.ndarray:
    """
    Rank-dependent CPT decision weights.

    Args:
        outcomes: Prospect outcomes, shape (n_eps,) or (n_grid, n_eps).
            Each row is one prospect.
        probs: Probability of each outcome column, shape (n_eps,)
        gamma: Weighting curvature for gains
        delta: Weighting curvature for losses
        reference_point: Outcomes >= this value are gains

    Returns:
        Decision weights aligned with ``outcomes``. Per row the gain weights
        sum to w_gamma(P(gain)) and the loss weights to w_delta(P(loss)).
        A side without mass receives zero weight.
    """
    x = np.asarray(outcomes, dtype=np.float64)
    p = np.asarray(probs, dtype=np.float64).reshape(-1)
    squeeze = x.ndim == 1
    x = np.atleast_2d(x)

    if x.ndim != 2 or x.shape[1] != p.size:
        raise InvalidArgument(
            f"outcomes must have {p.size} columns to match probs. Got shape {np.shape(outcomes)}"
        )

    n_rows = x.shape[0]
    zeros = np.zeros((n_rows, 1))

    # Rank outcomes from worst to best within each prospect
    order = np.argsort(x, axis=1, kind="stable")
    x_sorted = np.take_along_axis(x, order, axis=1)
    p_sorted = p[order]

    is_gain = x_sorted >= reference_point
    p_gain = np.where(is_gain, p_sorted, 0.0)
    p_loss = np.where(is_gain, 0.0, p_sorted)

    # Gains: P(outcome at least as good), accumulated from the best outcome down
    decum = np.cumsum(p_gain[:, ::-1], axis=1)[:, ::-1]
    w_decum = probability_weight(decum, gamma)
    w_better = np.concatenate([w_decum[:, 1:], zeros], axis=1)
    gain_weights = np.where(is_gain, w_decum - w_better, 0.0)

    # Losses: P(outcome at least as bad), accumulated from the worst outcome up
    cum = np.cumsum(p_loss, axis=1)
    w_cum = probability_weight(cum, delta)
    w_worse = np.concatenate([zeros, w_cum[:, :-1]], axis=1)
    loss_weights = np.where(is_gain, 0.0, w_cum - w_worse)

    # Scatter back to the caller's outcome order
    weights = np.empty_like(x)
    np.put_along_axis(weights, order, gain_weights + loss_weights, axis=1)

    return weights[0] if squeeze else weights


# --- 3. Expected CPT value ---

def expected_cpt_from_matrix(
    profits: np.ndarray,
    probs: np.ndarray,
    wref: float,
    rr_plus: float,
    rr_minus: float,
    lam: float,
    gamma: float,
    delta: float
) -> np.ndarray:
    """
    CPT value of each row of a (n_grid, n_eps) profit matrix.

    Returns:
        np.ndarray of shape (n_grid,)
    """
    profits = np.atleast_2d(np.asarray(profits, dtype=np.float64))
    weights = decision_weights(profits, probs, gamma, delta, reference_point=wref)
    values = value_function(profits - wref, rr_plus, rr_minus, lam)
    return np.sum(weights * values, axis=1)


def expected_cpt_curve(
    grid: InputGrid,
    dist: ShockDistribution,
    production: ProductionParams,
    prices: ProfitParams,
    wref: float,
    rr_plus: float,
    rr_minus: float,
    lam: float,
    gamma: float,
    delta: float
) -> np.ndarray:
    """CPT value at every grid point: sum_i decision_weight_i * v(pi_i - wref)."""
    profits = profit_matrix(grid, dist, production, prices)
    return expected_cpt_from_matrix(profits, dist.probs, wref, rr_plus, rr_minus, lam, gamma, delta)
