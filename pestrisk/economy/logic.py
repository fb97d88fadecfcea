"""
pestrisk/economy/logic.py

Core economic equations of the pesticide-input model.

Design:
- Pure functions of their inputs; nothing is cached here.
- Broadcasting: scalar or array inputs. Matrix helpers evaluate the full
  (input grid x shock) outer product.
"""

from typing import Union

import numpy as np

from pestrisk.economy.grids import InputGrid
from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.economy.shocks import ShockDistribution
from pestrisk.errors import InvalidArgument

Numeric = Union[float, np.ndarray]


def _check_positive_input(x: np.ndarray) -> None:
    if np.any(x <= 0):
        raise InvalidArgument("Input level x must be > 0")


# --- 1. Production ---

def production_mean(x: Numeric, production: ProductionParams) -> Numeric:
    """ Mean output: c0 + a * x^alpha """
    x = np.asarray(x, dtype=np.float64)
    _check_positive_input(x)
    return production.c0 + production.a * x ** production.alpha


def production_std(x: Numeric, production: ProductionParams) -> Numeric:
    """ Output standard deviation per unit shock: b * x^beta """
    x = np.asarray(x, dtype=np.float64)
    _check_positive_input(x)
    return production.b * x ** production.beta


def output(x: Numeric, eps: Numeric, production: ProductionParams) -> Numeric:
    """ Stochastic output: y = c0 + a * x^alpha + b * x^beta * eps """
    return production_mean(x, production) + production_std(x, production) * eps


# --- 2. Profit ---

def profit(
    x: Numeric,
    eps: Numeric,
    production: ProductionParams,
    prices: ProfitParams
) -> Numeric:
    """
    Realized profit in wealth terms.

        pi = w0 + py * (c0 + a * x^alpha + b * x^beta * eps) - x

    The input price is normalized to one, so py is the price ratio.
    """
    return prices.w0 + prices.py * output(x, eps, production) - np.asarray(x, dtype=np.float64)


def profit_matrix(
    grid: InputGrid,
    dist: ShockDistribution,
    production: ProductionParams,
    prices: ProfitParams
) -> np.ndarray:
    """
    Outer evaluation of profit over every (input, shock) pair.

    Returns:
        np.ndarray of shape (n_grid, n_eps).
            Axis 0: input level x
            Axis 1: shock realization eps
    """
    # x: (n_grid, 1), eps: (1, n_eps)
    x_mesh = grid.points[:, np.newaxis]
    eps_mesh = dist.values[np.newaxis, :]
    return profit(x_mesh, eps_mesh, production, prices)


def expected_profit_curve(
    grid: InputGrid,
    dist: ShockDistribution,
    production: ProductionParams,
    prices: ProfitParams
) -> np.ndarray:
    """
    Expected profit at every grid point: sum_i p_i * pi(x, eps_i).

    Returns:
        np.ndarray of shape (n_grid,)
    """
    return profit_matrix(grid, dist, production, prices) @ dist.probs


def risk_neutral_optimum(production: ProductionParams, prices: ProfitParams) -> float:
    """
    Closed-form maximizer of expected profit for a zero-mean shock.

    Solves py * a * alpha * x^(alpha - 1) = 1. Only meaningful for
    0 < alpha < 1 and a > 0; used as a reference for the grid search.
    """
    if not (0.0 < production.alpha < 1.0) or production.a <= 0:
        raise InvalidArgument(
            f"Closed-form optimum needs 0 < alpha < 1 and a > 0. Got alpha={production.alpha}, a={production.a}"
        )
    return (prices.py * production.a * production.alpha) ** (1.0 / (1.0 - production.alpha))
