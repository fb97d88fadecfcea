"""
pestrisk/preferences/crra.py

CRRA expected utility.

    U(pi) = pi^(1-r) / (1-r)   r != 1
          = ln(pi)             r == 1
          = pi                 r == 0  (risk neutral)

Profit realizations must stay positive for r != 0. A non-positive profit is
reported as a DomainError instead of being allowed to turn into NaN, which
would otherwise be silently skipped by the arg-max.
"""

from typing import Union

import numpy as np

from pestrisk.economy.grids import InputGrid
from pestrisk.economy.logic import profit_matrix
from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.economy.shocks import ShockDistribution
from pestrisk.errors import DomainError

Numeric = Union[float, np.ndarray]


def crra_utility(profit: Numeric, r: float) -> Numeric:
    """
    CRRA utility of profit.

    Args:
        profit: Profit level(s)
        r: Relative risk aversion (>= 0)

    Returns:
        Utility with the same shape as ``profit`` (a float for scalar input).

    Raises:
        DomainError: If r != 0 and any profit is <= 0.
    """
    pi = np.asarray(profit, dtype=np.float64)

    if r == 0:
        out = pi.copy()
    else:
        if np.any(pi <= 0):
            raise DomainError(
                f"CRRA utility with r={r} is undefined for non-positive profit "
                f"(min profit {pi.min():.4g})",
                context={"r": r},
            )
        if r == 1:
            out = np.log(pi)
        else:
            out = pi ** (1.0 - r) / (1.0 - r)

    return float(out) if out.ndim == 0 else out


def expected_utility_from_matrix(profits: np.ndarray, probs: np.ndarray, r: float) -> np.ndarray:
    """
    Expected CRRA utility per row of a (n_grid, n_eps) profit matrix.

    Returns:
        np.ndarray of shape (n_grid,)
    """
    return crra_utility(profits, r) @ probs


def expected_utility_curve(
    grid: InputGrid,
    dist: ShockDistribution,
    production: ProductionParams,
    prices: ProfitParams,
    r: float
) -> np.ndarray:
    """
    Expected CRRA utility at every grid point: sum_i p_i * U(pi(x, eps_i), r).

    With r = 0 this equals expected_profit_curve exactly.
    """
    profits = profit_matrix(grid, dist, production, prices)
    return expected_utility_from_matrix(profits, dist.probs, r)
