"""
pestrisk/solver/premium.py

Risk premium by numerical inversion of the utility function.

Finds RP such that U(anchor - RP) = target, where target is the optimal
expected criterion value and anchor the expected profit at the optimum.
The search is a bounded, derivative-free one-dimensional minimization of
|target - U(anchor - RP)|.

The default interval [-100, 500] is a modeling assumption. A solution on the
interval boundary is flagged (PremiumBoundaryWarning, ``at_bound``) and the
interval is never widened implicitly.
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from scipy.optimize import minimize_scalar

from pestrisk._defaults import (
    DEFAULT_BOUNDARY_TOL,
    DEFAULT_PREMIUM_ATOL,
    DEFAULT_PREMIUM_LOWER,
    DEFAULT_PREMIUM_MAXITER,
    DEFAULT_PREMIUM_MONEY_TOL,
    DEFAULT_PREMIUM_RTOL,
    DEFAULT_PREMIUM_UPPER,
    DEFAULT_PREMIUM_XATOL,
)
from pestrisk.errors import InvalidArgument, NoConvergence, PremiumBoundaryWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PremiumSolution:
    """
    Outcome of the premium search.

    Attributes:
        premium: Risk premium RP
        certainty_equivalent: anchor_profit - RP
        residual: |target - U(anchor - RP)| at the solution
        money_residual: residual / U'(CE), in currency units
        iterations: Iterations used by the minimizer
        at_bound: True if RP sits on an end of the search interval
    """
    premium: float
    certainty_equivalent: float
    residual: float
    money_residual: float
    iterations: int
    at_bound: bool


def _money_residual(utility_fn: Callable[[float], float], ce: float, residual: float) -> float:
    """Convert a utility residual to currency units with a forward-difference slope at ce."""
    if residual == 0.0:
        return 0.0
    # Step upwards only: for CRRA, ce is already inside the domain and ce + h stays there
    h = 1e-6 * max(1.0, abs(ce))
    slope = (utility_fn(ce + h) - utility_fn(ce)) / h
    if not (math.isfinite(slope) and slope > 0):
        return math.inf
    return residual / slope


def solve_premium(
    target_utility: float,
    anchor_profit: float,
    utility_fn: Callable[[float], float],
    search_interval: Tuple[float, float] = (DEFAULT_PREMIUM_LOWER, DEFAULT_PREMIUM_UPPER),
    xatol: float = DEFAULT_PREMIUM_XATOL,
    rtol: float = DEFAULT_PREMIUM_RTOL,
    atol: float = DEFAULT_PREMIUM_ATOL,
    maxiter: int = DEFAULT_PREMIUM_MAXITER,
    upper_limit: Optional[float] = None,
    boundary_tol: float = DEFAULT_BOUNDARY_TOL,
    money_tol: float = DEFAULT_PREMIUM_MONEY_TOL
) -> PremiumSolution:
    """
    Solve for the risk premium equating certain and expected utility.

    Args:
        target_utility: Expected utility (or CPT value) at the optimum
        anchor_profit: Expected profit at the optimum
        utility_fn: Utility of a sure profit level
        search_interval: (lo, hi) bounds for RP
        xatol: Absolute tolerance on RP
        rtol: Residual tolerance relative to |target_utility|
        atol: Absolute residual floor
        maxiter: Iteration budget of the minimizer
        upper_limit: Largest RP for which utility_fn is defined, e.g.
            anchor_profit for CRRA utility. Clips ``hi`` when smaller.
        boundary_tol: Distance to an interval end that counts as "at bound"
        money_tol: Largest accepted residual in currency units, i.e. the
            utility residual divided by the slope of utility_fn at the CE

    Returns:
        PremiumSolution

    Raises:
        InvalidArgument: If the interval is empty or the inputs are not finite.
        NoConvergence: If the minimizer fails, the residual stays above
            rtol * |target| + atol, or the residual is worth more than
            money_tol currency units.
    """
    lo, hi = float(search_interval[0]), float(search_interval[1])
    if not lo < hi:
        raise InvalidArgument(f"search_interval must satisfy lo < hi. Got ({lo}, {hi})")
    if not (math.isfinite(target_utility) and math.isfinite(anchor_profit)):
        raise InvalidArgument(
            f"target_utility and anchor_profit must be finite. Got {target_utility}, {anchor_profit}"
        )

    if upper_limit is not None and upper_limit < hi:
        if upper_limit <= lo:
            raise InvalidArgument(
                f"Utility domain leaves no room for the premium search: upper_limit={upper_limit:.4g} <= lo={lo}"
            )
        logger.debug(f"Premium search upper bound clipped from {hi} to {upper_limit:.6g} (utility domain)")
        hi = float(upper_limit)

    def objective(rp: float) -> float:
        return abs(target_utility - utility_fn(anchor_profit - rp))

    res = minimize_scalar(
        objective,
        bounds=(lo, hi),
        method="bounded",
        options={"xatol": xatol, "maxiter": maxiter},
    )

    premium = float(res.x)
    residual = float(objective(premium))
    money_residual = _money_residual(utility_fn, anchor_profit - premium, residual)
    tolerance = rtol * abs(target_utility) + atol
    at_bound = (premium - lo) <= boundary_tol or (hi - premium) <= boundary_tol
    context = {
        "target_utility": target_utility,
        "anchor_profit": anchor_profit,
        "interval": (lo, hi),
        "premium": premium,
        "residual": residual,
        "money_residual": money_residual,
        "at_bound": at_bound,
    }

    if not res.success:
        raise NoConvergence(f"Premium search did not converge: {res.message}", context=context)
    if residual > tolerance:
        raise NoConvergence(
            f"Premium residual {residual:.3e} above tolerance {tolerance:.3e}",
            context=context,
        )
    if money_residual > money_tol:
        # Far out in the CRRA tail |U| is tiny, so the utility-scale check
        # alone accepts premiums that are off by several currency units.
        raise NoConvergence(
            f"Premium residual is {money_residual:.3g} currency units, above {money_tol}",
            context=context,
        )

    if at_bound:
        msg = (
            f"Risk premium {premium:.4f} sits at the search interval boundary ({lo}, {hi}); "
            f"the bound, not the true premium, may have been returned"
        )
        logger.warning(msg)
        warnings.warn(msg, PremiumBoundaryWarning, stacklevel=2)

    logger.debug(f"Premium solved: RP={premium:.6f}, residual={residual:.2e}, nit={res.nit}")

    return PremiumSolution(
        premium=premium,
        certainty_equivalent=float(anchor_profit - premium),
        residual=residual,
        money_residual=money_residual,
        iterations=int(res.nit),
        at_bound=at_bound,
    )


def invert_utility(
    target_utility: float,
    anchor_profit: float,
    utility_fn: Callable[[float], float],
    **kwargs
) -> float:
    """Certainty equivalent: the sure profit whose utility equals target_utility."""
    return solve_premium(target_utility, anchor_profit, utility_fn, **kwargs).certainty_equivalent
