"""
pestrisk/economy/shocks.py

Discretization of the standard normal production shock.

The continuous shock eps ~ N(0, 1) is replaced by a finite set of points with
probability masses. Two deterministic rules are available:

- "quantile": equiprobable midpoint quantiles, moment-matched to mean 0 and
  variance 1. Scales to large sample sizes (default N.eps = 1000).
- "gauss_hermite": Gauss-Hermite quadrature nodes/weights from quantecon.
  Exact for polynomial moments but intended for small n.
"""

import logging
from dataclasses import dataclass
from numbers import Integral

import numpy as np
from quantecon.quad import qnwnorm
from scipy.stats import norm

from pestrisk._defaults import DEFAULT_N_EPS, DEFAULT_PROB_TOL, DEFAULT_SHOCK_METHOD
from pestrisk.errors import InvalidArgument

logger = logging.getLogger(__name__)

VALID_SHOCK_METHODS = ("quantile", "gauss_hermite")


def _frozen(arr) -> np.ndarray:
    out = np.array(arr, dtype=np.float64).reshape(-1)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class ShockDistribution:
    """
    Immutable discrete approximation of the production shock.

    Attributes:
        values: Shock realizations, shape (n_eps,)
        probs: Probability mass of each realization, shape (n_eps,)
    """
    values: np.ndarray
    probs: np.ndarray

    def __post_init__(self):
        values = _frozen(self.values)
        probs = _frozen(self.probs)

        if values.shape != probs.shape:
            raise InvalidArgument(
                f"values and probs must have the same length. Got {values.size} and {probs.size}"
            )
        if values.size == 0:
            raise InvalidArgument("ShockDistribution needs at least one point")
        if not np.all(np.isfinite(values)):
            raise InvalidArgument("Shock values must be finite")
        if np.any(probs < 0):
            raise InvalidArgument("Probabilities must be non-negative")
        total = probs.sum()
        if abs(total - 1.0) > DEFAULT_PROB_TOL:
            raise InvalidArgument(f"Probabilities must sum to 1. Got {total:.12f}")

        object.__setattr__(self, "values", values)
        object.__setattr__(self, "probs", probs)

    @property
    def size(self) -> int:
        return int(self.values.size)

    def __len__(self) -> int:
        return self.size

    def mean(self) -> float:
        """Probability-weighted mean of the shock."""
        return float(self.probs @ self.values)

    def variance(self) -> float:
        """Probability-weighted variance of the shock."""
        centred = self.values - self.mean()
        return float(self.probs @ centred ** 2)


def _quantile_points(n: int):
    # Midpoint of each of the n equiprobable bins
    levels = (np.arange(1, n + 1) - 0.5) / n
    values = norm.ppf(levels)
    probs = np.full(n, 1.0 / n)
    return values, probs


def _gauss_hermite_points(n: int):
    nodes, weights = qnwnorm(n)
    values = np.asarray(nodes, dtype=np.float64).reshape(-1)
    probs = np.asarray(weights, dtype=np.float64).reshape(-1)
    # Ensure strict normalization (handling potential float precision issues)
    probs = probs / probs.sum()
    return values, probs


def discretize_shock(n: int = DEFAULT_N_EPS, method: str = DEFAULT_SHOCK_METHOD) -> ShockDistribution:
    """
    Builds a finite, mean-zero approximation of the standard normal shock.

    Args:
        n: Number of support points (>= 2).
        method: "quantile" or "gauss_hermite".

    Returns:
        ShockDistribution with probabilities summing to one and
        probability-weighted mean 0.

    Raises:
        InvalidArgument: If n < 2 or the method is unknown.
    """
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidArgument(f"n must be an integer. Got {n!r}")
    if n < 2:
        raise InvalidArgument(f"n must be >= 2. Got {n}")

    if method == "quantile":
        values, probs = _quantile_points(int(n))
    elif method == "gauss_hermite":
        values, probs = _gauss_hermite_points(int(n))
    else:
        raise InvalidArgument(f"Unknown shock method: {method}. Valid options: {VALID_SHOCK_METHODS}")

    # Moment matching: exact zero mean, and unit variance for the quantile rule
    values = values - probs @ values
    if method == "quantile":
        values = values / np.sqrt(probs @ values ** 2)

    dist = ShockDistribution(values=values, probs=probs)
    logger.debug(
        f"Discretized shock: method={method}, n={n}, "
        f"mean={dist.mean():.2e}, var={dist.variance():.6f}"
    )
    return dist
