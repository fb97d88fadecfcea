"""
Solver configuration.

This module provides SolverConfig for the numerical settings of the scenario
solver. These are NOT economic primitives: they control the discretization
of the shock, the input grid and the premium search.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from pestrisk._defaults import (
    DEFAULT_BOUNDARY_TOL,
    DEFAULT_GRID_TYPE,
    DEFAULT_N_EPS,
    DEFAULT_N_GRID,
    DEFAULT_PREMIUM_ATOL,
    DEFAULT_PREMIUM_LOWER,
    DEFAULT_PREMIUM_MAXITER,
    DEFAULT_PREMIUM_MONEY_TOL,
    DEFAULT_PREMIUM_RTOL,
    DEFAULT_PREMIUM_UPPER,
    DEFAULT_PREMIUM_XATOL,
    DEFAULT_SHOCK_METHOD,
    DEFAULT_X_MAX,
    DEFAULT_X_MIN,
)
from pestrisk.economy.grids import VALID_GRID_TYPES, InputGrid, generate_input_grid
from pestrisk.economy.shocks import VALID_SHOCK_METHODS, ShockDistribution, discretize_shock
from pestrisk.errors import InvalidArgument
from pestrisk.utils.overrides import apply_overrides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverConfig:
    """
    Numerical settings of the scenario solver.

    Attributes:
        n_eps: Number of shock support points (N.eps)
        shock_method: "quantile" or "gauss_hermite"
        n_grid: Number of input grid points (Ns)
        x_max: Upper end of the input grid
        x_min: Excluded lower end of the input grid. Inputs this small are
            never optimal, but their tail profits can turn negative.
        grid_type: "linear" or "power"
        premium_bounds: (lo, hi) search interval for the risk premium
        premium_xatol: Absolute tolerance on the premium
        premium_rtol: Relative residual tolerance
        premium_atol: Absolute residual floor
        premium_money_tol: Largest accepted residual in currency units
        premium_maxiter: Iteration budget of the premium search

    Example:
        config = SolverConfig(n_eps=200, n_grid=300)
        dist = config.build_shock_distribution()
        grid = config.build_input_grid()
    """
    n_eps: int = DEFAULT_N_EPS
    shock_method: str = DEFAULT_SHOCK_METHOD
    n_grid: int = DEFAULT_N_GRID
    x_max: float = DEFAULT_X_MAX
    x_min: float = DEFAULT_X_MIN
    grid_type: str = DEFAULT_GRID_TYPE
    premium_bounds: Tuple[float, float] = (DEFAULT_PREMIUM_LOWER, DEFAULT_PREMIUM_UPPER)
    premium_xatol: float = DEFAULT_PREMIUM_XATOL
    premium_rtol: float = DEFAULT_PREMIUM_RTOL
    premium_atol: float = DEFAULT_PREMIUM_ATOL
    premium_money_tol: float = DEFAULT_PREMIUM_MONEY_TOL
    premium_maxiter: int = DEFAULT_PREMIUM_MAXITER
    boundary_tol: float = DEFAULT_BOUNDARY_TOL

    def __post_init__(self):
        """Validate numerical settings."""
        if self.shock_method not in VALID_SHOCK_METHODS:
            raise InvalidArgument(
                f"Unknown shock_method: {self.shock_method}. Valid options: {VALID_SHOCK_METHODS}"
            )

        if self.grid_type not in VALID_GRID_TYPES:
            raise InvalidArgument(f"Unknown grid_type: {self.grid_type}. Valid options: {VALID_GRID_TYPES}")

        if self.n_eps < 2:
            raise InvalidArgument(f"n_eps must be >= 2. Got {self.n_eps}")

        if self.n_grid < 1:
            raise InvalidArgument(f"n_grid must be >= 1. Got {self.n_grid}")

        if not self.x_max > 0:
            raise InvalidArgument(f"x_max must be > 0. Got {self.x_max}")

        if not 0 <= self.x_min < self.x_max:
            raise InvalidArgument(f"x_min must satisfy 0 <= x_min < x_max. Got x_min={self.x_min}")

        lo, hi = self.premium_bounds
        if not lo < hi:
            raise InvalidArgument(f"premium_bounds must satisfy lo < hi. Got {self.premium_bounds}")

        if (self.premium_xatol <= 0 or self.premium_rtol <= 0
                or self.premium_atol < 0 or self.premium_money_tol <= 0):
            raise InvalidArgument("Premium tolerances must be positive")

        if self.premium_maxiter < 1:
            raise InvalidArgument(f"premium_maxiter must be >= 1. Got {self.premium_maxiter}")

    @classmethod
    def with_overrides(
        cls,
        base: Optional[SolverConfig] = None,
        log_changes: bool = True,
        **overrides
    ) -> SolverConfig:
        """
        Update SolverConfig with strict validation and logging.

        Changing ``premium_bounds`` is logged, so a widened search interval is
        always visible.
        """
        return apply_overrides(cls, base, overrides, log_changes=log_changes, log=logger)

    def build_shock_distribution(self) -> ShockDistribution:
        """Discretized shock for this configuration."""
        return discretize_shock(self.n_eps, method=self.shock_method)

    def build_input_grid(self) -> InputGrid:
        """Input grid on (x_min, x_max] for this configuration."""
        return generate_input_grid(self.x_max, self.n_grid, grid_type=self.grid_type, x_min=self.x_min)

    def premium_options(self) -> Dict[str, float]:
        """Keyword arguments for solve_premium."""
        return {
            "search_interval": tuple(self.premium_bounds),
            "xatol": self.premium_xatol,
            "rtol": self.premium_rtol,
            "atol": self.premium_atol,
            "money_tol": self.premium_money_tol,
            "maxiter": self.premium_maxiter,
            "boundary_tol": self.boundary_tol,
        }
