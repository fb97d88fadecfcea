"""
pestrisk/_defaults.py

Centralized default constants for the numerical solution method.

This module contains ONLY constants with NO imports to avoid circular dependencies.
Both solver/solver_config.py and solver/premium.py import from here to keep a
single source of truth.
"""

# =============================================================================
# DISCRETIZATION DEFAULTS
# =============================================================================

DEFAULT_N_EPS = 1000             # Shock sample size (N.eps)
DEFAULT_SHOCK_METHOD = "quantile"

DEFAULT_N_GRID = 600             # Input grid resolution (Ns)
DEFAULT_X_MAX = 600.0            # Upper end of the input grid
DEFAULT_X_MIN = 20.0             # Grid starts just above this; keeps benchmark profits > 0
DEFAULT_GRID_TYPE = "linear"


# =============================================================================
# PREMIUM SEARCH DEFAULTS
# =============================================================================
# The search interval is a modeling assumption, not a law. Results sitting on
# either end are flagged rather than silently accepted.

DEFAULT_PREMIUM_LOWER = -100.0
DEFAULT_PREMIUM_UPPER = 500.0
DEFAULT_PREMIUM_XATOL = 1e-6     # Absolute tolerance on the premium itself
DEFAULT_PREMIUM_RTOL = 1e-6      # Residual tolerance relative to |target utility|
DEFAULT_PREMIUM_ATOL = 1e-12     # Residual floor for targets close to zero
DEFAULT_PREMIUM_MONEY_TOL = 0.5  # Residual converted to currency units via the local slope of U
DEFAULT_PREMIUM_MAXITER = 500
DEFAULT_BOUNDARY_TOL = 1e-3      # Distance to an interval end treated as "at bound"


# =============================================================================
# NUMERICAL SAFETY
# =============================================================================

DEFAULT_PROB_TOL = 1e-9          # Tolerance on probabilities summing to one
DEFAULT_PROB_SLACK = 1e-12       # Float slack allowed outside [0, 1] before DomainError
