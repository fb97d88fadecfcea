"""
Economic parameters for the pesticide-input model.

This module provides:
- ProductionParams: shape of the stochastic production function
- ProfitParams: output/input price ratio and initial wealth

Numerical settings (grid sizes, premium search interval) live in
pestrisk.solver.SolverConfig, keeping economic fundamentals separate from
the solution method.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional

from pestrisk.errors import InvalidArgument
from pestrisk.utils.overrides import apply_overrides

logger = logging.getLogger(__name__)


# =============================================================================
# PRODUCTION PARAMS
# =============================================================================

@dataclass(frozen=True)
class ProductionParams:
    """
    Immutable container for the production function

        y(x, eps) = c0 + a * x^alpha + b * x^beta * eps

    Attributes:
        c0: Output level independent of the input
        a: Scale of the mean effect of the input
        alpha: Curvature of the mean effect
        b: Scale of the risk effect
        beta: Curvature of the risk effect. beta < 0 makes the input
            risk-reducing, beta > 0 risk-increasing.

    By convention a, b, alpha > 0 and beta < 0. Other values are a modeling
    choice, not a runtime fault, and are only reported at DEBUG level.

    Example:
        prod = ProductionParams()  # benchmark shape
        prod = ProductionParams.with_overrides(beta=-0.3)
    """
    c0: float = 0.0
    a: float = 15.0
    alpha: float = 0.30
    b: float = 30.0
    beta: float = -0.10

    def __post_init__(self):
        for name in ("c0", "a", "alpha", "b", "beta"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidArgument(f"{name} must be finite. Got {value}")

        if self.a <= 0 or self.b <= 0 or self.alpha <= 0 or self.beta >= 0:
            logger.debug(
                f"Production shape outside the usual convention "
                f"(a,b,alpha > 0, beta < 0): {self}"
            )

    @classmethod
    def with_overrides(
        cls,
        base: Optional[ProductionParams] = None,
        log_changes: bool = True,
        **overrides
    ) -> ProductionParams:
        """
        Create (or update) ProductionParams with strict key validation and logging.

        Args:
            base: Existing parameters to update. If None, uses defaults.
            log_changes: Whether to log the differences.
            **overrides: Key-value pairs of parameters to update.

        Returns:
            New ProductionParams instance.
        """
        return apply_overrides(cls, base, overrides, log_changes=log_changes, log=logger)

    @property
    def is_risk_reducing(self) -> bool:
        """True when output variance falls as the input rises."""
        return self.beta < 0


# =============================================================================
# PROFIT PARAMS
# =============================================================================

@dataclass(frozen=True)
class ProfitParams:
    """
    Immutable container for prices and wealth.

    Attributes:
        py: Output price relative to the input price (price ratio)
        w0: Initial wealth, added to every profit realization
    """
    py: float = 11.0
    w0: float = 500.0

    def __post_init__(self):
        if not (math.isfinite(self.py) and self.py > 0):
            raise InvalidArgument(f"py must be finite and > 0. Got {self.py}")

        if not math.isfinite(self.w0):
            raise InvalidArgument(f"w0 must be finite. Got {self.w0}")

    @classmethod
    def with_overrides(
        cls,
        base: Optional[ProfitParams] = None,
        log_changes: bool = True,
        **overrides
    ) -> ProfitParams:
        """Create (or update) ProfitParams; see ProductionParams.with_overrides."""
        return apply_overrides(cls, base, overrides, log_changes=log_changes, log=logger)
