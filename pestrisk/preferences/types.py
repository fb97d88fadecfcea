"""
pestrisk/preferences/types.py

Risk-preference specifications.

RiskPreference is a tagged union of two frozen dataclasses. Each variant is
evaluated by its own pure function (see crra.py and cpt.py); dispatch happens
on the type in criterion.py, not through inheritance.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Union

from pestrisk.economy.parameters import ProfitParams
from pestrisk.errors import InvalidArgument


@dataclass(frozen=True)
class CRRAPreference:
    """
    Constant Relative Risk Aversion expected utility.

    Attributes:
        r: Degree of relative risk aversion. r = 0 is risk neutral.
    """
    r: float = 0.0

    def __post_init__(self):
        if not (math.isfinite(self.r) and self.r >= 0):
            raise InvalidArgument(f"r must be finite and >= 0. Got {self.r}")

    @property
    def is_risk_neutral(self) -> bool:
        return self.r == 0

    @property
    def label(self) -> str:
        return f"CRRA(r={self.r:g})"


@dataclass(frozen=True)
class CPTPreference:
    """
    Tversky-Kahneman (1992) Cumulative Prospect Theory.

    Attributes:
        rr_plus: Curvature of the value function over gains
        rr_minus: Curvature of the value function over losses
        lam: Loss aversion coefficient (lambda)
        gamma: Probability-weighting curvature for gains
        delta: Probability-weighting curvature for losses
        reference_point: Profit level separating gains from losses.
            None means the initial wealth w0 of the scenario.

    Defaults are the median estimates of Tversky and Kahneman (1992).
    """
    rr_plus: float = 0.88
    rr_minus: float = 0.88
    lam: float = 2.25
    gamma: float = 0.61
    delta: float = 0.69
    reference_point: Optional[float] = None

    def __post_init__(self):
        for name in ("rr_plus", "rr_minus", "lam", "gamma", "delta"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidArgument(f"{name} must be finite and > 0. Got {value}")

        if self.reference_point is not None and not math.isfinite(self.reference_point):
            raise InvalidArgument(f"reference_point must be finite. Got {self.reference_point}")

    def resolve_reference(self, prices: ProfitParams) -> float:
        """Reference point in profit units for a given scenario."""
        if self.reference_point is None:
            return float(prices.w0)
        return float(self.reference_point)

    @property
    def label(self) -> str:
        return (
            f"CPT(rr+={self.rr_plus:g}, rr-={self.rr_minus:g}, lam={self.lam:g}, "
            f"gamma={self.gamma:g}, delta={self.delta:g})"
        )


RiskPreference = Union[CRRAPreference, CPTPreference]
