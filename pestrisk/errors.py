"""
pestrisk/errors.py

Exception taxonomy for the scenario solver.

Every error is terminal for the scenario that raised it. ScenarioSolver attaches
the parameter combination to ``error.context`` and re-raises the same object,
so callers can still catch by type.
"""

from typing import Any, Dict, Optional


class PestRiskError(Exception):
    """Base class for all solver errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        base = super().__str__()
        if not self.context:
            return base
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{base} [{details}]"


class InvalidArgument(PestRiskError, ValueError):
    """Bad discretization size, invalid grid entries or invalid parameters."""


class DomainError(PestRiskError, ArithmeticError):
    """A function was evaluated outside its mathematical domain."""


class EmptyInput(PestRiskError, ValueError):
    """An optimizer was handed an empty curve."""


class NoConvergence(PestRiskError, RuntimeError):
    """The premium search did not reach the residual tolerance."""


class PremiumBoundaryWarning(UserWarning):
    """The premium solution sits on the edge of the search interval."""
