"""
pestrisk/preferences/criterion.py

Dispatch from a RiskPreference to its criterion evaluator.
"""

from typing import Callable

import numpy as np

from pestrisk.economy.parameters import ProfitParams
from pestrisk.errors import InvalidArgument
from pestrisk.preferences.cpt import expected_cpt_from_matrix, value_function
from pestrisk.preferences.crra import crra_utility, expected_utility_from_matrix
from pestrisk.preferences.types import CPTPreference, CRRAPreference, RiskPreference


def evaluate_criterion_curve(
    profits: np.ndarray,
    probs: np.ndarray,
    preference: RiskPreference,
    prices: ProfitParams
) -> np.ndarray:
    """
    Expected criterion (EU or CPT value) for each row of a profit matrix.

    Args:
        profits: Profit matrix of shape (n_grid, n_eps)
        probs: Shock probabilities of shape (n_eps,)
        preference: CRRAPreference or CPTPreference
        prices: Scenario prices, used to resolve the CPT reference point

    Returns:
        np.ndarray of shape (n_grid,)
    """
    if isinstance(preference, CRRAPreference):
        return expected_utility_from_matrix(profits, probs, preference.r)

    elif isinstance(preference, CPTPreference):
        return expected_cpt_from_matrix(
            profits,
            probs,
            wref=preference.resolve_reference(prices),
            rr_plus=preference.rr_plus,
            rr_minus=preference.rr_minus,
            lam=preference.lam,
            gamma=preference.gamma,
            delta=preference.delta,
        )

    else:
        raise InvalidArgument(f"Unknown risk preference: {type(preference).__name__}")


def certain_utility_fn(preference: RiskPreference, prices: ProfitParams) -> Callable[[float], float]:
    """
    Utility of a sure profit level, used to invert the criterion.

    CRRA: pi -> U(pi, r). CPT: pi -> v(pi - wref) (a sure outcome carries
    decision weight w(1) = 1).
    """
    if isinstance(preference, CRRAPreference):
        r = preference.r
        return lambda pi: crra_utility(pi, r)

    elif isinstance(preference, CPTPreference):
        wref = preference.resolve_reference(prices)
        return lambda pi: value_function(
            pi - wref, preference.rr_plus, preference.rr_minus, preference.lam
        )

    else:
        raise InvalidArgument(f"Unknown risk preference: {type(preference).__name__}")
