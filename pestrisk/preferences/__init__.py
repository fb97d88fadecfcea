"""
pestrisk/preferences/__init__.py

Public API for the decision criteria (CRRA expected utility and CPT).
"""

from pestrisk.preferences.types import CRRAPreference, CPTPreference, RiskPreference
from pestrisk.preferences.crra import (
    crra_utility,
    expected_utility_curve,
    expected_utility_from_matrix,
)
from pestrisk.preferences.cpt import (
    value_function,
    probability_weight,
    decision_weights,
    expected_cpt_curve,
    expected_cpt_from_matrix,
)
from pestrisk.preferences.criterion import certain_utility_fn, evaluate_criterion_curve

__all__ = [
    "CRRAPreference",
    "CPTPreference",
    "RiskPreference",
    # CRRA
    "crra_utility",
    "expected_utility_curve",
    "expected_utility_from_matrix",
    # CPT
    "value_function",
    "probability_weight",
    "decision_weights",
    "expected_cpt_curve",
    "expected_cpt_from_matrix",
    # Dispatch
    "certain_utility_fn",
    "evaluate_criterion_curve",
]
