"""
pestrisk/economy/__init__.py

Public API for economic model primitives.
"""

from pestrisk.economy.parameters import ProductionParams, ProfitParams

from pestrisk.economy.shocks import (
    ShockDistribution,
    discretize_shock,
)

from pestrisk.economy.grids import (
    InputGrid,
    generate_input_grid,
)

from pestrisk.economy.logic import (
    production_mean,
    production_std,
    output,
    profit,
    profit_matrix,
    expected_profit_curve,
    risk_neutral_optimum,
)

__all__ = [
    # Parameters
    "ProductionParams",
    "ProfitParams",
    # Shocks
    "ShockDistribution",
    "discretize_shock",
    # Grids
    "InputGrid",
    "generate_input_grid",
    # Production & profit
    "production_mean",
    "production_std",
    "output",
    "profit",
    "profit_matrix",
    "expected_profit_curve",
    "risk_neutral_optimum",
]
