"""
pestrisk

Expected-utility (CRRA) and Cumulative Prospect Theory solutions of a
farmer's pesticide-input decision under production risk.
"""

from pestrisk.economy import (
    InputGrid,
    ProductionParams,
    ProfitParams,
    ShockDistribution,
    discretize_shock,
    expected_profit_curve,
    generate_input_grid,
    profit,
)
from pestrisk.errors import (
    DomainError,
    EmptyInput,
    InvalidArgument,
    NoConvergence,
    PestRiskError,
    PremiumBoundaryWarning,
)
from pestrisk.preferences import CPTPreference, CRRAPreference, RiskPreference
from pestrisk.solver import (
    ScenarioResult,
    ScenarioSolver,
    SolverConfig,
    argmax,
    run_sweep,
    solve_premium,
    solve_scenario,
)

__version__ = "0.1.0"

__all__ = [
    # Economy
    "InputGrid",
    "ProductionParams",
    "ProfitParams",
    "ShockDistribution",
    "discretize_shock",
    "expected_profit_curve",
    "generate_input_grid",
    "profit",
    # Preferences
    "CPTPreference",
    "CRRAPreference",
    "RiskPreference",
    # Solver
    "ScenarioResult",
    "ScenarioSolver",
    "SolverConfig",
    "argmax",
    "run_sweep",
    "solve_premium",
    "solve_scenario",
    # Errors
    "DomainError",
    "EmptyInput",
    "InvalidArgument",
    "NoConvergence",
    "PestRiskError",
    "PremiumBoundaryWarning",
]
