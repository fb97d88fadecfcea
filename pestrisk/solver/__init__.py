"""
pestrisk/solver/__init__.py

Public API for the grid-search scenario solver.
"""

from pestrisk.solver.solver_config import SolverConfig
from pestrisk.solver.grid_search import argmax
from pestrisk.solver.premium import PremiumSolution, solve_premium, invert_utility
from pestrisk.solver.scenario import ProfitSurface, ScenarioResult, ScenarioSolver, solve_scenario
from pestrisk.solver.sweep import Scenario, SweepRecord, enumerate_scenarios, run_sweep, sweep_to_frame

__all__ = [
    "SolverConfig",
    "argmax",
    "PremiumSolution",
    "solve_premium",
    "invert_utility",
    "ProfitSurface",
    "ScenarioResult",
    "ScenarioSolver",
    "solve_scenario",
    "Scenario",
    "SweepRecord",
    "enumerate_scenarios",
    "run_sweep",
    "sweep_to_frame",
]
