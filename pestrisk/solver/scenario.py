"""
scenario.py

Solves one fully specified scenario: production shape, prices, wealth and
risk preference.

Pipeline:
  1) ProfitSurface: profit matrix over (input grid x shock) and the
     risk-neutral baseline derived from it
  2) Criterion curve for the requested preference (CRRA or CPT)
  3) Grid search for the optimal input
  4) Risk premium and certainty equivalent at the optimum

Every call builds a fresh surface; nothing is shared between scenarios.
"""

import dataclasses
import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Optional

import numpy as np

from pestrisk.economy.grids import InputGrid
from pestrisk.economy.logic import profit_matrix
from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.economy.shocks import ShockDistribution
from pestrisk.errors import PestRiskError
from pestrisk.preferences.criterion import certain_utility_fn, evaluate_criterion_curve
from pestrisk.preferences.types import CRRAPreference, RiskPreference
from pestrisk.solver.grid_search import argmax
from pestrisk.solver.premium import solve_premium
from pestrisk.solver.solver_config import SolverConfig

logger = logging.getLogger(__name__)


class ProfitSurface:
    """
    Profit realizations for one (production, prices) pair.

    Attributes:
        grid (InputGrid): Candidate input levels (n_grid,)
        dist (ShockDistribution): Discretized shock (n_eps,)
        production (ProductionParams): Production shape
        prices (ProfitParams): Price ratio and initial wealth
        profits (np.ndarray): Profit matrix of shape (n_grid, n_eps).
            Axis 0: input level, Axis 1: shock realization
        expected_profit (np.ndarray): Expected profit per input level (n_grid,)
    """

    def __init__(
        self,
        grid: InputGrid,
        dist: ShockDistribution,
        production: ProductionParams,
        prices: ProfitParams
    ):
        self.grid = grid
        self.dist = dist
        self.production = production
        self.prices = prices

        self.profits = profit_matrix(grid, dist, production, prices)
        self.profits.setflags(write=False)
        self.expected_profit = self.profits @ dist.probs

    @cached_property
    def risk_neutral_index(self) -> int:
        """Grid index maximizing expected profit (CRRA with r = 0)."""
        idx, _ = argmax(self.expected_profit)
        return idx

    @property
    def risk_neutral_input(self) -> float:
        return float(self.grid[self.risk_neutral_index])

    @property
    def min_profit(self) -> float:
        """Worst profit realization anywhere on the surface."""
        return float(self.profits.min())


@dataclass(frozen=True)
class ScenarioResult:
    """
    Solution of one scenario.

    Attributes:
        optimal_input: Maximizing input level x* (a member of the grid)
        optimal_index: Grid index of x*
        optimal_criterion_value: Expected utility (or CPT value) at x*
        optimal_expected_profit: Expected profit at x*
        risk_premium: RP with U(E[pi*] - RP) = criterion value
        certainty_equivalent: E[pi*] - RP
        risk_neutral_input: Maximizer of expected profit on the same grid
        input_change_pct: 100 * (x* - x_rn) / x_rn
        premium_ratio: RP / E[pi*]
        premium_at_bound: True if RP sits on the premium search boundary
    """
    optimal_input: float
    optimal_index: int
    optimal_criterion_value: float
    optimal_expected_profit: float
    risk_premium: float
    certainty_equivalent: float
    risk_neutral_input: float
    input_change_pct: float
    premium_ratio: float
    premium_at_bound: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


class ScenarioSolver:
    """
    Solves single scenarios with fixed numerical settings.

    Attributes:
        config (SolverConfig): Premium search settings (and, for
            solve_scenario, the grid and shock discretization).
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()

    def solve(
        self,
        production: ProductionParams,
        prices: ProfitParams,
        dist: ShockDistribution,
        grid: InputGrid,
        preference: RiskPreference
    ) -> ScenarioResult:
        """
        Solve one scenario.

        Errors raised along the way keep their type; the scenario parameters
        are attached to ``error.context`` before re-raising.
        """
        try:
            surface = ProfitSurface(grid, dist, production, prices)
            return self.solve_profit_surface(surface, preference)
        except PestRiskError as exc:
            exc.context.update({
                "production": production,
                "prices": prices,
                "preference": preference,
            })
            raise

    def solve_profit_surface(self, surface: ProfitSurface, preference: RiskPreference) -> ScenarioResult:
        """Solve a scenario whose profit surface is already built."""
        logger.debug(
            f"Solving {getattr(preference, 'label', preference)} on grid "
            f"n_grid={surface.grid.size}, n_eps={surface.dist.size}"
        )

        # 1. Criterion curve and grid search
        curve = evaluate_criterion_curve(surface.profits, surface.dist.probs, preference, surface.prices)
        idx, value = argmax(curve)
        x_star = float(surface.grid[idx])
        anchor = float(surface.expected_profit[idx])

        # 2. Premium: invert the certain utility at the optimum
        upper_limit = None
        if isinstance(preference, CRRAPreference) and not preference.is_risk_neutral:
            # U(anchor - RP) needs anchor - RP > 0
            upper_limit = anchor - max(abs(anchor) * 1e-12, 1e-12)

        solution = solve_premium(
            value,
            anchor,
            certain_utility_fn(preference, surface.prices),
            upper_limit=upper_limit,
            **self.config.premium_options(),
        )

        # 3. Comparison with the risk-neutral baseline
        x_rn = surface.risk_neutral_input
        input_change_pct = 100.0 * (x_star - x_rn) / x_rn
        premium_ratio = solution.premium / anchor if anchor != 0 else float("nan")

        logger.debug(
            f"x*={x_star:.4g} (risk neutral {x_rn:.4g}), E[pi*]={anchor:.4f}, "
            f"RP={solution.premium:.4f}"
        )

        return ScenarioResult(
            optimal_input=x_star,
            optimal_index=idx,
            optimal_criterion_value=float(value),
            optimal_expected_profit=anchor,
            risk_premium=solution.premium,
            certainty_equivalent=solution.certainty_equivalent,
            risk_neutral_input=x_rn,
            input_change_pct=float(input_change_pct),
            premium_ratio=float(premium_ratio),
            premium_at_bound=solution.at_bound,
        )


def solve_scenario(
    production: ProductionParams,
    prices: ProfitParams,
    preference: RiskPreference,
    dist: Optional[ShockDistribution] = None,
    grid: Optional[InputGrid] = None,
    config: Optional[SolverConfig] = None
) -> ScenarioResult:
    """
    Convenience wrapper: builds the shock distribution and input grid from
    ``config`` when they are not supplied, then solves the scenario.
    """
    config = config or SolverConfig()
    dist = dist if dist is not None else config.build_shock_distribution()
    grid = grid if grid is not None else config.build_input_grid()
    return ScenarioSolver(config).solve(production, prices, dist, grid, preference)
