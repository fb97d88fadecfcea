"""
sweep.py

Parameter sweeps over scenarios.

The nested loops over production shape, price ratio, initial wealth and risk
preference are written as an explicit Cartesian enumeration. Each scenario is
solved independently; results come back in enumeration order.

A scenario that fails is recorded as a flagged cell (``result is None`` plus
the error text). No default value is substituted.
"""

import itertools
import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.errors import InvalidArgument, PestRiskError
from pestrisk.preferences.types import CPTPreference, CRRAPreference, RiskPreference
from pestrisk.solver.scenario import ScenarioResult, ScenarioSolver
from pestrisk.solver.solver_config import SolverConfig
from pestrisk.utils.logging_config import scenario_context, setup_logging

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "optimal_input",
    "optimal_index",
    "optimal_criterion_value",
    "optimal_expected_profit",
    "risk_premium",
    "certainty_equivalent",
    "risk_neutral_input",
    "input_change_pct",
    "premium_ratio",
    "premium_at_bound",
]


@dataclass(frozen=True)
class Scenario:
    """One point of a sweep."""
    production: ProductionParams
    prices: ProfitParams
    preference: RiskPreference
    label: str = ""


@dataclass(frozen=True)
class SweepRecord:
    """
    Outcome of one scenario in a sweep.

    Attributes:
        scenario: The scenario that was solved
        result: ScenarioResult, or None if solving failed
        error: Error message of a failed scenario
        duration: Wall time in seconds
    """
    scenario: Scenario
    result: Optional[ScenarioResult]
    error: Optional[str] = None
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.result is not None


def enumerate_scenarios(
    productions: Sequence[ProductionParams],
    price_ratios: Sequence[float],
    wealth_levels: Sequence[float],
    preferences: Sequence[RiskPreference]
) -> List[Scenario]:
    """
    Cartesian product of the sweep axes.

    Order is row-major in (production, price ratio, wealth, preference), so
    the last axis varies fastest.
    """
    scenarios = []
    for i, (production, py, w0, preference) in enumerate(
        itertools.product(productions, price_ratios, wealth_levels, preferences)
    ):
        prices = ProfitParams(py=float(py), w0=float(w0))
        label = f"S{i:03d} py={py:g} w0={w0:g} {getattr(preference, 'label', preference)}"
        scenarios.append(Scenario(production=production, prices=prices, preference=preference, label=label))
    return scenarios


def run_sweep(
    scenarios: Iterable[Scenario],
    config: Optional[SolverConfig] = None,
    solver: Optional[ScenarioSolver] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None
) -> List[SweepRecord]:
    """
    Solve every scenario on one shared shock distribution and input grid.

    Args:
        scenarios: Scenarios to solve
        config: Numerical settings (defaults if None)
        solver: Solver instance; built from ``config`` if None. Its config
            drives the grid, the shock and the premium search.
        log_level: If given, install the sweep console logging at this level
            (see pestrisk.utils.logging_config.setup_logging)
        log_file: Optional DEBUG log file, used together with ``log_level``

    Returns:
        One SweepRecord per scenario, in input order.

    Raises:
        InvalidArgument: If both ``config`` and ``solver`` are given and
            their settings differ.
    """
    if solver is not None:
        if config is not None and config != solver.config:
            raise InvalidArgument(
                "run_sweep got a config that differs from solver.config; pass only one of them"
            )
        config = solver.config
    else:
        config = config or SolverConfig()
        solver = ScenarioSolver(config)

    if log_level is not None:
        setup_logging(log_level, log_file=log_file)

    dist = config.build_shock_distribution()
    grid = config.build_input_grid()

    scenarios = list(scenarios)
    total = len(scenarios)
    records = []

    logger.info(f"Starting sweep: {total} scenarios, n_grid={grid.size}, n_eps={dist.size}")

    for i, scenario in enumerate(scenarios, 1):
        start_time = time.time()
        with scenario_context(scenario.label or f"#{i}"):
            try:
                result = solver.solve(scenario.production, scenario.prices, dist, grid, scenario.preference)
                error = None
            except PestRiskError as exc:
                result = None
                error = f"{type(exc).__name__}: {exc}"
                logger.warning(f"[{i}/{total}] failed: {error}")

            duration = time.time() - start_time
            logger.debug(f"[{i}/{total}] done in {duration:.2f}s")
        records.append(SweepRecord(scenario=scenario, result=result, error=error, duration=duration))

    n_failed = sum(not r.ok for r in records)
    logger.info(f"Sweep finished: {total - n_failed} solved, {n_failed} failed")
    return records


def _preference_columns(preference: RiskPreference) -> dict:
    if isinstance(preference, CRRAPreference):
        return {"model": "CRRA", "r": preference.r}
    elif isinstance(preference, CPTPreference):
        return {
            "model": "CPT",
            "rr_plus": preference.rr_plus,
            "rr_minus": preference.rr_minus,
            "lam": preference.lam,
            "gamma": preference.gamma,
            "delta": preference.delta,
            "reference_point": preference.reference_point,
        }
    return {"model": type(preference).__name__}


def sweep_to_frame(records: Sequence[SweepRecord]) -> pd.DataFrame:
    """
    Tidy table of a sweep: one row per scenario.

    Failed scenarios keep their row, with NaN results and the error message
    in the ``error`` column.
    """
    rows = []
    for record in records:
        sc = record.scenario
        row = {
            "label": sc.label,
            "c0": sc.production.c0,
            "a": sc.production.a,
            "alpha": sc.production.alpha,
            "b": sc.production.b,
            "beta": sc.production.beta,
            "py": sc.prices.py,
            "w0": sc.prices.w0,
        }
        row.update(_preference_columns(sc.preference))

        if record.ok:
            row.update(record.result.to_dict())
        else:
            row.update({col: np.nan for col in RESULT_COLUMNS})
        row["error"] = record.error
        rows.append(row)

    return pd.DataFrame(rows)
