"""
pestrisk/utils/logging_config.py

Logging for scenario sweeps.

Records emitted while a scenario is being solved (premium boundary warnings,
clipped search intervals, optimum found) carry that scenario's label, so a
sweep log can be read without matching messages back to scenarios by hand.

Usage:
    from pestrisk.solver.sweep import run_sweep
    records = run_sweep(scenarios, log_level='INFO')

    # or, around your own loop
    from pestrisk.utils.logging_config import scenario_context, setup_logging
    setup_logging('DEBUG', log_file='sweep.log')
    with scenario_context('S003 py=11 w0=500 CRRA(r=2)'):
        ...
"""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

NO_SCENARIO = "-"


class ScenarioFilter(logging.Filter):
    """Stamps every record passing a handler with the active scenario label."""

    def __init__(self):
        super().__init__()
        self.label = NO_SCENARIO

    def filter(self, record: logging.LogRecord) -> bool:
        record.scenario = self.label
        return True


_scenario_filter = ScenarioFilter()


class SweepFormatter(logging.Formatter):
    """
    Console format: [LEVEL] module | scenario: message

    The scenario part is left out between scenarios.

    Example: [WARNING] premium | S007 py=11 w0=500 CRRA(r=4): Risk premium 500.0000 sits at ...
    """

    def format(self, record: logging.LogRecord) -> str:
        module_short = record.name.rsplit('.', 1)[-1]
        scenario = getattr(record, 'scenario', NO_SCENARIO)
        where = module_short if scenario == NO_SCENARIO else f"{module_short} | {scenario}"
        line = f"[{record.levelname}] {where}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


@contextmanager
def scenario_context(label: str) -> Iterator[None]:
    """Tag records emitted inside the block with ``label``; nesting restores the outer label."""
    previous = _scenario_filter.label
    _scenario_filter.label = label or NO_SCENARIO
    try:
        yield
    finally:
        _scenario_filter.label = previous


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None) -> None:
    """
    Route pestrisk logs to the console (and optionally a file).

    Args:
        level: 'DEBUG', 'INFO', 'WARNING', 'ERROR' or 'CRITICAL'
               - 'DEBUG': optimum and premium of every scenario
               - 'INFO': parameter overrides and sweep progress
               - 'WARNING': boundary premiums and failed scenarios only
        log_file: Optional path. The file receives DEBUG detail with
            timestamps regardless of ``level``.

    Handlers previously installed by this function are replaced, so calling
    it once per sweep does not duplicate output. Handlers installed by other
    code are left alone.
    """
    level_upper = level.upper()
    console_level = logging.getLevelName(level_upper)
    if not isinstance(console_level, int):
        raise ValueError(f"Invalid logging level: {level}. Use DEBUG, INFO, WARNING, ERROR, or CRITICAL")

    package_logger = logging.getLogger('pestrisk')
    for handler in list(package_logger.handlers):
        if _scenario_filter in handler.filters:
            package_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.addFilter(_scenario_filter)
    console_handler.setFormatter(SweepFormatter())
    package_logger.addHandler(console_handler)
    package_logger.setLevel(console_level)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(_scenario_filter)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(scenario)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.DEBUG)
