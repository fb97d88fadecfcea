"""
pestrisk/utils/

Helpers outside the numerical core.

Modules:
    logging_config: console/file logging for sweeps, tagged by scenario
    overrides: shared ``with_overrides`` body for frozen dataclasses
"""

from pestrisk.utils.logging_config import (
    setup_logging,
    scenario_context,
)
from pestrisk.utils.overrides import apply_overrides

__all__ = [
    "setup_logging",
    "scenario_context",
    "apply_overrides",
]
