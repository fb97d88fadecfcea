"""
pestrisk/utils/overrides.py

Shared body of the ``with_overrides`` constructors on the frozen parameter
and configuration dataclasses.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional

from pestrisk.errors import InvalidArgument


def apply_overrides(
    cls,
    base: Optional[Any],
    overrides: Dict[str, Any],
    log_changes: bool = True,
    log: Optional[logging.Logger] = None
):
    """
    Copy ``base`` (or a default ``cls()``) with ``overrides`` applied.

    Args:
        cls: Frozen dataclass type
        base: Instance to update; defaults are used if None
        overrides: Field names and new values
        log_changes: Whether to log the fields that actually change
        log: Logger of the calling module, so changes are attributed to it

    Raises:
        InvalidArgument: If a key is not a field of ``cls``.
    """
    base = base or cls()

    # 1. Validate keys to prevent typos
    valid_keys = {f.name for f in dataclasses.fields(cls)}
    if unknown := set(overrides) - valid_keys:
        raise InvalidArgument(f"Invalid override keys: {unknown}. Valid: {sorted(valid_keys)}")

    # 2. Log significant changes
    if log_changes:
        changes = [
            f"{k}: {getattr(base, k)} -> {v}"
            for k, v in overrides.items()
            if getattr(base, k) != v
        ]
        if changes:
            (log or logging.getLogger(__name__)).info(f"{cls.__name__} overrides: {', '.join(changes)}")

    # __post_init__ re-validates the new values
    return dataclasses.replace(base, **overrides)
