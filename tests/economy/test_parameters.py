"""
Unit tests for the economic parameter containers.
"""

import logging

import pytest
from dataclasses import replace

from pestrisk.economy.parameters import ProductionParams, ProfitParams
from pestrisk.errors import InvalidArgument


def test_benchmark_defaults():
    prod = ProductionParams()
    prices = ProfitParams()

    assert (prod.c0, prod.a, prod.alpha, prod.b, prod.beta) == (0.0, 15.0, 0.30, 30.0, -0.10)
    assert (prices.py, prices.w0) == (11.0, 500.0)
    assert prod.is_risk_reducing


def test_input_validation_logic():
    base = ProfitParams()

    with pytest.raises(InvalidArgument, match="py"):
        replace(base, py=0.0)

    with pytest.raises(InvalidArgument, match="w0"):
        replace(base, w0=float("nan"))

    with pytest.raises(InvalidArgument, match="beta"):
        ProductionParams(beta=float("inf"))

    # Invalid errors still behave like ValueError for generic callers
    with pytest.raises(ValueError):
        ProfitParams(py=-1.0)


def test_unconventional_shape_is_allowed():
    """beta > 0 (risk-increasing input) is a modeling choice, not an error."""
    prod = ProductionParams(beta=0.1)
    assert not prod.is_risk_reducing


def test_with_overrides_logs_changes(caplog):
    with caplog.at_level(logging.INFO, logger="pestrisk.economy.parameters"):
        prod = ProductionParams.with_overrides(beta=-0.3)

    assert prod.beta == -0.3
    assert prod.a == ProductionParams().a
    assert "beta: -0.1 -> -0.3" in caplog.text


def test_with_overrides_rejects_typos():
    with pytest.raises(InvalidArgument, match="Invalid override keys"):
        ProfitParams.with_overrides(price=12.0)


def test_with_overrides_from_base():
    base = ProfitParams(py=8.0, w0=1000.0)
    updated = ProfitParams.with_overrides(base, log_changes=False, w0=2000.0)

    assert updated.py == 8.0
    assert updated.w0 == 2000.0
    assert base.w0 == 1000.0
