"""Shared fixtures for calculator tests."""
from __future__ import annotations

import pytest

from bounds import OperandMode
from calculator import Calculator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never inherit CALC_MODE / LOG_LEVEL from the developer's shell."""
    monkeypatch.delenv("CALC_MODE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def calc_signed() -> Calculator:
    return Calculator(OperandMode.SIGNED)


@pytest.fixture
def calc_unsigned() -> Calculator:
    return Calculator(OperandMode.UNSIGNED)
