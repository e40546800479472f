"""Shared fixtures for bit-string calculator tests."""

from __future__ import annotations

import pytest

from bitcalc.arith import DivZeroMode
from bitcalc.calculator import BitCalculator
from bitcalc.config import get_settings


@pytest.fixture
def calc() -> BitCalculator:
    return BitCalculator()


@pytest.fixture
def calc_div_error() -> BitCalculator:
    return BitCalculator(div_zero_mode=DivZeroMode.ERROR)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; drop the cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
