"""
Tests for display formatting helpers.
"""

import math

import pytest

from strategy_lab.config import settings
from strategy_lab.utils.helpers import (
    format_breakevens,
    format_currency,
    format_greek,
    format_number,
    format_percent,
    is_available,
)


@pytest.fixture
def european(monkeypatch):
    monkeypatch.setattr(settings.display, "decimal_comma", True)
    monkeypatch.setattr(settings.display, "currency_symbol", "$")
    monkeypatch.setattr(settings.display, "unavailable_text", "N/A")


@pytest.mark.usefixtures("european")
class TestFormatting:
    """Tests for number formatting."""

    def test_format_number(self):
        assert format_number(1234.567) == "1.234,57"
        assert format_number(-0.5, 1) == "-0,5"

    def test_us_style(self, monkeypatch):
        monkeypatch.setattr(settings.display, "decimal_comma", False)
        assert format_number(1234.567) == "1,234.57"

    @pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf])
    def test_unavailable(self, value):
        assert not is_available(value)
        assert format_number(value) == "N/A"
        assert format_currency(value) == "N/A"
        assert format_percent(value) == "N/A"
        assert format_greek(value) == "N/A"

    def test_format_currency(self):
        assert format_currency(1500) == "$1.500,00"
        assert format_currency(-600) == "-$600,00"

    def test_format_percent(self):
        assert format_percent(66.666) == "66,7%"

    def test_format_greek(self):
        assert format_greek(0.12346) == "+0,1235"
        assert format_greek(-0.5) == "-0,5000"

    def test_format_breakevens(self):
        assert format_breakevens([94, 106]) == "$94,00 / $106,00"
        assert format_breakevens([]) == "None in range"
