"""
Display formatting helpers.
"""

import math
from typing import Iterable, Optional

from strategy_lab.config import settings


def is_available(value: Optional[float]) -> bool:
    """False for None, NaN and infinities."""
    return value is not None and math.isfinite(value)


def format_number(value: Optional[float], decimals: int = 2) -> str:
    """Format a number, European style (1.234,56) unless configured otherwise."""
    display = settings.display
    if not is_available(value):
        return display.unavailable_text

    text = f"{value:,.{decimals}f}"
    if display.decimal_comma:
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return text


def format_currency(value: Optional[float], decimals: int = 2) -> str:
    """Format value as currency string."""
    if not is_available(value):
        return settings.display.unavailable_text
    symbol = settings.display.currency_symbol
    if value < 0:
        return f"-{symbol}{format_number(abs(value), decimals)}"
    return f"{symbol}{format_number(value, decimals)}"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    """Format a value already expressed in percent."""
    if not is_available(value):
        return settings.display.unavailable_text
    return f"{format_number(value, decimals)}%"


def format_greek(value: Optional[float], decimals: int = 4) -> str:
    """Format Greek value with an explicit sign."""
    if not is_available(value):
        return settings.display.unavailable_text
    sign = "+" if value > 0 else ""
    return f"{sign}{format_number(value, decimals)}"


def format_breakevens(breakevens: Iterable[float], separator: str = " / ") -> str:
    formatted = [format_currency(b) for b in breakevens]
    return separator.join(formatted) if formatted else "None in range"
