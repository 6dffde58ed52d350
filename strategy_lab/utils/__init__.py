"""Utility functions and helpers."""

from strategy_lab.utils.logging import setup_logging
from strategy_lab.utils.helpers import format_currency, format_number

__all__ = [
    "setup_logging",
    "format_currency",
    "format_number",
]
