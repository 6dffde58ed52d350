"""Reporting layer for strategy risk reports."""

from strategy_lab.reporting.generator import ReportGenerator

__all__ = [
    "ReportGenerator",
]
