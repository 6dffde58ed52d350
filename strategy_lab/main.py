"""
Command-line entry point: analyze a saved strategy snapshot.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from strategy_lab.analytics.greeks import GreeksCalculator
from strategy_lab.analytics.risk_profile import StrategySummary, analyze_strategy
from strategy_lab.analytics.scenarios import build_scenario_table
from strategy_lab.data.models import StrategySnapshot
from strategy_lab.data.templates import TEMPLATES, apply_template
from strategy_lab.reporting.generator import ReportGenerator
from strategy_lab.utils.helpers import (
    format_breakevens,
    format_currency,
    format_greek,
    format_percent,
)
from strategy_lab.utils.logging import setup_logging


def load_snapshot(path: Optional[Path], template: Optional[str]) -> StrategySnapshot:
    """Snapshot from a JSON file, a template, or both (template legs replace the file's)."""
    if path is not None:
        snapshot = StrategySnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    else:
        snapshot = StrategySnapshot(name=template or "Strategy")

    if template is not None:
        snapshot = snapshot.model_copy(update={"legs": apply_template(template)})
    return snapshot


def format_summary(summary: StrategySummary) -> str:
    analysis = summary.analysis
    max_profit = "Unlimited" if analysis.unbounded_profit else format_currency(analysis.max_profit)
    max_loss = "Unlimited" if analysis.unbounded_loss else format_currency(analysis.max_loss)
    lines = [
        f"Max profit:      {max_profit}",
        f"Max loss:        {max_loss}",
        f"Return on risk:  {format_percent(analysis.return_on_risk)}",
        f"Payoff at spot:  {format_currency(summary.payoff_at_spot)}",
        f"Breakevens:      {format_breakevens(analysis.breakevens)}",
    ]
    return "\n".join(lines)


def run(snapshot: StrategySnapshot, report: Optional[Path] = None) -> None:
    summary = analyze_strategy(snapshot.legs, snapshot.market_state)
    greeks = GreeksCalculator(snapshot.model_parameters).calculate_strategy_greeks(
        snapshot.legs, snapshot.underlying_price
    )
    table = build_scenario_table(snapshot.legs, snapshot.market_state, snapshot.model_parameters)

    print("=" * 50)
    print(snapshot.name)
    print("=" * 50)
    print(format_summary(summary))
    print("-" * 50)
    total = greeks.total
    print(
        f"Delta {format_greek(total.delta)} | Gamma {format_greek(total.gamma)} | "
        f"Theta {format_greek(total.theta)} | Vega {format_greek(total.vega)}"
    )
    print("-" * 50)
    if len(table):
        print(table.to_dataframe(snapshot.group_names()).round(2).to_string(index=False))
    else:
        print("No active legs.")

    if report is not None:
        ReportGenerator().generate(snapshot, report)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Analyze a multi-leg options strategy.")
    parser.add_argument("snapshot", nargs="?", type=Path, help="strategy snapshot JSON file")
    parser.add_argument("--template", choices=sorted(TEMPLATES), help="use a predefined strategy")
    parser.add_argument("--report", type=Path, help="write an HTML report to this path")
    args = parser.parse_args(argv)

    if args.snapshot is None and args.template is None:
        parser.error("a snapshot file or --template is required")

    setup_logging(log_to_file=False)

    try:
        snapshot = load_snapshot(args.snapshot, args.template)
    except (OSError, ValidationError) as e:
        logger.error(f"Failed to load strategy: {e}")
        return 1

    run(snapshot, args.report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
