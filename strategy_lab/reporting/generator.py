"""
Strategy report generation.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, select_autoescape
from loguru import logger

from strategy_lab.analytics.greeks import GreeksCalculator, StrategyGreeks
from strategy_lab.analytics.risk_profile import StrategySummary, analyze_strategy
from strategy_lab.analytics.scenarios import ScenarioTable, build_scenario_table
from strategy_lab.config import settings
from strategy_lab.data.models import StrategySnapshot
from strategy_lab.utils.helpers import (
    format_breakevens,
    format_currency,
    format_greek,
    format_number,
    format_percent,
)


REPORT_TEMPLATE = '''
<!DOCTYPE html>
<html>
<head>
    <title>{{ name }} - Strategy Report</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; background: #f5f5f5; }
        .container { max-width: 1100px; margin: 0 auto; background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        h1 { color: #1a1a2e; border-bottom: 3px solid #4a69bd; padding-bottom: 10px; }
        h2 { color: #4a69bd; margin-top: 30px; }
        .metric-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 20px; margin: 20px 0; }
        .metric-box { background: #f8f9fa; padding: 20px; border-radius: 8px; text-align: center; }
        .metric-value { font-size: 24px; font-weight: bold; color: #1a1a2e; }
        .metric-label { color: #666; font-size: 14px; margin-top: 5px; }
        .positive { color: #27ae60; }
        .negative { color: #e74c3c; }
        table { width: 100%; border-collapse: collapse; margin: 20px 0; }
        th, td { padding: 8px; text-align: right; border-bottom: 1px solid #ddd; }
        th { background: #4a69bd; color: white; text-align: center; }
        tr.current { background: #fff6bf; }
        .timestamp { color: #999; font-size: 12px; text-align: right; }
    </style>
</head>
<body>
    <div class="container">
        <h1>{{ name }}</h1>
        <p class="timestamp">Generated: {{ timestamp }}</p>

        <h2>Market &amp; Model</h2>
        <div class="metric-grid">
            <div class="metric-box">
                <div class="metric-value">{{ spot | currency }}</div>
                <div class="metric-label">Underlying Price</div>
            </div>
            <div class="metric-box">
                <div class="metric-value">{{ params.time_to_expiry_days | number(0) }}</div>
                <div class="metric-label">Days to Expiry</div>
            </div>
            <div class="metric-box">
                <div class="metric-value">{{ params.risk_free_rate_percent | percent }}</div>
                <div class="metric-label">Risk-Free Rate</div>
            </div>
            <div class="metric-box">
                <div class="metric-value">{{ params.volatility_percent | percent }}</div>
                <div class="metric-label">Volatility</div>
            </div>
        </div>

        <h2>Risk Profile</h2>
        <div class="metric-grid">
            <div class="metric-box">
                <div class="metric-value positive">{{ "Unlimited" if analysis.unbounded_profit else (analysis.max_profit | currency) }}</div>
                <div class="metric-label">Max Profit{% if analysis.return_on_risk is not none %} ({{ analysis.return_on_risk | percent }} on risk){% endif %}</div>
            </div>
            <div class="metric-box">
                <div class="metric-value negative">{{ "Unlimited" if analysis.unbounded_loss else (analysis.max_loss | currency) }}</div>
                <div class="metric-label">Max Loss</div>
            </div>
            <div class="metric-box">
                <div class="metric-value">{{ payoff_at_spot | currency }}</div>
                <div class="metric-label">Payoff at Current Price</div>
            </div>
            <div class="metric-box">
                <div class="metric-value">{{ breakevens }}</div>
                <div class="metric-label">Breakevens</div>
            </div>
        </div>

        <h2>Greeks</h2>
        <div class="metric-grid">
            {% for label, value in greeks %}
            <div class="metric-box">
                <div class="metric-value">{{ value | greek }}</div>
                <div class="metric-label">{{ label }}</div>
            </div>
            {% endfor %}
        </div>

        <h2>Scenario P&amp;L</h2>
        {% if rows %}
        <table>
            <thead>
                <tr>
                    <th colspan="2">Scenario</th>
                    {% for gid in group_ids %}<th colspan="2">{{ group_names.get(gid, gid) }}</th>{% endfor %}
                    <th colspan="2">Total</th>
                </tr>
                <tr>
                    <th>Price</th><th>Change</th>
                    {% for gid in group_ids %}<th>Finish</th><th>Theoretical</th>{% endfor %}
                    <th>Finish</th><th>Theoretical</th>
                </tr>
            </thead>
            <tbody>
                {% for row in rows %}
                <tr class="{{ 'current' if row.is_current_price else '' }}">
                    <td>{{ row.price | number }}</td>
                    <td>{{ row.shock_percent }}%</td>
                    {% for gid in group_ids %}
                    <td>{{ row.per_group[gid].finish | number }}</td>
                    <td>{{ row.per_group[gid].theoretical | number }}</td>
                    {% endfor %}
                    <td>{{ row.total.finish | number }}</td>
                    <td>{{ row.total.theoretical | number }}</td>
                </tr>
                {% endfor %}
            </tbody>
        </table>
        {% else %}
        <p>No active legs.</p>
        {% endif %}
    </div>
</body>
</html>
'''


class ReportGenerator:
    """Render HTML reports of a strategy's risk profile."""

    def __init__(self, reports_dir: Optional[Path] = None):
        self.reports_dir = reports_dir or settings.reports_dir
        self.env = Environment(autoescape=select_autoescape(default_for_string=True))
        self.env.filters.update(
            number=format_number,
            currency=format_currency,
            percent=format_percent,
            greek=format_greek,
        )
        self.template = self.env.from_string(REPORT_TEMPLATE)

    def render(
        self,
        snapshot: StrategySnapshot,
        summary: Optional[StrategySummary] = None,
        greeks: Optional[StrategyGreeks] = None,
        table: Optional[ScenarioTable] = None,
    ) -> str:
        """Render the report; missing analytics are computed from the snapshot."""
        if summary is None:
            summary = analyze_strategy(snapshot.legs, snapshot.market_state)
        if greeks is None:
            greeks = GreeksCalculator(snapshot.model_parameters).calculate_strategy_greeks(
                snapshot.legs, snapshot.underlying_price
            )
        if table is None:
            table = build_scenario_table(
                snapshot.legs, snapshot.market_state, snapshot.model_parameters
            )
        context = self._build_context(snapshot, summary, greeks, table)
        return self.template.render(**context)

    def generate(self, snapshot: StrategySnapshot, path: Optional[Path] = None) -> Path:
        """
        Write the report for `snapshot`.

        Returns:
            Path to generated report
        """
        html_content = self.render(snapshot)

        if path is None:
            self.reports_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            slug = "".join(c if c.isalnum() else "_" for c in snapshot.name).strip("_") or "strategy"
            path = self.reports_dir / f"{slug}_{stamp}.html"
        path.write_text(html_content, encoding="utf-8")

        logger.info(f"Generated report: {path}")
        return path

    def _build_context(
        self,
        snapshot: StrategySnapshot,
        summary: StrategySummary,
        greeks: StrategyGreeks,
        table: ScenarioTable,
    ) -> dict:
        """Build template context from data."""
        total = greeks.total
        return {
            "name": snapshot.name,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "spot": snapshot.underlying_price,
            "params": snapshot.model_parameters,
            "analysis": summary.analysis,
            "payoff_at_spot": summary.payoff_at_spot,
            "breakevens": format_breakevens(summary.analysis.breakevens),
            "greeks": [
                ("Delta", total.delta),
                ("Gamma", total.gamma),
                ("Theta / Day", total.theta),
                ("Vega", total.vega),
            ],
            "rows": table.rows,
            "group_ids": table.group_ids,
            "group_names": snapshot.group_names(),
        }
