"""Analytics layer for option pricing, payoffs, Greeks and risk profiles."""

from strategy_lab.analytics.aggregation import (
    AggregateValue,
    CurveSet,
    aggregate,
    aggregate_curve,
    partition_groups,
)
from strategy_lab.analytics.greeks import GreeksCalculator, StrategyGreeks
from strategy_lab.analytics.payoff import CONTRACT_SIZE, payoff
from strategy_lab.analytics.pricing import BlackScholes, Greeks, greeks, theoretical_price
from strategy_lab.analytics.risk_profile import (
    StrategyAnalysis,
    StrategySummary,
    TailRisk,
    analyze,
    analyze_strategy,
    classify_tail_risk,
)
from strategy_lab.analytics.sampling import CurveSampler, SamplingPolicy, sample_curve
from strategy_lab.analytics.scenarios import (
    ScenarioTable,
    ScenarioTableBuilder,
    build_scenario_table,
)

__all__ = [
    "AggregateValue",
    "CurveSet",
    "aggregate",
    "aggregate_curve",
    "partition_groups",
    "GreeksCalculator",
    "StrategyGreeks",
    "CONTRACT_SIZE",
    "payoff",
    "BlackScholes",
    "Greeks",
    "greeks",
    "theoretical_price",
    "StrategyAnalysis",
    "StrategySummary",
    "TailRisk",
    "analyze",
    "analyze_strategy",
    "classify_tail_risk",
    "CurveSampler",
    "SamplingPolicy",
    "sample_curve",
    "ScenarioTable",
    "ScenarioTableBuilder",
    "build_scenario_table",
]
