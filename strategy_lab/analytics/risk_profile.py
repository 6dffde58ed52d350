"""
Risk profile of a strategy: breakevens, extrema and return on risk.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np
from loguru import logger

from strategy_lab.analytics.aggregation import active_only, aggregate, aggregate_curve
from strategy_lab.analytics.payoff import action_sign, contract_multiplier
from strategy_lab.analytics.sampling import CurveSampler
from strategy_lab.data.models import InstrumentType, Leg, MarketState, SampledCurve


# Relative to the largest absolute payoff on the curve
FLAT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class StrategyAnalysis:
    """
    Summary statistics derived from a sampled total payoff curve.

    Figures are None when the curve is empty. The unbounded flags come from
    comparing boundary samples with the interior, so they are only as good
    as the sampling window and resolution.
    """

    breakevens: list[float] = field(default_factory=list)
    max_profit: Optional[float] = None
    max_profit_price: Optional[float] = None
    max_loss: Optional[float] = None
    max_loss_price: Optional[float] = None
    unbounded_profit: bool = False
    unbounded_loss: bool = False
    return_on_risk: Optional[float] = None

    @property
    def is_available(self) -> bool:
        return self.max_profit is not None

    @classmethod
    def unavailable(cls) -> "StrategyAnalysis":
        return cls()

    def __str__(self) -> str:
        if not self.is_available:
            return "Strategy Analysis: no data"
        profit = "unbounded" if self.unbounded_profit else f"{self.max_profit:,.2f}"
        loss = "unbounded" if self.unbounded_loss else f"{self.max_loss:,.2f}"
        breakevens = ", ".join(f"{b:.2f}" for b in self.breakevens) or "none in range"
        return (
            f"Strategy Analysis:\n"
            f"  Max profit: {profit}\n"
            f"  Max loss:   {loss}\n"
            f"  Breakevens: {breakevens}"
        )


@dataclass(frozen=True)
class TailRisk:
    """Exact classification of payoff growth as the settlement price rises without bound."""

    upside_slope: float
    unbounded_profit: bool
    unbounded_loss: bool


@dataclass(frozen=True)
class StrategySummary:
    """Analysis of the strike-anchored curve plus the payoff at spot."""

    analysis: StrategyAnalysis
    payoff_at_spot: Optional[float]
    tail_risk: Optional[TailRisk]
    curve: SampledCurve


def find_breakevens(prices: np.ndarray, values: np.ndarray, step: float) -> list[float]:
    """
    Zero crossings of the sampled payoff, linearly interpolated.

    A crossing within 2 * step of one already recorded is dropped.
    """
    breakevens: list[float] = []
    signs = np.sign(values)
    for i in range(1, len(values)):
        if signs[i - 1] == signs[i]:
            continue
        x1, y1 = prices[i - 1], values[i - 1]
        x2, y2 = prices[i], values[i]
        breakeven = float(x1 - y1 * (x2 - x1) / (y2 - y1))
        if all(abs(b - breakeven) > step * 2 for b in breakevens):
            breakevens.append(breakeven)
    return breakevens


def analyze(curve: SampledCurve) -> StrategyAnalysis:
    """Breakevens, extrema, unboundedness and return on risk of a total payoff curve."""
    if curve.is_empty:
        return StrategyAnalysis.unavailable()

    prices = np.asarray(curve.prices, dtype=float)
    values = np.asarray(curve.values, dtype=float)

    max_idx = int(np.argmax(values))
    min_idx = int(np.argmin(values))
    max_profit = float(values[max_idx])
    max_loss = float(values[min_idx])

    # Boundary samples are compared against the interior only; flat tails
    # differing by rounding noise do not count as exceeding it
    interior = values[1:-1]
    if len(interior) > 0:
        boundary = (values[0], values[-1])
        tolerance = FLAT_TOLERANCE * max(1.0, float(np.abs(values).max()))
        unbounded_profit = bool(max(boundary) > interior.max() + tolerance)
        unbounded_loss = bool(min(boundary) < interior.min() - tolerance)
    else:
        unbounded_profit = unbounded_loss = False

    return_on_risk = None
    if not unbounded_profit and not unbounded_loss and max_loss < 0:
        return_on_risk = max_profit / abs(max_loss) * 100

    analysis = StrategyAnalysis(
        breakevens=find_breakevens(prices, values, curve.step),
        max_profit=max_profit,
        max_profit_price=float(prices[max_idx]),
        max_loss=max_loss,
        max_loss_price=float(prices[min_idx]),
        unbounded_profit=unbounded_profit,
        unbounded_loss=unbounded_loss,
        return_on_risk=return_on_risk,
    )
    logger.debug(
        f"Analyzed {len(curve)} samples: {len(analysis.breakevens)} breakevens, "
        f"max {max_profit:.2f}, min {max_loss:.2f}"
    )
    return analysis


def classify_tail_risk(legs: Iterable[Leg]) -> TailRisk:
    """
    Classify unbounded risk from the payoff slope above every strike.

    Settlement prices cannot fall below zero, so only the upside tail can
    be unbounded: its slope is the signed share exposure of the active
    calls and underlying legs.
    """
    slope = 0.0
    for leg in active_only(legs):
        if leg.instrument_type == InstrumentType.PUT:
            continue
        slope += action_sign(leg) * leg.quantity * contract_multiplier(leg)
    return TailRisk(
        upside_slope=slope,
        unbounded_profit=slope > 0,
        unbounded_loss=slope < 0,
    )


def analyze_strategy(
    legs: Sequence[Leg],
    market_state: MarketState,
    sampler: Optional[CurveSampler] = None,
) -> StrategySummary:
    """Risk profile of the active legs over the strike-anchored price window."""
    sampler = sampler or CurveSampler()
    active = active_only(legs)
    if not active:
        return StrategySummary(
            analysis=StrategyAnalysis.unavailable(),
            payoff_at_spot=None,
            tail_risk=None,
            curve=SampledCurve.empty(),
        )

    prices = sampler.anchored_grid(active)
    curve = aggregate_curve(active, prices).total
    return StrategySummary(
        analysis=analyze(curve),
        payoff_at_spot=aggregate(active, market_state.underlying_price).total,
        tail_risk=classify_tail_risk(active),
        curve=curve,
    )
