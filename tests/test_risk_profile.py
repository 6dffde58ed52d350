"""
Tests for strategy risk profile analytics.
"""

import numpy as np
import pytest

from strategy_lab.analytics.aggregation import aggregate_curve
from strategy_lab.analytics.risk_profile import (
    StrategyAnalysis,
    analyze,
    analyze_strategy,
    classify_tail_risk,
    find_breakevens,
)
from strategy_lab.analytics.sampling import CurveSampler
from strategy_lab.data.models import Action, InstrumentType, Leg, MarketState, SampledCurve
from strategy_lab.data.templates import apply_template


def anchored_curve(legs):
    prices = CurveSampler().anchored_grid(legs)
    return aggregate_curve(legs, prices).total


class TestAnalyze:
    """Tests for analyze() on sampled curves."""

    @pytest.fixture
    def straddle(self):
        return apply_template("Long Straddle")

    @pytest.fixture
    def covered_call(self):
        return apply_template("Covered Call")

    @pytest.fixture
    def iron_condor(self):
        return apply_template("Iron Condor")

    def test_long_straddle_breakevens(self, straddle):
        analysis = analyze(anchored_curve(straddle))

        assert len(analysis.breakevens) == 2
        assert analysis.breakevens[0] == pytest.approx(94, abs=1e-6)
        assert analysis.breakevens[1] == pytest.approx(106, abs=1e-6)

    def test_long_straddle_risk(self, straddle):
        analysis = analyze(anchored_curve(straddle))

        assert analysis.max_loss == pytest.approx(-600)
        assert analysis.max_loss_price == pytest.approx(100)
        assert analysis.unbounded_profit is True
        assert analysis.unbounded_loss is False
        assert analysis.return_on_risk is None

    def test_covered_call_boundary_heuristic(self, covered_call):
        curve = anchored_curve(covered_call)
        analysis = analyze(curve)

        # 1 share against a 100-share short call: capped upside at the strike
        assert analysis.unbounded_profit is False
        assert analysis.max_profit == pytest.approx(205)
        assert analysis.max_profit_price == pytest.approx(105)
        # ...and a loss that keeps growing to the window edge
        assert analysis.unbounded_loss is True
        assert analysis.max_loss == pytest.approx(curve.values[-1])
        assert np.isfinite(analysis.max_loss)
        assert analysis.return_on_risk is None

    def test_covered_call_breakeven(self, covered_call):
        analysis = analyze(anchored_curve(covered_call))
        # 10600 - 99 S = 0
        assert analysis.breakevens == pytest.approx([10600 / 99])

    def test_iron_condor_bounded(self, iron_condor):
        analysis = analyze(anchored_curve(iron_condor))

        assert analysis.unbounded_profit is False
        assert analysis.unbounded_loss is False
        assert analysis.max_profit == pytest.approx(200)
        assert analysis.max_loss == pytest.approx(-300)
        assert analysis.return_on_risk == pytest.approx(200 / 300 * 100)
        assert analysis.breakevens == pytest.approx([93, 107])

    def test_empty_curve_is_unavailable(self):
        analysis = analyze(SampledCurve.empty())

        assert not analysis.is_available
        assert analysis.max_profit is None
        assert analysis.max_loss is None
        assert analysis.breakevens == []
        assert analysis.return_on_risk is None

    def test_near_duplicate_crossings_coalesced(self):
        prices = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
        values = np.array([1.0, -1.0, 1.0, 2.0, 3.0])
        assert find_breakevens(prices, values, step=1.0) == [0.5]

    def test_sample_on_zero_counted_once(self):
        prices = np.array([0.0, 1.0, 2.0])
        values = np.array([-1.0, 0.0, 1.0])
        assert find_breakevens(prices, values, step=1.0) == [1.0]

    def test_str(self, straddle):
        assert "Breakevens" in str(analyze(anchored_curve(straddle)))
        assert str(StrategyAnalysis.unavailable()) == "Strategy Analysis: no data"


class TestTailRisk:
    """Tests for the slope-based classifier."""

    def test_long_call_unbounded_profit(self):
        tail = classify_tail_risk(apply_template("Long Call"))
        assert tail.unbounded_profit and not tail.unbounded_loss

    def test_covered_call_net_short(self):
        tail = classify_tail_risk(apply_template("Covered Call"))
        assert tail.upside_slope == -99
        assert tail.unbounded_loss

    def test_fully_covered_call_is_bounded(self):
        legs = [
            Leg(action=Action.BUY, instrument_type=InstrumentType.UNDERLYING, premium=100, quantity=100),
            Leg(action=Action.SELL, instrument_type=InstrumentType.CALL, strike=105, premium=2),
        ]
        tail = classify_tail_risk(legs)
        assert tail.upside_slope == 0
        assert not tail.unbounded_profit and not tail.unbounded_loss

    def test_puts_never_unbounded(self):
        tail = classify_tail_risk(apply_template("Long Put"))
        assert tail.upside_slope == 0


class TestAnalyzeStrategy:
    """Tests for analyze_strategy()."""

    def test_payoff_at_spot_is_exact(self):
        legs = apply_template("Long Straddle")
        summary = analyze_strategy(legs, MarketState(underlying_price=101.37))

        assert summary.payoff_at_spot == pytest.approx((1.37 - 6) * 100)
        assert summary.tail_risk.unbounded_profit
        assert len(summary.curve) == 501

    def test_no_active_legs(self):
        legs = [leg.model_copy(update={"active": False}) for leg in apply_template("Long Call")]
        summary = analyze_strategy(legs, MarketState(underlying_price=100))

        assert not summary.analysis.is_available
        assert summary.payoff_at_spot is None
        assert summary.tail_risk is None
        assert summary.curve.is_empty
