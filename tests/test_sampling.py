"""
Tests for price grid sampling.
"""

import numpy as np
import pytest

from strategy_lab.analytics.sampling import (
    CurveSampler,
    SamplingPolicy,
    anchor_prices,
    sample_curve,
)
from strategy_lab.config import SamplingConfig
from strategy_lab.data.models import Action, InstrumentType, Leg, MarketState


class TestCurveSampler:
    """Tests for CurveSampler."""

    @pytest.fixture
    def sampler(self):
        return CurveSampler(SamplingConfig())

    @pytest.fixture
    def straddle(self):
        return [
            Leg(action=Action.BUY, instrument_type=InstrumentType.CALL, strike=100, premium=3),
            Leg(action=Action.BUY, instrument_type=InstrumentType.PUT, strike=100, premium=3),
        ]

    def test_symmetric_grid(self, sampler):
        prices = sampler.sample(SamplingPolicy.SYMMETRIC_ABOUT_SPOT, [], MarketState(underlying_price=100))
        assert len(prices) == 201
        assert prices[0] == pytest.approx(50)
        assert prices[-1] == pytest.approx(150)
        np.testing.assert_allclose(np.diff(prices), 0.5)

    @pytest.mark.parametrize("spot", [0.0, -10.0])
    def test_symmetric_grid_empty_for_non_positive_spot(self, sampler, spot):
        prices = sampler.sample(SamplingPolicy.SYMMETRIC_ABOUT_SPOT, [], MarketState(underlying_price=spot))
        assert len(prices) == 0

    def test_anchored_grid_default_window(self, sampler):
        prices = sampler.anchored_grid([])
        # [80, 120] anchors, range 40, extended 60 each side
        assert len(prices) == 501
        assert prices[0] == pytest.approx(20)
        assert prices[-1] == pytest.approx(180)

    def test_anchored_grid_minimum_range(self, sampler, straddle):
        prices = sampler.anchored_grid(straddle)
        assert prices[0] == pytest.approx(40)
        assert prices[-1] == pytest.approx(160)
        assert prices[1] - prices[0] == pytest.approx(0.24)

    def test_anchored_grid_wide_strikes_clamped_at_zero(self, sampler):
        legs = [
            Leg(action=Action.BUY, instrument_type=InstrumentType.PUT, strike=50, premium=1),
            Leg(action=Action.SELL, instrument_type=InstrumentType.CALL, strike=150, premium=1),
        ]
        prices = sampler.anchored_grid(legs)
        # range 100 -> [50 - 150, 150 + 150]
        assert prices[0] == 0
        assert prices[-1] == pytest.approx(300)

    def test_anchor_prices_skip_inactive_and_zero_strikes(self):
        legs = [
            Leg(action=Action.BUY, instrument_type=InstrumentType.CALL, strike=0, premium=1),
            Leg(action=Action.BUY, instrument_type=InstrumentType.CALL, strike=95, premium=1, active=False),
            Leg(action=Action.BUY, instrument_type=InstrumentType.PUT, strike=90, premium=1),
            Leg(action=Action.BUY, instrument_type=InstrumentType.UNDERLYING, strike=7, premium=101),
        ]
        assert anchor_prices(legs) == [90, 101]

    def test_module_function_is_deterministic(self, straddle):
        market = MarketState(underlying_price=100)
        first = sample_curve(SamplingPolicy.STRIKE_ANCHORED, straddle, market)
        second = sample_curve("strike_anchored", straddle, market)
        np.testing.assert_array_equal(first, second)
        assert np.all(np.diff(first) > 0)
