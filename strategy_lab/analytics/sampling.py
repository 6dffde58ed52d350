"""
Settlement price grids for payoff curves.
"""

from enum import Enum
from typing import Iterable, Optional

import numpy as np
from loguru import logger

from strategy_lab.config import SamplingConfig, settings
from strategy_lab.data.models import InstrumentType, Leg, MarketState


class SamplingPolicy(str, Enum):
    """How the price window is chosen."""
    SYMMETRIC_ABOUT_SPOT = "symmetric_about_spot"  # payoff chart
    STRIKE_ANCHORED = "strike_anchored"  # summary statistics


def _even_grid(start: float, end: float, steps: int) -> np.ndarray:
    """Inclusive grid of `steps` equal intervals, empty if the step is not positive."""
    step = (end - start) / steps
    if step <= 0:
        logger.warning(f"Empty price window [{start}, {end}]; no samples produced")
        return np.array([], dtype=float)
    return np.linspace(start, end, steps + 1)


def anchor_prices(legs: Iterable[Leg]) -> list[float]:
    """Positive strikes of active options plus entry prices of active underlying legs."""
    anchors = []
    for leg in legs:
        if not leg.active:
            continue
        if leg.instrument_type == InstrumentType.UNDERLYING:
            anchors.append(leg.premium)
        elif leg.strike > 0:
            anchors.append(leg.strike)
    return anchors


class CurveSampler:
    """Builds ascending, evenly spaced price grids for a sampling policy."""

    def __init__(self, config: Optional[SamplingConfig] = None):
        self.config = config or settings.sampling

    def symmetric_grid(self, spot: float) -> np.ndarray:
        half_width = spot * self.config.chart_view_fraction
        start = max(0.0, spot - half_width)
        end = spot + half_width
        return _even_grid(start, end, self.config.chart_steps)

    def anchored_grid(self, legs: Iterable[Leg]) -> np.ndarray:
        anchors = anchor_prices(legs)
        if anchors:
            low, high = min(anchors), max(anchors)
        else:
            low, high = self.config.default_anchor_low, self.config.default_anchor_high

        width = max(self.config.summary_min_range, high - low)
        extension = width * self.config.summary_range_extension
        start = max(0.0, low - extension)
        end = high + extension

        logger.debug(f"Anchored grid over [{start:.2f}, {end:.2f}] from {len(anchors)} anchors")
        return _even_grid(start, end, self.config.summary_steps)

    def sample(
        self,
        policy: SamplingPolicy,
        legs: Iterable[Leg],
        market_state: MarketState,
    ) -> np.ndarray:
        """Candidate settlement prices for the given policy."""
        if policy == SamplingPolicy.SYMMETRIC_ABOUT_SPOT:
            return self.symmetric_grid(market_state.underlying_price)
        return self.anchored_grid(legs)


def sample_curve(
    policy: SamplingPolicy,
    legs: Iterable[Leg],
    market_state: MarketState,
) -> np.ndarray:
    """Candidate settlement prices using the configured sampling constants."""
    return CurveSampler().sample(SamplingPolicy(policy), legs, market_state)
