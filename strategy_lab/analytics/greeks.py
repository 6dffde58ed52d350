"""
Greeks calculation and strategy aggregation.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from loguru import logger

from strategy_lab.analytics.aggregation import active_only, partition_groups
from strategy_lab.analytics.payoff import action_sign
from strategy_lab.analytics.pricing import Greeks, leg_greeks
from strategy_lab.data.models import Leg, ModelParameters


@dataclass(frozen=True)
class StrategyGreeks:
    """Aggregated Greeks for the whole strategy and for each group."""

    total: Greeks
    per_group: dict[str, Greeks] = field(default_factory=dict)
    num_legs: int = 0

    def __str__(self) -> str:
        return (
            f"Strategy Greeks:\n"
            f"  Delta: {self.total.delta:+.4f}\n"
            f"  Gamma: {self.total.gamma:+.4f}\n"
            f"  Theta: {self.total.theta:+.4f}/day\n"
            f"  Vega:  {self.total.vega:+.4f}\n"
            f"  Legs:  {self.num_legs}"
        )


class GreeksCalculator:
    """Calculate and aggregate strategy Greeks."""

    def __init__(self, params: Optional[ModelParameters] = None):
        self.params = params or ModelParameters()

    def position_greeks(self, leg: Leg, spot_price: float) -> Greeks:
        """
        Greeks of one leg, scaled by quantity and direction.

        No contract multiplier is applied: an option leg of quantity 1
        reports per-share sensitivities, the same scale as one share of
        the underlying.
        """
        unit = leg_greeks(leg, spot_price, self.params)
        return unit.scaled(leg.quantity * action_sign(leg))

    def sum_greeks(self, legs: Sequence[Leg], spot_price: float) -> Greeks:
        total = Greeks()
        for leg in legs:
            total = total + self.position_greeks(leg, spot_price)
        return total

    def calculate_strategy_greeks(
        self,
        legs: Sequence[Leg],
        spot_price: float,
    ) -> StrategyGreeks:
        """
        Calculate aggregated Greeks of the active legs.

        Args:
            legs: All legs; inactive ones are ignored
            spot_price: Current underlying price

        Returns:
            StrategyGreeks with totals and per-group values
        """
        active = active_only(legs)
        per_group = {
            gid: self.sum_greeks(group, spot_price)
            for gid, group in partition_groups(legs).items()
        }
        total = self.sum_greeks(active, spot_price)

        logger.debug(f"Greeks for {len(active)} active legs at spot {spot_price}: {total}")
        return StrategyGreeks(total=total, per_group=per_group, num_legs=len(active))
