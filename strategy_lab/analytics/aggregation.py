"""
Payoff aggregation across active legs and leg groups.
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from strategy_lab.analytics.payoff import payoff
from strategy_lab.data.models import Leg, SampledCurve


def active_only(legs: Iterable[Leg]) -> list[Leg]:
    return [leg for leg in legs if leg.active]


def partition_groups(legs: Iterable[Leg]) -> dict[str, list[Leg]]:
    """
    Active legs keyed by resolved group id.

    Groups appear in the order their first active leg appears.
    """
    groups: dict[str, list[Leg]] = {}
    for leg in active_only(legs):
        groups.setdefault(leg.resolved_group_id, []).append(leg)
    return groups


def total_payoff(legs: Iterable[Leg], price):
    """Sum of terminal payoffs; `price` may be a scalar or an array."""
    return sum((payoff(price, leg) for leg in legs), 0.0)


@dataclass(frozen=True)
class AggregateValue:
    """Total and per-group terminal payoff at one settlement price."""

    total: float
    per_group: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CurveSet:
    """Total and per-group payoff curves over one price grid."""

    total: SampledCurve
    per_group: dict[str, SampledCurve] = field(default_factory=dict)


def aggregate(legs: Sequence[Leg], price: float) -> AggregateValue:
    """Terminal payoff of the active legs at `price`, in total and per group."""
    groups = partition_groups(legs)
    per_group = {gid: float(total_payoff(group, price)) for gid, group in groups.items()}
    total = float(total_payoff(active_only(legs), price))
    return AggregateValue(total=total, per_group=per_group)


def aggregate_curve(legs: Sequence[Leg], prices: np.ndarray) -> CurveSet:
    """Payoff curves of the active legs over `prices`."""
    prices = np.asarray(prices, dtype=float)

    def _curve(group: list[Leg]) -> SampledCurve:
        values = np.zeros_like(prices) + total_payoff(group, prices)
        return SampledCurve(prices=prices, values=values)

    groups = partition_groups(legs)
    return CurveSet(
        total=_curve(active_only(legs)),
        per_group={gid: _curve(group) for gid, group in groups.items()},
    )
