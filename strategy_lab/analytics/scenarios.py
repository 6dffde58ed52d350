"""
Scenario P&L table over a fixed grid of spot shocks.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import pandas as pd
from loguru import logger

from strategy_lab.analytics.aggregation import partition_groups, total_payoff
from strategy_lab.analytics.payoff import action_sign, contract_multiplier
from strategy_lab.analytics.pricing import leg_theoretical_price
from strategy_lab.config import ScenarioConfig, settings
from strategy_lab.data.models import Leg, MarketState, ModelParameters


@dataclass(frozen=True)
class ScenarioCell:
    """P&L at expiration (finish) and under the model today (theoretical)."""

    finish: float = 0.0
    theoretical: float = 0.0

    def __add__(self, other: "ScenarioCell") -> "ScenarioCell":
        return ScenarioCell(
            finish=self.finish + other.finish,
            theoretical=self.theoretical + other.theoretical,
        )


@dataclass(frozen=True)
class ScenarioRow:
    """One shocked spot price."""

    shock_percent: int
    price: float
    per_group: dict[str, ScenarioCell]
    total: ScenarioCell

    @property
    def is_current_price(self) -> bool:
        return self.shock_percent == 0


@dataclass(frozen=True)
class ScenarioTable:
    """Rows ordered from the largest down shock to the largest up shock."""

    rows: list[ScenarioRow] = field(default_factory=list)
    group_ids: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def current_row(self) -> Optional[ScenarioRow]:
        return next((row for row in self.rows if row.is_current_price), None)

    def to_dataframe(self, group_names: Optional[dict[str, str]] = None) -> pd.DataFrame:
        """Render the table with (column group, figure) two-level columns."""
        group_names = group_names or {}
        records = []
        for row in self.rows:
            record = {
                ("Scenario", "Price"): row.price,
                ("Scenario", "Change %"): row.shock_percent,
            }
            for gid in self.group_ids:
                name = group_names.get(gid, gid)
                cell = row.per_group[gid]
                record[(name, "Finish")] = cell.finish
                record[(name, "Theoretical")] = cell.theoretical
            record[("Total", "Finish")] = row.total.finish
            record[("Total", "Theoretical")] = row.total.theoretical
            records.append(record)

        df = pd.DataFrame(records)
        if not df.empty:
            df.columns = pd.MultiIndex.from_tuples(df.columns)
        return df


def theoretical_pnl(leg: Leg, price: float, params: ModelParameters) -> float:
    """Model value of a leg at `price` relative to what was paid or received."""
    value = leg_theoretical_price(leg, price, params)
    return (value - leg.premium) * leg.quantity * contract_multiplier(leg) * action_sign(leg)


class ScenarioTableBuilder:
    """Builds shock-grid P&L tables per group and in total."""

    def __init__(self, config: Optional[ScenarioConfig] = None):
        self.config = config or settings.scenario

    def shocks(self) -> list[int]:
        limit = self.config.max_shock_percent
        return list(range(-limit, limit + 1, self.config.shock_step_percent))

    def build(
        self,
        legs: Sequence[Leg],
        market_state: MarketState,
        params: ModelParameters,
    ) -> ScenarioTable:
        """
        Build the scenario table for the active legs.

        Returns an empty table when no leg is active or the spot is not positive.
        """
        spot = market_state.underlying_price
        groups = partition_groups(legs)
        if not groups or spot <= 0:
            logger.debug("No active legs or non-positive spot; empty scenario table")
            return ScenarioTable()

        rows = []
        for shock in self.shocks():
            price = spot * (1 + shock / 100)
            per_group = {
                gid: ScenarioCell(
                    finish=float(total_payoff(group, price)),
                    theoretical=sum(theoretical_pnl(leg, price, params) for leg in group),
                )
                for gid, group in groups.items()
            }
            total = sum(per_group.values(), ScenarioCell())
            rows.append(ScenarioRow(shock_percent=shock, price=price, per_group=per_group, total=total))

        return ScenarioTable(rows=rows, group_ids=list(groups))


def build_scenario_table(
    legs: Sequence[Leg],
    market_state: MarketState,
    model_parameters: ModelParameters,
) -> ScenarioTable:
    """Scenario table using the configured shock grid."""
    return ScenarioTableBuilder().build(legs, market_state, model_parameters)
