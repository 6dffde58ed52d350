"""
Tests for the scenario P&L table.
"""

import pytest

from strategy_lab.analytics.aggregation import aggregate
from strategy_lab.analytics.pricing import BlackScholes
from strategy_lab.analytics.scenarios import (
    ScenarioTableBuilder,
    build_scenario_table,
    theoretical_pnl,
)
from strategy_lab.config import ScenarioConfig
from strategy_lab.data.models import Action, InstrumentType, Leg, MarketState, ModelParameters


class TestScenarioTableBuilder:
    """Tests for ScenarioTableBuilder."""

    @pytest.fixture
    def params(self):
        return ModelParameters(time_to_expiry_days=30, risk_free_rate_percent=5, volatility_percent=20)

    @pytest.fixture
    def market(self):
        return MarketState(underlying_price=100)

    @pytest.fixture
    def legs(self):
        return [
            Leg(action=Action.BUY, instrument_type=InstrumentType.CALL, strike=100, premium=2.5),
            Leg(action=Action.SELL, instrument_type=InstrumentType.CALL, strike=110, premium=0.5),
            Leg(action=Action.BUY, instrument_type=InstrumentType.UNDERLYING, premium=98, quantity=20, group_id="stock"),
        ]

    def test_shock_grid(self, legs, market, params):
        table = ScenarioTableBuilder(ScenarioConfig()).build(legs, market, params)

        assert len(table) == 21
        assert [row.shock_percent for row in table.rows] == list(range(-20, 21, 2))
        assert table.rows[0].price == pytest.approx(80)
        assert table.rows[-1].price == pytest.approx(120)

    def test_current_price_row(self, legs, market, params):
        table = build_scenario_table(legs, market, params)

        current = [row for row in table.rows if row.is_current_price]
        assert len(current) == 1
        assert current[0] is table.current_row
        assert current[0].price == 100

    def test_finish_matches_aggregate_payoff(self, legs, market, params):
        table = build_scenario_table(legs, market, params)

        for row in table.rows:
            expected = aggregate(legs, row.price)
            assert row.total.finish == pytest.approx(expected.total)
            for gid, cell in row.per_group.items():
                assert cell.finish == pytest.approx(expected.per_group[gid])

    def test_groups_sum_to_total(self, legs, market, params):
        table = build_scenario_table(legs, market, params)

        assert table.group_ids == ["1", "stock"]
        for row in table.rows:
            assert sum(c.theoretical for c in row.per_group.values()) == pytest.approx(row.total.theoretical)

    def test_theoretical_pnl_option(self, params):
        leg = Leg(action=Action.SELL, instrument_type=InstrumentType.PUT, strike=95, premium=1.2, quantity=2)
        model = BlackScholes.price(90, 95, params.time_to_expiry_years, 0.05, 0.20, InstrumentType.PUT)
        assert theoretical_pnl(leg, 90, params) == pytest.approx((model - 1.2) * 2 * 100 * -1)

    def test_theoretical_pnl_underlying(self, params):
        leg = Leg(action=Action.BUY, instrument_type=InstrumentType.UNDERLYING, premium=98, quantity=20)
        assert theoretical_pnl(leg, 102, params) == pytest.approx(80)

    def test_theoretical_equals_finish_at_expiry(self, legs, market):
        table = build_scenario_table(legs, market, ModelParameters(time_to_expiry_days=0))
        for row in table.rows:
            assert row.total.theoretical == pytest.approx(row.total.finish)

    def test_empty_without_active_legs(self, legs, market, params):
        inactive = [leg.model_copy(update={"active": False}) for leg in legs]
        assert len(build_scenario_table(inactive, market, params)) == 0

    def test_empty_for_non_positive_spot(self, legs, params):
        assert len(build_scenario_table(legs, MarketState(underlying_price=0), params)) == 0

    def test_to_dataframe(self, legs, market, params):
        table = build_scenario_table(legs, market, params)
        df = table.to_dataframe({"1": "Bull Spread", "stock": "Shares"})

        assert len(df) == 21
        assert ("Bull Spread", "Finish") in df.columns
        assert ("Shares", "Theoretical") in df.columns
        assert df[("Total", "Finish")].iloc[10] == pytest.approx(table.rows[10].total.finish)
        assert df[("Scenario", "Change %")].tolist() == list(range(-20, 21, 2))
