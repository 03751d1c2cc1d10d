"""Tests for the financial calculator.

Validates cost roll-up, per-lot pricing at each margin, zero guards,
currency conversion and recalculation from stored inputs.
"""

from __future__ import annotations

import json
import math

import pytest

from microvillas.config import Settings
from microvillas.models.schemas import FinancialAnalysis, LandParcel, OtherCost
from microvillas.subdivision_engine import ScenarioGenerator
from microvillas.subdivision_engine.diagnostics import FINANCIAL_RECALC_OVER_BUDGET
from microvillas.subdivision_engine.financial import (
    calculate_base_cost_per_lot,
    calculate_cost_per_sqm,
    calculate_financial_analysis,
    calculate_lot_maintenance_contribution,
    calculate_maintenance_contribution,
    calculate_total_project_cost,
    convert_currency,
    format_currency,
    format_percentage,
    generate_pricing_scenario,
    generate_pricing_scenarios,
    recalculate_financial_analysis,
    round_to_two_decimals,
)
from microvillas.subdivision_engine.scenarios import get_default_scenario


@pytest.fixture(scope="module")
def default_scenario():
    """50x30 parcel at 20%: 12 lots."""
    scenarios = ScenarioGenerator().generate(LandParcel(width=50, height=30))
    return get_default_scenario(scenarios)


def _make_analysis(scenario=None, **overrides) -> FinancialAnalysis:
    params = dict(
        land_cost=100000,
        amenities_cost=15000,
        legal_costs=5000,
        other_costs=[],
        total_land_area=1500,
        selected_scenario=scenario,
        target_profit_margins=[20],
        total_monthly_maintenance=1200,
        currency="USD",
        exchange_rate=58.5,
    )
    params.update(overrides)
    return calculate_financial_analysis(**params)


# ──────────────────────────────────────────────────────────────────
# COST ROLL-UP
# ──────────────────────────────────────────────────────────────────

class TestProjectCosts:

    def test_total_includes_other_costs(self):
        other = [
            OtherCost(id="survey", label="Topographic survey", amount=1000),
            OtherCost(id="permits", label="Permits", amount=2500.25),
        ]
        assert calculate_total_project_cost(50000, 30000, 5000, other) == 88500.25

    def test_total_without_other_costs(self):
        assert calculate_total_project_cost(50000, 30000, 5000, []) == 85000

    def test_cost_per_sqm(self):
        assert calculate_cost_per_sqm(150000, 1500) == 100.0
        assert calculate_cost_per_sqm(100, 3) == 33.33

    def test_cost_per_sqm_zero_area(self):
        assert calculate_cost_per_sqm(150000, 0) == 0
        assert calculate_cost_per_sqm(150000, -10) == 0

    def test_base_cost_per_lot(self):
        assert calculate_base_cost_per_lot(120000, 12) == 10000.0
        assert calculate_base_cost_per_lot(10000, 3) == 3333.33

    def test_base_cost_per_lot_zero_lots(self):
        assert calculate_base_cost_per_lot(10000, 0) == 0

    def test_rounding(self):
        assert round_to_two_decimals(3.14159) == 3.14
        assert round_to_two_decimals(2.0) == 2.0

    def test_half_cent_rounds_up(self):
        assert round_to_two_decimals(0.125) == 0.13
        assert round_to_two_decimals(50.125) == 50.13
        assert round_to_two_decimals(-0.125) == -0.12

    def test_half_cent_split_over_lots(self):
        assert calculate_base_cost_per_lot(100.25, 2) == 50.13
        assert calculate_maintenance_contribution(0.25, 50) == 0.13


# ──────────────────────────────────────────────────────────────────
# PRICING
# ──────────────────────────────────────────────────────────────────

class TestPricing:

    def test_reference_pricing(self):
        p = generate_pricing_scenario(1000, 20, 10, 10000)
        assert p.lot_sale_price == 1200.0
        assert p.total_revenue == 12000.0
        assert p.total_profit == 2000.0
        assert p.profit_per_lot == 200.0
        assert p.return_on_investment == 20.0
        assert p.profit_margin_percentage == 20

    def test_zero_margin_breaks_even(self):
        p = generate_pricing_scenario(1000, 0, 10, 10000)
        assert p.total_profit == 0
        assert p.return_on_investment == 0

    def test_zero_lots_guard(self):
        p = generate_pricing_scenario(0, 20, 0, 10000)
        assert p.profit_per_lot == 0
        assert p.total_revenue == 0

    def test_zero_cost_guard(self):
        p = generate_pricing_scenario(500, 20, 4, 0)
        assert p.return_on_investment == 0
        assert p.total_profit == 2400.0

    def test_one_row_per_margin_in_order(self):
        rows = generate_pricing_scenarios(1000, [15, 20, 25, 30], 10, 10000)
        assert [r.profit_margin_percentage for r in rows] == [15, 20, 25, 30]
        assert [r.lot_sale_price for r in rows] == [1150.0, 1200.0, 1250.0, 1300.0]

    def test_empty_margins(self):
        assert generate_pricing_scenarios(1000, [], 10, 10000) == []


# ──────────────────────────────────────────────────────────────────
# MAINTENANCE
# ──────────────────────────────────────────────────────────────────

class TestMaintenance:

    def test_contribution(self):
        assert calculate_maintenance_contribution(1000, 8.3333) == 83.33
        assert calculate_maintenance_contribution(1000, 0) == 0

    def test_lot_contributions_add_up(self, default_scenario):
        shares = [calculate_lot_maintenance_contribution(1200, lot) for lot in default_scenario.lots]
        assert sum(shares) == pytest.approx(1200, abs=0.05)

    def test_larger_lots_pay_more(self, default_scenario):
        north = next(l for l in default_scenario.lots if l.quadrant == "north")
        east = next(l for l in default_scenario.lots if l.quadrant == "east")
        assert calculate_lot_maintenance_contribution(1200, north) == pytest.approx(103.65, abs=0.01)
        assert calculate_lot_maintenance_contribution(1200, east) == pytest.approx(92.71, abs=0.01)


# ──────────────────────────────────────────────────────────────────
# CURRENCY
# ──────────────────────────────────────────────────────────────────

class TestCurrency:

    def test_usd_to_dop(self):
        assert convert_currency(100, "USD", "DOP", 58.5) == 5850.0

    def test_dop_to_usd(self):
        assert convert_currency(5850, "DOP", "USD", 58.5) == 100.0

    def test_same_currency_is_identity(self):
        assert convert_currency(123.456, "USD", "USD", 58.5) == 123.456
        assert convert_currency(123.456, "DOP", "DOP", 0) == 123.456

    def test_dop_to_usd_with_invalid_rate(self):
        assert convert_currency(5850, "DOP", "USD", 0) == 0
        assert convert_currency(5850, "DOP", "USD", -1) == 0

    def test_format_currency(self):
        assert format_currency(1234.5, "USD") == "$1,234.50"
        assert format_currency(1234.5, "DOP") == "RD$1,234.50"
        assert format_currency(1234.5, "DOP", show_symbol=False) == "1,234.50"

    def test_format_percentage(self):
        assert format_percentage(12.3456) == "12.35%"
        assert format_percentage(12.3456, decimals=1) == "12.3%"


# ──────────────────────────────────────────────────────────────────
# FULL ANALYSIS
# ──────────────────────────────────────────────────────────────────

class TestFinancialAnalysis:

    def test_with_scenario(self, default_scenario):
        analysis = _make_analysis(default_scenario)
        assert analysis.total_project_cost == 120000
        assert analysis.cost_per_sqm == 80.0
        assert analysis.base_cost_per_lot == 10000.0

        [pricing] = analysis.pricing_scenarios
        assert pricing.lot_sale_price == 12000.0
        assert pricing.total_revenue == 144000.0
        assert pricing.total_profit == 24000.0
        assert pricing.profit_per_lot == 2000.0
        assert pricing.return_on_investment == 20.0

    def test_average_maintenance_per_owner(self, default_scenario):
        analysis = _make_analysis(default_scenario)
        assert analysis.monthly_maintenance_per_owner == 100.0

    def test_without_scenario(self):
        analysis = _make_analysis(None)
        assert analysis.total_project_cost == 120000
        assert analysis.base_cost_per_lot == 0
        assert analysis.pricing_scenarios == []
        assert analysis.monthly_maintenance_per_owner == 0

    def test_zero_land_area(self, default_scenario):
        analysis = _make_analysis(default_scenario, total_land_area=0)
        assert analysis.cost_per_sqm == 0

    def test_raw_inputs_preserved(self, default_scenario):
        other = [OtherCost(id="fees", label="Notary", amount=750, currency="USD")]
        analysis = _make_analysis(default_scenario, other_costs=other, currency="DOP", exchange_rate=60)
        assert analysis.other_costs == other
        assert analysis.currency == "DOP"
        assert analysis.exchange_rate == 60
        assert analysis.target_profit_margins == [20]
        assert analysis.calculated_at == analysis.last_updated_at

    def test_serializes_to_finite_json(self, default_scenario):
        analysis = _make_analysis(default_scenario, total_land_area=0, target_profit_margins=[15, 20, 25, 30])
        payload = json.loads(analysis.model_dump_json())
        numbers = [v for v in payload.values() if isinstance(v, (int, float)) and not isinstance(v, bool)]
        for row in payload["pricing_scenarios"]:
            numbers.extend(row.values())
        assert numbers
        assert all(math.isfinite(n) for n in numbers)

    def test_over_budget_emits_diagnostic(self, default_scenario):
        seen = []
        _make_analysis(
            default_scenario,
            settings=Settings(financial_recalc_budget_ms=0),
            on_diagnostic=seen.append,
        )
        assert [d.code for d in seen] == [FINANCIAL_RECALC_OVER_BUDGET]
        assert seen[0].data["number_of_lots"] == 12

    def test_no_diagnostic_within_budget(self, default_scenario):
        seen = []
        _make_analysis(default_scenario, on_diagnostic=seen.append)
        assert seen == []


class TestRecalculate:

    def test_preserves_user_inputs(self, default_scenario):
        existing = _make_analysis(None, target_profit_margins=[15, 20])
        updated = recalculate_financial_analysis(existing, 1500, default_scenario)

        assert updated.land_cost == existing.land_cost
        assert updated.amenities_cost == existing.amenities_cost
        assert updated.legal_costs == existing.legal_costs
        assert updated.total_monthly_maintenance == existing.total_monthly_maintenance
        assert updated.target_profit_margins == [15, 20]

    def test_rederives_for_new_scenario(self, default_scenario):
        existing = _make_analysis(None)
        updated = recalculate_financial_analysis(existing, 1500, default_scenario)
        assert updated.base_cost_per_lot == 10000.0
        assert len(updated.pricing_scenarios) == 1

    def test_new_margin_set(self, default_scenario):
        existing = _make_analysis(default_scenario)
        updated = recalculate_financial_analysis(existing, 1500, default_scenario, [10, 30])
        assert updated.target_profit_margins == [10, 30]
        assert [p.lot_sale_price for p in updated.pricing_scenarios] == [11000.0, 13000.0]

    def test_matches_fresh_calculation(self, default_scenario):
        existing = _make_analysis(None)
        updated = recalculate_financial_analysis(existing, 1500, default_scenario)
        fresh = _make_analysis(default_scenario)
        exclude = {"calculated_at", "last_updated_at"}
        assert updated.model_dump(exclude=exclude) == fresh.model_dump(exclude=exclude)
