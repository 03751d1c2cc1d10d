"""
Investment economics for a selected subdivision scenario.

  total project cost = land + amenities + legal + sum(other costs)
  cost per sqm       = total / land area
  base cost per lot  = total / lots
  lot sale price     = base cost x (1 + margin%)
  ROI                = profit / total cost x 100

Every ratio with a zero-prone denominator returns 0 instead of raising, and
every monetary output is rounded half up to 2 decimals so results serialize as
plain finite numbers.  All functions are pure.
"""

from __future__ import annotations

import math
import time
from datetime import datetime, timezone
from typing import Optional

from microvillas.config import Settings, settings as default_settings
from microvillas.models.schemas import (
    Currency,
    FinancialAnalysis,
    MicroVillaLot,
    OtherCost,
    PricingScenario,
    SubdivisionScenario,
)
from microvillas.subdivision_engine.diagnostics import (
    FINANCIAL_RECALC_OVER_BUDGET,
    DiagnosticSink,
    emit,
)

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "DOP": "RD$",
}


def round_to_two_decimals(value: float) -> float:
    """Round half up to cents (0.125 -> 0.13, -0.125 -> -0.12)."""
    return math.floor(value * 100 + 0.5) / 100


def convert_currency(
    amount: float,
    from_currency: Currency,
    to_currency: Currency,
    exchange_rate: float,
) -> float:
    """Convert between USD and DOP; exchange_rate is DOP per USD."""
    if from_currency == to_currency:
        return amount
    if from_currency == "USD" and to_currency == "DOP":
        return round_to_two_decimals(amount * exchange_rate)
    if from_currency == "DOP" and to_currency == "USD":
        if exchange_rate <= 0:
            return 0.0
        return round_to_two_decimals(amount / exchange_rate)
    return amount


def calculate_total_project_cost(
    land_cost: float,
    amenities_cost: float,
    legal_costs: float,
    other_costs: list[OtherCost],
) -> float:
    other_total = sum(cost.amount for cost in other_costs)
    return round_to_two_decimals(land_cost + amenities_cost + legal_costs + other_total)


def calculate_cost_per_sqm(total_project_cost: float, total_land_area: float) -> float:
    if total_land_area <= 0:
        return 0.0
    return round_to_two_decimals(total_project_cost / total_land_area)


def calculate_base_cost_per_lot(total_project_cost: float, number_of_lots: int) -> float:
    """Total cost spread evenly over the lots, before margin."""
    if number_of_lots <= 0:
        return 0.0
    return round_to_two_decimals(total_project_cost / number_of_lots)


def generate_pricing_scenario(
    base_cost_per_lot: float,
    profit_margin_percentage: float,
    number_of_lots: int,
    total_project_cost: float,
) -> PricingScenario:
    """Price lots at one profit margin.

    Each intermediate figure is rounded before it feeds the next, so the
    table adds up exactly as displayed.
    """
    lot_sale_price = round_to_two_decimals(base_cost_per_lot * (1 + profit_margin_percentage / 100))
    total_revenue = round_to_two_decimals(lot_sale_price * number_of_lots)
    total_profit = round_to_two_decimals(total_revenue - total_project_cost)

    profit_per_lot = round_to_two_decimals(total_profit / number_of_lots) if number_of_lots > 0 else 0.0
    roi = round_to_two_decimals(total_profit / total_project_cost * 100) if total_project_cost > 0 else 0.0

    return PricingScenario(
        profit_margin_percentage=profit_margin_percentage,
        lot_sale_price=lot_sale_price,
        total_revenue=total_revenue,
        total_profit=total_profit,
        profit_per_lot=profit_per_lot,
        return_on_investment=roi,
    )


def generate_pricing_scenarios(
    base_cost_per_lot: float,
    profit_margins: list[float],
    number_of_lots: int,
    total_project_cost: float,
) -> list[PricingScenario]:
    return [
        generate_pricing_scenario(base_cost_per_lot, margin, number_of_lots, total_project_cost)
        for margin in profit_margins
    ]


def calculate_maintenance_contribution(
    total_monthly_maintenance: float,
    common_area_percentage: float,
) -> float:
    """An owner's monthly share of club maintenance."""
    return round_to_two_decimals(total_monthly_maintenance * common_area_percentage / 100)


def calculate_lot_maintenance_contribution(
    total_monthly_maintenance: float,
    lot: MicroVillaLot,
) -> float:
    return calculate_maintenance_contribution(total_monthly_maintenance, lot.common_area_percentage)


def _average_maintenance_per_owner(
    total_monthly_maintenance: float,
    scenario: Optional[SubdivisionScenario],
) -> float:
    if scenario is None or not scenario.lots:
        return 0.0
    avg_pct = sum(lot.common_area_percentage for lot in scenario.lots) / len(scenario.lots)
    return calculate_maintenance_contribution(total_monthly_maintenance, avg_pct)


def calculate_financial_analysis(
    land_cost: float,
    amenities_cost: float,
    legal_costs: float,
    other_costs: list[OtherCost],
    total_land_area: float,
    selected_scenario: Optional[SubdivisionScenario],
    target_profit_margins: list[float],
    total_monthly_maintenance: float,
    currency: Currency,
    exchange_rate: float,
    settings: Settings | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> FinancialAnalysis:
    """Build the full FinancialAnalysis record.

    A missing scenario is allowed: base cost per lot is 0, the pricing
    table is empty and the per-owner maintenance is 0.
    """
    cfg = settings or default_settings
    start = time.perf_counter()

    total_project_cost = calculate_total_project_cost(land_cost, amenities_cost, legal_costs, other_costs)
    cost_per_sqm = calculate_cost_per_sqm(total_project_cost, total_land_area)

    number_of_lots = selected_scenario.total_lots if selected_scenario is not None else 0
    base_cost_per_lot = calculate_base_cost_per_lot(total_project_cost, number_of_lots)

    pricing = []
    if selected_scenario is not None:
        pricing = generate_pricing_scenarios(
            base_cost_per_lot, target_profit_margins, number_of_lots, total_project_cost,
        )

    now = datetime.now(timezone.utc).isoformat()
    analysis = FinancialAnalysis(
        land_cost=land_cost,
        amenities_cost=amenities_cost,
        legal_costs=legal_costs,
        other_costs=list(other_costs),
        total_monthly_maintenance=total_monthly_maintenance,
        currency=currency,
        exchange_rate=exchange_rate,
        target_profit_margins=list(target_profit_margins),
        total_project_cost=total_project_cost,
        cost_per_sqm=cost_per_sqm,
        base_cost_per_lot=base_cost_per_lot,
        pricing_scenarios=pricing,
        monthly_maintenance_per_owner=_average_maintenance_per_owner(
            total_monthly_maintenance, selected_scenario,
        ),
        calculated_at=now,
        last_updated_at=now,
    )

    duration_ms = (time.perf_counter() - start) * 1000
    if duration_ms > cfg.financial_recalc_budget_ms:
        emit(
            on_diagnostic,
            FINANCIAL_RECALC_OVER_BUDGET,
            f"Financial analysis took {duration_ms:.0f}ms "
            f"(budget {cfg.financial_recalc_budget_ms:.0f}ms)",
            number_of_lots=number_of_lots,
            margin_count=len(target_profit_margins),
            duration_ms=duration_ms,
        )

    return analysis


def recalculate_financial_analysis(
    existing: FinancialAnalysis,
    total_land_area: float,
    selected_scenario: Optional[SubdivisionScenario],
    target_profit_margins: Optional[list[float]] = None,
    settings: Settings | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> FinancialAnalysis:
    """Re-derive every computed field from the stored raw inputs.

    User-entered costs, maintenance, currency and rate are carried over; the
    margin set falls back to the one stored on ``existing``.
    """
    margins = target_profit_margins if target_profit_margins is not None else existing.target_profit_margins
    return calculate_financial_analysis(
        existing.land_cost,
        existing.amenities_cost,
        existing.legal_costs,
        existing.other_costs,
        total_land_area,
        selected_scenario,
        margins,
        existing.total_monthly_maintenance,
        existing.currency,
        existing.exchange_rate,
        settings=settings,
        on_diagnostic=on_diagnostic,
    )


# ──────────────────────────────────────────────────────────────────
# DISPLAY HELPERS
# ──────────────────────────────────────────────────────────────────

def format_currency(amount: float, currency: Currency, show_symbol: bool = True) -> str:
    """Format as 1,234.50 with an optional $ / RD$ prefix."""
    formatted = f"{amount:,.2f}"
    if not show_symbol:
        return formatted
    return f"{CURRENCY_SYMBOLS.get(currency, '')}{formatted}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"
