from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from microvillas.config import settings
from microvillas.models.schemas import (
    FinancialAnalysis,
    FinancialAnalysisRequest,
    LandParcel,
    RecalculateRequest,
    SocialClubDesignRequest,
    SocialClubLayout,
    SubdivisionScenario,
)
from microvillas.services.cache import clear_subdivision_cache, scenario_cache
from microvillas.subdivision_engine.amenities import (
    AMENITIES_CATALOG,
    CATEGORY_DISPLAY_NAMES,
    DEFAULT_AMENITY_SELECTION,
    calculate_amenities_space,
    design_social_club,
)
from microvillas.subdivision_engine.financial import (
    calculate_financial_analysis,
    recalculate_financial_analysis,
)
from microvillas.subdivision_engine.scenarios import (
    ScenarioGenerator,
    calculate_all_scenarios,
    get_default_scenario,
)

router = APIRouter(prefix="/api")
generator = ScenarioGenerator()


@router.post("/scenarios")
def list_scenarios(land: LandParcel):
    """Every viable subdivision scenario for a parcel (cached by dimensions)."""
    scenarios = calculate_all_scenarios(land, generator=generator, cache=scenario_cache)
    default = get_default_scenario(scenarios)
    return {
        "land": land,
        "scenarios": scenarios,
        "default_scenario_id": default.id if default else None,
    }


@router.get("/scenarios/default", response_model=SubdivisionScenario)
def default_scenario(
    width: float = Query(..., description="Parcel width in meters"),
    height: float = Query(..., description="Parcel height in meters"),
):
    """The scenario at the default social club allocation."""
    try:
        land = LandParcel(width=width, height=height)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    scenarios = calculate_all_scenarios(land, generator=generator, cache=scenario_cache)
    default = get_default_scenario(scenarios)
    if default is None:
        raise HTTPException(
            status_code=404,
            detail=f"No viable scenario at {settings.default_social_club_percentage}% for {width}x{height}",
        )
    return default


@router.delete("/scenarios/cache")
async def clear_scenarios_cache():
    clear_subdivision_cache()
    return {"cleared": True}


@router.post("/financial-analysis", response_model=FinancialAnalysis)
async def financial_analysis(request: FinancialAnalysisRequest):
    """Cost allocation, pricing table and maintenance split for a scenario."""
    margins = request.target_profit_margins
    if margins is None:
        margins = settings.default_profit_margins
    exchange_rate = request.exchange_rate
    if exchange_rate is None:
        exchange_rate = settings.default_exchange_rate

    return calculate_financial_analysis(
        request.land_cost,
        request.amenities_cost,
        request.legal_costs,
        request.other_costs,
        request.total_land_area,
        request.selected_scenario,
        margins,
        request.total_monthly_maintenance,
        request.currency,
        exchange_rate,
    )


@router.post("/financial-analysis/recalculate", response_model=FinancialAnalysis)
async def recalculate(request: RecalculateRequest):
    """Re-derive an analysis after the scenario or margin set changed."""
    return recalculate_financial_analysis(
        request.analysis,
        request.total_land_area,
        request.selected_scenario,
        request.target_profit_margins,
    )


@router.get("/amenities")
async def list_amenities(category: str | None = Query(None)):
    amenities = [a for a in AMENITIES_CATALOG if category is None or a.category == category]
    return {
        "amenities": amenities,
        "categories": CATEGORY_DISPLAY_NAMES,
        "default_selection": list(DEFAULT_AMENITY_SELECTION),
    }


@router.post("/social-club/design", response_model=SocialClubLayout)
async def social_club_design(request: SocialClubDesignRequest):
    """Attach an amenity selection to a social club layout."""
    layout = design_social_club(
        request.social_club,
        request.amenity_ids,
        request.custom_costs,
        request.storage_type,
    )
    space = calculate_amenities_space(layout.selected_amenities)
    if space > layout.area:
        raise HTTPException(
            status_code=400,
            detail=f"Selected amenities need {space:.0f} sqm but the social club has {layout.area:.0f} sqm",
        )
    return layout
