from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

Currency = Literal["USD", "DOP"]
Quadrant = Literal["north", "south", "east", "west"]
StorageType = Literal["dedicated", "patio"]
AmenityCategory = Literal["aquatic", "dining", "recreation", "furniture", "utilities"]


class LandParcel(BaseModel):
    """Rectangular land parcel in meters.

    Construction is the validation step: non-positive or non-finite
    dimensions are rejected before they can reach the engine.
    """
    model_config = ConfigDict(frozen=True)

    width: float = Field(gt=0)
    height: float = Field(gt=0)
    province: Optional[str] = None
    acquisition_cost: float = 0
    acquisition_currency: Currency = "USD"
    is_urbanized: bool = False

    @field_validator("width", "height")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("land dimensions must be finite")
        return value

    @computed_field
    @property
    def total_area(self) -> float:
        return self.width * self.height


class SocialClubLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    area: float
    x: float  # top-left corner within the parcel
    y: float
    selected_amenities: list[str] = []
    storage_type: StorageType = "dedicated"
    total_cost: float = 0


class MicroVillaLot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    lot_number: int
    x: float
    y: float
    width: float
    height: float
    area: float
    quadrant: Quadrant
    common_area_percentage: float = 0
    is_valid: bool


class SubdivisionScenario(BaseModel):
    id: str
    social_club_percentage: int
    social_club: SocialClubLayout
    lots: list[MicroVillaLot] = []
    total_lots: int = 0
    average_lot_size: float = 0
    efficiency: float = 0  # (lots + club) / land, percent
    is_viable: bool = False
    is_selected: bool = False
    created_at: str


class Amenity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: AmenityCategory
    description: str
    default_cost_usd: float
    unit: str
    space_requirement: Optional[float] = None  # sqm


class OtherCost(BaseModel):
    id: str
    label: str
    amount: float
    currency: Optional[Currency] = None


class PricingScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    profit_margin_percentage: float
    lot_sale_price: float
    total_revenue: float
    total_profit: float
    profit_per_lot: float
    return_on_investment: float


class FinancialAnalysis(BaseModel):
    # Raw inputs (user-entered, preserved across recalculation)
    land_cost: float = 0
    amenities_cost: float = 0
    legal_costs: float = 0
    other_costs: list[OtherCost] = []
    total_monthly_maintenance: float = 0
    currency: Currency = "USD"
    exchange_rate: float = 58.5
    target_profit_margins: list[float] = []

    # Derived
    total_project_cost: float = 0
    cost_per_sqm: float = 0
    base_cost_per_lot: float = 0
    pricing_scenarios: list[PricingScenario] = []
    monthly_maintenance_per_owner: float = 0

    calculated_at: str
    last_updated_at: str


# ──────────────────────────────────────────────────────────────────
# REQUEST BODIES
# ──────────────────────────────────────────────────────────────────

class FinancialAnalysisRequest(BaseModel):
    land_cost: float = 0
    amenities_cost: float = 0
    legal_costs: float = 0
    other_costs: list[OtherCost] = []
    total_land_area: float = 0
    selected_scenario: Optional[SubdivisionScenario] = None
    target_profit_margins: Optional[list[float]] = None
    total_monthly_maintenance: float = 0
    currency: Currency = "USD"
    exchange_rate: Optional[float] = None


class RecalculateRequest(BaseModel):
    analysis: FinancialAnalysis
    total_land_area: float
    selected_scenario: Optional[SubdivisionScenario] = None
    target_profit_margins: Optional[list[float]] = None


class SocialClubDesignRequest(BaseModel):
    social_club: SocialClubLayout
    amenity_ids: list[str] = []
    custom_costs: dict[str, float] = {}
    storage_type: StorageType = "dedicated"
