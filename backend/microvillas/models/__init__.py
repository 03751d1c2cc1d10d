from __future__ import annotations

from microvillas.models.schemas import (
    LandParcel,
    SocialClubLayout,
    MicroVillaLot,
    SubdivisionScenario,
    PricingScenario,
    FinancialAnalysis,
    OtherCost,
    Amenity,
)

__all__ = [
    "LandParcel",
    "SocialClubLayout",
    "MicroVillaLot",
    "SubdivisionScenario",
    "PricingScenario",
    "FinancialAnalysis",
    "OtherCost",
    "Amenity",
]
