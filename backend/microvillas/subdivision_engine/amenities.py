"""
Social club amenity catalog.

36 amenities across 5 categories with default USD costs drawn from
2025-2026 Dominican Republic market research.  Operators may override any
default per project; overrides take precedence when totalling.

Space requirements are approximate footprints in sqm and are absent for
furniture and site-wide systems.
"""

from __future__ import annotations

from typing import Optional

from microvillas.models.schemas import (
    Amenity,
    AmenityCategory,
    SocialClubLayout,
    StorageType,
)


# ──────────────────────────────────────────────────────────────────
# CATALOG
# ──────────────────────────────────────────────────────────────────
# (id, name, category, default_cost_usd, unit, space_sqm, description)

_CATALOG_ROWS: list[tuple] = [
    # Aquatic
    ("pool-small", "Small Swimming Pool", "aquatic", 14500, "unit", 25,
     "Basic rectangular pool with filter and pump system (20-30 sqm)"),
    ("pool-medium", "Medium Swimming Pool", "aquatic", 25000, "unit", 50,
     "Standard pool with LED lighting and chemical system (40-60 sqm)"),
    ("pool-large", "Large Swimming Pool", "aquatic", 40000, "unit", 70,
     "Premium pool with advanced features and waterfall (60+ sqm)"),
    ("pool-infinity", "Infinity Pool", "aquatic", 55000, "unit", 60,
     "Luxury infinity edge pool with vanishing edge design"),
    ("jacuzzi", "Jacuzzi / Hot Tub", "aquatic", 8000, "unit", 9,
     "6-8 person hot tub with jets and heating (8-10 sqm)"),
    ("wading-pool", "Children's Wading Pool", "aquatic", 6000, "unit", 18,
     "Shallow pool for children with safety features (15-20 sqm)"),

    # Dining
    ("bbq-station", "BBQ Grilling Station", "dining", 3500, "unit", 6,
     "Built-in grill with counter space and basic storage"),
    ("outdoor-kitchen-basic", "Basic Outdoor Kitchen", "dining", 8000, "unit", 10,
     "Compact kitchen with grill, sink, and refrigerator (10 sqm)"),
    ("outdoor-kitchen-full", "Full Outdoor Kitchen", "dining", 18000, "unit", 22,
     "Complete kitchen with appliances, bar seating, and pizza oven (20+ sqm)"),
    ("dining-pavilion", "Covered Dining Pavilion", "dining", 12000, "unit", 35,
     "Roofed dining area with ceiling fans (30-40 sqm)"),
    ("outdoor-bar", "Outdoor Bar Counter", "dining", 5000, "unit", 8,
     "Bar with stools, sink, and mini-fridge"),

    # Recreation
    ("gazebo", "Lounge Gazebo", "recreation", 4000, "unit", 12,
     "Covered relaxation area with built-in seating"),
    ("pergola", "Pergola", "recreation", 4500, "unit", 25,
     "Open-air structure with climbing plants (20-30 sqm)"),
    ("tennis-court", "Tennis Court", "recreation", 65000, "unit", 650,
     "Full-size court with professional surface and net (600+ sqm)"),
    ("basketball-court", "Basketball Court", "recreation", 40000, "unit", 250,
     "Half-court with quality surface and hoops (200-300 sqm)"),
    ("multi-sport-court", "Multi-Sport Court", "recreation", 50000, "unit", 400,
     "Versatile court for basketball, volleyball, and tennis (400 sqm)"),
    ("playground", "Children's Playground", "recreation", 8000, "unit", 50,
     "Safe play area with swings, slides, and climbing structures"),
    ("fire-pit", "Fire Pit Seating Area", "recreation", 2500, "unit", 15,
     "Built-in fire pit with stone seating circle"),
    ("game-area", "Covered Game Area", "recreation", 15000, "unit", 28,
     "Roofed space for table tennis, billiards, and board games (25-30 sqm)"),

    # Furniture
    ("lounge-chairs-6", "Pool Lounge Chairs (Set of 6)", "furniture", 1800, "set", None,
     "Weather-resistant reclining chairs with cushions"),
    ("lounge-chairs-12", "Pool Lounge Chairs (Set of 12)", "furniture", 3200, "set", None,
     "Premium weather-resistant reclining chairs with cushions"),
    ("umbrellas-4", "Pool Umbrellas (Set of 4)", "furniture", 1200, "set", None,
     "Large sun umbrellas with heavy-duty bases"),
    ("shade-umbrellas-2", "Large Shade Umbrellas (Set of 2)", "furniture", 1500, "set", None,
     "Commercial-grade cantilever umbrellas (3m+ diameter)"),
    ("poolside-cabana", "Poolside Cabana", "furniture", 2500, "unit", None,
     "Fabric cabana with curtains and daybed"),
    ("dining-tables-3", "Outdoor Dining Tables (Set of 3)", "furniture", 3000, "set", None,
     "Weather-resistant tables with 6 chairs each (18 seats total)"),
    ("lounge-furniture-set", "Outdoor Lounge Furniture Set", "furniture", 4000, "set", None,
     "Sectional sofa set with coffee table and cushions"),

    # Utilities
    ("bathrooms-basic", "Basic Bathrooms (2 units)", "utilities", 12000, "set", 18,
     "Two standard bathrooms with sinks and toilets (15-20 sqm total)"),
    ("bathrooms-full", "Full Bathrooms with Showers (2 units)", "utilities", 22000, "set", 35,
     "Two complete bathrooms with showers and lockers (30-40 sqm total)"),
    ("changing-rooms", "Changing Rooms", "utilities", 8000, "unit", 15,
     "Two changing rooms with benches and hooks (15 sqm total)"),
    ("storage-room", "Equipment Storage Room", "utilities", 6000, "unit", 20,
     "Secure storage for pool and recreational equipment (20 sqm)"),
    ("rinse-showers", "Outdoor Rinse Showers (Set of 2)", "utilities", 2000, "set", 4,
     "Basic outdoor showers for pool area"),
    ("landscaping-basic", "Basic Landscaping (per 100 sqm)", "utilities", 3500, "per 100 sqm", None,
     "Grass, shrubs, and basic plantings with irrigation"),
    ("landscaping-premium", "Premium Landscaping (per 100 sqm)", "utilities", 7000, "per 100 sqm", None,
     "Tropical plants, palm trees, stone features, and automated irrigation"),
    ("parking", "Parking Area (per 10 spaces)", "utilities", 8000, "per 10 spaces", 250,
     "Paved parking with striping and lighting (10 car spaces)"),
    ("security-lighting", "Security & Pathway Lighting System", "utilities", 4500, "system", None,
     "LED pathway lights and security lighting throughout social club"),
    ("wifi-system", "WiFi Network System", "utilities", 2500, "system", None,
     "Commercial-grade WiFi coverage for social club area"),
]

AMENITIES_CATALOG: tuple[Amenity, ...] = tuple(
    Amenity(
        id=row[0],
        name=row[1],
        category=row[2],
        default_cost_usd=row[3],
        unit=row[4],
        space_requirement=row[5],
        description=row[6],
    )
    for row in _CATALOG_ROWS
)

_BY_ID: dict[str, Amenity] = {a.id: a for a in AMENITIES_CATALOG}

AMENITY_CATEGORIES: tuple[AmenityCategory, ...] = (
    "aquatic",
    "dining",
    "recreation",
    "furniture",
    "utilities",
)

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "aquatic": "Aquatic Features",
    "dining": "Dining & Kitchen",
    "recreation": "Recreation & Sports",
    "furniture": "Furniture & Fixtures",
    "utilities": "Utilities & Facilities",
}

# Typical selection for a micro villa social club
DEFAULT_AMENITY_SELECTION: tuple[str, ...] = (
    "pool-medium",
    "bbq-station",
    "lounge-chairs-12",
    "umbrellas-4",
    "bathrooms-full",
    "landscaping-basic",
    "security-lighting",
)


def get_amenities_by_category(category: str) -> list[Amenity]:
    return [a for a in AMENITIES_CATALOG if a.category == category]


def get_amenity_by_id(amenity_id: str) -> Optional[Amenity]:
    return _BY_ID.get(amenity_id)


def calculate_total_amenities_cost(
    selected_ids: list[str],
    custom_costs: dict[str, float] | None = None,
) -> float:
    """Sum amenity costs, preferring per-project overrides.

    Unknown ids are skipped.
    """
    custom_costs = custom_costs or {}
    total = 0.0
    for amenity_id in selected_ids:
        amenity = _BY_ID.get(amenity_id)
        if amenity is None:
            continue
        total += custom_costs.get(amenity_id, amenity.default_cost_usd)
    return total


def calculate_amenities_space(selected_ids: list[str]) -> float:
    """Footprint in sqm of the selected amenities that declare one."""
    return sum(
        _BY_ID[amenity_id].space_requirement or 0
        for amenity_id in selected_ids
        if amenity_id in _BY_ID
    )


def design_social_club(
    layout: SocialClubLayout,
    amenity_ids: list[str],
    custom_costs: dict[str, float] | None = None,
    storage_type: StorageType = "dedicated",
) -> SocialClubLayout:
    """Return a copy of the layout carrying the amenity selection and its cost.

    Duplicate and unknown ids are dropped; selection order is preserved.
    """
    selected: list[str] = []
    for amenity_id in amenity_ids:
        if amenity_id in _BY_ID and amenity_id not in selected:
            selected.append(amenity_id)

    return layout.model_copy(update={
        "selected_amenities": selected,
        "storage_type": storage_type,
        "total_cost": calculate_total_amenities_cost(selected, custom_costs),
    })
