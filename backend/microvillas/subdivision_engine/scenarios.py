"""
Scenario generation: sweep the social-club allocation and subdivide.

For every integer percentage in the configured range (10-30 by default) the
generator places the social club, tiles the four quadrants around it with
lot numbering continuing north -> south -> east -> west, drops scenarios that
are not viable, and allocates common-area shares on the rest.

A sweep is deterministic for a given parcel, which is what makes the
dimension-keyed cache in ``microvillas.services.cache`` safe.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from microvillas.config import Settings, settings as default_settings
from microvillas.models.schemas import LandParcel, MicroVillaLot, SubdivisionScenario
from microvillas.services.cache import ScenarioCache, scenario_cache
from microvillas.subdivision_engine.common_area import calculate_common_area_percentages
from microvillas.subdivision_engine.diagnostics import (
    SCENARIO_SWEEP_OVER_BUDGET,
    SOCIAL_CLUB_EXCEEDS_LAND,
    DiagnosticSink,
    emit,
)
from microvillas.subdivision_engine.quadrants import quadrant_regions, subdivide_quadrant
from microvillas.subdivision_engine.social_club import (
    calculate_social_club_dimensions,
    fits_within_land,
)

logger = logging.getLogger(__name__)


class ScenarioGenerator:
    """Produces every viable SubdivisionScenario for a parcel."""

    def __init__(
        self,
        settings: Settings | None = None,
        on_diagnostic: DiagnosticSink | None = None,
    ):
        self.settings = settings or default_settings
        self.on_diagnostic = on_diagnostic

    def percentages(self) -> range:
        cfg = self.settings
        return range(
            cfg.min_social_club_percentage,
            cfg.max_social_club_percentage + 1,
            cfg.social_club_percentage_step,
        )

    def calculate_grid_subdivision(
        self,
        land: LandParcel,
        social_club_percentage: int,
    ) -> SubdivisionScenario:
        """Subdivide the parcel at one allocation, without filtering.

        Common-area shares are not yet allocated on the returned lots.
        """
        club = calculate_social_club_dimensions(land.width, land.height, social_club_percentage)
        if not fits_within_land(club, land.width, land.height):
            emit(
                self.on_diagnostic,
                SOCIAL_CLUB_EXCEEDS_LAND,
                f"Social club at {social_club_percentage}% does not fit inside the parcel",
                land_width=land.width,
                land_height=land.height,
                social_club_percentage=social_club_percentage,
            )

        lots: list[MicroVillaLot] = []
        for region in quadrant_regions(land.width, land.height, club):
            lots.extend(subdivide_quadrant(
                region.width,
                region.height,
                region.x,
                region.y,
                region.quadrant,
                start_lot_number=len(lots) + 1,
                settings=self.settings,
            ))

        total_lots = len(lots)
        total_lot_area = sum(lot.area for lot in lots)
        average_lot_size = total_lot_area / total_lots if total_lots > 0 else 0
        efficiency = (total_lot_area + club.area) / land.total_area * 100

        # A scenario with no lots cannot satisfy the ownership invariant.
        is_viable = total_lots > 0 and all(lot.is_valid for lot in lots)

        return SubdivisionScenario(
            id=f"scenario-{social_club_percentage}",
            social_club_percentage=social_club_percentage,
            social_club=club,
            lots=lots,
            total_lots=total_lots,
            average_lot_size=average_lot_size,
            efficiency=efficiency,
            is_viable=is_viable,
            is_selected=social_club_percentage == self.settings.default_social_club_percentage,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    def generate(self, land: LandParcel) -> list[SubdivisionScenario]:
        """Run the full sweep and return the viable scenarios in percentage order."""
        start = time.perf_counter()

        scenarios: list[SubdivisionScenario] = []
        for pct in self.percentages():
            subdivision = self.calculate_grid_subdivision(land, pct)
            if not subdivision.is_viable:
                logger.debug("Dropping non-viable scenario at %d%% for %sx%s", pct, land.width, land.height)
                continue

            lots = calculate_common_area_percentages(
                subdivision.lots,
                subdivision.social_club.area,
                settings=self.settings,
                on_diagnostic=self.on_diagnostic,
            )
            scenarios.append(subdivision.model_copy(update={"lots": lots}))

        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms > self.settings.scenario_sweep_budget_ms:
            emit(
                self.on_diagnostic,
                SCENARIO_SWEEP_OVER_BUDGET,
                f"Subdivision calculation took {duration_ms:.0f}ms "
                f"(budget {self.settings.scenario_sweep_budget_ms:.0f}ms)",
                land_width=land.width,
                land_height=land.height,
                scenario_count=len(scenarios),
                duration_ms=duration_ms,
            )

        return scenarios


def calculate_all_scenarios(
    land: LandParcel,
    generator: ScenarioGenerator | None = None,
    cache: ScenarioCache | None = None,
) -> list[SubdivisionScenario]:
    """Cached sweep: reuse the scenarios for these dimensions if present."""
    generator = generator or ScenarioGenerator()
    cache = cache if cache is not None else scenario_cache
    return cache.get_or_compute(land, generator.generate)


def get_default_scenario(
    scenarios: list[SubdivisionScenario],
    settings: Settings | None = None,
) -> Optional[SubdivisionScenario]:
    """The scenario at the default allocation (20%), if it survived filtering."""
    cfg = settings or default_settings
    return get_scenario_by_percentage(scenarios, cfg.default_social_club_percentage)


def get_scenario_by_percentage(
    scenarios: list[SubdivisionScenario],
    percentage: int,
) -> Optional[SubdivisionScenario]:
    for scenario in scenarios:
        if scenario.social_club_percentage == percentage:
            return scenario
    return None
