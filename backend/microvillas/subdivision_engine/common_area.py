"""
Common-area ownership allocation.

Each lot owns a share of the social club proportional to its own area
relative to the total lot area.  Shares must sum to 100% within the
configured tolerance; a miss is reported as a diagnostic, not an error.
"""

from __future__ import annotations

from microvillas.config import Settings, settings as default_settings
from microvillas.models.schemas import MicroVillaLot
from microvillas.subdivision_engine.diagnostics import (
    COMMON_AREA_SUM_OUT_OF_TOLERANCE,
    DiagnosticSink,
    emit,
)


def calculate_common_area_percentages(
    lots: list[MicroVillaLot],
    social_club_area: float,
    settings: Settings | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> list[MicroVillaLot]:
    """Return new lots annotated with common_area_percentage.

    social_club_area is carried into the diagnostic payload only; it does
    not affect the ratio.  The input lots are left untouched.
    """
    if not lots:
        return []

    cfg = settings or default_settings
    total_lot_area = sum(lot.area for lot in lots)

    allocated = [
        lot.model_copy(update={
            "common_area_percentage": lot.area / total_lot_area * 100 if total_lot_area > 0 else 0.0,
        })
        for lot in lots
    ]

    total_pct = sum(lot.common_area_percentage for lot in allocated)
    if abs(total_pct - 100) > cfg.common_area_tolerance_pct:
        emit(
            on_diagnostic,
            COMMON_AREA_SUM_OUT_OF_TOLERANCE,
            f"Common area percentages sum to {total_pct:.4f}% "
            f"(expected 100% ±{cfg.common_area_tolerance_pct}%)",
            total_lots=len(lots),
            total_lot_area=total_lot_area,
            social_club_area=social_club_area,
            total_percentage=total_pct,
        )

    return allocated
