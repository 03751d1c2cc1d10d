"""
Quadrant subdivision.

The parcel area left around the centered social club is split into four
rectangles (north, south, east, west).  Each is tiled into a uniform grid of
lots by a brute-force search over rows x cols:

  1. Skip any grid whose lot area is below the minimum lot size.
  2. Prefer the smallest lot area (densest subdivision).
  3. Within the near-tie band (default 5 sqm) prefer the squarer lot.

The search space is bounded by floor(sqrt(area / min_lot)) + 1 on each axis,
which is a few dozen iterations for realistic parcels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from microvillas.config import Settings, settings as default_settings
from microvillas.models.schemas import MicroVillaLot, Quadrant, SocialClubLayout

# Lot numbering runs across quadrants in this order.
QUADRANT_ORDER: tuple[Quadrant, ...] = ("north", "south", "east", "west")


@dataclass
class QuadrantRegion:
    """One rectangle of free land around the social club."""
    quadrant: Quadrant
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class GridConfig:
    rows: int
    cols: int
    lot_width: float
    lot_height: float

    @property
    def lot_area(self) -> float:
        return self.lot_width * self.lot_height

    @property
    def aspect_ratio(self) -> float:
        return max(self.lot_width, self.lot_height) / min(self.lot_width, self.lot_height)


def quadrant_regions(
    land_width: float,
    land_height: float,
    club: SocialClubLayout,
) -> list[QuadrantRegion]:
    """The four regions around the club, in numbering order.

    North and south span the full parcel width; east and west span only the
    club's height and sit beside it.
    """
    club_right = club.x + club.width
    club_bottom = club.y + club.height

    return [
        QuadrantRegion("north", 0, 0, land_width, club.y),
        QuadrantRegion("south", 0, club_bottom, land_width, land_height - club_bottom),
        QuadrantRegion("east", club_right, club.y, land_width - club_right, club.height),
        QuadrantRegion("west", 0, club.y, club.x, club.height),
    ]


def find_best_grid(
    quadrant_width: float,
    quadrant_height: float,
    min_lot_area: float,
    tie_threshold: float = 5,
) -> Optional[GridConfig]:
    """Search rows x cols for the densest grid with every lot >= min_lot_area.

    Returns None when no grid qualifies.
    """
    if quadrant_width <= 0 or quadrant_height <= 0:
        return None

    quadrant_area = quadrant_width * quadrant_height
    if quadrant_area < min_lot_area:
        return None

    max_divisions = math.floor(math.sqrt(quadrant_area / min_lot_area)) + 1

    best: Optional[GridConfig] = None
    for rows in range(1, max_divisions + 1):
        for cols in range(1, max_divisions + 1):
            candidate = GridConfig(
                rows=rows,
                cols=cols,
                lot_width=quadrant_width / cols,
                lot_height=quadrant_height / rows,
            )
            if candidate.lot_area < min_lot_area:
                continue

            if (
                best is None
                or candidate.lot_area < best.lot_area
                or (
                    abs(candidate.lot_area - best.lot_area) < tie_threshold
                    and candidate.aspect_ratio < best.aspect_ratio
                )
            ):
                best = candidate

    return best


def subdivide_quadrant(
    quadrant_width: float,
    quadrant_height: float,
    offset_x: float,
    offset_y: float,
    quadrant: Quadrant,
    start_lot_number: int,
    settings: Settings | None = None,
) -> list[MicroVillaLot]:
    """Tile one quadrant into lots, numbered from start_lot_number.

    Args:
        quadrant_width: Region width in meters
        quadrant_height: Region height in meters
        offset_x: Region left edge within the parcel
        offset_y: Region top edge within the parcel
        quadrant: Tag stamped on every lot
        start_lot_number: First lot number to assign

    Lots are emitted row-major.  Returns [] if the region cannot hold a
    single minimum-size lot.
    """
    cfg = settings or default_settings
    min_lot_area = cfg.min_lot_size_sqm

    grid = find_best_grid(
        quadrant_width, quadrant_height, min_lot_area, cfg.lot_area_tie_threshold_sqm,
    )
    if grid is None:
        return []

    lots: list[MicroVillaLot] = []
    lot_number = start_lot_number
    for row in range(grid.rows):
        for col in range(grid.cols):
            area = grid.lot_area
            lots.append(MicroVillaLot(
                id=f"lot-{lot_number}",
                lot_number=lot_number,
                x=offset_x + col * grid.lot_width,
                y=offset_y + row * grid.lot_height,
                width=grid.lot_width,
                height=grid.lot_height,
                area=area,
                quadrant=quadrant,
                is_valid=area >= min_lot_area,
            ))
            lot_number += 1

    return lots
