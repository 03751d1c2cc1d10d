"""
Social club placement.

The shared-amenity rectangle is sized to a percentage of the parcel, keeps
the parcel's aspect ratio, and is centered.  No clamping is applied: callers
that care whether the rectangle fits can ask ``fits_within_land``.
"""

from __future__ import annotations

import math

from shapely.geometry import box

from microvillas.models.schemas import SocialClubLayout


def calculate_social_club_dimensions(
    land_width: float,
    land_height: float,
    social_club_percentage: float,
) -> SocialClubLayout:
    """Size and center the social club for a given land allocation.

    Args:
        land_width: Parcel width in meters (> 0)
        land_height: Parcel height in meters (> 0)
        social_club_percentage: Share of the parcel given to the club (10-30)

    Returns a SocialClubLayout whose top-left corner is (x, y).
    """
    target_area = land_width * land_height * social_club_percentage / 100

    aspect_ratio = land_width / land_height
    height = math.sqrt(target_area / aspect_ratio)
    width = height * aspect_ratio

    return SocialClubLayout(
        width=width,
        height=height,
        area=target_area,
        x=(land_width - width) / 2,
        y=(land_height - height) / 2,
    )


def fits_within_land(club: SocialClubLayout, land_width: float, land_height: float) -> bool:
    """True when the club rectangle lies inside the parcel (edges may touch)."""
    parcel = box(0, 0, land_width, land_height)
    footprint = box(club.x, club.y, club.x + club.width, club.y + club.height)
    return parcel.buffer(1e-9).contains(footprint)
