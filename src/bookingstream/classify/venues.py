"""Map a matched venue name to its display category."""

from __future__ import annotations

from enum import Enum


class VenueCategory(str, Enum):
    """Display category for a facility span."""

    spice = "venue-spice"  # Gilpin Spice dining
    spa = "venue-spa"  # Jetty Spa treatments and hampers
    lake_house = "venue-lake-house"
    light_dining = "venue-light-dining"  # teas, bento
    generic = "venue"


_SPA_KEYWORDS = (
    "spa",
    "massage",
    "facial",
    "treatment",
    "aromatherapy",
    "hot stone",
    "pure",
    "espa",
)
_LIGHT_DINING_KEYWORDS = ("tea", "bento", "afternoon")


def classify_venue(name: str) -> VenueCategory:
    """Return the category for venue *name*; groups are tested in priority order."""
    low = name.lower()
    if "spice" in low:
        return VenueCategory.spice
    if any(k in low for k in _SPA_KEYWORDS):
        return VenueCategory.spa
    if low.startswith("lh ") or "lake house" in low:
        return VenueCategory.lake_house
    if any(k in low for k in _LIGHT_DINING_KEYWORDS):
        return VenueCategory.light_dining
    return VenueCategory.generic
