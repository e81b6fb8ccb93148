"""Pure lookup classifiers for venue names and section headings."""

from .lines import DEFAULT_SECTION_PREFIXES, SectionTag, classify_line
from .venues import VenueCategory, classify_venue

__all__ = [
    "DEFAULT_SECTION_PREFIXES",
    "SectionTag",
    "VenueCategory",
    "classify_line",
    "classify_venue",
]
