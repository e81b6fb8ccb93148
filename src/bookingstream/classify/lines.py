"""Tag a reconstructed line with the section it starts, if any."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple


class SectionTag(str, Enum):
    """Section label used to decide heading styling."""

    facility_header = "facility_header"
    traces_header = "traces_header"
    booking_notes_header = "booking_notes_header"
    hk_notes_header = "hk_notes_header"
    allergies_header = "allergies_header"
    previous_stays_header = "previous_stays_header"
    metadata = "metadata"  # Company / Contact / Occasion / P.O.Nr
    content = "content"


DEFAULT_SECTION_PREFIXES: Tuple[Tuple[Tuple[str, ...], SectionTag], ...] = (
    (("Facility Bookings:",), SectionTag.facility_header),
    (("Traces:",), SectionTag.traces_header),
    (("Booking Notes",), SectionTag.booking_notes_header),
    (("HK Notes:",), SectionTag.hk_notes_header),
    (("Allergies:",), SectionTag.allergies_header),
    (("Previous Stays",), SectionTag.previous_stays_header),
    (
        ("Company:", "Contact Details:", "Occasion:", "P.O.Nr:"),
        SectionTag.metadata,
    ),
)


def classify_line(
    text: str,
    prefixes: Sequence[Tuple[Tuple[str, ...], SectionTag]] = DEFAULT_SECTION_PREFIXES,
) -> SectionTag:
    """Return the tag of the first prefix group *text* starts with."""
    lead = text.lstrip()
    for group, tag in prefixes:
        if lead.startswith(group):
            return tag
    return SectionTag.content
