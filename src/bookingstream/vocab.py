"""Static lookup tables: venue vocabulary and column/section labels.

Facility boundaries are recognised via a finite, ordered keyword set.
A venue marker is ``/`` immediately followed by one of
:data:`VENUE_KEYWORDS`; the alternation is tried in table order, so more
specific names must precede any shorter keyword that is a prefix of them
("GH Pure Lakes Aromatherapy Massage" before "GH Pure" before "Pure").

Any addition to the vocabulary needs a regression check for accidental
prefix collisions; :func:`find_shadowed_keywords` reports them.
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

VENUE_KEYWORDS: Tuple[str, ...] = (
    # Jetty Spa treatments
    "GH Pure Lakes Aromatherapy Massage",
    "GH Pure Lakes Hot Stone Massage",
    "GH Pure Couples Massage",
    "GH Pure Lakes",
    "GH Pure Facial",
    "GH Pure",
    "Pure Lakes",
    "Pure Couples",
    "Pure",
    "ESPA Facial",
    "ESPA",
    "Aromatherapy Massage",
    "Hot Stone Massage",
    "Massage",
    "Facial",
    "Treatments",
    "Spa In-Room Hamper",
    "Spa Hamper",
    "Spa Use",
    "Spa",
    # Lake House
    "LH Afternoon Tea",
    "LH Bento",
    "LH Dinner",
    "LH Lunch",
    "Lake House Afternoon Tea",
    "Lake House",
    # Light dining
    "Afternoon Tea",
    "Bento",
    # Restaurants
    "Gilpin Spice",
    "Spice",
    "Source",
    "Dinner",
    "Lunch",
)

# Leading labels that always belong to the right (facility) column.
RIGHT_COLUMN_LABELS: Tuple[str, ...] = (
    "Facility Bookings:",
    "Allergies:",
    "HK Notes:",
)

_NEVER = re.compile(r"(?!)")


def venue_alternation(vocab: Sequence[str]) -> str:
    """Regex alternation of *vocab* in table order (no group)."""
    return "|".join(re.escape(k) for k in vocab)


def compile_venue_marker(vocab: Sequence[str]) -> re.Pattern[str]:
    """Compile the venue-marker pattern for *vocab*.

    The venue name is captured in the ``venue`` group.  An empty
    vocabulary yields a pattern that never matches.
    """
    if not vocab:
        return _NEVER
    return re.compile(r"/(?P<venue>" + venue_alternation(vocab) + r")\b")


def find_shadowed_keywords(vocab: Sequence[str]) -> List[Tuple[str, str]]:
    """Return ``(general, specific)`` pairs where *general* hides *specific*.

    *general* shadows *specific* when it appears earlier in the table and
    *specific* starts with it at a word boundary, so the marker alternation
    would stop at the shorter name.
    """
    shadowed: List[Tuple[str, str]] = []
    for i, general in enumerate(vocab):
        for specific in vocab[i + 1 :]:
            if len(specific) <= len(general) or not specific.startswith(general):
                continue
            nxt = specific[len(general)]
            if not (nxt.isalnum() or nxt == "_"):
                shadowed.append((general, specific))
    return shadowed
