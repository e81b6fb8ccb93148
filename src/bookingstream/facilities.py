"""Facility chain tokenizer.

Splits a line such as::

    /Source: Table for 2 03/01/26 @ 19:30/Spice: Table for 2 02/01/26 @ 20:15

into one :class:`FacilityEntry` per venue marker.  The end of an entry is
found by looking ahead for the *next venue marker*, not for any ``/``, so
DD/MM/YY dates stay inside the entry's detail text.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .models import FacilityChain, FacilityEntry
from .vocab import venue_alternation


def compile_entry_pattern(vocab: Sequence[str]) -> re.Pattern[str]:
    """Pattern matching one entry: a marker plus text up to the next marker."""
    if not vocab:
        return re.compile(r"(?!)")
    venues = venue_alternation(vocab)
    return re.compile(
        r"/(?P<venue>" + venues + r")\b.*?(?=/(?:" + venues + r")\b|\Z)",
        re.DOTALL,
    )


def tokenize_facilities(
    line: str, entry_pattern: re.Pattern[str]
) -> Optional[FacilityChain]:
    """Split *line* into facility entries.

    Returns ``None`` when the line has no venue marker, in which case the
    caller highlights the whole line generically.  Otherwise
    ``chain.prefix + "".join(entry.text ...)`` reproduces *line*.
    """
    entries = [
        FacilityEntry(venue=m.group("venue"), text=m.group(0), start=m.start(), end=m.end())
        for m in entry_pattern.finditer(line)
    ]
    if not entries:
        return None
    return FacilityChain(prefix=line[: entries[0].start], entries=entries)
