"""Layout column classifier: header / left column / right column.

The booking record is a two-column layout below a single header row::

    ┌────────────────────────────────────────────────────────┐
    │  HEADER  (id, name, room, eta, departure, rate, car)   │
    ├───────────────────────────┬────────────────────────────┤
    │  LEFT                     │  RIGHT                     │
    │  guest metadata, traces,  │  Facility Bookings:        │
    │  booking notes, history   │  /Source: ... /Spice: ...  │
    │                           │  Allergies:  HK Notes:     │
    └───────────────────────────┴────────────────────────────┘

With positions available, assignment is a plain x threshold.  Without
them, right-column content is sniffed from leading labels and venue
markers.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Sequence

from .models import PositionedLine, ReconstructedDocument
from .vocab import RIGHT_COLUMN_LABELS

logger = logging.getLogger("bookingstream.layout")


def classify_columns(
    lines: Sequence[PositionedLine], split_x: float
) -> ReconstructedDocument:
    """Assign positioned lines to columns.

    The first line is always the header.  Later lines go right when
    ``x >= split_x``, otherwise left.
    """
    if not lines:
        return ReconstructedDocument()
    doc = ReconstructedDocument(header=lines[0].text)
    for line in lines[1:]:
        if line.x >= split_x:
            doc.right_lines.append(line.text)
        else:
            doc.left_lines.append(line.text)
    logger.debug(
        "Classified %d positioned lines: %d left, %d right (split_x=%.1f)",
        len(lines),
        len(doc.left_lines),
        len(doc.right_lines),
        split_x,
    )
    return doc


def classify_text_columns(
    raw_text: Optional[str],
    venue_marker: re.Pattern[str],
    right_labels: Iterable[str] = RIGHT_COLUMN_LABELS,
) -> ReconstructedDocument:
    """Fallback column assignment for plain newline-delimited text.

    A line goes right when it starts with a right-column label or with a
    venue marker.  A left line with a venue marker further in was merged
    by the extractor: it is split at the marker, prefix left, suffix right.
    """
    if not raw_text:
        return ReconstructedDocument()
    labels = tuple(right_labels)
    lines = [ln.strip() for ln in raw_text.split("\n")]
    lines = [ln for ln in lines if ln]
    if not lines:
        return ReconstructedDocument()

    doc = ReconstructedDocument(header=lines[0])
    n_split = 0
    for line in lines[1:]:
        if line.startswith(labels):
            doc.right_lines.append(line)
            continue
        m = venue_marker.search(line)
        if m is None:
            doc.left_lines.append(line)
        elif m.start() == 0:
            doc.right_lines.append(line)
        else:
            prefix = line[: m.start()].rstrip()
            if prefix:
                doc.left_lines.append(prefix)
            doc.right_lines.append(line[m.start() :])
            n_split += 1
    logger.debug(
        "Classified %d text lines: %d left, %d right, %d merged lines split",
        len(lines),
        len(doc.left_lines),
        len(doc.right_lines),
        n_split,
    )
    return doc
