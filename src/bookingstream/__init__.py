"""Booking-stream reconstruction for two-column hotel arrival records.

Frequently-used symbols are re-exported here for convenience.
For the individual stages import directly from the relevant submodule,
e.g.::

    from bookingstream.repair import repair_columns
    from bookingstream.facilities import tokenize_facilities
    from bookingstream.ingest import ingest_pdf
"""

# ── Core models & config ──────────────────────────────────────────────

from .classify import SectionTag, VenueCategory, classify_line, classify_venue
from .config import ConfigValidationError, ReconstructConfig
from .highlight import DEFAULT_RULES, FACILITY_DETAIL_RULES, RuleSet, highlight
from .layout import classify_columns, classify_text_columns
from .models import (
    FacilityChain,
    FacilityEntry,
    HighlightSpan,
    PositionedLine,
    ReconstructedDocument,
    RenderedDocument,
    RenderedLine,
    Rule,
)
from .pipeline import BookingStreamReconstructor
from .repair import RepairStageResult, repair_columns
from .sections import BookingSections, HeaderFields, extract_sections, parse_header
from .vocab import RIGHT_COLUMN_LABELS, VENUE_KEYWORDS, find_shadowed_keywords

__all__ = [
    # Models & config
    "ConfigValidationError",
    "ReconstructConfig",
    "PositionedLine",
    "ReconstructedDocument",
    "FacilityEntry",
    "FacilityChain",
    "HighlightSpan",
    "Rule",
    "RenderedLine",
    "RenderedDocument",
    # Tables
    "VENUE_KEYWORDS",
    "RIGHT_COLUMN_LABELS",
    "DEFAULT_RULES",
    "FACILITY_DETAIL_RULES",
    "find_shadowed_keywords",
    # Stages
    "classify_columns",
    "classify_text_columns",
    "repair_columns",
    "RepairStageResult",
    "RuleSet",
    "highlight",
    "SectionTag",
    "VenueCategory",
    "classify_line",
    "classify_venue",
    # Orchestrator
    "BookingStreamReconstructor",
    # Sections
    "BookingSections",
    "HeaderFields",
    "extract_sections",
    "parse_header",
]
