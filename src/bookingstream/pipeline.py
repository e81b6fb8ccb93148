"""Reconstruction orchestrator.

Composes the stages into a single entry point::

    positioned lines / raw text
        → column classification   (layout)
        → column repair           (repair)
        → facility tokenization   (facilities)
        → span highlighting       (highlight, classify)

The static tables (venue vocabulary, rule tables, section prefixes,
right-column labels) are injected at construction so alternate
vocabularies can be tested in isolation.  A reconstructor holds no state
beyond its compiled patterns; every call is independent.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .classify.lines import DEFAULT_SECTION_PREFIXES, SectionTag, classify_line
from .classify.venues import classify_venue
from .config import ReconstructConfig
from .facilities import compile_entry_pattern, tokenize_facilities
from .highlight import DEFAULT_RULES, FACILITY_DETAIL_RULES, RuleSet
from .layout import classify_columns, classify_text_columns
from .models import (
    HighlightSpan,
    PositionedLine,
    ReconstructedDocument,
    RenderedDocument,
    RenderedLine,
    Rule,
)
from .repair import RepairStageResult, repair_columns
from .vocab import (
    RIGHT_COLUMN_LABELS,
    VENUE_KEYWORDS,
    compile_venue_marker,
    find_shadowed_keywords,
)

logger = logging.getLogger("bookingstream.pipeline")


class BookingStreamReconstructor:
    """Rebuild the two-column booking record and categorise its text."""

    def __init__(
        self,
        config: Optional[ReconstructConfig] = None,
        *,
        venues: Sequence[str] = VENUE_KEYWORDS,
        rules: Sequence[Rule] = DEFAULT_RULES,
        facility_rules: Sequence[Rule] = FACILITY_DETAIL_RULES,
        section_prefixes: Sequence[Tuple[Tuple[str, ...], SectionTag]] = DEFAULT_SECTION_PREFIXES,
        right_column_labels: Sequence[str] = RIGHT_COLUMN_LABELS,
    ) -> None:
        self.config = config or ReconstructConfig()
        self.venues: Tuple[str, ...] = tuple(venues)
        self.section_prefixes = tuple(section_prefixes)
        self.right_column_labels: Tuple[str, ...] = tuple(right_column_labels)
        self.venue_marker = compile_venue_marker(self.venues)
        self.entry_pattern = compile_entry_pattern(self.venues)
        self.rules = RuleSet(rules)
        self.facility_rules = RuleSet(facility_rules)

        for general, specific in find_shadowed_keywords(self.venues):
            logger.warning(
                "Venue keyword %r precedes and shadows %r; %r will never match",
                general,
                specific,
                specific,
            )

    # ── Reconstruction ────────────────────────────────────────────────

    def reconstruct(
        self,
        positioned_lines: Optional[Sequence[PositionedLine]] = None,
        raw_text: Optional[str] = None,
    ) -> ReconstructedDocument:
        """Classify into columns and repair.

        Positioned lines are preferred; *raw_text* is the fallback when no
        position data was captured.  Empty input yields an empty document.
        """
        doc, _ = self.reconstruct_with_stages(positioned_lines, raw_text)
        return doc

    def reconstruct_with_stages(
        self,
        positioned_lines: Optional[Sequence[PositionedLine]] = None,
        raw_text: Optional[str] = None,
    ) -> Tuple[ReconstructedDocument, List[RepairStageResult]]:
        """Like :meth:`reconstruct`, also returning the repair stage records."""
        if positioned_lines:
            doc = classify_columns(positioned_lines, self.config.column_split_x)
        else:
            doc = classify_text_columns(
                raw_text, self.venue_marker, self.right_column_labels
            )

        if not (self.config.enable_column_repair and doc.right_lines):
            return doc, []
        left, right, stages = repair_columns(
            doc.left_lines, doc.right_lines, self.venue_marker
        )
        repaired = ReconstructedDocument(
            header=doc.header, left_lines=list(left), right_lines=list(right)
        )
        return repaired, stages

    # ── Highlighting ──────────────────────────────────────────────────

    def highlight_line(self, line: str) -> List[HighlightSpan]:
        """Categorised spans for one line; concatenated texts equal *line*."""
        chain = tokenize_facilities(line, self.entry_pattern)
        if chain is None:
            return self.rules.highlight(line)

        spans = self.rules.highlight(chain.prefix)
        for entry in chain.entries:
            span = HighlightSpan(entry.text, classify_venue(entry.venue).value)
            if self.config.highlight_facility_details:
                detail_spans = self.facility_rules.highlight(entry.detail)
                if any(c.category for c in detail_spans):
                    marker = entry.text[: len(entry.text) - len(entry.detail)]
                    span.children = [HighlightSpan(marker)] + detail_spans
            spans.append(span)
        return spans

    def render_line(self, line: str) -> RenderedLine:
        return RenderedLine(
            text=line,
            section=classify_line(line, self.section_prefixes).value,
            spans=self.highlight_line(line),
        )

    def render(
        self,
        positioned_lines: Optional[Sequence[PositionedLine]] = None,
        raw_text: Optional[str] = None,
    ) -> RenderedDocument:
        """Reconstruct and highlight every line of one guest record."""
        return self.render_document(self.reconstruct(positioned_lines, raw_text))

    def render_document(self, doc: ReconstructedDocument) -> RenderedDocument:
        """Highlight an already reconstructed document."""
        if doc.is_empty():
            return RenderedDocument()
        return RenderedDocument(
            header=self.render_line(doc.header) if doc.header else None,
            left=[self.render_line(ln) for ln in doc.left_lines],
            right=[self.render_line(ln) for ln in doc.right_lines],
        )
