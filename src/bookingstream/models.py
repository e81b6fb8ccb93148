from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PositionedLine:
    """One line of extracted text with its position on the source page.

    ``y`` gives reading order; ``x`` is only used for column inference.
    """

    text: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "x": self.x, "y": self.y}


@dataclass
class ReconstructedDocument:
    """Header line plus the left (guest) and right (facility) columns."""

    header: str = ""
    left_lines: List[str] = field(default_factory=list)
    right_lines: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when nothing was recovered (render a "no data" placeholder)."""
        return not (self.header or self.left_lines or self.right_lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header,
            "left_lines": list(self.left_lines),
            "right_lines": list(self.right_lines),
        }


@dataclass(frozen=True)
class FacilityEntry:
    """One booking recovered from a venue marker to the next marker or line end."""

    venue: str
    text: str  # full matched text, starting with "/<venue>"
    start: int
    end: int

    @property
    def detail(self) -> str:
        """Text following the venue name (e.g. ``": Table for 2 03/01/26 @ 19:30"``)."""
        return self.text[len(self.venue) + 1 :]


@dataclass(frozen=True)
class FacilityChain:
    """Tokenizer result: untouched leading text plus the facility entries."""

    prefix: str
    entries: List[FacilityEntry]

    def text(self) -> str:
        return self.prefix + "".join(e.text for e in self.entries)


@dataclass
class HighlightSpan:
    """A contiguous run of text tagged with zero or one category.

    ``children`` carries nested sub-emphasis (dates/times inside a facility
    span); their texts concatenate to ``text``.
    """

    text: str
    category: Optional[str] = None
    children: List[HighlightSpan] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"text": self.text, "category": self.category}
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d


@dataclass(frozen=True)
class Rule:
    """One entry of an ordered highlight rule table."""

    pattern: str
    category: str
    ignore_case: bool = False


@dataclass
class RenderedLine:
    """A reconstructed line with its section label and highlight spans."""

    text: str
    section: str
    spans: List[HighlightSpan] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "section": self.section,
            "spans": [s.to_dict() for s in self.spans],
        }


@dataclass
class RenderedDocument:
    """Orchestrator output consumed by the presentation layer."""

    header: Optional[RenderedLine] = None
    left: List[RenderedLine] = field(default_factory=list)
    right: List[RenderedLine] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.header is None and not self.left and not self.right

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_dict() if self.header else None,
            "left": [ln.to_dict() for ln in self.left],
            "right": [ln.to_dict() for ln in self.right],
        }
