"""Span highlighter: ordered category rules applied in one left-to-right scan.

The rule table is compiled into a single alternation of named groups.  At
the leftmost position where anything matches, alternatives are tried in
table order, so the first rule wins ties and spans never overlap.
Characters between matches become plain (uncategorised) spans; the span
texts always concatenate back to the input.
"""

from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple

from .models import HighlightSpan, Rule

_DATE = r"\d{1,2}/\d{1,2}(?:/\d{2,4})?"
_TIME = r"\d{1,2}[:.]\d{2}"

DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(
        r"\bDinner for \d+ on " + _DATE + r" at \d{1,2}:\d{2} in [A-Za-z][\w' ]*\w",
        "dinner",
        ignore_case=True,
    ),
    Rule(
        r"\b(?:nut allergy|nut free|no nuts?|peanuts?|tree nuts?|anaphylaxis"
        r"|gluten[- ]free|GF|coeliac|celiac|dairy[- ]free|no dairy"
        r"|lactose(?: intolerant)?|oat milk|soya milk|shellfish|vegan"
        r"|vegetarian|pescatarian)\b",
        "allergy",
        ignore_case=True,
    ),
    Rule(
        r"\b(?:VIP|DIRECTOR|CELEBRITY|OWNER|CHAIRMAN|HIGH PROFILE"
        r"|PRIDE OF BRITAIN|POB_STAFF|POB)\b",
        "vip",
        ignore_case=True,
    ),
    Rule(
        r"\bComp(?:limentary)? Upgrade(?::\s*Guest Unaware)?",
        "comp-upgrade",
        ignore_case=True,
    ),
    Rule(r"\b(?:pets? in room|dogs?|pets?|canine)\b", "pet", ignore_case=True),
    Rule(
        r"\bPre[- ]?Reg(?:istered|istration)?\b(?:[:\s]+(?:confirmed|complete|done|yes)\b)?",
        "pre-reg",
        ignore_case=True,
    ),
    Rule(
        r"\b(?:Champagne|Prosecco|Wine|Flowers|Gin|Whisky|Spa In-Room Hamper)"
        r" on " + _DATE + r"(?: for £\d+(?:\.\d{2})?)?",
        "purchase",
        ignore_case=True,
    ),
    Rule(r"\bBilling:.*", "billing", ignore_case=True),
    Rule(
        r"\bETA:?\s*" + _TIME + r"(?:\s*(?:-|–|to)\s*" + _TIME + r")?",
        "eta",
        ignore_case=True,
    ),
    Rule(
        r"\bSpecial Occasion:.*|\b(?:birthday|anniversary|honeymoon|babymoon|proposal)\b",
        "occasion",
        ignore_case=True,
    ),
    Rule(
        r"\bBeen Before:.*|\bStayed Before(?:\s*\(?x\s*\d+\)?)?|\bPrevious Stays?\b.*",
        "stay-history",
        ignore_case=True,
    ),
    Rule(r"\bIn[- ]Room(?: on Arrival)?:.*", "in-room", ignore_case=True),
    # UK plates: current (AB12 CDE), prefix (A123 BCD), suffix (ABC 123D).
    Rule(
        r"\b(?:[A-Z]{2}\d{2}\s?[A-Z]{3}|[A-Z]\d{1,3}\s?[A-Z]{3}|[A-Z]{3}\s?\d{1,3}[A-Z])\b",
        "plate",
    ),
    Rule(r"^\s*\d{1,3}\s?[-.]\s?[A-Z][A-Za-z]*(?: [A-Z][A-Za-z]*)*", "room"),
    Rule(
        r"\b(?:MINIMOON|MINI_MOON|MAGESC|MAG_ESC|CEL_DBB_\d|APR_\d_BB|POB_STAFF"
        r"|BB_?\d_WIN|LHBB_?\d?|LHAPR|LHMAG|DBB_?\d?|BB_\d|RO|MIN|CEL|COMP|STAFF)\b",
        "rate-code",
    ),
    Rule(r"£\s?\d+(?:,\d{3})*(?:\.\d{2})?", "price"),
)

FACILITY_DETAIL_RULES: Tuple[Rule, ...] = (
    Rule(r"\b" + _DATE + r"\b", "facility-date"),
    Rule(r"\b\d{1,2}:\d{2}\b", "facility-time"),
)


class RuleSet:
    """An ordered rule table compiled into one scanning pattern."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        self.rules: Tuple[Rule, ...] = tuple(rules)
        self._group_categories: Dict[str, str] = {}
        parts: List[str] = []
        for idx, rule in enumerate(self.rules):
            name = f"r{idx}"
            body = f"(?i:{rule.pattern})" if rule.ignore_case else f"(?:{rule.pattern})"
            parts.append(f"(?P<{name}>{body})")
            self._group_categories[name] = rule.category
        self._pattern = re.compile("|".join(parts)) if parts else None

    def highlight(self, text: str) -> List[HighlightSpan]:
        """Split *text* into plain and categorised spans."""
        if not text:
            return []
        if self._pattern is None:
            return [HighlightSpan(text)]
        spans: List[HighlightSpan] = []
        pos = 0
        for m in self._pattern.finditer(text):
            if m.start() == m.end():
                continue
            if m.start() > pos:
                spans.append(HighlightSpan(text[pos : m.start()]))
            spans.append(HighlightSpan(m.group(0), self._group_categories[m.lastgroup]))
            pos = m.end()
        if pos < len(text):
            spans.append(HighlightSpan(text[pos:]))
        return spans


def highlight(text: str, rules: Sequence[Rule] = DEFAULT_RULES) -> List[HighlightSpan]:
    """One-shot helper: compile *rules* and highlight *text*."""
    return RuleSet(rules).highlight(text)
