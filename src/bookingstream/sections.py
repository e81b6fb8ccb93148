"""Structured sections of a booking record.

Complements the column view with named fields pulled from the flattened
record text: header fields (ETA, status, departure, room type, rate code,
rate, car registration) and the labelled sections that follow (company,
traces, facility bookings, allergies, notes, purchases, billing, checks).

Each section runs from its label to the first of a set of stop labels, so
a section missing its terminator simply extends to the end of the text.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .repair import split_multi_venue
from .vocab import VENUE_KEYWORDS, compile_venue_marker

_DATE_RE = re.compile(r"\d{2}/\d{2}/\d{2,4}")
_HHMM_RE = re.compile(r"\b(\d{4})\b")
_STATUS_RE = re.compile(r"\b(CHI|DEF|GRP|VAC|RES|INH|DUE|ARR|CXL|CAN)\b", re.I)
_ROOM_TYPE_RE = re.compile(r"\b(SL|MR|CR|JS|GR|SS|LHC|LHM|LHS|LHSS)\b", re.I)
# Longest codes first.
_RATE_CODE_RE = re.compile(
    r"\b(MINIMOON|MINI_MOON|MAGESC|MAG_ESC|APR_\d_BB|POB_STAFF|BB_?\d?_?WIN"
    r"|LHBB_?\d?|DBB_?\d?|BB_?\d?|RO_?\d?|MIN|CEL|COMP|LHAPR|LHMAG|POB|STAFF)\b",
    re.I,
)
_RATE_AMOUNT_RE = re.compile(r"(\d{2,4}\.\d{2})\b")
_CAR_REG_RE = re.compile(
    r"\b([A-Z]{2}\d{2}\s?[A-Z]{3}|[A-Z]\d{1,3}\s[A-Z]{3}|\d{1,4}\s[A-Z]{2,3}|[A-Z]{2}\d{2,4})\s*$",
    re.I,
)


@dataclass
class HeaderFields:
    """Fields recovered from the record's header row."""

    time: str = ""  # arrival time as HHMM
    status: str = ""
    departure: str = ""
    room_type: str = ""
    rate_code: str = ""
    rate: str = ""
    car_reg: str = ""


@dataclass
class Billing:
    total_rate: Optional[str] = None
    deposit: Optional[str] = None
    billing: Optional[str] = None
    unit: Optional[str] = None


@dataclass
class BookingSections:
    """Named sections of one booking record."""

    company: Optional[str] = None
    contact: Optional[str] = None
    occasion: Optional[str] = None
    po_number: Optional[str] = None
    traces: Optional[str] = None
    facility_bookings: List[str] = field(default_factory=list)
    allergies: Optional[str] = None
    hk_notes: Optional[str] = None
    booking_notes: List[str] = field(default_factory=list)
    in_room_items: List[str] = field(default_factory=list)
    line_items: List[str] = field(default_factory=list)
    billing: Optional[Billing] = None
    checks: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_header(line: str) -> HeaderFields:
    """Pull the header-row fields out of *line*; missing fields stay empty."""
    fields = HeaderFields()
    if not line:
        return fields

    m = _HHMM_RE.search(line)
    # Four digits starting "20" are a year, not a time.
    if m and not m.group(1).startswith("20"):
        fields.time = m.group(1)
    m = _STATUS_RE.search(line)
    if m:
        fields.status = m.group(1).upper()
    dates = _DATE_RE.findall(line)
    if dates:
        fields.departure = dates[1] if len(dates) > 1 else dates[0]
    m = _ROOM_TYPE_RE.search(line)
    if m:
        fields.room_type = m.group(1).upper()
    m = _RATE_CODE_RE.search(line)
    if m:
        fields.rate_code = m.group(1).upper()
    m = _RATE_AMOUNT_RE.search(line)
    if m:
        fields.rate = f"£{m.group(1)}"
    m = _CAR_REG_RE.search(line)
    if m:
        fields.car_reg = m.group(1).upper()
    return fields


def _section(text: str, label: str, stops: Tuple[str, ...]) -> Optional[str]:
    """Text after *label* up to the first stop label, or ``None`` if blank."""
    stop_alt = "|".join(stops + ("$",))
    m = re.search(rf"{label}\s*(.*?)(?=\s*(?:{stop_alt}))", text, re.I)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return None


_NOTES_END_RE = re.compile(
    r"Checked:|8 Day Check:|4 day Call:|Champagne on|Spa In-Room|Dinner for"
    r"|Flowers on|Prosecco on|Wine on",
    re.I,
)
_NOTE_SPLIT_RE = re.compile(
    r"(?=Been Before:|Special Occasion:|ETA:|Billing:|In Room|Checked:|Pre.?Reg)", re.I
)
_LINE_ITEM_RES = (
    re.compile(r"(?:Champagne|Prosecco|Wine|Flowers|Gin|Whisky)\s+on\s+[\d/]+\s+for\s+£[\d.]+", re.I),
    re.compile(r"Spa\s+In-Room\s+Hamper\s+on\s+[\d/]+\s+for\s+£[\d.]+", re.I),
    re.compile(r"Dinner\s+for\s+\d+\s+on\s+[\d/]+\s+at\s+[\d:]+\s+in\s+\S+(?:\s+\S+)?", re.I),
)
_VENUE_MARKER = compile_venue_marker(VENUE_KEYWORDS)
_CHECK_RES = (
    re.compile(r"Checked:\s*[A-Z]{2}", re.I),
    re.compile(r"8 Day Check:\s*[A-Z]{2}", re.I),
    re.compile(r"4 day Call:\s*.+?(?=\s*(?:\d{2}/|$))", re.I),
)


def extract_sections(
    lines: Sequence[str], venue_marker: Optional[re.Pattern[str]] = None
) -> BookingSections:
    """Extract named sections from the body lines of one record.

    *lines* are the record lines after the header; they are flattened to a
    single space-joined string first, since sections freely wrap lines.
    Facility bookings are split at venue markers (default vocabulary
    unless *venue_marker* is given).
    """
    text = " ".join(ln.strip() for ln in lines if ln and ln.strip())
    out = BookingSections()
    if not text:
        return out

    out.company = _section(
        text, r"Company:", ("Contact Details:", "Occasion:", r"P\.O\.Nr:", "Traces:", "Booking Notes")
    )
    out.contact = _section(
        text,
        r"Contact Details:",
        ("Occasion:", r"P\.O\.Nr:", "Traces:", "Total Rate:", "Booking Notes"),
    )
    out.occasion = _section(
        text, r"(?<!Special )Occasion:", (r"P\.O\.Nr:", "Traces:", "Booking Notes", "Contact Details:")
    )
    out.po_number = _section(text, r"P\.O\.Nr:", ("Traces:", "Booking Notes", "Facility Bookings:"))
    out.traces = _section(text, r"Traces:", ("Booking Notes", "Facility Bookings:", "Allergies:"))

    facilities = _section(text, r"Facility Bookings:", ("Allergies:", "HK Notes:", "Booking Notes"))
    if facilities:
        out.facility_bookings = list(
            split_multi_venue([facilities], venue_marker or _VENUE_MARKER)
        )

    out.allergies = _section(
        text, r"Allergies:", ("HK Notes:", "Guest Notes:", "Unit:", "Booking Notes")
    )
    out.hk_notes = _section(
        text, r"HK Notes:", ("Unit:", "Guest Notes:", "Booking Notes", "Allergies:")
    )

    idx = text.find("Booking Notes")
    if idx != -1:
        after = text[idx + len("Booking Notes") :]
        end = _NOTES_END_RE.search(after)
        notes = (after[: end.start()] if end else after).strip()
        out.booking_notes = [
            n.strip() for n in _NOTE_SPLIT_RE.split(notes) if len(n.strip()) > 2
        ]

    in_room = _section(
        text, r"In Room(?:\s+on Arrival)?:", ("Checked:", "8 Day Check:", "4 day Call:")
    )
    if in_room:
        out.in_room_items = [
            i.strip() for i in re.split(r"[,;]", in_room) if len(i.strip()) > 1
        ]

    for pattern in _LINE_ITEM_RES:
        out.line_items.extend(m.group(0).strip() for m in pattern.finditer(text))

    total = re.search(r"Total Rate:\s*([\d,]+\.\d{2})", text)
    deposit = re.search(r"Deposit:\s*([\d,]+\.\d{2})", text)
    billing = _section(text, r"Billing:", ("Unit:", "Total Rate:", "Deposit:"))
    unit = _section(text, r"Unit:", ("Token",))
    if total or deposit or billing or unit:
        out.billing = Billing(
            total_rate=f"£{total.group(1)}" if total else None,
            deposit=f"£{deposit.group(1)}" if deposit else None,
            billing=billing,
            unit=unit,
        )

    for pattern in _CHECK_RES:
        out.checks.extend(m.group(0).strip() for m in pattern.finditer(text))
    return out
