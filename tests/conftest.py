"""Shared test fixtures for booking-stream reconstruction."""

import pytest

from bookingstream.config import ReconstructConfig
from bookingstream.facilities import compile_entry_pattern
from bookingstream.models import PositionedLine
from bookingstream.pipeline import BookingStreamReconstructor
from bookingstream.vocab import VENUE_KEYWORDS, compile_venue_marker

# ── Helpers ────────────────────────────────────────────────────────────


def make_line(text: str, x: float = 40.0, y: float = 0.0) -> PositionedLine:
    """Create a PositionedLine with sane defaults (left column)."""
    return PositionedLine(text=text, x=x, y=y)


def make_word(
    text: str,
    x0: float,
    top: float,
    width: float = 0.0,
    page: int = 0,
) -> dict:
    """Create a pdfplumber-style word dict; width defaults to 5 pts per char."""
    w = width or 5.0 * len(text)
    return {"text": text, "x0": x0, "x1": x0 + w, "top": top, "page": page}


def span_texts(spans) -> str:
    return "".join(s.text for s in spans)


def categorised(spans) -> list[tuple[str, str]]:
    """``(text, category)`` pairs for the categorised spans only."""
    return [(s.text, s.category) for s in spans if s.category]


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def default_cfg() -> ReconstructConfig:
    """Return a default ReconstructConfig."""
    return ReconstructConfig()


@pytest.fixture
def venue_marker():
    return compile_venue_marker(VENUE_KEYWORDS)


@pytest.fixture
def entry_pattern():
    return compile_entry_pattern(VENUE_KEYWORDS)


@pytest.fixture
def reconstructor(default_cfg) -> BookingStreamReconstructor:
    return BookingStreamReconstructor(default_cfg)


@pytest.fixture
def wrapped_record() -> list[PositionedLine]:
    """A record whose facility chain wrapped across the page.

    Layout (x=40 left column, x=420 right column)::

        12345 Smith ...  (header)
        12345 01/02/2026 03/02/2026 14-Lyth 19:30   Facility Bookings:
        Traces: call re dog                         /Source: Table for 2 03/01/26 @
                                                    /Spice: Table for 2 02/01/26 @
                                                    20:15
                                                    /Bento: 04/01/26 @ 12:30/Spa Use: 04/01/26 @
                                                    14:00/Afternoon Tea: 05/01/26 @ 15:00/LH Dinner: ...
    """
    return [
        make_line(
            "12345 Smith Mr & Mrs 14 Lyth 1430 CHI 03/02/26 MR BB_2 345.00 AB12 CDE",
            20,
            10,
        ),
        make_line("12345 01/02/2026 03/02/2026 14-Lyth 19:30", 40, 30),
        make_line("Facility Bookings:", 420, 30),
        make_line("Traces: call re dog", 40, 45),
        make_line("/Source: Table for 2 03/01/26 @", 420, 45),
        make_line("/Spice: Table for 2 02/01/26 @", 420, 60),
        make_line("20:15", 420, 75),
        make_line("/Bento: 04/01/26 @ 12:30/Spa Use: 04/01/26 @", 420, 90),
        make_line(
            "14:00/Afternoon Tea: 05/01/26 @ 15:00/LH Dinner: 05/01/26 @ 19:00",
            420,
            105,
        ),
    ]


WRAPPED_RIGHT_REPAIRED = [
    "Facility Bookings:",
    "/Source: Table for 2 03/01/26 @ 19:30",
    "/Spice: Table for 2 02/01/26 @ 20:15",
    "/Bento: 04/01/26 @ 12:30",
    "/Spa Use: 04/01/26 @ 14:00",
    "/Afternoon Tea: 05/01/26 @ 15:00",
    "/LH Dinner: 05/01/26 @ 19:00",
]
WRAPPED_LEFT_REPAIRED = [
    "12345 01/02/2026 03/02/2026 14-Lyth",
    "Traces: call re dog",
]
