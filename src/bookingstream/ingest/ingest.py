"""Ingest stage: arrivals-report PDF to per-guest positioned lines.

Centralises PDF opening and word-box grouping so that runner scripts never
call ``pdfplumber.open()`` directly.  This is only the boundary adapter that
produces the reconstruction input contract; it does no OCR and no layout
inference beyond grouping words into rows and rows into guest records.

Public API
----------
- :func:`ingest_pdf` : open + validate a PDF, return a list of :class:`GuestRecord`
- :func:`group_rows` : order word boxes into visual rows, dropping page furniture
- :func:`split_records` : cut rows into guest records
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pdfplumber

from ..config import ReconstructConfig
from ..models import PositionedLine

log = logging.getLogger(__name__)

Word = Dict[str, Any]

_RECORD_ID_RE = re.compile(r"^\d{5}$")
# Column headings, page numbers and report footer repeated on every page.
_FURNITURE_RE = re.compile(
    r"^ID\s+Guest Name|Req\.\s+Vip|Page\s+\d+|JHunt/Gilpin|Total Rate:", re.I
)


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------


@dataclass
class Row:
    """Words sharing one baseline band, ordered left to right."""

    page: int
    y: float
    words: List[Word] = field(default_factory=list)

    def text(self) -> str:
        return " ".join(str(w["text"]) for w in self.words)

    def segments(self, gap: float) -> List[PositionedLine]:
        """Split the row at horizontal gaps wider than *gap* pts."""
        out: List[PositionedLine] = []
        current: List[Word] = []
        for w in self.words:
            if current and float(w["x0"]) - float(current[-1]["x1"]) > gap:
                out.append(self._line(current))
                current = []
            current.append(w)
        if current:
            out.append(self._line(current))
        return out

    def _line(self, words: List[Word]) -> PositionedLine:
        return PositionedLine(
            text=" ".join(str(w["text"]) for w in words),
            x=float(words[0]["x0"]),
            y=self.y,
        )


@dataclass
class GuestRecord:
    """One booking record: positioned lines plus the plain-text fallback."""

    id: str
    page: int
    lines: List[PositionedLine] = field(default_factory=list)
    raw_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "page": self.page,
            "lines": [ln.to_dict() for ln in self.lines],
            "raw_text": self.raw_text,
        }


class IngestError(Exception):
    """Raised when a PDF cannot be ingested."""


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def group_rows(
    words: Iterable[Word], cfg: Optional[ReconstructConfig] = None
) -> List[Row]:
    """Order *words* into reading order and group them into rows.

    Each word needs ``text``, ``x0``, ``x1``, ``top`` and ``page``.  Words
    are sorted by page, then y (bucketed by ``sort_y_tolerance``), then x.
    A new row starts when a word's top is more than ``line_y_tolerance``
    from the current row's.  Page-furniture rows are dropped.
    """
    cfg = cfg or ReconstructConfig()
    bucket = cfg.sort_y_tolerance

    def _key(w: Word):
        top = float(w["top"])
        return (int(w.get("page", 0)), round(top / bucket) if bucket else top, float(w["x0"]))

    rows: List[Row] = []
    current: Optional[Row] = None
    for w in sorted(words, key=_key):
        page = int(w.get("page", 0))
        top = float(w["top"])
        if current is None or page != current.page or abs(top - current.y) > cfg.line_y_tolerance:
            current = Row(page=page, y=top)
            rows.append(current)
        current.words.append(w)
    for row in rows:
        row.words.sort(key=lambda w: float(w["x0"]))

    kept = [r for r in rows if not _FURNITURE_RE.search(r.text())]
    if len(kept) != len(rows):
        log.debug("Dropped %d page-furniture rows", len(rows) - len(kept))
    return kept


def split_records(
    rows: Iterable[Row], cfg: Optional[ReconstructConfig] = None
) -> List[GuestRecord]:
    """Cut *rows* into guest records.

    A row whose first word is a 5-digit booking id left of
    ``record_id_max_x`` opens a record.  That row becomes the header line
    whole; every later row is split into segments at ``segment_gap``.
    Rows before the first record (report title) are discarded.
    """
    cfg = cfg or ReconstructConfig()
    records: List[GuestRecord] = []
    texts: List[List[str]] = []
    for row in rows:
        if not row.words:
            continue
        first = row.words[0]
        if _RECORD_ID_RE.match(str(first["text"]).strip()) and float(first["x0"]) < cfg.record_id_max_x:
            records.append(GuestRecord(id=str(first["text"]).strip(), page=row.page))
            texts.append([])
            records[-1].lines.append(
                PositionedLine(text=row.text(), x=float(first["x0"]), y=row.y)
            )
        elif records:
            records[-1].lines.extend(row.segments(cfg.segment_gap))
        else:
            continue
        texts[-1].append(row.text())

    for rec, rec_texts in zip(records, texts):
        rec.raw_text = "\n".join(rec_texts)
    return records


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _validate_pdf_path(pdf_path: Path) -> None:
    """Raise :class:`IngestError` for missing / empty / wrong-extension files."""
    if not pdf_path.exists():
        raise IngestError(f"File not found: {pdf_path}")
    if not pdf_path.is_file():
        raise IngestError(f"Not a file: {pdf_path}")
    if pdf_path.stat().st_size == 0:
        raise IngestError(f"Empty file: {pdf_path}")
    if pdf_path.suffix.lower() != ".pdf":
        raise IngestError(f"Not a PDF (suffix={pdf_path.suffix!r}): {pdf_path}")


def ingest_pdf(
    pdf_path: Path | str, cfg: Optional[ReconstructConfig] = None
) -> List[GuestRecord]:
    """Open an arrivals report and return one :class:`GuestRecord` per booking.

    Word tops are offset by the heights of preceding pages so ``y`` keeps
    reading order across page breaks.

    Raises
    ------
    IngestError
        When the file is missing, empty, or cannot be opened as a PDF.
    """
    pdf_path = Path(pdf_path)
    _validate_pdf_path(pdf_path)
    cfg = cfg or ReconstructConfig()

    try:
        words: List[Word] = []
        with pdfplumber.open(pdf_path) as pdf:
            offset = 0.0
            for i, page in enumerate(pdf.pages):
                for w in page.extract_words():
                    words.append(
                        {
                            "text": w.get("text", ""),
                            "x0": float(w.get("x0", 0.0)),
                            "x1": float(w.get("x1", 0.0)),
                            "top": float(w.get("top", 0.0)) + offset,
                            "page": i,
                        }
                    )
                offset += float(page.height)
            num_pages = len(pdf.pages)
    except Exception as exc:
        raise IngestError(f"Cannot open PDF: {exc}") from exc

    records = split_records(group_rows(words, cfg), cfg)
    log.info(
        "Ingested %s: %d pages, %d words, %d guest records",
        pdf_path.name,
        num_pages,
        len(words),
        len(records),
    )
    return records
