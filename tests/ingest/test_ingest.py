"""Tests for bookingstream.ingest: row grouping, record splitting, PDF ingest."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from conftest import make_word

from bookingstream.config import ReconstructConfig
from bookingstream.ingest import (
    GuestRecord,
    IngestError,
    group_rows,
    ingest_pdf,
    split_records,
)
from bookingstream.models import PositionedLine


def _record_words(top: float = 100.0, page: int = 0) -> list[dict]:
    """Header row plus one two-column body row."""
    return [
        make_word("12345", 20, top, page=page),
        make_word("Smith", 60, top + 0.5, page=page),
        make_word("Traces:", 40, top + 20, page=page),
        make_word("call", 80, top + 20, page=page),
        make_word("/Source:", 420, top + 21, page=page),
        make_word("Table", 465, top + 21, page=page),
    ]


# ── Row grouping ───────────────────────────────────────────────────────


class TestGroupRows:
    def test_rows_by_baseline(self):
        rows = group_rows(_record_words())
        assert [r.text() for r in rows] == ["12345 Smith", "Traces: call /Source: Table"]
        assert rows[0].y == 100.0

    def test_words_sorted_by_x(self):
        words = [make_word("b", 80, 10), make_word("a", 40, 11)]
        assert group_rows(words)[0].text() == "a b"

    def test_row_tolerance(self):
        words = [make_word("a", 40, 10), make_word("b", 40, 17)]
        assert len(group_rows(words)) == 2
        cfg = ReconstructConfig(line_y_tolerance=8.0, sort_y_tolerance=0.0)
        assert len(group_rows(words, cfg)) == 1

    def test_pages_never_merge(self):
        words = [make_word("a", 40, 10, page=0), make_word("b", 40, 10, page=1)]
        rows = group_rows(words)
        assert [(r.page, r.text()) for r in rows] == [(0, "a"), (1, "b")]

    def test_page_furniture_dropped(self):
        words = [make_word("Page", 500, 5), make_word("3", 530, 5)] + _record_words()
        assert "Page 3" not in [r.text() for r in group_rows(words)]

    def test_empty(self):
        assert group_rows([]) == []


class TestRowSegments:
    def test_split_at_gap(self):
        row = group_rows(_record_words())[1]
        assert row.segments(24.0) == [
            PositionedLine("Traces: call", 40.0, 120.0),
            PositionedLine("/Source: Table", 420.0, 120.0),
        ]

    def test_wide_gap_keeps_one_segment(self):
        row = group_rows(_record_words())[1]
        assert [s.text for s in row.segments(1000.0)] == ["Traces: call /Source: Table"]


# ── Record splitting ───────────────────────────────────────────────────


class TestSplitRecords:
    def test_single_record(self):
        records = split_records(group_rows(_record_words()))
        assert len(records) == 1
        rec = records[0]
        assert rec.id == "12345"
        assert [ln.text for ln in rec.lines] == ["12345 Smith", "Traces: call", "/Source: Table"]
        assert rec.lines[0].x == 20.0
        assert rec.raw_text == "12345 Smith\nTraces: call /Source: Table"

    def test_two_records(self):
        words = _record_words(100) + [make_word("67890", 20, 200), make_word("Jones", 60, 200)]
        records = split_records(group_rows(words))
        assert [r.id for r in records] == ["12345", "67890"]
        assert records[1].raw_text == "67890 Jones"

    def test_leading_rows_discarded(self):
        words = [make_word("Arrivals", 40, 20)] + _record_words()
        records = split_records(group_rows(words))
        assert records[0].lines[0].text == "12345 Smith"

    def test_id_must_be_left_of_threshold(self):
        words = _record_words() + [make_word("Room", 300, 160), make_word("67890", 340, 160)]
        records = split_records(group_rows(words))
        assert len(records) == 1
        words = _record_words() + [make_word("67890", 300, 160)]
        assert len(split_records(group_rows(words))) == 1

    def test_record_output_reconstructs(self, reconstructor):
        rec = split_records(group_rows(_record_words()))[0]
        doc = reconstructor.reconstruct(rec.lines)
        assert doc.header == "12345 Smith"
        assert doc.left_lines == ["Traces: call"]
        assert doc.right_lines == ["/Source: Table"]
        assert reconstructor.reconstruct(raw_text=rec.raw_text).right_lines == ["/Source: Table"]

    def test_to_dict(self):
        rec = GuestRecord(id="1", page=0, lines=[PositionedLine("a", 1.0, 2.0)], raw_text="a")
        assert rec.to_dict() == {
            "id": "1",
            "page": 0,
            "lines": [{"text": "a", "x": 1.0, "y": 2.0}],
            "raw_text": "a",
        }


# ── Validation ─────────────────────────────────────────────────────────


class TestValidation:
    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestError, match="not found"):
            ingest_pdf(tmp_path / "nonexistent.pdf")

    def test_directory_not_file(self, tmp_path):
        d = tmp_path / "subdir.pdf"
        d.mkdir()
        with pytest.raises(IngestError, match="Not a file"):
            ingest_pdf(d)

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.pdf"
        f.write_bytes(b"")
        with pytest.raises(IngestError, match="Empty file"):
            ingest_pdf(f)

    def test_wrong_extension(self, tmp_path):
        f = tmp_path / "arrivals.txt"
        f.write_text("hello")
        with pytest.raises(IngestError, match="Not a PDF"):
            ingest_pdf(f)

    def test_corrupt_pdf(self, tmp_path):
        f = tmp_path / "corrupt.pdf"
        f.write_bytes(b"this is not a pdf file at all")
        with pytest.raises(IngestError, match="Cannot open PDF"):
            ingest_pdf(f)


# ── ingest_pdf with mock pdfplumber ───────────────────────────────────


def _pdfplumber_words(words: list[dict]) -> list[dict]:
    return [{k: w[k] for k in ("text", "x0", "x1", "top")} for w in words]


class TestIngestPdf:
    def _make_fake_pdf(self, tmp_path):
        f = tmp_path / "arrivals.pdf"
        f.write_bytes(b"%PDF-1.4\n%%EOF")
        return f

    def _mock_pdf(self, pages):
        mock_pdf = MagicMock()
        mock_pdf.pages = pages
        mock_pdf.__enter__ = MagicMock(return_value=mock_pdf)
        mock_pdf.__exit__ = MagicMock(return_value=False)
        return mock_pdf

    def _mock_page(self, words, height=800.0):
        page = MagicMock(height=height)
        page.extract_words.return_value = _pdfplumber_words(words)
        return page

    def test_basic_ingest(self, tmp_path):
        pdf_path = self._make_fake_pdf(tmp_path)
        mock_pdf = self._mock_pdf([self._mock_page(_record_words())])

        with patch("bookingstream.ingest.ingest.pdfplumber.open", return_value=mock_pdf):
            records = ingest_pdf(pdf_path)

        assert len(records) == 1
        assert records[0].id == "12345"
        assert records[0].lines[-1] == PositionedLine("/Source: Table", 420.0, 120.0)

    def test_page_offsets_keep_reading_order(self, tmp_path):
        pdf_path = self._make_fake_pdf(tmp_path)
        second = [make_word("67890", 20, 50), make_word("Jones", 60, 50)]
        mock_pdf = self._mock_pdf(
            [self._mock_page(_record_words()), self._mock_page(second)]
        )

        with patch("bookingstream.ingest.ingest.pdfplumber.open", return_value=mock_pdf):
            records = ingest_pdf(str(pdf_path))

        assert [r.id for r in records] == ["12345", "67890"]
        assert records[1].page == 1
        assert records[1].lines[0].y == 850.0

    def test_no_records(self, tmp_path):
        pdf_path = self._make_fake_pdf(tmp_path)
        mock_pdf = self._mock_pdf([self._mock_page([make_word("Arrivals", 40, 20)])])

        with patch("bookingstream.ingest.ingest.pdfplumber.open", return_value=mock_pdf):
            assert ingest_pdf(pdf_path) == []

    def test_open_failure_wrapped(self, tmp_path):
        pdf_path = self._make_fake_pdf(tmp_path)
        with patch(
            "bookingstream.ingest.ingest.pdfplumber.open",
            side_effect=RuntimeError("password required"),
        ):
            with pytest.raises(IngestError, match="password required"):
                ingest_pdf(pdf_path)
