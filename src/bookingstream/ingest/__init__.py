"""Ingest boundary: PDF word boxes -> per-guest positioned lines.

Public API
----------
- :func:`ingest_pdf` : open + validate a PDF, return one :class:`GuestRecord` per booking
- :func:`group_rows` : order word boxes and group them into visual rows
- :func:`split_records` : cut rows into guest records of positioned lines
- :class:`GuestRecord` : positioned lines plus the newline-joined fallback text
- :class:`IngestError` : raised on validation failures
"""

from .ingest import (
    GuestRecord,
    IngestError,
    Row,
    group_rows,
    ingest_pdf,
    split_records,
)

__all__ = [
    "GuestRecord",
    "IngestError",
    "Row",
    "group_rows",
    "ingest_pdf",
    "split_records",
]
