"""Reconstruct every guest record in an arrivals-report PDF and dump JSON.

Usage::

    python scripts/runners/run_booking_stream.py arrivals.pdf --out stream.json
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from bookingstream import (
    BookingStreamReconstructor,
    ConfigValidationError,
    ReconstructConfig,
    extract_sections,
    parse_header,
)
from bookingstream.ingest import IngestError, ingest_pdf


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("pdf", type=Path, help="Arrivals report PDF")
    parser.add_argument("--out", type=Path, default=None, help="Output JSON path")
    parser.add_argument(
        "--split-x",
        type=float,
        default=None,
        help="Right-column x threshold in pts (default from ReconstructConfig)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Ignore positions and use the plain-text fallback",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = ReconstructConfig()
    if args.split_x is not None:
        try:
            cfg = dataclasses.replace(cfg, column_split_x=args.split_x)
        except ConfigValidationError as exc:
            parser.error(str(exc))

    try:
        records = ingest_pdf(args.pdf, cfg)
    except IngestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    recon = BookingStreamReconstructor(cfg)
    results = []
    for rec in records:
        if args.raw:
            doc, stages = recon.reconstruct_with_stages(raw_text=rec.raw_text)
        else:
            doc, stages = recon.reconstruct_with_stages(positioned_lines=rec.lines)
        rendered = recon.render_document(doc)
        results.append(
            {
                "id": rec.id,
                "page": rec.page,
                "header_fields": vars(parse_header(doc.header)),
                "sections": extract_sections(
                    rec.raw_text.split("\n")[1:], recon.venue_marker
                ).to_dict(),
                "repair": [s.to_dict() for s in stages],
                "document": rendered.to_dict(),
            }
        )

    payload = json.dumps(results, indent=2, ensure_ascii=False)
    if args.out:
        args.out.write_text(payload, encoding="utf-8")
        print(f"Wrote {len(results)} records -> {args.out}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
