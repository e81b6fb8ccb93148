from dataclasses import dataclass


class ConfigValidationError(ValueError):
    """Raised when a ReconstructConfig field has an invalid value."""


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name}={value} must be > 0")


def _check_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ConfigValidationError(f"{name}={value} must be >= 0")


@dataclass
class ReconstructConfig:
    """Tunables for booking-stream reconstruction."""

    # ── Column layout ──────────────────────────────────────────────────
    # Horizontal position (pts) at or beyond which a line belongs to the
    # right (facility) column.  Calibrated against the arrivals report
    # layout; revisit if the report template changes.
    column_split_x: float = 400.0
    # Run the four-stage column repair after classification.
    enable_column_repair: bool = True
    # Attach nested date/time spans to facility spans.
    highlight_facility_details: bool = True

    # ── Ingest (PDF word boxes -> positioned lines) ────────────────────
    # Words whose tops differ by at most this many pts share a row.
    line_y_tolerance: float = 5.0
    # Bucket size (pts) used when sorting words into reading order.
    sort_y_tolerance: float = 4.0
    # Horizontal gap (pts) that splits a row into separate positioned lines.
    segment_gap: float = 24.0
    # A 5-digit booking id left of this x starts a new guest record.
    record_id_max_x: float = 100.0

    def __post_init__(self) -> None:
        """Validate field ranges to catch misconfiguration early."""
        for name in (
            "column_split_x",
            "line_y_tolerance",
            "segment_gap",
            "record_id_max_x",
        ):
            _check_positive(name, getattr(self, name))
        _check_non_negative("sort_y_tolerance", self.sort_y_tolerance)
