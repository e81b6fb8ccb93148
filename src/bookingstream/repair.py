"""Column repair: recover time stamps stranded by the extractor.

A booking chain that wraps across the page often leaves its trailing
``HH:MM`` in the wrong column or on a line of its own, so the facility
entry ends in an unterminated ``@``.  Four stages run in a fixed order,
each a single forward pass taking and returning immutable tuples:

1. :func:`steal_time_from_left`: pull a trailing time off a left line
   whose shape (id, arrival, departure, room, time) has no time field.
2. :func:`merge_orphan_times`: fold a bare ``HH:MM`` line into the
   preceding unterminated entry.
3. :func:`split_multi_venue`: one line per venue marker.
4. :func:`reattach_orphan_times`: fold time fragments exposed by the
   split into the preceding unterminated entry.

Stage 3 must run before stage 4.  No stage invents a time; digits are
only relocated.  Entries without a trailing ``@`` are never modified by
stages 1, 2 or 4.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

logger = logging.getLogger("bookingstream.repair")

_UNTERMINATED_AT = re.compile(r"@\s*$")
_ORPHAN_TIME = re.compile(r"^@?\s*(\d{1,2}:\d{2})$")
# id, arrival date, departure date, room/area, trailing time
_LEFT_WITH_TIME = re.compile(
    r"^(?P<body>\d{4,6}\s+\d{1,2}/\d{1,2}/\d{2,4}\s+\d{1,2}/\d{1,2}/\d{2,4}\s+\S.*?)"
    r"\s+(?P<time>\d{1,2}:\d{2})\s*$"
)

Columns = Tuple[str, ...]


def is_unterminated(entry: str) -> bool:
    """True when *entry* ends in ``@`` with no time after it."""
    return bool(_UNTERMINATED_AT.search(entry))


def _append_time(entry: str, hhmm: str) -> str:
    return f"{entry.rstrip()} {hhmm}"


def steal_time_from_left(
    left: Sequence[str], right: Sequence[str]
) -> Tuple[Columns, Columns]:
    """Stage 1: move trailing times from malformed left lines onto ``@`` entries."""
    new_left: List[str] = list(left)
    new_right: List[str] = list(right)
    for ri, entry in enumerate(new_right):
        if not is_unterminated(entry):
            continue
        for li, line in enumerate(new_left):
            m = _LEFT_WITH_TIME.match(line)
            if m is None:
                continue
            new_right[ri] = _append_time(entry, m.group("time"))
            new_left[li] = m.group("body")
            break
    return tuple(new_left), tuple(new_right)


def merge_orphan_times(right: Sequence[str]) -> Columns:
    """Stage 2: append bare time lines to the preceding unterminated entry."""
    merged: List[str] = []
    for line in right:
        m = _ORPHAN_TIME.match(line.strip())
        if m and merged and is_unterminated(merged[-1]):
            merged[-1] = _append_time(merged[-1], m.group(1))
            continue
        merged.append(line)
    return tuple(merged)


def split_multi_venue(right: Sequence[str], venue_marker: re.Pattern[str]) -> Columns:
    """Stage 3: split lines holding two or more venue markers, one per marker."""
    out: List[str] = []
    for line in right:
        starts = [m.start() for m in venue_marker.finditer(line)]
        if len(starts) < 2:
            out.append(line)
            continue
        bounds = [0] + starts + [len(line)]
        for a, b in zip(bounds, bounds[1:]):
            frag = line[a:b].strip()
            if frag:
                out.append(frag)
    return tuple(out)


def reattach_orphan_times(right: Sequence[str]) -> Columns:
    """Stage 4: fold time fragments left behind by the split back into their entry."""
    return merge_orphan_times(right)


@dataclass
class RepairStageResult:
    """Outcome record for one repair stage."""

    stage: str
    changed: int = 0  # lines modified, added or removed
    duration_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage,
            "changed": self.changed,
            "duration_ms": self.duration_ms,
        }


def repair_columns(
    left: Sequence[str],
    right: Sequence[str],
    venue_marker: re.Pattern[str],
) -> Tuple[Columns, Columns, List[RepairStageResult]]:
    """Run the four repair stages in order.

    Returns the repaired ``(left, right)`` columns and one
    :class:`RepairStageResult` per stage.
    """
    results: List[RepairStageResult] = []

    t0 = time.perf_counter()
    new_left, stage1 = steal_time_from_left(left, right)
    results.append(_record("steal_time_from_left", right, stage1, t0))

    t0 = time.perf_counter()
    stage2 = merge_orphan_times(stage1)
    results.append(_record("merge_orphan_times", stage1, stage2, t0))

    t0 = time.perf_counter()
    stage3 = split_multi_venue(stage2, venue_marker)
    results.append(_record("split_multi_venue", stage2, stage3, t0))

    t0 = time.perf_counter()
    stage4 = reattach_orphan_times(stage3)
    results.append(_record("reattach_orphan_times", stage3, stage4, t0))

    for res in results:
        if res.changed:
            logger.debug("%s: %d line(s) changed", res.stage, res.changed)
    return new_left, stage4, results


def _record(
    stage: str, before: Sequence[str], after: Sequence[str], t0: float
) -> RepairStageResult:
    changed = abs(len(after) - len(before))
    if not changed:
        changed = sum(1 for a, b in zip(before, after) if a != b)
    return RepairStageResult(
        stage=stage,
        changed=changed,
        duration_ms=int((time.perf_counter() - t0) * 1000),
    )
