from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, MutableSequence, Optional, Sequence

from ..common.datetime_utils import DateLike, enumerate_dates_inclusive, to_iso
from ..common.formatting import format_days
from ..core.enums import AddOutcome
from .model import AbsenceEntry, Entry

logger = logging.getLogger(__name__)

EntryBuilder = Callable[[date], Entry]


@dataclass(frozen=True)
class AddResult:
    outcome: AddOutcome
    message: str = ""
    added: int = 0
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome == AddOutcome.ADDED

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "outcome": self.outcome.value,
            "message": self.message,
            "added": self.added,
            "skipped": self.skipped,
        }


def next_id(entries: Sequence[Entry]) -> int:
    """The only id allocator: max(existing ids) + 1."""
    return max((e.entry_id for e in entries), default=0) + 1


def holidays_taken(entries: Sequence[AbsenceEntry]) -> float:
    return sum(e.day_value for e in entries)


def _limit_failure(entries: Sequence[Entry], incoming: float, limit: Optional[float]) -> Optional[AddResult]:
    if limit is None:
        return None
    taken = holidays_taken(entries)
    if limit - (taken + incoming) < 0:
        return AddResult(
            AddOutcome.LIMIT_EXCEEDED,
            f"Holidays limit exceeded ({format_days(limit)} days, {format_days(taken)} already taken).",
        )
    return None


def add_single(
    entries: MutableSequence[Entry],
    entry: Entry,
    *,
    holidays_limit: Optional[float] = None,
) -> AddResult:
    """Append ``entry`` unless its date is already present.

    With ``holidays_limit`` set the entry's day value is checked against the limit first.
    The list is not touched on failure.
    """

    failure = _limit_failure(entries, getattr(entry, "day_value", 0), holidays_limit)
    if failure:
        return failure

    if any(e.entry_date == entry.entry_date for e in entries):
        return AddResult(
            AddOutcome.DUPLICATE_DATE,
            f"This day ({to_iso(entry.entry_date)}) already exists in this list.",
            skipped=1,
        )

    entries.append(replace(entry, entry_id=next_id(entries)))
    return AddResult(AddOutcome.ADDED, added=1)


def add_range(
    entries: MutableSequence[Entry],
    start: DateLike,
    end: DateLike,
    builder: EntryBuilder,
    *,
    holidays_limit: Optional[float] = None,
) -> AddResult:
    dates = enumerate_dates_inclusive(start, end)
    if not dates:
        return AddResult(AddOutcome.INVALID_RANGE, "Invalid range. Make sure 'from' <= 'to'.")

    existing = {e.entry_date for e in entries}
    to_add = [builder(d) for d in dates if d not in existing]
    skipped = len(dates) - len(to_add)

    failure = _limit_failure(entries, sum(getattr(e, "day_value", 0) for e in to_add), holidays_limit)
    if failure:
        return failure

    if not to_add:
        return AddResult(
            AddOutcome.ALL_DUPLICATES,
            "All days in this range already exist in this list.",
            skipped=skipped,
        )

    for entry in to_add:
        entries.append(replace(entry, entry_id=next_id(entries)))

    logger.debug("Range %s..%s: added=%d skipped=%d", dates[0], dates[-1], len(to_add), skipped)
    return AddResult(
        AddOutcome.ADDED,
        f"Added: {len(to_add)} days. Skipped (duplicates): {skipped}.",
        added=len(to_add),
        skipped=skipped,
    )
