"""Repair untrusted entry lists (stored state, imported backups) into well-formed entries.

Nothing here raises: records that cannot be repaired are dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Iterable, Sequence, TypeVar

from ..common.datetime_utils import try_parse_iso_date
from ..common.validators import coerce_text, round_half_up, safe_number, to_number
from ..core.enums import EntryList
from .model import AbsenceEntry, Entry, TimeEntry, day_type_for

E = TypeVar("E", AbsenceEntry, TimeEntry)


def _candidate_id(value: Any) -> int:
    n = to_number(value)
    if n is None or n <= 0 or not n.is_integer():
        return 0
    return int(n)


def _iter_candidates(items: Any) -> Iterable[tuple[Mapping, Any]]:
    """Yield (record, parsed date) for records that carry a valid date; first date wins."""

    if not isinstance(items, (list, tuple)):
        return
    seen = set()
    for item in items:
        if not isinstance(item, Mapping):
            continue
        entry_date = try_parse_iso_date(item.get("date"))
        if entry_date is None or entry_date in seen:
            continue
        seen.add(entry_date)
        yield item, entry_date


def _assign_ids(entries: Sequence[E]) -> list[E]:
    used: set[int] = set()
    keep: list[bool] = []
    for e in entries:
        ok = e.entry_id > 0 and e.entry_id not in used
        if ok:
            used.add(e.entry_id)
        keep.append(ok)

    top = max(used, default=0)
    out: list[E] = []
    for e, ok in zip(entries, keep):
        if ok:
            out.append(e)
        else:
            top += 1
            out.append(replace(e, entry_id=top))
    return out


def normalize_absence_list(items: Any) -> list[AbsenceEntry]:
    out: list[AbsenceEntry] = []
    for item, entry_date in _iter_candidates(items):
        day_value = safe_number(item.get("dayValue")) or 1.0
        out.append(
            AbsenceEntry(
                entry_id=_candidate_id(item.get("id")),
                entry_date=entry_date,
                day_value=day_value,
                day_type=coerce_text(item.get("dayType")) or day_type_for(day_value),
                note=coerce_text(item.get("note")),
                cert=coerce_text(item.get("cert")),
                contact=coerce_text(item.get("contact")),
                child=coerce_text(item.get("child")),
                reason=coerce_text(item.get("reason")),
            )
        )
    return _assign_ids(out)


def normalize_time_list(items: Any, *, overtime: bool) -> list[TimeEntry]:
    out: list[TimeEntry] = []
    for item, entry_date in _iter_candidates(items):
        multiplier = safe_number(item.get("multiplier")) if overtime else 1.0
        out.append(
            TimeEntry(
                entry_id=_candidate_id(item.get("id")),
                entry_date=entry_date,
                minutes=max(0, round_half_up(safe_number(item.get("minutes")))),
                multiplier=multiplier if multiplier >= 1 else 1.0,
                note=coerce_text(item.get("note")),
            )
        )
    return _assign_ids(out)


def normalize_list(kind: EntryList, items: Any) -> list[Entry]:
    if kind.is_absence:
        return normalize_absence_list(items)
    return normalize_time_list(items, overtime=kind.is_overtime)
