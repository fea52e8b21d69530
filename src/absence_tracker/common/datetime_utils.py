from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Union

from ..core.constants import ISO_DATE_FORMAT
from .validators import safe_number

DateLike = Union[str, date, datetime]

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def try_parse_iso_date(value: Any) -> Optional[date]:
    """Like :func:`parse_iso_date` but tolerant: returns None for anything unusable."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def to_iso(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def _as_date(value: DateLike) -> date:
    d = try_parse_iso_date(value)
    if d is None:
        raise ValueError(f"Invalid calendar date: {value!r}")
    return d


def enumerate_dates_inclusive(start: DateLike, end: DateLike) -> list[date]:
    """All calendar dates from ``start`` to ``end`` (both included).

    Returns an empty list when either bound is not a valid date or the range is reversed.
    """

    first = try_parse_iso_date(start)
    last = try_parse_iso_date(end)
    if first is None or last is None or last < first:
        return []

    out: list[date] = []
    cur = first
    while cur <= last:
        out.append(cur)
        cur += timedelta(days=1)
    return out


# Week is Sunday..Saturday
def start_of_week(value: DateLike) -> datetime:
    d = _as_date(value)
    days_since_sunday = (d.weekday() + 1) % 7
    return datetime.combine(d - timedelta(days=days_since_sunday), time.min)


def end_of_week(value: DateLike) -> datetime:
    start = start_of_week(value)
    return datetime.combine(start.date() + timedelta(days=6), END_OF_DAY)


def start_of_month(value: DateLike) -> datetime:
    d = _as_date(value)
    return datetime(d.year, d.month, 1)


def end_of_month(value: DateLike) -> datetime:
    d = _as_date(value)
    last_day = calendar.monthrange(d.year, d.month)[1]
    return datetime.combine(date(d.year, d.month, last_day), END_OF_DAY)


def start_of_year(value: DateLike) -> datetime:
    return datetime(_as_date(value).year, 1, 1)


def end_of_year(value: DateLike) -> datetime:
    return datetime.combine(date(_as_date(value).year, 12, 31), END_OF_DAY)


def week_key(value: DateLike) -> date:
    """Sunday that starts the week containing ``value``."""
    return start_of_week(value).date()


def _window_bound(value: DateLike, *, upper: bool) -> datetime:
    if isinstance(value, datetime):
        return value
    d = _as_date(value)
    return datetime.combine(d, END_OF_DAY if upper else time.min)


def in_range(value: DateLike, start: DateLike, end: DateLike) -> bool:
    """True when the calendar date of ``value`` (at local midnight) lies in ``[start, end]``.

    Plain dates used as bounds cover the whole day.
    """

    d = try_parse_iso_date(value)
    if d is None:
        return False
    moment = datetime.combine(d, time.min)
    return _window_bound(start, upper=False) <= moment <= _window_bound(end, upper=True)


@dataclass(frozen=True)
class Period:
    """Closed window ``[start, end]`` used for aggregation."""

    start: datetime
    end: datetime

    def contains(self, value: DateLike) -> bool:
        return in_range(value, self.start, self.end)


@dataclass(frozen=True)
class CurrentPeriods:
    week: Period
    month: Period
    year: Period

    def items(self):
        return (("week", self.week), ("month", self.month), ("year", self.year))


def current_periods(now: Optional[datetime] = None) -> CurrentPeriods:
    now = now or now_local()
    return CurrentPeriods(
        week=Period(start_of_week(now), end_of_week(now)),
        month=Period(start_of_month(now), end_of_month(now)),
        year=Period(start_of_year(now), end_of_year(now)),
    )


def minutes_from_hhmm(hh: Any, mm: Any) -> int:
    """Hours + minutes form input to total minutes; minutes are clamped to 59."""

    h = max(0, math.floor(safe_number(hh)))
    m = max(0, math.floor(safe_number(mm)))
    return h * 60 + min(59, m)
