from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import DateLike, Period, in_range, to_iso, week_key
from ..common.formatting import format_hours_minutes, format_money
from ..common.validators import round_money
from ..entries.model import AbsenceEntry, Entry, TimeEntry
from ..tracker.model import AccountingState
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator


@dataclass(frozen=True)
class PeriodTotals:
    regular_minutes: int = 0
    holiday_minutes: int = 0
    overtime_minutes: int = 0
    regular_pay: float = 0.0
    holiday_pay: float = 0.0
    overtime_pay: float = 0.0

    @property
    def total_minutes(self) -> int:
        return self.regular_minutes + self.holiday_minutes + self.overtime_minutes

    @property
    def total_pay(self) -> float:
        return self.regular_pay + self.holiday_pay + self.overtime_pay

    def to_dict(self, currency: str) -> dict:
        return {
            "regular_minutes": self.regular_minutes,
            "holiday_minutes": self.holiday_minutes,
            "overtime_minutes": self.overtime_minutes,
            "total_minutes": self.total_minutes,
            "total_hours": format_hours_minutes(self.total_minutes),
            "regular_pay": float(round_money(self.regular_pay)),
            "holiday_pay": float(round_money(self.holiday_pay)),
            "overtime_pay": float(round_money(self.overtime_pay)),
            "total_pay": float(round_money(self.total_pay)),
            "total_pay_label": format_money(self.total_pay, currency),
        }


@dataclass
class WeekBucket:
    week_start: date
    week_end: date
    regular_minutes: int = 0
    holiday_minutes: int = 0
    overtime_minutes: int = 0
    regular_pay: float = 0.0
    holiday_pay: float = 0.0
    overtime_pay: float = 0.0

    @property
    def total_minutes(self) -> int:
        return self.regular_minutes + self.holiday_minutes + self.overtime_minutes

    @property
    def total_pay(self) -> float:
        return self.regular_pay + self.holiday_pay + self.overtime_pay

    def to_dict(self, currency: str) -> dict:
        return {
            "week_start": to_iso(self.week_start),
            "week_end": to_iso(self.week_end),
            "regular_minutes": self.regular_minutes,
            "holiday_minutes": self.holiday_minutes,
            "overtime_minutes": self.overtime_minutes,
            "total_minutes": self.total_minutes,
            "total_hours": format_hours_minutes(self.total_minutes),
            "regular_pay": float(round_money(self.regular_pay)),
            "holiday_pay": float(round_money(self.holiday_pay)),
            "overtime_pay": float(round_money(self.overtime_pay)),
            "total_pay": float(round_money(self.total_pay)),
            "total_pay_label": format_money(self.total_pay, currency),
        }


class PeriodAggregator:
    def __init__(self, *, calculator: Optional[PayCalculator] = None):
        self._calculator = calculator or StandardPayCalculator()

    @property
    def calculator(self) -> PayCalculator:
        return self._calculator

    def entry_minutes(self, entry: Entry) -> int:
        if isinstance(entry, AbsenceEntry):
            return self._calculator.paid_minutes(entry)
        return entry.minutes

    @staticmethod
    def _in_period(entries: Iterable[Entry], start: DateLike, end: DateLike) -> list[Entry]:
        return [e for e in entries if in_range(e.entry_date, start, end)]

    def sum_minutes_in_period(self, entries: Sequence[Entry], start: DateLike, end: DateLike) -> int:
        """Minutes of time entries, or paid minutes of absence entries, dated within [start, end]."""
        return sum(self.entry_minutes(e) for e in self._in_period(entries, start, end))

    def sum_overtime_earnings(self, overtimes: Sequence[TimeEntry], start: DateLike, end: DateLike, rate: float) -> float:
        return sum(self._calculator.overtime_pay(e, rate) for e in self._in_period(overtimes, start, end))

    def period_totals(self, state: AccountingState, period: Period) -> PeriodTotals:
        rate = state.settings.hourly_rate
        regular = self.sum_minutes_in_period(state.hours, period.start, period.end)
        holiday = self.sum_minutes_in_period(state.holidays, period.start, period.end)
        overtime = self.sum_minutes_in_period(state.overtimes, period.start, period.end)
        return PeriodTotals(
            regular_minutes=regular,
            holiday_minutes=holiday,
            overtime_minutes=overtime,
            regular_pay=self._calculator.minutes_pay(regular, rate),
            holiday_pay=self._calculator.minutes_pay(holiday, rate),
            overtime_pay=self.sum_overtime_earnings(state.overtimes, period.start, period.end, rate),
        )

    def weekly_overview(self, state: AccountingState, *, limit: Optional[int] = None) -> list[WeekBucket]:
        """Whole history bucketed by Sunday-start week, most recent week first.

        ``limit`` only trims the returned list.
        """

        rate = state.settings.hourly_rate
        buckets: dict[date, WeekBucket] = {}

        def bucket_for(entry: Entry) -> WeekBucket:
            start = week_key(entry.entry_date)
            b = buckets.get(start)
            if not b:
                b = WeekBucket(week_start=start, week_end=start + timedelta(days=6))
                buckets[start] = b
            return b

        for e in state.hours:
            bucket_for(e).regular_minutes += e.minutes

        for e in state.holidays:
            bucket_for(e).holiday_minutes += self._calculator.paid_minutes(e)

        for e in state.overtimes:
            b = bucket_for(e)
            b.overtime_minutes += e.minutes
            b.overtime_pay += self._calculator.overtime_pay(e, rate)

        for b in buckets.values():
            b.regular_pay = self._calculator.minutes_pay(b.regular_minutes, rate)
            b.holiday_pay = self._calculator.minutes_pay(b.holiday_minutes, rate)

        weeks = sorted(buckets.values(), key=lambda b: b.week_start, reverse=True)
        if limit is not None:
            weeks = weeks[: max(int(limit), 0)]
        return weeks
