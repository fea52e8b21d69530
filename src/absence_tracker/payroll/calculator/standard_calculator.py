from __future__ import annotations

from ...common.validators import round_half_up
from ...core.constants import HOLIDAY_FULL_MINUTES, HOLIDAY_HALF_MINUTES
from ...entries.model import AbsenceEntry, TimeEntry
from .base import PayCalculator


def holiday_paid_minutes(entry: AbsenceEntry) -> int:
    """Full day -> 450 min, half day -> 210 min (deliberately not half of 450).

    Other day values fall back to a share of the full day. That fallback does not
    follow the 3h30 half-day rule and is kept only for odd imported values.
    """

    day_value = entry.day_value
    if day_value == 1:
        return HOLIDAY_FULL_MINUTES
    if day_value == 0.5:
        return HOLIDAY_HALF_MINUTES
    return round_half_up(day_value * HOLIDAY_FULL_MINUTES)


class StandardPayCalculator(PayCalculator):
    """Standard rule: hours * rate, overtime weighted by its multiplier (never below 1)."""

    def paid_minutes(self, entry: AbsenceEntry) -> int:
        return holiday_paid_minutes(entry)

    def minutes_pay(self, minutes: float, rate: float) -> float:
        return (minutes / 60) * rate

    def overtime_pay(self, entry: TimeEntry, rate: float) -> float:
        return self.minutes_pay(entry.minutes, rate) * max(entry.multiplier, 1)
