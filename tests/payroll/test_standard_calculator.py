from datetime import date
from decimal import Decimal

from absence_tracker.common.validators import round_money
from absence_tracker.entries.model import AbsenceEntry, TimeEntry
from absence_tracker.payroll.calculator.standard_calculator import StandardPayCalculator, holiday_paid_minutes


def _holiday(day_value):
    return AbsenceEntry(entry_id=1, entry_date=date(2024, 1, 1), day_value=day_value)


def test_holiday_paid_minutes_fixed_schedule():
    assert holiday_paid_minutes(_holiday(1)) == 450
    assert holiday_paid_minutes(_holiday(0.5)) == 210


def test_half_day_is_not_half_of_full_day():
    assert holiday_paid_minutes(_holiday(0.5)) * 2 != holiday_paid_minutes(_holiday(1))


def test_holiday_paid_minutes_fallback_is_proportional():
    assert holiday_paid_minutes(_holiday(2)) == 900
    assert holiday_paid_minutes(_holiday(0.25)) == 113


def test_regular_pay():
    calc = StandardPayCalculator()
    assert round_money(calc.minutes_pay(480, 20)) == Decimal("160.00")


def test_overtime_pay_uses_multiplier():
    calc = StandardPayCalculator()
    entry = TimeEntry(entry_id=1, entry_date=date(2024, 1, 1), minutes=120, multiplier=1.5)
    assert round_money(calc.overtime_pay(entry, 20)) == Decimal("60.00")


def test_overtime_multiplier_below_one_counts_as_one():
    calc = StandardPayCalculator()
    entry = TimeEntry(entry_id=1, entry_date=date(2024, 1, 1), minutes=60, multiplier=0.5)
    assert calc.overtime_pay(entry, 10) == 10
