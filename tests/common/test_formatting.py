from datetime import date

from absence_tracker.common.formatting import (
    format_date_with_weekday,
    format_days,
    format_hours_minutes,
    format_money,
)


def test_format_hours_minutes():
    assert format_hours_minutes(480) == "8h"
    assert format_hours_minutes(450) == "7h 30m"
    assert format_hours_minutes(65) == "1h 05m"
    assert format_hours_minutes(0) == "0h"


def test_format_money_rounds_half_up():
    assert format_money(10.005, "PLN") == "10.01 PLN"
    assert format_money(0, "EUR") == "0.00 EUR"


def test_format_days():
    assert format_days(3) == "3"
    assert format_days(2.5) == "2.5"


def test_format_date_with_weekday():
    assert format_date_with_weekday(date(2024, 3, 13)) == "13.03.2024 • Wednesday"
    assert format_date_with_weekday(None) == "—"
