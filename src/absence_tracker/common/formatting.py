from __future__ import annotations

from datetime import date
from typing import Optional

from .validators import round_half_up, round_money

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def format_hours_minutes(total_minutes: float) -> str:
    """480 -> '8h', 450 -> '7h 30m'."""

    minutes = max(0, round_half_up(total_minutes))
    h, m = divmod(minutes, 60)
    if m == 0:
        return f"{h}h"
    return f"{h}h {m:02d}m"


def format_money(value: float, currency: str) -> str:
    return f"{round_money(value)} {currency}"


def format_days(value: float) -> str:
    if float(value) % 1 == 0:
        return f"{value:.0f}"
    return f"{value:.1f}"


def format_date_with_weekday(value: Optional[date]) -> str:
    if value is None:
        return "—"
    return f"{value.strftime('%d.%m.%Y')} • {WEEKDAY_NAMES[value.weekday()]}"
