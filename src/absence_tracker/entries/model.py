from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from ..common.datetime_utils import to_iso
from ..core.constants import FULL_DAY_LABEL, HALF_DAY_LABEL


def day_type_for(day_value: float) -> str:
    return FULL_DAY_LABEL if day_value == 1 else HALF_DAY_LABEL


def _plain_number(value: float):
    """1.0 -> 1 for JSON output."""
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class AbsenceEntry:
    """One day (or half day) in the holidays, sickness or childcare list."""

    entry_id: int
    entry_date: date
    day_value: float = 1.0
    day_type: str = FULL_DAY_LABEL
    note: str = ""
    cert: str = ""
    contact: str = ""
    child: str = ""
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "date": to_iso(self.entry_date),
            "dayValue": _plain_number(self.day_value),
            "dayType": self.day_type,
            "note": self.note,
            "cert": self.cert,
            "contact": self.contact,
            "child": self.child,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class TimeEntry:
    """Worked minutes on one day (overtimes and regular hours lists)."""

    entry_id: int
    entry_date: date
    minutes: int
    multiplier: float = 1.0
    note: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "date": to_iso(self.entry_date),
            "minutes": self.minutes,
            "multiplier": _plain_number(self.multiplier),
            "note": self.note,
        }


Entry = Union[AbsenceEntry, TimeEntry]
