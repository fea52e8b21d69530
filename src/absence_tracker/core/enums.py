from __future__ import annotations

from enum import Enum


class EntryList(str, Enum):
    """Tracked lists; the value is the key used in storage and import payloads."""

    HOLIDAYS = "holidays"
    SICKNESS = "sickness"
    CHILDCARE = "childcare"
    OVERTIMES = "overtimes"
    HOURS = "hours"

    @property
    def is_absence(self) -> bool:
        return self in {EntryList.HOLIDAYS, EntryList.SICKNESS, EntryList.CHILDCARE}

    @property
    def is_overtime(self) -> bool:
        return self is EntryList.OVERTIMES


class Currency(str, Enum):
    PLN = "PLN"
    EUR = "EUR"
    GBP = "GBP"


class AddOutcome(str, Enum):
    """Result of an add-single / add-range request."""

    ADDED = "ADDED"
    DUPLICATE_DATE = "DUPLICATE_DATE"
    ALL_DUPLICATES = "ALL_DUPLICATES"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_INPUT = "INVALID_INPUT"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
