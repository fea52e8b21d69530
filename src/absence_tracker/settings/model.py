from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_CURRENCY, DEFAULT_HOLIDAYS_LIMIT, DEFAULT_HOURLY_RATE
from ..core.enums import Currency


@dataclass(frozen=True)
class Settings:
    holidays_limit: float = DEFAULT_HOLIDAYS_LIMIT
    hourly_rate: float = DEFAULT_HOURLY_RATE
    currency: Currency = Currency(DEFAULT_CURRENCY)

    def to_dict(self) -> dict:
        return {
            "holidaysLimit": self.holidays_limit,
            "hourlyRate": self.hourly_rate,
            "currency": self.currency.value,
        }
