from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional

from ..common.validators import normalize_limit, normalize_money
from ..core.enums import Currency
from ..core.exceptions import ValidationError
from .model import Settings


def parse_currency(value: Any) -> Optional[Currency]:
    try:
        return Currency(value)
    except ValueError:
        return None


def settings_from_raw(raw: Any) -> Settings:
    """Stored settings -> Settings; anything unusable falls back to the default."""

    defaults = Settings()
    if not isinstance(raw, Mapping):
        return defaults

    limit = normalize_limit(raw.get("holidaysLimit"))
    rate = normalize_money(raw.get("hourlyRate"))
    currency = parse_currency(raw.get("currency"))
    return Settings(
        holidays_limit=defaults.holidays_limit if limit is None else limit,
        hourly_rate=defaults.hourly_rate if rate is None else rate,
        currency=currency or defaults.currency,
    )


def merge_settings(current: Settings, raw: Mapping, *, strict: bool = False) -> Settings:
    """Apply the keys present in ``raw`` on top of ``current``.

    Invalid values are skipped, or rejected with ValidationError when ``strict``.
    """

    changes: dict[str, Any] = {}

    if "holidaysLimit" in raw:
        limit = normalize_limit(raw.get("holidaysLimit"))
        if limit is not None:
            changes["holidays_limit"] = limit
        elif strict:
            raise ValidationError("Holidays limit must be a number of days >= 0")

    if "hourlyRate" in raw:
        rate = normalize_money(raw.get("hourlyRate"))
        if rate is not None:
            changes["hourly_rate"] = rate
        elif strict:
            raise ValidationError("Hourly rate must be a number >= 0")

    if "currency" in raw:
        currency = parse_currency(raw.get("currency"))
        if currency is not None:
            changes["currency"] = currency
        elif strict:
            allowed = ", ".join(c.value for c in Currency)
            raise ValidationError(f"Currency must be one of: {allowed}")

    return replace(current, **changes)
