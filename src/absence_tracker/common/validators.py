from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """Best-effort numeric coercion for untrusted input.

    Returns None for anything that is not a finite number (or a numeric string).
    """

    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, Decimal)):
        n = float(value)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            n = float(s)
        except ValueError:
            return None
    else:
        return None
    return n if math.isfinite(n) else None


def safe_number(value: Any) -> float:
    n = to_number(value)
    return n if n is not None else 0.0


def round_half_up(value: float) -> int:
    """Round to nearest int, .5 going up (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def coerce_text(value: Any) -> str:
    return str(value) if value else ""


def normalize_limit(value: Any) -> Optional[float]:
    """Holidays limit: non-negative, snapped to 0.5 day steps."""

    n = to_number(value)
    if n is None or n < 0:
        return None
    return round_half_up(n * 2) / 2


def normalize_money(value: Any) -> Optional[float]:
    n = to_number(value)
    if n is None or n < 0:
        return None
    return round_half_up(n * 100) / 100


def round_money(value: float) -> Decimal:
    return Decimal(repr(float(value))).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
