"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STATE_VERSION = 1

DEFAULT_HOLIDAYS_LIMIT = 25
DEFAULT_HOURLY_RATE = 0
DEFAULT_CURRENCY = "PLN"

# Paid minutes credited for a holiday entry (7h30m / 3h30m).
HOLIDAY_FULL_MINUTES = 450
HOLIDAY_HALF_MINUTES = 210

FULL_DAY_LABEL = "Full day"
HALF_DAY_LABEL = "Half day"

DEFAULT_WEEKLY_OVERVIEW_LIMIT = 16

ISO_DATE_FORMAT = "%Y-%m-%d"
