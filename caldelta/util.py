"""Utility constants for caldelta.

Time unit constants represent fixed durations in nanoseconds.
These are used throughout the API for exact elapsed-time arithmetic.
"""

from datetime import MAXYEAR, MINYEAR, timedelta

# Time unit constants (all values in nanoseconds)
NANOSECOND = 1
MICROSECOND = 1_000
MILLISECOND = 1_000_000
SECOND = 1_000_000_000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

MONTHS_PER_YEAR = 12

# Month and year counts are signed 32-bit
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Elapsed time must stay convertible to a timedelta
ELAPSED_MIN = timedelta.min.days * DAY
ELAPSED_MAX = (
    timedelta.max.days * DAY
    + timedelta.max.seconds * SECOND
    + timedelta.max.microseconds * MICROSECOND
    + (MICROSECOND - 1)
)

# Representable calendar years of the point-in-time type
MIN_YEAR = MINYEAR
MAX_YEAR = MAXYEAR


def timedelta_to_ns(td: timedelta) -> int:
    """Exact nanosecond count of a timedelta."""
    return (td.days * 86400 + td.seconds) * SECOND + td.microseconds * MICROSECOND


def ns_to_timedelta(ns: int) -> timedelta:
    """Timedelta for a nanosecond count, truncated toward zero to microseconds."""
    if ns < 0:
        return -timedelta(microseconds=-ns // MICROSECOND)
    return timedelta(microseconds=ns // MICROSECOND)
