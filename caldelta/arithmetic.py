"""Applying calendar durations to dates and datetimes.

Python's date types cannot be extended with a new ``+`` overload, so the
operations live here as free functions (``CalendarDuration.__radd__``
delegates to ``add``). Every function has a checked form returning None
when the result falls outside the years the date type can represent.

Order of application: the elapsed part is added first, then years, then
months. This order is observable when day clamping occurs (dateutil's
relativedelta applies years, then months, then elapsed time instead) and
is kept fixed for every operation in this package, iterators included.
"""

from datetime import date, datetime, timedelta
from typing import TypeVar

from caldelta.calendar import last_day_of_month, last_day_of_month_zero_based
from caldelta.duration import CalendarDuration, to_calendar_duration
from caldelta.logging import get_logger
from caldelta.util import MAX_YEAR, MIN_YEAR, MONTHS_PER_YEAR

_log = get_logger(__name__)

PointT = TypeVar("PointT", bound=date)


def add_elapsed(point: PointT, elapsed: timedelta) -> PointT | None:
    """Add a fixed duration, or None if the result leaves the date range.

    Plain ``date`` values only take whole days, rounded toward zero, so
    ``hours(-1)`` leaves a date unchanged just like ``hours(23)``.
    """
    if not isinstance(point, datetime):
        whole_days = abs(elapsed) // timedelta(days=1)
        if elapsed < timedelta(0):
            whole_days = -whole_days
        elapsed = timedelta(days=whole_days)
    try:
        return point + elapsed
    except OverflowError:
        return None


def add_years(point: PointT, years: int) -> PointT | None:
    """Move ``point`` by ``years`` calendar years, keeping month and time.

    February 29th moved into a non-leap year becomes February 28th.
    """
    year = point.year + years
    if not (MIN_YEAR <= year <= MAX_YEAR):
        return None
    day = min(point.day, last_day_of_month(year, point.month))
    return point.replace(year=year, day=day)


def add_months(point: PointT, months: int) -> PointT | None:
    """Move ``point`` by ``months`` calendar months, clamping the day.

    The target month is computed from the month alone; the day is then
    clamped to the last valid day of that month, so January 31st plus one
    month is February 28th (29th in leap years). Time of day and tzinfo are
    kept unchanged.
    """
    # divmod floors, so month0 == -1 is December of the previous year
    additional_years, month0 = divmod(point.month - 1 + months, MONTHS_PER_YEAR)
    year = point.year + additional_years
    if not (MIN_YEAR <= year <= MAX_YEAR):
        return None
    day = min(point.day, last_day_of_month_zero_based(year, month0))
    return point.replace(year=year, month=month0 + 1, day=day)


def checked_add(
    point: PointT, duration: CalendarDuration | timedelta
) -> PointT | None:
    """Apply ``duration`` to ``point``, returning None on overflow.

    Adding one month to January 30th returns February 28th (or 29th).
    """
    duration = to_calendar_duration(duration)
    result = add_elapsed(point, duration.elapsed)
    if result is not None:
        result = add_years(result, duration.years)
    if result is not None:
        result = add_months(result, duration.months)
    if result is None:
        _log.debug("calendar_overflow", point=str(point), duration=str(duration))
    return result


def add(point: PointT, duration: CalendarDuration | timedelta) -> PointT:
    """Apply ``duration`` to ``point``.

    Raises:
        OverflowError: If the result is outside the representable years
    """
    result = checked_add(point, duration)
    if result is None:
        raise OverflowError(
            f"add({point!r}, {duration}) overflowed: the result is outside "
            f"years {MIN_YEAR}-{MAX_YEAR}.\n"
            f"Hint: use checked_add() to get None instead of an error"
        )
    return result
