"""Calendar helpers for month lengths and leap years.

Month lengths come from the host date type via dateutil's relativedelta,
which snaps an absolute day to the last valid day of the month.
"""

from datetime import date

from dateutil.relativedelta import relativedelta

from caldelta.util import MAX_YEAR, MIN_YEAR, MONTHS_PER_YEAR


def _check_year(year: int) -> None:
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise ValueError(
            f"year must be in range [{MIN_YEAR}, {MAX_YEAR}], got {year}.\n"
            f"Hint: use checked_add() to detect years the date type cannot hold"
        )


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` (1-12) of ``year``.

    Example:
        >>> last_day_of_month(2024, 2)
        29
        >>> last_day_of_month(2023, 2)
        28
    """
    _check_year(year)
    if not (1 <= month <= MONTHS_PER_YEAR):
        raise ValueError(
            f"month must be in range [1, {MONTHS_PER_YEAR}], got {month}.\n"
            f"Hint: use last_day_of_month_zero_based() for months counted from 0"
        )
    return (date(year, month, 1) + relativedelta(day=31)).day


def last_day_of_month_zero_based(year: int, month0: int) -> int:
    """Return the number of days in zero-based ``month0`` (0-11) of ``year``."""
    if not (0 <= month0 < MONTHS_PER_YEAR):
        raise ValueError(
            f"month0 must be in range [0, {MONTHS_PER_YEAR - 1}], got {month0}.\n"
            f"Hint: use last_day_of_month() for months counted from 1"
        )
    return last_day_of_month(year, month0 + 1)


def is_leap_year(year: int) -> bool:
    """True if February 29 exists in ``year``.

    Years outside the range the date type can hold are never leap years.
    """
    if not (MIN_YEAR <= year <= MAX_YEAR):
        return False
    return last_day_of_month(year, 2) == 29
