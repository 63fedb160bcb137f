from .arithmetic import add, add_elapsed, add_months, add_years, checked_add
from .calendar import is_leap_year, last_day_of_month, last_day_of_month_zero_based
from .duration import (
    CalendarDuration,
    days,
    hours,
    microseconds,
    milliseconds,
    minutes,
    months,
    nanoseconds,
    seconds,
    weeks,
    years,
    zero,
)
from .iterators import (
    ClosedDateIterator,
    ClosedPairwiseDateIterator,
    DateIterator,
    OpenEndedDateIterator,
    PairwiseDateIterator,
    date_iterator_from,
    date_iterator_from_to,
    date_iterator_to,
)
from .logging import configure_logging

__all__ = [
    "CalendarDuration",
    "years",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
    "nanoseconds",
    "zero",
    "add",
    "checked_add",
    "add_elapsed",
    "add_years",
    "add_months",
    "is_leap_year",
    "last_day_of_month",
    "last_day_of_month_zero_based",
    "DateIterator",
    "OpenEndedDateIterator",
    "ClosedDateIterator",
    "PairwiseDateIterator",
    "ClosedPairwiseDateIterator",
    "date_iterator_from",
    "date_iterator_to",
    "date_iterator_from_to",
    "configure_logging",
]
