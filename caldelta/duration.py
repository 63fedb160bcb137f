"""Calendar-aware durations.

A ``CalendarDuration`` combines a fixed elapsed time with independent month
and year counts. Months have varying length: adding a month to 2017-05-01
is unambiguous, but 2017-01-30 plus one month has no exact answer since
February 30th does not exist. Such operations still make sense for date
iteration, so the month arithmetic gives the next best day of the target
month (2017-02-28 in the example). See ``caldelta.arithmetic``.

Components are never normalized: ``months(13)`` stays 13 months and is not
folded into one year and one month.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from dateutil.relativedelta import relativedelta

from caldelta.util import (
    DAY,
    ELAPSED_MAX,
    ELAPSED_MIN,
    HOUR,
    INT32_MAX,
    INT32_MIN,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    WEEK,
    ns_to_timedelta,
    timedelta_to_ns,
)


def _in_range(elapsed_ns: int, months: int, years: int) -> bool:
    return (
        ELAPSED_MIN <= elapsed_ns <= ELAPSED_MAX
        and INT32_MIN <= months <= INT32_MAX
        and INT32_MIN <= years <= INT32_MAX
    )


@dataclass(frozen=True, kw_only=True)
class CalendarDuration:
    elapsed_ns: int = 0
    months: int = 0
    years: int = 0

    def __post_init__(self) -> None:
        for name in ("elapsed_ns", "months", "years"):
            value = getattr(self, name)
            if not isinstance(value, int):
                raise TypeError(
                    f"CalendarDuration {name} must be an int, "
                    f"got {type(value).__name__!r}: {value!r}\n"
                    f"Hint: use a smaller unit for fractions, "
                    f"e.g. minutes(90) instead of hours(1.5)"
                )
        if not _in_range(self.elapsed_ns, self.months, self.years):
            raise OverflowError(
                f"CalendarDuration out of range: elapsed_ns={self.elapsed_ns}, "
                f"months={self.months}, years={self.years}\n"
                f"Months and years must fit in 32 bits and elapsed time in a "
                f"timedelta.\n"
                f"Hint: use checked_add() / checked_mul() to get None instead"
            )

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "CalendarDuration":
        """Wrap a fixed duration, with no months or years."""
        return cls(elapsed_ns=timedelta_to_ns(td))

    @property
    def elapsed(self) -> timedelta:
        """The fixed part as a timedelta (truncated to microseconds)."""
        return ns_to_timedelta(self.elapsed_ns)

    def checked_add(
        self, other: "CalendarDuration | timedelta"
    ) -> "CalendarDuration | None":
        """Component-wise sum, or None if any component overflows."""
        other = to_calendar_duration(other)
        return _checked(
            self.elapsed_ns + other.elapsed_ns,
            self.months + other.months,
            self.years + other.years,
        )

    def checked_sub(
        self, other: "CalendarDuration | timedelta"
    ) -> "CalendarDuration | None":
        other = to_calendar_duration(other)
        return _checked(
            self.elapsed_ns - other.elapsed_ns,
            self.months - other.months,
            self.years - other.years,
        )

    def checked_mul(self, factor: int) -> "CalendarDuration | None":
        """Scale every component by ``factor``, or None on overflow."""
        return _checked(
            self.elapsed_ns * factor, self.months * factor, self.years * factor
        )

    def to_relativedelta(self) -> relativedelta:
        """Convert to a dateutil relativedelta.

        dateutil applies years and months before the elapsed part, so the
        result of adding it to a date may differ from ``caldelta.add`` when
        day clamping occurs.
        """
        micros = self.elapsed // timedelta(microseconds=1)
        return relativedelta(
            years=self.years, months=self.months, microseconds=micros
        )

    def __add__(self, other: Any) -> "CalendarDuration":
        if not isinstance(other, (CalendarDuration, timedelta)):
            return NotImplemented
        other = to_calendar_duration(other)
        return CalendarDuration(
            elapsed_ns=self.elapsed_ns + other.elapsed_ns,
            months=self.months + other.months,
            years=self.years + other.years,
        )

    def __radd__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return to_calendar_duration(other) + self
        if isinstance(other, date):
            from caldelta.arithmetic import add

            return add(other, self)
        return NotImplemented

    def __sub__(self, other: Any) -> "CalendarDuration":
        if not isinstance(other, (CalendarDuration, timedelta)):
            return NotImplemented
        other = to_calendar_duration(other)
        return CalendarDuration(
            elapsed_ns=self.elapsed_ns - other.elapsed_ns,
            months=self.months - other.months,
            years=self.years - other.years,
        )

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, timedelta):
            return to_calendar_duration(other) - self
        if isinstance(other, date):
            from caldelta.arithmetic import add

            return add(other, -self)
        return NotImplemented

    def __mul__(self, factor: Any) -> "CalendarDuration":
        if not isinstance(factor, int):
            return NotImplemented
        return CalendarDuration(
            elapsed_ns=self.elapsed_ns * factor,
            months=self.months * factor,
            years=self.years * factor,
        )

    __rmul__ = __mul__

    def __floordiv__(self, divisor: Any) -> "CalendarDuration":
        """Divide every component, rounding each toward zero."""
        if not isinstance(divisor, int):
            return NotImplemented
        return CalendarDuration(
            elapsed_ns=_div_toward_zero(self.elapsed_ns, divisor),
            months=_div_toward_zero(self.months, divisor),
            years=_div_toward_zero(self.years, divisor),
        )

    def __neg__(self) -> "CalendarDuration":
        return CalendarDuration(
            elapsed_ns=-self.elapsed_ns, months=-self.months, years=-self.years
        )

    def __pos__(self) -> "CalendarDuration":
        return self

    def __bool__(self) -> bool:
        return bool(self.elapsed_ns or self.months or self.years)

    def __str__(self) -> str:
        """Human-friendly string listing the non-zero components."""
        parts: list[str] = []
        if self.years:
            parts.append(f"{self.years}y")
        if self.months:
            parts.append(f"{self.months}mo")
        if self.elapsed_ns:
            parts.append(str(self.elapsed))
            remainder = abs(self.elapsed_ns) % MICROSECOND
            if remainder:
                parts.append(f"{'-' if self.elapsed_ns < 0 else ''}{remainder}ns")
        return f"CalendarDuration({', '.join(parts) or '0'})"


def to_calendar_duration(value: "CalendarDuration | timedelta") -> CalendarDuration:
    if isinstance(value, CalendarDuration):
        return value
    if isinstance(value, timedelta):
        return CalendarDuration.from_timedelta(value)
    raise TypeError(
        f"Expected CalendarDuration or timedelta, got {type(value).__name__!r}: "
        f"{value!r}\n"
        f"Examples:\n"
        f"  months(1) + days(2)\n"
        f"  months(1) + timedelta(hours=3)"
    )


def _div_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value < 0) == (divisor < 0) else -quotient


def _checked(elapsed_ns: int, months: int, years: int) -> CalendarDuration | None:
    if not _in_range(elapsed_ns, months, years):
        return None
    return CalendarDuration(elapsed_ns=elapsed_ns, months=months, years=years)


# Unit factories
def years(n: int) -> CalendarDuration:
    return CalendarDuration(years=n)


def months(n: int) -> CalendarDuration:
    return CalendarDuration(months=n)


def weeks(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * WEEK)


def days(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * DAY)


def hours(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * HOUR)


def minutes(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * MINUTE)


def seconds(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * SECOND)


def milliseconds(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * MILLISECOND)


def microseconds(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * MICROSECOND)


def nanoseconds(n: int) -> CalendarDuration:
    return CalendarDuration(elapsed_ns=n * NANOSECOND)


def zero() -> CalendarDuration:
    return CalendarDuration()
