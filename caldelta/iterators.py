"""Lazy date sequences driven by a calendar duration.

Every element is computed from the origin as ``origin + step * n`` rather
than by adding ``step`` to the previous element. With clamping, repeated
addition drifts: January 31st plus one month is February 28th, and
February 28th plus one month is March 28th, whereas ``origin + 2 * step``
gives March 31st.

Iterators are forward-only. To replay a sequence, build a new iterator
from the same origin, step and bound.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta
from typing import Any, Generic, TypeVar

from typing_extensions import override

from caldelta.arithmetic import checked_add
from caldelta.duration import CalendarDuration, to_calendar_duration
from caldelta.logging import get_logger

_log = get_logger(__name__)

PointT = TypeVar("PointT", bound=date)
ItemT = TypeVar("ItemT")


class DateIterator(ABC, Generic[ItemT]):
    """Base class for the date iterator family.

    Once ``__next__`` has raised StopIteration, it keeps raising it.
    """

    _exhausted: bool = False

    @abstractmethod
    def _produce(self) -> ItemT | None:
        """Return the next item, or None when the sequence has ended."""
        pass

    def __iter__(self) -> "DateIterator[ItemT]":
        return self

    def __next__(self) -> ItemT:
        if self._exhausted:
            raise StopIteration
        item = self._produce()
        if item is None:
            self._exhausted = True
            raise StopIteration
        return item


class OpenEndedDateIterator(DateIterator[PointT]):
    """Yield ``origin``, ``origin + step``, ``origin + 2 * step``, ...

    The sequence only ends when the arithmetic overflows.
    """

    def __init__(self, origin: PointT, step: CalendarDuration | timedelta):
        self._origin: PointT = origin
        self._step: CalendarDuration = to_calendar_duration(step)
        self._iterations: int = 0

    @property
    def origin(self) -> PointT:
        return self._origin

    @property
    def step(self) -> CalendarDuration:
        return self._step

    @property
    def iterations(self) -> int:
        """Number of values produced so far."""
        return self._iterations

    def current(self) -> PointT | None:
        """Compute the value at the current counter without advancing."""
        offset = self._step.checked_mul(self._iterations)
        if offset is None:
            return None
        return checked_add(self._origin, offset)

    @override
    def _produce(self) -> PointT | None:
        point = self.current()
        if point is None:
            _log.debug(
                "date_iterator_overflow",
                origin=str(self._origin),
                step=str(self._step),
                iterations=self._iterations,
            )
        self._iterations += 1
        return point

    def to(self, bound: PointT) -> "ClosedDateIterator[PointT]":
        """Stop before the first value that is not strictly less than ``bound``."""
        _check_comparable(self._origin, bound)
        return ClosedDateIterator(self, bound)

    def pairwise(self) -> "PairwiseDateIterator[PointT]":
        """Yield adjacent ``(start, end)`` pairs, e.g. to slice a range into months.

        Taking each value and adding ``step`` to it is not equivalent and
        can produce overlapping slices. Starting from January 31st with a
        one month step, pairwise iteration yields (Jan 31, Feb 28),
        (Feb 28, Mar 31), (Mar 31, Apr 30); adding one month to each value
        would give (Feb 28, Mar 28) for the second pair instead.
        """
        return PairwiseDateIterator(self)


class ClosedDateIterator(DateIterator[PointT]):
    """Forward values from ``source`` while they are strictly less than ``bound``.

    The first value at or past the bound ends the sequence.
    """

    def __init__(self, source: Iterable[PointT], bound: PointT):
        self._source: Iterator[PointT] = iter(source)
        self.bound: PointT = bound

    @override
    def _produce(self) -> PointT | None:
        point = next(self._source, None)
        if point is None or not point < self.bound:
            return None
        return point

    def pairwise(self) -> "ClosedPairwiseDateIterator[PointT]":
        """Adjacent pairs whose first element is strictly less than ``bound``.

        The second element of the last pair may be at or past the bound.
        """
        if not isinstance(self._source, OpenEndedDateIterator):
            raise TypeError(
                f"pairwise() needs a closed iterator over an open-ended date "
                f"iterator, got a source of type {type(self._source).__name__!r}.\n"
                f"Fix: date_iterator_from(origin, step).to(bound).pairwise()"
            )
        return ClosedPairwiseDateIterator(self._source.pairwise(), self.bound)


class PairwiseDateIterator(DateIterator[tuple[PointT, PointT]]):
    """Yield ``(p[i], p[i + 1])`` with both points computed from the origin."""

    def __init__(self, source: OpenEndedDateIterator[PointT]):
        self._source: OpenEndedDateIterator[PointT] = source

    @override
    def _produce(self) -> tuple[PointT, PointT] | None:
        start = next(self._source, None)
        if start is None:
            return None
        end = self._source.current()
        if end is None:
            return None
        return start, end


class ClosedPairwiseDateIterator(DateIterator[tuple[PointT, PointT]]):
    """Pairwise iteration ending at the first pair starting at or past ``bound``."""

    def __init__(self, source: PairwiseDateIterator[PointT], bound: PointT):
        self._source: PairwiseDateIterator[PointT] = source
        self.bound: PointT = bound

    @override
    def _produce(self) -> tuple[PointT, PointT] | None:
        pair = next(self._source, None)
        if pair is None or not pair[0] < self.bound:
            return None
        return pair


def _check_comparable(origin: Any, bound: Any) -> None:
    if isinstance(origin, datetime) and isinstance(bound, datetime):
        if (origin.tzinfo is None) != (bound.tzinfo is None):
            raise TypeError(
                f"Date iterator bound must match the origin's timezone awareness.\n"
                f"Got origin={origin!r} and bound={bound!r}\n"
                f"Hint: Add timezone info to the naive value:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))"
            )


def date_iterator_from(
    origin: PointT, step: CalendarDuration | timedelta
) -> OpenEndedDateIterator[PointT]:
    """
    Return an open-ended iterator over ``origin + step * n``.

    The first value is ``origin`` itself.

    Args:
        origin: First date or datetime of the sequence
        step: Calendar duration (or timedelta) between consecutive values

    Returns:
        OpenEndedDateIterator yielding values until the arithmetic overflows

    Examples:
        >>> from datetime import date
        >>> from itertools import islice
        >>> from caldelta import date_iterator_from, months
        >>>
        >>> # Month ends, clamped where the month is shorter
        >>> list(islice(date_iterator_from(date(2021, 1, 31), months(1)), 3))
        [datetime.date(2021, 1, 31), datetime.date(2021, 2, 28), datetime.date(2021, 3, 31)]
        >>>
        >>> # Monthly slices of a year
        >>> slices = date_iterator_from(date(2021, 1, 1), months(1)).pairwise()
        >>> next(slices)
        (datetime.date(2021, 1, 1), datetime.date(2021, 2, 1))
    """
    return OpenEndedDateIterator(origin, step)


def date_iterator_to(
    source: Iterable[PointT], bound: PointT
) -> ClosedDateIterator[PointT]:
    """Bound any sequence of dates, stopping at the first value ``>= bound``."""
    return ClosedDateIterator(source, bound)


def date_iterator_from_to(
    origin: PointT, step: CalendarDuration | timedelta, bound: PointT
) -> ClosedDateIterator[PointT]:
    """Shorthand for ``date_iterator_from(origin, step).to(bound)``."""
    return date_iterator_from(origin, step).to(bound)
