"""Tests for open-ended, closed and pairwise date iterators."""

from datetime import date, datetime, timedelta, timezone
from itertools import islice

import pytest
from dateutil.parser import isoparse

from caldelta import (
    ClosedDateIterator,
    OpenEndedDateIterator,
    date_iterator_from,
    date_iterator_from_to,
    date_iterator_to,
    days,
    minutes,
    months,
    years,
)

STEP = years(3) + months(1) + days(2) + minutes(4)
ORIGIN = isoparse("1996-12-25T16:39:57.123Z")
BOUND = isoparse("2006-03-31T16:51:57.123Z")
EXPECTED = [
    isoparse("1996-12-25T16:39:57.123Z"),
    isoparse("2000-01-27T16:43:57.123Z"),
    isoparse("2003-02-28T16:47:57.123Z"),  # clamped, not Feb 27th
    isoparse("2006-03-31T16:51:57.123Z"),
]


def test_date_iterator_from():
    """Test the first values of an open-ended iterator."""
    it = date_iterator_from(ORIGIN, STEP)

    assert isinstance(it, OpenEndedDateIterator)
    assert list(islice(it, 4)) == EXPECTED


def test_first_value_is_origin():
    """Test that the origin is always produced first, unchanged."""
    it = date_iterator_from(date(2021, 1, 31), months(1))
    assert next(it) == date(2021, 1, 31)


def test_date_iterator_from_to():
    """Test that the bound is exclusive."""
    assert list(date_iterator_from(ORIGIN, STEP).to(BOUND)) == EXPECTED[:3]
    assert list(date_iterator_from_to(ORIGIN, STEP, BOUND)) == EXPECTED[:3]


def test_date_iterator_from_to_pairwise():
    """Test pairwise iteration over a closed iterator.

    Every pair whose start is before the bound is produced; the end of the
    last pair may lie on or after the bound.
    """
    pairs = list(date_iterator_from(ORIGIN, STEP).to(BOUND).pairwise())

    assert pairs == [
        (EXPECTED[0], EXPECTED[1]),
        (EXPECTED[1], EXPECTED[2]),
        (EXPECTED[2], EXPECTED[3]),
    ]


def test_pairwise_stops_when_start_reaches_bound():
    """Test that a pair starting exactly at the bound is not produced."""
    pairs = list(date_iterator_from(ORIGIN, STEP).to(EXPECTED[2]).pairwise())

    assert pairs == [(EXPECTED[0], EXPECTED[1]), (EXPECTED[1], EXPECTED[2])]


def test_no_cumulative_drift():
    """Test that each value is computed from the origin."""
    values = list(islice(date_iterator_from(date(2021, 1, 31), months(1)), 4))

    assert values == [
        date(2021, 1, 31),
        date(2021, 2, 28),
        date(2021, 3, 31),
        date(2021, 4, 30),
    ]


def test_pairwise_no_overlap():
    """Test that monthly slices are contiguous and follow the month ends."""
    pairs = list(
        islice(date_iterator_from(date(2021, 1, 31), months(1)).pairwise(), 3)
    )

    assert pairs == [
        (date(2021, 1, 31), date(2021, 2, 28)),
        (date(2021, 2, 28), date(2021, 3, 31)),
        (date(2021, 3, 31), date(2021, 4, 30)),
    ]
    for (_, end), (start, _) in zip(pairs, pairs[1:]):
        assert end == start


def test_negative_step():
    """Test iterating backwards in time."""
    values = list(islice(date_iterator_from(date(2021, 3, 31), months(-1)), 3))

    assert values == [date(2021, 3, 31), date(2021, 2, 28), date(2021, 1, 31)]


def test_timedelta_step():
    """Test that a plain timedelta works as a step."""
    start = datetime(2021, 1, 1, tzinfo=timezone.utc)
    end = datetime(2021, 1, 1, 3, tzinfo=timezone.utc)

    values = list(date_iterator_from_to(start, timedelta(hours=1), end))

    assert values == [start + timedelta(hours=h) for h in range(3)]


def test_overflow_ends_sequence():
    """Test that overflow is a natural end of an open-ended iterator."""
    it = date_iterator_from(date(9998, 6, 15), years(1))

    assert list(it) == [date(9998, 6, 15), date(9999, 6, 15)]
    # Stays exhausted
    assert next(it, None) is None


def test_pairwise_overflow_ends_sequence():
    """Test that a pair whose end overflows is not produced."""
    pairs = list(date_iterator_from(date(9997, 6, 15), years(1)).pairwise())

    assert pairs == [
        (date(9997, 6, 15), date(9998, 6, 15)),
        (date(9998, 6, 15), date(9999, 6, 15)),
    ]


def test_step_multiplication_overflow_ends_sequence():
    """Test that an overflowing step multiple ends the sequence."""
    it = date_iterator_from(date(2000, 1, 1), months(2**30))

    assert list(it) == [date(2000, 1, 1)]


def test_bound_at_origin_is_empty():
    """Test that a bound equal to the origin yields nothing."""
    assert list(date_iterator_from_to(ORIGIN, STEP, ORIGIN)) == []
    assert list(date_iterator_from(ORIGIN, STEP).to(ORIGIN).pairwise()) == []


def test_closed_iterator_terminates_permanently():
    """Test that the first value at or past the bound ends the sequence."""
    source = [date(2021, 1, 1), date(2021, 6, 1), date(2021, 2, 1)]
    it = date_iterator_to(source, date(2021, 3, 1))

    assert isinstance(it, ClosedDateIterator)
    assert list(it) == [date(2021, 1, 1)]
    assert next(it, None) is None


def test_closed_iterator_over_generator():
    """Test bounding an arbitrary iterable of dates."""
    source = (date(2021, 1, d) for d in range(1, 32))
    assert len(list(date_iterator_to(source, date(2021, 1, 11)))) == 10


def test_pairwise_requires_open_ended_source():
    """Test that pairwise on an arbitrary closed iterator raises TypeError."""
    it = date_iterator_to([date(2021, 1, 1)], date(2021, 3, 1))
    with pytest.raises(TypeError, match="open-ended"):
        it.pairwise()


def test_mixed_awareness_bound_raises():
    """Test that naive and aware datetimes cannot be mixed."""
    with pytest.raises(TypeError, match="timezone awareness"):
        date_iterator_from(ORIGIN, STEP).to(datetime(2006, 1, 1))


def test_iterators_are_independent():
    """Test that iterators advance independently."""
    a = date_iterator_from(date(2021, 1, 1), months(1))
    b = date_iterator_from(date(2021, 1, 1), months(1))

    next(a)
    next(a)

    assert next(b) == date(2021, 1, 1)
    assert next(a) == date(2021, 3, 1)
    assert a.iterations == 3
    assert b.iterations == 1


def test_current_does_not_advance():
    """Test peeking at the next value."""
    it = date_iterator_from(date(2021, 1, 31), months(1))
    next(it)

    assert it.current() == date(2021, 2, 28)
    assert it.current() == date(2021, 2, 28)
    assert next(it) == date(2021, 2, 28)
    assert it.origin == date(2021, 1, 31)
    assert it.step == months(1)


def test_iter_returns_self():
    """Test that iterators are read-once."""
    it = date_iterator_from_to(date(2021, 1, 1), months(1), date(2021, 4, 1))

    assert iter(it) is it
    assert len(list(it)) == 3
    assert list(it) == []
