"""Tests for spans and duration ordering helpers."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from dateutil.relativedelta import relativedelta

from chronoprog.metrics import (
    Span,
    duration_millis,
    max_duration,
    min_duration,
    sorted_durations,
    span,
    total_duration,
)


def test_span_duration_in_days():
    """Test whole days of spans built from a start point."""
    now = datetime(2025, 1, 6, 9, 30, tzinfo=timezone.utc)

    assert span(now, now + timedelta(days=1)).duration == timedelta(days=1)
    for days in [1, 7, 40, 100, 300, 500, 1000]:
        assert span(now, now + timedelta(days=days)).standard_days == days


def test_span_of_dates_and_ints():
    """Test spans of dates and of integer milliseconds."""
    assert span(date(2025, 1, 1), date(2025, 2, 1)).standard_days == 31
    assert span(0, 5_000).millis == 5_000
    assert span(0, 5_000).duration == 5_000


def test_span_requires_ordered_bounds():
    """Test that a span cannot end before it starts."""
    with pytest.raises(ValueError, match="must be <= end"):
        Span(start=2, end=1)


def test_span_measures_elapsed_time_across_dst():
    """Spring-forward days are 23 hours long."""
    zone = ZoneInfo("America/New_York")
    weekend = span(
        datetime(2025, 3, 8, 12, tzinfo=zone), datetime(2025, 3, 10, 12, tzinfo=zone)
    )

    assert weekend.duration == timedelta(hours=47)
    assert weekend.millis == 47 * 3_600_000
    assert weekend.standard_days == 1


def test_span_orders_repeated_wall_times():
    """The second 01:30 of a fall-back night comes after the first."""
    zone = ZoneInfo("America/New_York")
    first = datetime(2025, 11, 2, 1, 30, tzinfo=zone)
    second = datetime(2025, 11, 2, 1, 30, fold=1, tzinfo=zone)

    assert span(first, second).duration == timedelta(hours=1)
    with pytest.raises(ValueError, match="must be <= end"):
        Span(start=second, end=first)


def test_sort_durations():
    """Test sorting and min/max of durations."""
    durations = [
        timedelta(seconds=1),
        timedelta(seconds=5),
        timedelta(seconds=2),
        timedelta(seconds=4),
    ]
    expected = [
        timedelta(seconds=1),
        timedelta(seconds=2),
        timedelta(seconds=4),
        timedelta(seconds=5),
    ]

    assert sorted_durations(durations) == expected
    assert sorted_durations(durations, reverse=True) == expected[::-1]
    assert max_duration(durations) == timedelta(seconds=5)
    assert min_duration(durations) == timedelta(seconds=1)


def test_mixed_durations_order_by_millis():
    """Test that ints, timedeltas and relativedeltas order together."""
    durations = [relativedelta(seconds=5), timedelta(seconds=2), 3_000]

    assert sorted_durations(durations) == [
        timedelta(seconds=2),
        3_000,
        relativedelta(seconds=5),
    ]
    assert max_duration(durations) == relativedelta(seconds=5)


def test_min_and_max_of_nothing_fail():
    """Test that min and max need at least one duration."""
    with pytest.raises(ValueError):
        min_duration([])

    with pytest.raises(ValueError):
        max_duration([])


def test_total_duration():
    """Test summing durations into milliseconds."""
    assert total_duration([]) == 0
    assert (
        total_duration([timedelta(seconds=1), 500, relativedelta(minutes=1)])
        == 61_500
    )


def test_duration_millis():
    """Test millisecond lengths of each duration type."""
    assert duration_millis(timedelta(microseconds=1_500)) == 1
    assert duration_millis(timedelta(seconds=-1)) == -1_000
    assert duration_millis(-(2**40)) == -(2**40)

    with pytest.raises(ValueError, match="fixed length"):
        duration_millis(relativedelta(months=1))

    with pytest.raises(TypeError):
        duration_millis("1s")  # type: ignore[arg-type]
