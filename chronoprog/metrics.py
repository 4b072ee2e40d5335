"""Duration helpers: spans between two points and ordering of durations.

Durations are compared by their signed length in milliseconds, which gives
`relativedelta` (unordered on its own) the same total order as `timedelta`.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, TypeAlias

from dateutil.relativedelta import relativedelta

from chronoprog.axis import fixed_timedelta
from chronoprog.util import DAY

Duration: TypeAlias = int | timedelta | relativedelta

_MILLISECOND = timedelta(milliseconds=1)


@dataclass(frozen=True, kw_only=True)
class Span:
    """Closed stretch of time between two points of the same kind."""

    start: Any
    end: Any

    def __post_init__(self) -> None:
        if _absolute(self.start) > _absolute(self.end):
            raise ValueError(
                f"Span start ({self.start}) must be <= end ({self.end})"
            )

    @property
    def duration(self) -> Any:
        """Elapsed time from `start` to `end`."""
        return _absolute(self.end) - _absolute(self.start)

    @property
    def millis(self) -> int:
        if isinstance(self.start, date):
            return duration_millis(self.duration)
        return self.duration

    @property
    def standard_days(self) -> int:
        """Number of whole days in the span."""
        return self.millis // DAY

    def __str__(self) -> str:
        return f"Span({self.start}→{self.end}, {self.duration})"


def _absolute(point: Any) -> Any:
    # Same-zone aware subtraction is wall-clock time; UTC makes it elapsed time
    if isinstance(point, datetime) and point.utcoffset() is not None:
        return point.astimezone(timezone.utc)
    return point


def span(start: Any, end: Any) -> Span:
    return Span(start=start, end=end)


def duration_millis(duration: Duration) -> int:
    """Signed length of a duration in whole milliseconds.

    Ints are taken to already be milliseconds. Sub-millisecond remainders
    are floored.

    Raises:
        ValueError: If a relativedelta has no fixed length
        TypeError: If the duration type is unsupported
    """
    if isinstance(duration, int) and not isinstance(duration, bool):
        return duration
    return fixed_timedelta(duration) // _MILLISECOND  # type: ignore[arg-type]


def sorted_durations(
    durations: Iterable[Duration], reverse: bool = False
) -> list[Duration]:
    return sorted(durations, key=duration_millis, reverse=reverse)


def min_duration(durations: Iterable[Duration]) -> Duration:
    """Shortest duration.

    Raises:
        ValueError: If there are no durations
    """
    return min(durations, key=duration_millis)


def max_duration(durations: Iterable[Duration]) -> Duration:
    """Longest duration.

    Raises:
        ValueError: If there are no durations
    """
    return max(durations, key=duration_millis)


def total_duration(durations: Iterable[Duration]) -> int:
    """Sum of the durations in milliseconds (0 when there are none)."""
    return sum(duration_millis(duration) for duration in durations)
