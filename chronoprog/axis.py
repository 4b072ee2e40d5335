"""Time axes: the arithmetic a progression needs from a time-point type.

A progression never does time arithmetic itself. It maps points and steps
onto signed integer ticks through a `TimeAxis`, solves the lattice there,
and asks the axis to move points back. Concrete axes cover plain integers
(e.g. Unix timestamps), `date` and `datetime`.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Generic, TypeVar

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from chronoprog.util import DAY, MILLISECOND

logger = logging.getLogger(__name__)

P = TypeVar("P")
D = TypeVar("D")

_EPOCH_NAIVE = datetime(1970, 1, 1)
_EPOCH_AWARE = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)
_ONE_DAY = timedelta(days=1)


def fixed_timedelta(step: timedelta | relativedelta) -> timedelta:
    """Convert a fixed-length step to a `timedelta`.

    A `relativedelta` is accepted only when it has a fixed length: no years,
    months or leap days, and no absolute fields (``day=``, ``weekday=``...).

    Raises:
        ValueError: If the relativedelta is calendar-variable
        TypeError: If the step is neither a timedelta nor a relativedelta
    """
    if isinstance(step, timedelta):
        return step
    if isinstance(step, relativedelta):
        absolute = (
            step.year,
            step.month,
            step.day,
            step.weekday,
            step.hour,
            step.minute,
            step.second,
            step.microsecond,
        )
        if step.years or step.months or step.leapdays or any(
            field is not None for field in absolute
        ):
            raise ValueError(
                f"Step must have a fixed length.\n"
                f"Got calendar-dependent relativedelta: {step!r}\n"
                f"Hint: Use days, hours, minutes, seconds or microseconds only:\n"
                f"  relativedelta(days=1)  # or timedelta(days=1)"
            )
        return timedelta(
            days=step.days,
            hours=step.hours,
            minutes=step.minutes,
            seconds=step.seconds,
            microseconds=step.microseconds,
        )
    raise TypeError(
        f"Step must be a timedelta or relativedelta.\n"
        f"Got {type(step).__name__!r}: {step!r}"
    )


class TimeAxis(ABC, Generic[P, D]):
    """Integer view of a time-point type and its duration type."""

    @abstractmethod
    def supports(self, point: Any, step: Any) -> bool:
        """True if this axis can handle points and steps of these types."""
        pass

    @abstractmethod
    def ticks(self, point: P) -> int:
        """Signed integer offset of a point."""
        pass

    @abstractmethod
    def shift(self, point: P, ticks: int) -> P:
        """Move a point by a signed number of ticks."""
        pass

    @abstractmethod
    def coerce_step(self, step: Any) -> D:
        """Return the canonical duration for a step accepted by `supports`."""
        pass

    @abstractmethod
    def step_ticks(self, step: D) -> int:
        """Signed integer magnitude of a canonical step."""
        pass

    @abstractmethod
    def to_millis(self, ticks: int) -> int:
        """Convert ticks to whole milliseconds (floored)."""
        pass

    def advance(self, point: P, step: D) -> P:
        return self.shift(point, self.step_ticks(step))

    def check_points(self, *points: Any) -> None:
        """Raise TypeError unless all points belong on this axis together."""
        for point in points:
            if not self.supports(point, None):
                raise TypeError(
                    f"{type(self).__name__} cannot place "
                    f"{type(point).__name__!r}: {point!r}"
                )


@dataclass(frozen=True)
class IntAxis(TimeAxis[int, int]):
    """Points and steps are plain integers.

    Attributes:
        unit_millis: Milliseconds per integer unit (1 for epoch millis,
            `SECOND` for Unix seconds)
    """

    unit_millis: int = MILLISECOND

    @override
    def supports(self, point: Any, step: Any) -> bool:
        def is_int(value: Any) -> bool:
            return isinstance(value, int) and not isinstance(value, bool)

        return is_int(point) and (step is None or is_int(step))

    @override
    def ticks(self, point: int) -> int:
        return point

    @override
    def shift(self, point: int, ticks: int) -> int:
        return point + ticks

    @override
    def coerce_step(self, step: Any) -> int:
        if isinstance(step, bool) or not isinstance(step, int):
            raise TypeError(
                f"IntAxis step must be an int.\n"
                f"Got {type(step).__name__!r}: {step!r}"
            )
        return step

    @override
    def step_ticks(self, step: int) -> int:
        return step

    @override
    def to_millis(self, ticks: int) -> int:
        return ticks * self.unit_millis


@dataclass(frozen=True)
class DateAxis(TimeAxis[date, timedelta]):
    """Calendar dates stepped by whole days. One tick is one day."""

    @override
    def supports(self, point: Any, step: Any) -> bool:
        return (
            isinstance(point, date)
            and not isinstance(point, datetime)
            and (step is None or isinstance(step, (timedelta, relativedelta)))
        )

    @override
    def ticks(self, point: date) -> int:
        return point.toordinal()

    @override
    def shift(self, point: date, ticks: int) -> date:
        return point + timedelta(days=ticks)

    @override
    def coerce_step(self, step: Any) -> timedelta:
        delta = fixed_timedelta(step)
        if delta % _ONE_DAY:
            raise ValueError(
                f"Date progressions step by whole days.\n"
                f"Got step: {delta!r}\n"
                f"Hint: Use datetime endpoints for sub-day steps."
            )
        return delta

    @override
    def step_ticks(self, step: timedelta) -> int:
        return step.days

    @override
    def to_millis(self, ticks: int) -> int:
        return ticks * DAY


@dataclass(frozen=True)
class DatetimeAxis(TimeAxis[datetime, timedelta]):
    """Naive or timezone-aware datetimes. One tick is one microsecond.

    Aware points are moved in UTC and converted back to their own zone, so a
    step is always an exact elapsed duration, also across DST changes.
    """

    @override
    def supports(self, point: Any, step: Any) -> bool:
        return isinstance(point, datetime) and (
            step is None or isinstance(step, (timedelta, relativedelta))
        )

    @override
    def ticks(self, point: datetime) -> int:
        epoch = _EPOCH_NAIVE if _is_naive(point) else _EPOCH_AWARE
        return (point - epoch) // _MICROSECOND

    @override
    def shift(self, point: datetime, ticks: int) -> datetime:
        delta = timedelta(microseconds=ticks)
        if _is_naive(point):
            return point + delta
        return (point.astimezone(timezone.utc) + delta).astimezone(point.tzinfo)

    @override
    def coerce_step(self, step: Any) -> timedelta:
        return fixed_timedelta(step)

    @override
    def step_ticks(self, step: timedelta) -> int:
        return step // _MICROSECOND

    @override
    def to_millis(self, ticks: int) -> int:
        return ticks // 1000

    @override
    def check_points(self, *points: Any) -> None:
        super().check_points(*points)
        if len({_is_naive(point) for point in points}) > 1:
            raise TypeError(
                f"Cannot mix naive and timezone-aware datetimes.\n"
                f"Got: {', '.join(repr(point) for point in points)}\n"
                f"Hint: Add timezone info to every endpoint:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )


def _is_naive(point: datetime) -> bool:
    return point.utcoffset() is None


_DEFAULT_AXES: tuple[TimeAxis[Any, Any], ...] = (DatetimeAxis(), DateAxis(), IntAxis())


def axis_for(point: Any, step: Any) -> TimeAxis[Any, Any]:
    """Pick the built-in axis for a point/step pair.

    Raises:
        TypeError: If no built-in axis supports the types
    """
    for axis in _DEFAULT_AXES:
        if axis.supports(point, step):
            logger.debug("Selected %s for %r stepped by %r", axis, point, step)
            return axis
    raise TypeError(
        f"No time axis for point {type(point).__name__!r} "
        f"and step {type(step).__name__!r}.\n"
        f"Supported pairs:\n"
        f"  datetime with timedelta or relativedelta\n"
        f"  date with whole-day timedelta or relativedelta\n"
        f"  int with int (pass axis=IntAxis(unit_millis=...) to set the unit)"
    )
