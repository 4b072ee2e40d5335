"""Bounded arithmetic progressions of time points.

A `Progression` describes ``first, first + step, first + 2*step, ...`` up to
an inclusive end, for either sign of step. The final element is solved once,
at construction, by snapping the end bound onto the step lattice, so the
value is cheap to compare and can be iterated any number of times.
"""

import logging
from typing import Any, Generic, TypeVar

from chronoprog.axis import TimeAxis, axis_for
from chronoprog.modulo import difference_modulo

logger = logging.getLogger(__name__)

P = TypeVar("P")
D = TypeVar("D")

_EMPTY_HASH = 0


def _zero_step_error(step: Any) -> ValueError:
    return ValueError(
        f"Step is zero.\n"
        f"Got step: {step!r}\n"
        f"Hint: Use a positive step to count up and a negative one to count down."
    )


def last_element(
    start: P, end: P, step: Any, axis: TimeAxis[P, Any] | None = None
) -> P:
    """Calculate the final element of a bounded arithmetic progression.

    That is the last element of the progression which lies in the range
    from `start` to `end` for a positive `step`, or from `end` to `start`
    for a negative one.

    No ordering validation is performed: the arguments should satisfy either
    ``step > 0 and start <= end`` or ``step < 0 and start >= end``. Otherwise
    the result is still defined, and the progression built on it is empty.

    Args:
        start: First element of the progression
        end: Inclusive bound of the progression
        step: Difference between successive elements
        axis: Axis to compute on (default: picked from the argument types)

    Raises:
        ValueError: If the step is zero
    """
    if axis is None:
        axis = axis_for(start, step)
    step_ticks = axis.step_ticks(axis.coerce_step(step))
    if step_ticks > 0:
        offset = difference_modulo(axis.ticks(end), axis.ticks(start), step_ticks)
        return axis.shift(end, -offset)
    if step_ticks < 0:
        offset = difference_modulo(axis.ticks(start), axis.ticks(end), -step_ticks)
        return axis.shift(end, offset)
    raise _zero_step_error(step)


class Progression(Generic[P, D]):
    """An immutable progression of time points.

    Two progressions are equal when both are empty, or when their `first`,
    `last` and `step` are equal. Every empty progression hashes the same.

    Attributes:
        first: First element (included whenever the progression is non-empty)
        last: Final element, lattice-aligned to `first`
        step: Canonical, non-zero step
        axis: Axis the arithmetic runs on
    """

    __slots__ = ("_first", "_last", "_step", "_axis")

    def __init__(
        self,
        start: P,
        end_inclusive: P,
        step: Any,
        *,
        axis: TimeAxis[P, D] | None = None,
    ) -> None:
        if axis is None:
            axis = axis_for(start, step)
        axis.check_points(start, end_inclusive)
        canonical: D = axis.coerce_step(step)
        if axis.step_ticks(canonical) == 0:
            raise _zero_step_error(step)

        last = last_element(start, end_inclusive, canonical, axis)
        object.__setattr__(self, "_axis", axis)
        object.__setattr__(self, "_step", canonical)
        object.__setattr__(self, "_first", start)
        object.__setattr__(self, "_last", last)
        logger.debug(
            "Built progression first=%r last=%r step=%r", self._first, self._last, canonical
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; cannot delete {name!r}")

    @classmethod
    def from_closed_range(
        cls, range_start: P, range_end: P, step: Any
    ) -> "Progression[P, Any]":
        return cls(range_start, range_end, step)

    @property
    def first(self) -> P:
        return self._first

    @property
    def last(self) -> P:
        return self._last

    @property
    def step(self) -> D:
        return self._step

    @property
    def axis(self) -> TimeAxis[P, D]:
        return self._axis

    @property
    def step_millis(self) -> int:
        """Signed step length in milliseconds."""
        return self._axis.to_millis(self._step_ticks)

    @property
    def _step_ticks(self) -> int:
        return self._axis.step_ticks(self._step)

    def is_empty(self) -> bool:
        first = self._axis.ticks(self._first)
        last = self._axis.ticks(self._last)
        return first > last if self._step_ticks > 0 else first < last

    def iterator(self) -> "ProgressionIterator[P, D]":
        return ProgressionIterator(self._first, self._last, self._step, self._axis)

    def reversed(self) -> "Progression[P, D]":
        """Return the same elements from `last` down to `first`."""
        return Progression(self._last, self._first, -self._step, axis=self._axis)  # type: ignore[operator]

    def __iter__(self) -> "ProgressionIterator[P, D]":
        return self.iterator()

    def __len__(self) -> int:
        if self.is_empty():
            return 0
        span = self._axis.ticks(self._last) - self._axis.ticks(self._first)
        return abs(span) // abs(self._step_ticks) + 1

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, point: object) -> bool:
        if self.is_empty():
            return False
        try:
            self._axis.check_points(self._first, point)
        except TypeError:
            return False
        first = self._axis.ticks(self._first)
        last = self._axis.ticks(self._last)
        ticks = self._axis.ticks(point)  # type: ignore[arg-type]
        low, high = min(first, last), max(first, last)
        return low <= ticks <= high and (ticks - first) % self._step_ticks == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Progression):
            return NotImplemented
        if self.is_empty() and other.is_empty():
            return True
        return self._axis == other._axis and self._key() == other._key()

    def __hash__(self) -> int:
        if self.is_empty():
            return _EMPTY_HASH
        return hash(self._key())

    def _key(self) -> tuple[int, int, int]:
        # Ticks, not points: same-zone datetimes ignore `fold` in == and hash
        return (
            self._axis.ticks(self._first),
            self._axis.ticks(self._last),
            self._step_ticks,
        )

    def __str__(self) -> str:
        if self._step_ticks > 0:
            return f"{self._first}..{self._last} step {self._step}"
        return f"{self._first} downTo {self._last} step {-self._step}"  # type: ignore[operator]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(first={self._first!r}, "
            f"last={self._last!r}, step={self._step!r})"
        )


class ProgressionIterator(Generic[P, D]):
    """Single-pass cursor over a progression's elements.

    Yields `first`, `first + step`, ... `last`, each exactly once. Once the
    cursor sits on `last` it stays there, and the `has_next` flag alone
    decides whether it is still to be returned. A one-element progression
    therefore yields exactly once and the cursor never steps past `last`.
    """

    def __init__(self, first: P, last: P, step: D, axis: TimeAxis[P, D]) -> None:
        self._step: D = step
        self._axis: TimeAxis[P, D] = axis
        self._final_element: P = last
        self._final_ticks: int = axis.ticks(last)
        first_ticks = axis.ticks(first)
        if axis.step_ticks(step) > 0:
            self._has_next: bool = first_ticks <= self._final_ticks
        else:
            self._has_next = first_ticks >= self._final_ticks
        self._next: P = first if self._has_next else last

    @property
    def final_element(self) -> P:
        return self._final_element

    def has_next(self) -> bool:
        return self._has_next

    def advance(self) -> P:
        """Return the next element and move forward.

        Raises:
            StopIteration: If the final element was already returned
        """
        value = self._next
        if self._axis.ticks(value) == self._final_ticks:
            if not self._has_next:
                raise StopIteration
            self._has_next = False
            logger.debug("Progression iterator reached %r", value)
        else:
            self._next = self._axis.advance(value, self._step)
        return value

    def __next__(self) -> P:
        return self.advance()

    def __iter__(self) -> "ProgressionIterator[P, D]":
        return self


def progression(
    start: P,
    end_inclusive: P,
    step: Any,
    *,
    axis: TimeAxis[P, Any] | None = None,
) -> Progression[P, Any]:
    """Build the progression from `start` to `end_inclusive` by `step`.

    Examples:
        progression(monday, friday, timedelta(days=1))       # five days
        progression(friday, monday, timedelta(days=-1))      # backwards
        progression(0, 10_000, SECOND)                       # epoch millis

    Raises:
        ValueError: If the step is zero or not of fixed length
        TypeError: If the point or step types are unsupported
    """
    return Progression(start, end_inclusive, step, axis=axis)
