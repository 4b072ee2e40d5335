from .axis import DateAxis, DatetimeAxis, IntAxis, TimeAxis, axis_for
from .metrics import (
    Span,
    duration_millis,
    max_duration,
    min_duration,
    sorted_durations,
    span,
    total_duration,
)
from .modulo import difference_modulo, mod
from .progression import Progression, ProgressionIterator, last_element, progression
from .util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, WEEK

__all__ = [
    "Progression",
    "ProgressionIterator",
    "progression",
    "last_element",
    "mod",
    "difference_modulo",
    "TimeAxis",
    "IntAxis",
    "DateAxis",
    "DatetimeAxis",
    "axis_for",
    "Span",
    "span",
    "duration_millis",
    "sorted_durations",
    "min_duration",
    "max_duration",
    "total_duration",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
