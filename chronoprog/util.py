"""Utility constants for chronoprog.

Time unit constants represent durations in milliseconds.
These are the units used by `IntAxis(unit_millis=...)` and by the
duration helpers in `chronoprog.metrics`.
"""

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000
