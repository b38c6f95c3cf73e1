"""Closed tags and civil calendar/clock primitives.

Dates are civil calendar days exchanged as ``YYYY-MM-DD`` strings and held as naive
``datetime.date`` values; all comparisons go through ordinal day counts, never through a
time-of-day or time-zone aware object. Clock times are ``HH:MM`` (24-hour) strings held as
minutes since midnight.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum

from .errors import AcadSchedValueError

MINUTES_PER_DAY = 24 * 60

_CIVIL_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class Weekday(str, Enum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @property
    def index(self) -> int:
        """Zero-based index matching ``date.weekday()`` (Monday == 0)."""
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def from_index(cls, index: int) -> Weekday:
        return _WEEKDAY_ORDER[index % 7]


_WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)


class RecurrenceKind(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Priority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, most pressing first."""
        return _PRIORITY_ORDER.index(self)


_PRIORITY_ORDER: tuple[Priority, ...] = tuple(Priority)


def parse_civil_date(value: str | date) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a civil date.

    ``datetime`` instances are rejected rather than truncated so that a time-of-day never leaks
    into calendar comparisons.
    """
    if isinstance(value, datetime):
        raise AcadSchedValueError(f"Expected a civil date, got datetime {value!r}")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise AcadSchedValueError(f"Expected a YYYY-MM-DD string, got {value!r}")
    match = _CIVIL_DATE_RE.match(value.strip())
    if match is None:
        raise AcadSchedValueError(f"Malformed civil date {value!r}; expected YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise AcadSchedValueError(f"Invalid civil date {value!r}: {exc}") from exc


def day_count(value: date) -> int:
    """Return the proleptic Gregorian day number (integer day count) of ``value``."""
    return value.toordinal()


def weekday_of(value: date) -> Weekday:
    return Weekday.from_index(value.weekday())


def parse_clock(value: str) -> int:
    """Convert an ``HH:MM`` string into minutes since midnight."""
    if not isinstance(value, str):
        raise AcadSchedValueError(f"Expected an HH:MM string, got {value!r}")
    match = _CLOCK_RE.match(value.strip())
    if match is None:
        raise AcadSchedValueError(f"Malformed clock time {value!r}; expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise AcadSchedValueError(f"Clock time {value!r} is outside 00:00-23:59")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise AcadSchedValueError(f"Minute offset {minutes} is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


__all__ = [
    "MINUTES_PER_DAY",
    "Weekday",
    "RecurrenceKind",
    "Priority",
    "parse_civil_date",
    "day_count",
    "weekday_of",
    "parse_clock",
    "format_clock",
]
