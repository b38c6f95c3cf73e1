"""Core utilities shared across acadsched modules."""

from .errors import AcadSchedValueError, RecurrenceConfigError
from .types import (
    Priority,
    RecurrenceKind,
    Weekday,
    day_count,
    format_clock,
    parse_civil_date,
    parse_clock,
    weekday_of,
)

__all__ = [
    "AcadSchedValueError",
    "RecurrenceConfigError",
    "Priority",
    "RecurrenceKind",
    "Weekday",
    "day_count",
    "format_clock",
    "parse_civil_date",
    "parse_clock",
    "weekday_of",
]
