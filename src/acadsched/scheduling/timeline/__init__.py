"""Weekly timeline primitives and timetable slot helpers."""

from .grid import (
    SLOT_MINUTES,
    TIME_SLOTS,
    TimetableEntry,
    entries_in_slot,
    entries_starting_in_slot,
    slot_label,
    slot_span,
)
from .models import TimeInterval, WeeklySchedule, effective_interval_for, overlaps

__all__ = [
    "TimeInterval",
    "WeeklySchedule",
    "overlaps",
    "effective_interval_for",
    "SLOT_MINUTES",
    "TIME_SLOTS",
    "TimetableEntry",
    "entries_in_slot",
    "entries_starting_in_slot",
    "slot_label",
    "slot_span",
]
