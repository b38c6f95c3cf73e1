"""Scheduling utilities (weekly timeline, timetable grid, booking conflicts)."""

from .conflicts import Booking, BookingConflict, check_conflict, ensure_bookable
from .timeline import TimeInterval, WeeklySchedule, effective_interval_for, overlaps

__all__ = [
    "TimeInterval",
    "WeeklySchedule",
    "overlaps",
    "effective_interval_for",
    "Booking",
    "BookingConflict",
    "check_conflict",
    "ensure_bookable",
]
