"""Timetable slot helpers for weekly class grids.

The grid runs in 30-minute slots from 09:00 to 22:30 (28 slots per weekday). A class occupies
every slot whose start minute falls inside its effective interval for that weekday, and its
block is drawn from the slot matching the interval start, spanning ``slot_span`` rows.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from acadsched.core.types import Weekday, format_clock

from .models import TimeInterval, WeeklySchedule

SLOT_MINUTES = 30
FIRST_SLOT_MINUTES = 9 * 60
SLOT_COUNT = 28

TIME_SLOTS: tuple[int, ...] = tuple(
    FIRST_SLOT_MINUTES + index * SLOT_MINUTES for index in range(SLOT_COUNT)
)


@dataclass(frozen=True)
class TimetableEntry:
    """A class (or other booking) placed on the weekly grid."""

    entity_id: str
    label: str
    schedule: WeeklySchedule
    color: str | None = None


def slot_label(slot: int) -> str:
    return format_clock(slot)


def entries_in_slot(
    entries: Iterable[TimetableEntry], weekday: Weekday, slot: int
) -> list[TimetableEntry]:
    """Return entries whose effective interval on ``weekday`` covers the slot start."""
    matches: list[TimetableEntry] = []
    for entry in entries:
        interval = entry.schedule.effective_interval_for(weekday)
        if interval is not None and interval.contains_minute(slot):
            matches.append(entry)
    return matches


def entries_starting_in_slot(
    entries: Iterable[TimetableEntry], weekday: Weekday, slot: int
) -> list[TimetableEntry]:
    matches: list[TimetableEntry] = []
    for entry in entries:
        interval = entry.schedule.effective_interval_for(weekday)
        if interval is not None and interval.start_minutes == slot:
            matches.append(entry)
    return matches


def slot_span(interval: TimeInterval) -> int:
    """Number of grid rows an interval covers (at least one)."""
    return max(1, math.ceil(interval.duration_minutes / SLOT_MINUTES))


__all__ = [
    "SLOT_MINUTES",
    "TIME_SLOTS",
    "TimetableEntry",
    "slot_label",
    "entries_in_slot",
    "entries_starting_in_slot",
    "slot_span",
]
