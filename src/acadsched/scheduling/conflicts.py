"""Weekly booking conflict detection for enrolments and teacher assignments.

The same check serves both directions: enrolling a student compares the candidate class against
the student's other enrolled classes, and assigning a teacher compares it against the teacher's
other classes. Only the ``existing`` collection differs.

Example
-------
>>> from acadsched.scheduling import Booking, WeeklySchedule, check_conflict
>>> candidate = WeeklySchedule.from_clock(["mon"], "14:00", "15:00")
>>> algebra = Booking("C-ALG", WeeklySchedule.from_clock(["mon", "wed"], "14:30", "16:00"))
>>> check_conflict(candidate, [algebra]).conflicts_with
'C-ALG'
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from acadsched.core.errors import AcadSchedValueError
from acadsched.core.types import Weekday

from .timeline.models import TimeInterval, WeeklySchedule, overlaps

__all__ = ["Booking", "BookingConflict", "check_conflict", "ensure_bookable"]


@dataclass(frozen=True)
class Booking:
    """A weekly schedule already bound to an actor (teacher or student).

    Attributes
    ----------
    entity_id:
        Identifier of the owning class/booking, reported back on conflict.
    schedule:
        The entity's current weekly schedule.
    label:
        Optional human-readable name used in conflict messages.
    """

    entity_id: str
    schedule: WeeklySchedule
    label: str | None = None


@dataclass(frozen=True)
class BookingConflict:
    """First overlap found between a candidate schedule and an existing booking."""

    conflicts_with: str
    weekday: Weekday
    candidate_interval: TimeInterval
    existing_interval: TimeInterval
    label: str | None = None

    def message(self) -> str:
        name = self.label or self.conflicts_with
        return (
            f"overlaps with class {name} on {self.weekday.value} "
            f"({self.candidate_interval} vs {self.existing_interval})"
        )


def ensure_bookable(schedule: WeeklySchedule) -> WeeklySchedule:
    """Reject schedules that cannot be booked (no weekdays)."""
    if schedule.is_empty():
        raise AcadSchedValueError("schedule must include at least one weekday")
    return schedule


def check_conflict(
    candidate: WeeklySchedule,
    existing: Iterable[Booking],
    *,
    exclude_id: str | None = None,
) -> BookingConflict | None:
    """Return the first existing booking that overlaps ``candidate``, or ``None``.

    Parameters
    ----------
    candidate:
        Schedule being enrolled/assigned.
    existing:
        Bookings already bound to the same actor, in the caller's priority order (first match
        wins; order by creation time when determinism matters).
    exclude_id:
        Entity id to skip, so that re-saving an edited class does not collide with itself.
    """
    for booking in existing:
        if exclude_id is not None and booking.entity_id == exclude_id:
            continue
        for weekday, candidate_interval in candidate.iter_blocks():
            existing_interval = booking.schedule.effective_interval_for(weekday)
            if existing_interval is None:
                continue
            if overlaps(candidate_interval, existing_interval):
                return BookingConflict(
                    conflicts_with=booking.entity_id,
                    weekday=weekday,
                    candidate_interval=candidate_interval,
                    existing_interval=existing_interval,
                    label=booking.label,
                )
    return None
