"""Pydantic models describing an academy workspace snapshot.

A workspace is the engine's view of the storage collaborator: classes with their weekly
schedules, enrolments, to-dos with completion ledgers, and calendar events. It answers the
three storage queries the engine needs (schedules bound to an actor, a to-do's rule and
records, events intersecting a month) and never persists anything itself.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, field_validator, model_validator

from acadsched.calendar.grid import events_in_range, month_bounds
from acadsched.calendar.layout import RangeEvent
from acadsched.core.errors import AcadSchedValueError
from acadsched.core.types import Weekday, format_clock, parse_civil_date, parse_clock
from acadsched.recurrence.agenda import TodoItem
from acadsched.recurrence.rules import RecurrenceRule
from acadsched.recurrence.tracker import CompletionRecord, toggle
from acadsched.scheduling.conflicts import Booking, BookingConflict, check_conflict, ensure_bookable
from acadsched.scheduling.timeline.grid import TimetableEntry
from acadsched.scheduling.timeline.models import TimeInterval, WeeklySchedule


def _split_tokens(value: Any) -> Any:
    if isinstance(value, str):
        return [token.strip() for token in value.replace(",", "|").split("|") if token.strip()]
    return value


def _coerce_clock(value: Any) -> Any:
    # YAML 1.1 reads an unquoted 14:30 as the base-60 integer 870.
    if isinstance(value, int) and not isinstance(value, bool):
        return format_clock(value)
    if isinstance(value, str):
        parse_clock(value)
    return value


@runtime_checkable
class ScheduleStore(Protocol):
    """Read side of the storage collaborator consumed by the engine.

    :class:`Workspace` is the in-memory implementation; CLI helpers accept any store.
    """

    def bookings_for_teacher(self, teacher_id: str) -> list[Booking]: ...

    def bookings_for_student(self, student_id: str) -> list[Booking]: ...

    def rule_and_records(
        self, todo_id: str
    ) -> tuple[RecurrenceRule, tuple[CompletionRecord, ...]]: ...

    def events_in_month(self, year: int, month: int) -> list[RangeEvent]: ...

    def events_between(self, start: date, end: date) -> list[RangeEvent]: ...


class DaySchedule(BaseModel):
    """Weekday-specific start/end time for a class."""

    day: Weekday
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _clock(cls, value: Any) -> Any:
        return _coerce_clock(value)


class ClassRecord(BaseModel):
    """A class as stored by the portal.

    Attributes
    ----------
    id:
        Unique class identifier (referenced by enrolments).
    name:
        Display name used in conflict messages.
    teacher_id:
        Assigned teacher, ``None`` for unassigned/archived classes.
    days:
        Weekdays the class meets. CSV tables may encode this as ``mon|wed``.
    start_time, end_time:
        Default ``HH:MM`` times for every meeting day.
    schedule:
        Optional per-day overrides. CSV tables may encode this as a JSON list of
        ``{"day", "start_time", "end_time"}`` objects.
    """

    id: str
    name: str
    subject: str | None = None
    teacher_id: str | None = None
    classroom: str | None = None
    days: list[Weekday]
    start_time: str
    end_time: str
    schedule: list[DaySchedule] | None = None
    color: str | None = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _clock(cls, value: Any) -> Any:
        return _coerce_clock(value)

    @field_validator("days", mode="before")
    @classmethod
    def _parse_days(cls, value: Any) -> Any:
        return _split_tokens(value)

    @field_validator("schedule", mode="before")
    @classmethod
    def _parse_schedule(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            try:
                return json.loads(stripped)
            except json.JSONDecodeError as exc:
                raise ValueError(f"schedule is not valid JSON: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _schedule_consistent(self) -> ClassRecord:
        self.to_schedule()
        return self

    def to_schedule(self) -> WeeklySchedule:
        """Build the class's weekly schedule (fresh on every call)."""
        overrides = {
            entry.day: TimeInterval.from_clock(entry.start_time, entry.end_time)
            for entry in self.schedule or []
        }
        return WeeklySchedule(
            weekdays=frozenset(self.days),
            default_interval=TimeInterval.from_clock(self.start_time, self.end_time),
            overrides=overrides,
        )

    def to_booking(self) -> Booking:
        return Booking(entity_id=self.id, schedule=self.to_schedule(), label=self.name)

    def to_timetable_entry(self) -> TimetableEntry:
        return TimetableEntry(
            entity_id=self.id, label=self.name, schedule=self.to_schedule(), color=self.color
        )


class Enrollment(BaseModel):
    student_id: str
    class_id: str


class TodoCompletion(BaseModel):
    """Completion record keyed by its owning to-do."""

    todo_id: str
    occurrence_date: date
    assignee_id: str

    @field_validator("occurrence_date", mode="before")
    @classmethod
    def _civil_date(cls, value: Any) -> date:
        return parse_civil_date(value)

    def to_record(self) -> CompletionRecord:
        return CompletionRecord(occurrence_date=self.occurrence_date, assignee_id=self.assignee_id)


class Workspace(BaseModel):
    """Snapshot of the storage collaborator's scheduling data."""

    name: str
    classes: list[ClassRecord] = []
    enrollments: list[Enrollment] = []
    todos: list[TodoItem] = []
    completions: list[TodoCompletion] = []
    events: list[RangeEvent] = []

    @field_validator("todos", mode="before")
    @classmethod
    def _split_assignees(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        rows = []
        for row in value:
            if isinstance(row, dict) and "assignee_ids" in row:
                row = {**row, "assignee_ids": _split_tokens(row["assignee_ids"]) or ()}
            rows.append(row)
        return rows

    @model_validator(mode="after")
    def _cross_validate(self) -> Workspace:
        class_ids = _unique_ids("class", [cls.id for cls in self.classes])
        todo_ids = _unique_ids("todo", [todo.id for todo in self.todos])
        _unique_ids("event", [event.id for event in self.events])

        seen_enrollments: set[tuple[str, str]] = set()
        for enrollment in self.enrollments:
            if enrollment.class_id not in class_ids:
                raise ValueError(
                    f"Enrollment references unknown class_id={enrollment.class_id}"
                )
            key = (enrollment.student_id, enrollment.class_id)
            if key in seen_enrollments:
                raise ValueError(
                    f"Duplicate enrollment of student {enrollment.student_id} in "
                    f"class {enrollment.class_id}"
                )
            seen_enrollments.add(key)

        for completion in self.completions:
            if completion.todo_id not in todo_ids:
                raise ValueError(f"Completion references unknown todo_id={completion.todo_id}")
        return self

    def class_by_id(self, class_id: str) -> ClassRecord:
        for cls in self.classes:
            if cls.id == class_id:
                return cls
        raise AcadSchedValueError(f"Unknown class_id={class_id}")

    def todo_by_id(self, todo_id: str) -> TodoItem:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        raise AcadSchedValueError(f"Unknown todo_id={todo_id}")

    def student_class_ids(self, student_id: str) -> list[str]:
        return [e.class_id for e in self.enrollments if e.student_id == student_id]

    def bookings_for_teacher(self, teacher_id: str) -> list[Booking]:
        return [cls.to_booking() for cls in self.classes if cls.teacher_id == teacher_id]

    def bookings_for_student(self, student_id: str) -> list[Booking]:
        enrolled = set(self.student_class_ids(student_id))
        return [cls.to_booking() for cls in self.classes if cls.id in enrolled]

    def check_enrollment(self, student_id: str, class_id: str) -> BookingConflict | None:
        """Decide whether ``student_id`` may enrol in ``class_id``."""
        if class_id in self.student_class_ids(student_id):
            raise AcadSchedValueError(f"Student {student_id} is already enrolled in {class_id}")
        candidate = ensure_bookable(self.class_by_id(class_id).to_schedule())
        return check_conflict(candidate, self.bookings_for_student(student_id))

    def check_teacher_assignment(
        self, class_id: str, teacher_id: str | None = None
    ) -> BookingConflict | None:
        """Decide whether ``class_id`` fits the teacher's other classes.

        ``teacher_id`` defaults to the class's current teacher; the class never conflicts with
        itself.
        """
        cls = self.class_by_id(class_id)
        teacher = teacher_id or cls.teacher_id
        if teacher is None:
            raise AcadSchedValueError(f"Class {class_id} has no teacher to check against")
        candidate = ensure_bookable(cls.to_schedule())
        return check_conflict(candidate, self.bookings_for_teacher(teacher), exclude_id=class_id)

    def records_for(self, todo_id: str) -> tuple[CompletionRecord, ...]:
        return tuple(c.to_record() for c in self.completions if c.todo_id == todo_id)

    def rule_and_records(self, todo_id: str) -> tuple[RecurrenceRule, tuple[CompletionRecord, ...]]:
        return self.todo_by_id(todo_id).rule, self.records_for(todo_id)

    def ledgers(self) -> dict[str, tuple[CompletionRecord, ...]]:
        return {todo.id: self.records_for(todo.id) for todo in self.todos}

    def with_toggle(self, todo_id: str, day: date | str, assignee_id: str) -> Workspace:
        """Return a copy whose ledger for ``todo_id`` has ``(day, assignee_id)`` toggled."""
        self.todo_by_id(todo_id)
        updated = toggle(self.records_for(todo_id), day, assignee_id)
        others = [c for c in self.completions if c.todo_id != todo_id]
        rebuilt = others + [
            TodoCompletion(
                todo_id=todo_id,
                occurrence_date=record.occurrence_date,
                assignee_id=record.assignee_id,
            )
            for record in updated
        ]
        return self.model_copy(update={"completions": rebuilt})

    def events_in_month(self, year: int, month: int) -> list[RangeEvent]:
        first, last = month_bounds(year, month)
        return events_in_range(self.events, first, last)

    def events_between(self, start: date, end: date) -> list[RangeEvent]:
        """Events intersecting ``[start, end]``, e.g. the padded span of a month grid."""
        return events_in_range(self.events, start, end)

    def timetable_entries(
        self, *, teacher_id: str | None = None, student_id: str | None = None
    ) -> list[TimetableEntry]:
        classes: Sequence[ClassRecord] = self.classes
        if teacher_id is not None:
            classes = [cls for cls in classes if cls.teacher_id == teacher_id]
        if student_id is not None:
            enrolled = set(self.student_class_ids(student_id))
            classes = [cls for cls in classes if cls.id in enrolled]
        return [cls.to_timetable_entry() for cls in classes]


def _unique_ids(kind: str, ids: list[str]) -> set[str]:
    seen: set[str] = set()
    for item in ids:
        if item in seen:
            raise ValueError(f"Duplicate {kind} id: {item}")
        seen.add(item)
    return seen


__all__ = [
    "ScheduleStore",
    "DaySchedule",
    "ClassRecord",
    "Enrollment",
    "TodoCompletion",
    "Workspace",
]
