"""Workspace contract models (Pydantic schemas, validators)."""

from .models import (
    ClassRecord,
    DaySchedule,
    Enrollment,
    ScheduleStore,
    TodoCompletion,
    Workspace,
)

__all__ = [
    "ClassRecord",
    "DaySchedule",
    "Enrollment",
    "ScheduleStore",
    "TodoCompletion",
    "Workspace",
]
