"""Recurrence rules, completion tracking, and to-do agenda views."""

from .agenda import TodoItem, TodoSort, overdue_todos, sort_todos, todo_completed, todos_for_date
from .rules import RecurrenceRule, applies_on, marked_dates, occurrences_between
from .tracker import (
    CompletionRecord,
    is_completed,
    is_completed_by_anyone,
    is_overdue,
    toggle,
)

__all__ = [
    "RecurrenceRule",
    "applies_on",
    "occurrences_between",
    "marked_dates",
    "CompletionRecord",
    "is_completed",
    "is_completed_by_anyone",
    "is_overdue",
    "toggle",
    "TodoItem",
    "TodoSort",
    "todos_for_date",
    "overdue_todos",
    "todo_completed",
    "sort_todos",
]
