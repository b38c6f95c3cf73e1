"""To-do agenda views built on recurrence rules and completion ledgers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from acadsched.core.errors import AcadSchedValueError
from acadsched.core.types import Priority, parse_civil_date

from .rules import RecurrenceRule, applies_on
from .tracker import CompletionRecord, is_completed, is_completed_by_anyone, is_overdue

__all__ = [
    "TodoItem",
    "TodoSort",
    "todos_for_date",
    "overdue_todos",
    "todo_completed",
    "sort_todos",
]

TodoSort = Literal["priority", "date"]

_RULE_FIELDS = ("recurrence", "due_date", "start_date", "anchor_date")


class TodoItem(BaseModel):
    """A to-do with its recurrence rule and assignees.

    Flat ``recurrence``/``due_date``/``start_date``/``anchor_date`` keys (as stored by the
    portal) are folded into ``rule`` during validation.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    rule: RecurrenceRule
    priority: Priority = Priority.MEDIUM
    description: str | None = None
    creator_id: str | None = None
    assignee_ids: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _lift_rule_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "rule" in data:
            return data
        data = dict(data)
        rule: dict[str, Any] = {}
        for key in _RULE_FIELDS:
            value = data.pop(key, None)
            if value is None:
                continue
            rule["kind" if key == "recurrence" else key] = value
        data["rule"] = rule
        return data

    @property
    def due_date(self) -> date:
        return self.rule.due_date

    def applies_on(self, day: date | str) -> bool:
        return applies_on(self.rule, day)


def sort_todos(todos: Iterable[TodoItem], sort: TodoSort = "priority") -> list[TodoItem]:
    if sort == "priority":
        return sorted(todos, key=lambda todo: todo.priority.rank)
    if sort == "date":
        return sorted(todos, key=lambda todo: todo.due_date)
    raise AcadSchedValueError(f"Unknown to-do sort key {sort!r}")


def todos_for_date(
    todos: Iterable[TodoItem],
    day: date | str,
    *,
    assignee_id: str | None = None,
    sort: TodoSort = "priority",
) -> list[TodoItem]:
    """Return to-dos with an occurrence on ``day``, optionally restricted to one assignee."""
    target = parse_civil_date(day)
    selected = [
        todo
        for todo in todos
        if (assignee_id is None or assignee_id in todo.assignee_ids) and todo.applies_on(target)
    ]
    return sort_todos(selected, sort)


def todo_completed(
    todo: TodoItem,
    records: Iterable[CompletionRecord],
    day: date | str,
    assignee_id: str | None = None,
) -> bool:
    """Completion state for one assignee, or for anyone when ``assignee_id`` is ``None``."""
    if assignee_id is None:
        return is_completed_by_anyone(records, day)
    return is_completed(todo.rule, records, day, assignee_id)


def overdue_todos(
    todos: Sequence[TodoItem],
    ledgers: Mapping[str, Iterable[CompletionRecord]],
    today: date | str,
    *,
    assignee_id: str | None = None,
) -> list[TodoItem]:
    """One-off to-dos due before ``today`` that are still open, most urgent first.

    ``ledgers`` maps to-do id to its completion records; missing ids count as empty ledgers.
    """
    reference = parse_civil_date(today)
    overdue = [
        todo
        for todo in todos
        if (assignee_id is None or assignee_id in todo.assignee_ids)
        and is_overdue(todo.rule, tuple(ledgers.get(todo.id, ())), reference, assignee_id)
    ]
    return sort_todos(overdue, "priority")
