"""Per-occurrence completion ledger for recurring and one-off to-dos.

A :class:`CompletionRecord` states that one assignee completed the occurrence falling on one
date. Records are only ever added or removed, and :func:`toggle` is the single place that does
either, so un-checking an occurrence is the exact inverse of checking it.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from acadsched.core.types import RecurrenceKind, parse_civil_date

from .rules import RecurrenceRule

__all__ = [
    "CompletionRecord",
    "is_completed",
    "is_completed_by_anyone",
    "is_overdue",
    "toggle",
]


class CompletionRecord(BaseModel):
    """Presence marker: ``assignee_id`` completed the occurrence on ``occurrence_date``."""

    model_config = ConfigDict(frozen=True)

    occurrence_date: date
    assignee_id: str

    @field_validator("occurrence_date", mode="before")
    @classmethod
    def _civil_date(cls, value: Any) -> date:
        return parse_civil_date(value)

    def matches(self, day: date, assignee_id: str) -> bool:
        return self.occurrence_date == day and self.assignee_id == assignee_id


def is_completed(
    rule: RecurrenceRule,
    records: Iterable[CompletionRecord],
    day: date | str,
    assignee_id: str,
) -> bool:
    """Return whether ``assignee_id`` has completed the occurrence on ``day``.

    ``rule`` is accepted for symmetry with :func:`is_overdue`; completion is purely a ledger
    lookup and does not require ``day`` to be an occurrence of the rule.
    """
    target = parse_civil_date(day)
    return any(record.matches(target, assignee_id) for record in records)


def is_completed_by_anyone(records: Iterable[CompletionRecord], day: date | str) -> bool:
    """Aggregate view: whether any assignee completed the occurrence on ``day``."""
    target = parse_civil_date(day)
    return any(record.occurrence_date == target for record in records)


def is_overdue(
    rule: RecurrenceRule,
    records: Iterable[CompletionRecord],
    reference_date: date | str,
    assignee_id: str | None,
) -> bool:
    """Return whether a one-off rule is past due without a completion on its due date.

    Recurring rules are never overdue. Passing ``assignee_id=None`` evaluates the aggregate
    view, where a completion by any assignee clears the occurrence.
    """
    if rule.kind != RecurrenceKind.NONE:
        return False
    reference = parse_civil_date(reference_date)
    if not rule.due_date < reference:
        return False
    if assignee_id is None:
        return not is_completed_by_anyone(records, rule.due_date)
    return not is_completed(rule, records, rule.due_date, assignee_id)


def toggle(
    records: Iterable[CompletionRecord], day: date | str, assignee_id: str
) -> tuple[CompletionRecord, ...]:
    """Return a new ledger with the ``(day, assignee_id)`` record removed if present, else added.

    The input collection is never mutated. The caller must toggle against the most recently
    fetched snapshot; the ledger has no locking of its own.
    """
    target = parse_civil_date(day)
    current = tuple(records)
    remaining = tuple(record for record in current if not record.matches(target, assignee_id))
    if len(remaining) != len(current):
        return remaining
    return current + (CompletionRecord(occurrence_date=target, assignee_id=assignee_id),)
