"""Recurrence rules for to-dos and calendar items.

A rule decides membership of a civil date: one-off rules (``none``) cover the inclusive window
``[start_date, due_date]``; weekly rules fire every seventh day counted from the anchor; monthly
rules fire on the anchor's day-of-month. Weekly and monthly rules have no upper bound, their
``due_date`` only feeds display and sorting.

Monthly rules anchored on a day that a month lacks (e.g. the 31st) do not fire in that month.
This is the observed behaviour of the scheduling portal and is kept until product owners decide
otherwise.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from acadsched.core.errors import AcadSchedValueError, RecurrenceConfigError
from acadsched.core.types import RecurrenceKind, day_count, parse_civil_date

__all__ = ["RecurrenceRule", "applies_on", "occurrences_between", "marked_dates"]


class RecurrenceRule(BaseModel):
    """Immutable recurrence descriptor.

    Attributes
    ----------
    kind:
        ``none``, ``weekly`` or ``monthly``.
    due_date:
        Last day of a one-off rule; display/sort key for recurring rules.
    start_date:
        First day of a one-off rule's window. Defaults to ``due_date``.
    anchor_date:
        Reference date for recurring periods. Defaults to ``due_date`` (the portal anchors a
        recurring to-do on the due date it was created with).
    """

    model_config = ConfigDict(frozen=True)

    kind: RecurrenceKind = RecurrenceKind.NONE
    due_date: date
    start_date: date | None = None
    anchor_date: date | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_anchor(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("anchor_date") is None and "due_date" in data:
            data = dict(data)
            data["anchor_date"] = data["due_date"]
        return data

    @field_validator("due_date", "start_date", "anchor_date", mode="before")
    @classmethod
    def _civil_date(cls, value: Any) -> Any:
        if value is None:
            return None
        return parse_civil_date(value)

    @model_validator(mode="after")
    def _window_consistent(self) -> RecurrenceRule:
        if self.anchor_date is not None and self.anchor_date > self.due_date:
            raise ValueError(
                f"anchor_date {self.anchor_date} must not be after due_date {self.due_date}"
            )
        if self.kind == RecurrenceKind.NONE and self.effective_start > self.due_date:
            raise ValueError(
                f"start_date {self.effective_start} must not be after due_date {self.due_date}"
            )
        return self

    @property
    def effective_start(self) -> date:
        return self.start_date or self.due_date

    @property
    def effective_anchor(self) -> date:
        return self.anchor_date or self.due_date

    @property
    def is_recurring(self) -> bool:
        return self.kind != RecurrenceKind.NONE

    def applies_on(self, day: date | str) -> bool:
        return applies_on(self, day)


def applies_on(rule: RecurrenceRule, day: date | str) -> bool:
    """Return whether ``rule`` has an occurrence on the civil date ``day``.

    Raises
    ------
    RecurrenceConfigError
        If the rule carries a kind outside ``none``/``weekly``/``monthly`` (only reachable for
        rules built without validation).
    """
    target = parse_civil_date(day)
    kind = rule.kind
    if kind == RecurrenceKind.NONE:
        return rule.effective_start <= target <= rule.due_date

    anchor = rule.effective_anchor
    if kind == RecurrenceKind.WEEKLY:
        if target < anchor:
            return False
        return (day_count(target) - day_count(anchor)) % 7 == 0
    if kind == RecurrenceKind.MONTHLY:
        if target < anchor:
            return False
        return target.day == anchor.day
    raise RecurrenceConfigError(f"Unsupported recurrence kind {kind!r}")


def occurrences_between(rule: RecurrenceRule, start: date | str, end: date | str) -> list[date]:
    """List every date in the inclusive window ``[start, end]`` on which ``rule`` applies."""
    first = day_count(parse_civil_date(start))
    last = day_count(parse_civil_date(end))
    if last < first:
        raise AcadSchedValueError(f"window end {end} precedes start {start}")
    return [
        date.fromordinal(ordinal)
        for ordinal in range(first, last + 1)
        if applies_on(rule, date.fromordinal(ordinal))
    ]


def marked_dates(
    rules: Iterable[RecurrenceRule], start: date | str, end: date | str
) -> set[date]:
    """Union of occurrence dates across ``rules`` (calendar "has occurrence" marks)."""
    marks: set[date] = set()
    for rule in rules:
        marks.update(occurrences_between(rule, start, end))
    return marks
