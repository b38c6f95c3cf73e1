"""Tabular (pandas) views of timetables, month layouts, and to-do agendas."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

import pandas as pd

from acadsched.calendar.grid import WeekLayout
from acadsched.recurrence.agenda import TodoItem, todo_completed
from acadsched.recurrence.rules import occurrences_between
from acadsched.recurrence.tracker import CompletionRecord
from acadsched.scheduling.timeline.grid import TIME_SLOTS, TimetableEntry, slot_span

__all__ = [
    "TIMETABLE_COLUMNS",
    "LAYOUT_COLUMNS",
    "AGENDA_COLUMNS",
    "timetable_dataframe",
    "month_layout_dataframe",
    "agenda_dataframe",
    "occurrence_dataframe",
]

TIMETABLE_COLUMNS = [
    "entity_id",
    "label",
    "weekday",
    "start_time",
    "end_time",
    "slot_span",
    "on_grid",
    "color",
]
LAYOUT_COLUMNS = [
    "week_index",
    "event_id",
    "title",
    "display_start",
    "display_end",
    "start_col",
    "end_col",
    "span",
    "lane",
    "continues_from_prev",
    "continues_to_next",
    "show_title",
    "color",
]
AGENDA_COLUMNS = ["todo_id", "title", "priority", "recurrence", "due_date", "completed"]


def timetable_dataframe(entries: Iterable[TimetableEntry]) -> pd.DataFrame:
    """One row per (entry, weekday) block, Monday-first within each entry.

    ``on_grid`` flags blocks whose start lines up with a 30-minute grid slot.
    """
    rows = []
    for entry in entries:
        for weekday, interval in entry.schedule.iter_blocks():
            rows.append(
                {
                    "entity_id": entry.entity_id,
                    "label": entry.label,
                    "weekday": weekday.value,
                    "start_time": interval.start_time,
                    "end_time": interval.end_time,
                    "slot_span": slot_span(interval),
                    "on_grid": interval.start_minutes in TIME_SLOTS,
                    "color": entry.color,
                }
            )
    return pd.DataFrame(rows, columns=TIMETABLE_COLUMNS)


def month_layout_dataframe(layouts: Sequence[WeekLayout]) -> pd.DataFrame:
    rows = []
    for week_index, layout in enumerate(layouts):
        for segment in layout.segments:
            rows.append(
                {
                    "week_index": week_index,
                    "event_id": segment.event.id,
                    "title": segment.event.title,
                    "display_start": segment.display_start.isoformat(),
                    "display_end": segment.display_end.isoformat(),
                    "start_col": segment.start_col,
                    "end_col": segment.end_col,
                    "span": segment.span,
                    "lane": segment.lane,
                    "continues_from_prev": segment.continues_from_prev,
                    "continues_to_next": segment.continues_to_next,
                    "show_title": segment.show_title,
                    "color": segment.event.color,
                }
            )
    return pd.DataFrame(rows, columns=LAYOUT_COLUMNS)


def agenda_dataframe(
    todos: Iterable[TodoItem],
    ledgers: Mapping[str, Iterable[CompletionRecord]],
    day: date,
    assignee_id: str | None = None,
) -> pd.DataFrame:
    rows = [
        {
            "todo_id": todo.id,
            "title": todo.title,
            "priority": todo.priority.value,
            "recurrence": todo.rule.kind.value,
            "due_date": todo.due_date.isoformat(),
            "completed": todo_completed(todo, tuple(ledgers.get(todo.id, ())), day, assignee_id),
        }
        for todo in todos
    ]
    return pd.DataFrame(rows, columns=AGENDA_COLUMNS)


def occurrence_dataframe(todos: Iterable[TodoItem], start: date, end: date) -> pd.DataFrame:
    """Long-form table of (todo, occurrence date) pairs within ``[start, end]``."""
    rows = [
        {"todo_id": todo.id, "occurrence_date": occurrence.isoformat()}
        for todo in todos
        for occurrence in occurrences_between(todo.rule, start, end)
    ]
    return pd.DataFrame(rows, columns=["todo_id", "occurrence_date"])
