"""Month grid composition: week rows, per-cell events, and range-bar layouts."""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from acadsched.core.errors import AcadSchedValueError
from acadsched.core.types import Weekday, parse_civil_date

from .layout import RangeEvent, RangeSegment, layout_week

__all__ = [
    "CELL_EVENT_LIMIT",
    "WeekLayout",
    "month_bounds",
    "month_weeks",
    "grid_bounds",
    "events_for_day",
    "events_in_range",
    "visible_events",
    "layout_month",
]

CELL_EVENT_LIMIT = 3


@dataclass(frozen=True)
class WeekLayout:
    """One rendered week row of a month grid."""

    week_dates: tuple[date, ...]
    segments: list[RangeSegment]
    single_day: dict[date, list[RangeEvent]] = field(default_factory=dict)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise AcadSchedValueError(f"month must be within 1..12, got {month}")
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def month_weeks(year: int, month: int, week_start: Weekday = Weekday.SUN) -> list[tuple[date, ...]]:
    """Return the 7-date rows that cover ``year``/``month``, padded with adjacent-month days."""
    month_bounds(year, month)
    grid = calendar.Calendar(firstweekday=Weekday(week_start).index)
    return [tuple(row) for row in grid.monthdatescalendar(year, month)]


def grid_bounds(
    year: int, month: int, week_start: Weekday = Weekday.SUN
) -> tuple[date, date]:
    """First and last date shown on the month grid, padding days included."""
    weeks = month_weeks(year, month, week_start)
    return weeks[0][0], weeks[-1][-1]


def events_for_day(events: Iterable[RangeEvent], day: date | str) -> list[RangeEvent]:
    """Every event (single- or multi-day) covering ``day``, in input order."""
    target = parse_civil_date(day)
    return [event for event in events if event.covers(target)]


def events_in_range(
    events: Iterable[RangeEvent], start: date | str, end: date | str
) -> list[RangeEvent]:
    """Events whose ``[start_date, end_date]`` intersects the inclusive window."""
    first, last = parse_civil_date(start), parse_civil_date(end)
    return [event for event in events if event.start_date <= last and event.end_date >= first]


def visible_events(
    events: Sequence[RangeEvent], limit: int = CELL_EVENT_LIMIT
) -> tuple[list[RangeEvent], int]:
    """Split a cell's events into the ones drawn and the "+N more" overflow count."""
    if limit < 0:
        raise AcadSchedValueError("limit must be non-negative")
    return list(events[:limit]), max(0, len(events) - limit)


def layout_month(
    year: int,
    month: int,
    events: Iterable[RangeEvent],
    week_start: Weekday = Weekday.SUN,
) -> list[WeekLayout]:
    """Lay out a month: bar segments for multi-day events, per-cell lists for single-day ones."""
    pool = list(events)
    layouts: list[WeekLayout] = []
    for week in month_weeks(year, month, week_start):
        single_day = {
            day: [event for event in events_for_day(pool, day) if not event.is_multi_day]
            for day in week
        }
        layouts.append(
            WeekLayout(
                week_dates=week,
                segments=layout_week(week, pool),
                single_day={day: items for day, items in single_day.items() if items},
            )
        )
    return layouts
