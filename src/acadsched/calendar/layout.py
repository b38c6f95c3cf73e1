"""Week-row layout of multi-day range events on a month grid.

Each multi-day event that touches a week row is clipped to that row and rendered as one bar.
Continuation flags tell the renderer which side was clipped (no rounded corner, no title), and
lanes stack bars whose columns overlap.

Example
-------
>>> from datetime import date, timedelta
>>> from acadsched.calendar.layout import RangeEvent, layout_week
>>> week = [date(2026, 1, 25) + timedelta(days=i) for i in range(7)]
>>> trip = RangeEvent(id="E1", start_date="2026-01-30", end_date="2026-02-02")
>>> [(s.start_col, s.end_col, s.continues_to_next) for s in layout_week(week, [trip])]
[(5, 6, True)]
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from acadsched.core.errors import AcadSchedValueError
from acadsched.core.types import day_count, parse_civil_date

__all__ = ["RangeEvent", "RangeSegment", "layout_week", "validate_week"]


class RangeEvent(BaseModel):
    """Calendar item spanning the inclusive civil-date interval ``[start_date, end_date]``.

    ``end_date`` defaults to ``start_date`` for single-day events.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    start_date: date
    end_date: date
    color: str | None = None
    title: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_end(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("end_date"):
            data = dict(data)
            data["end_date"] = data.get("start_date")
        return data

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _civil_date(cls, value: Any) -> date:
        return parse_civil_date(value)

    @model_validator(mode="after")
    def _end_not_before_start(self) -> RangeEvent:
        if self.end_date < self.start_date:
            raise ValueError(
                f"event {self.id} ends ({self.end_date}) before it starts ({self.start_date})"
            )
        return self

    @property
    def is_multi_day(self) -> bool:
        return self.end_date > self.start_date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class RangeSegment:
    """Rendering geometry of one event within one week row.

    Attributes
    ----------
    event:
        The unmodified source event.
    display_start, display_end:
        The event's dates clipped to the week row.
    start_col, end_col:
        Zero-based column indices of ``display_start``/``display_end`` within the row.
    span:
        Number of columns covered (``end_col - start_col + 1``).
    continues_from_prev, continues_to_next:
        Whether the event extends beyond the row on the left/right.
    lane:
        Zero-based stacking row; bars sharing a column never share a lane.
    """

    event: RangeEvent
    display_start: date
    display_end: date
    start_col: int
    end_col: int
    span: int
    continues_from_prev: bool
    continues_to_next: bool
    lane: int = 0

    @property
    def show_title(self) -> bool:
        """The title is drawn only on the segment that contains the event's true start."""
        return not self.continues_from_prev


def validate_week(week_dates: Sequence[date | str]) -> tuple[date, ...]:
    """Parse a week row and require seven consecutive civil dates."""
    dates = tuple(parse_civil_date(value) for value in week_dates)
    if len(dates) != 7:
        raise AcadSchedValueError(f"a week row needs 7 dates, got {len(dates)}")
    first = day_count(dates[0])
    for offset, value in enumerate(dates):
        if day_count(value) != first + offset:
            raise AcadSchedValueError(f"week row dates are not consecutive at column {offset}")
    return dates


def layout_week(
    week_dates: Sequence[date | str], events: Iterable[RangeEvent]
) -> list[RangeSegment]:
    """Compute clipped bar segments for the multi-day events that touch one week row.

    Single-day events are skipped; they are drawn inside their day cell instead. Segments are
    ordered by ``(start_col, event.id)`` and lanes are assigned greedily in that order.
    """
    week = validate_week(week_dates)
    week_start, week_end = week[0], week[-1]
    base = day_count(week_start)

    segments: list[RangeSegment] = []
    for event in events:
        if not event.is_multi_day:
            continue
        if event.end_date < week_start or event.start_date > week_end:
            continue
        display_start = max(event.start_date, week_start)
        display_end = min(event.end_date, week_end)
        start_col = day_count(display_start) - base
        end_col = day_count(display_end) - base
        segments.append(
            RangeSegment(
                event=event,
                display_start=display_start,
                display_end=display_end,
                start_col=start_col,
                end_col=end_col,
                span=end_col - start_col + 1,
                continues_from_prev=event.start_date < week_start,
                continues_to_next=event.end_date > week_end,
            )
        )

    segments.sort(key=lambda segment: (segment.start_col, segment.event.id))
    return _assign_lanes(segments)


def _assign_lanes(segments: list[RangeSegment]) -> list[RangeSegment]:
    lane_ends: list[int] = []
    placed: list[RangeSegment] = []
    for segment in segments:
        for lane, last_col in enumerate(lane_ends):
            if last_col < segment.start_col:
                lane_ends[lane] = segment.end_col
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(segment.end_col)
        placed.append(replace(segment, lane=lane))
    return placed
