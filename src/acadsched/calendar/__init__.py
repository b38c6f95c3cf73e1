"""Calendar range-event layout and month grid helpers."""

from .grid import (
    CELL_EVENT_LIMIT,
    WeekLayout,
    events_for_day,
    events_in_range,
    grid_bounds,
    layout_month,
    month_bounds,
    month_weeks,
    visible_events,
)
from .layout import RangeEvent, RangeSegment, layout_week, validate_week

__all__ = [
    "RangeEvent",
    "RangeSegment",
    "layout_week",
    "validate_week",
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
