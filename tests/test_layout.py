from datetime import date, timedelta

import pytest

from acadsched.calendar import RangeEvent, layout_week, validate_week
from acadsched.core.errors import AcadSchedValueError


def week_from(start: date) -> list[date]:
    return [start + timedelta(days=offset) for offset in range(7)]


WEEK = week_from(date(2026, 1, 25))


def event(event_id: str, start: str, end: str | None = None) -> RangeEvent:
    return RangeEvent(id=event_id, start_date=start, end_date=end)


def test_single_day_events_are_skipped():
    assert layout_week(WEEK, [event("E1", "2026-01-27")]) == []


def test_event_inside_the_week():
    (segment,) = layout_week(WEEK, [event("E1", "2026-01-26", "2026-01-28")])
    assert (segment.start_col, segment.end_col, segment.span) == (1, 3, 3)
    assert not segment.continues_from_prev
    assert not segment.continues_to_next
    assert segment.show_title


def test_event_clipped_on_both_sides():
    (segment,) = layout_week(WEEK, [event("E1", "2026-01-20", "2026-02-05")])
    assert segment.display_start == date(2026, 1, 25)
    assert segment.display_end == date(2026, 1, 31)
    assert (segment.start_col, segment.end_col, segment.span) == (0, 6, 7)
    assert segment.continues_from_prev and segment.continues_to_next
    assert not segment.show_title


def test_event_outside_the_week_is_ignored():
    assert layout_week(WEEK, [event("E1", "2026-02-01", "2026-02-03")]) == []
    assert layout_week(WEEK, [event("E2", "2026-01-20", "2026-01-24")]) == []


def test_segment_geometry_matches_display_dates():
    events = [
        event("E1", "2026-01-20", "2026-01-26"),
        event("E2", "2026-01-29", "2026-02-04"),
        event("E3", "2026-01-27", "2026-01-28"),
    ]
    for segment in layout_week(WEEK, events):
        assert segment.display_start == WEEK[segment.start_col]
        assert segment.display_end == WEEK[segment.end_col]
        assert segment.span == segment.end_col - segment.start_col + 1
        assert segment.continues_from_prev == (segment.event.start_date < WEEK[0])
        assert segment.continues_to_next == (segment.event.end_date > WEEK[-1])


def test_segments_are_ordered_and_stacked_in_lanes():
    events = [
        event("E-B", "2026-01-26", "2026-01-28"),
        event("E-A", "2026-01-26", "2026-01-27"),
        event("E-C", "2026-01-29", "2026-01-30"),
    ]
    segments = layout_week(WEEK, events)
    assert [(s.event.id, s.lane) for s in segments] == [("E-A", 0), ("E-B", 1), ("E-C", 0)]


def test_source_event_is_not_modified():
    source = event("E1", "2026-01-20", "2026-02-05")
    (segment,) = layout_week(WEEK, [source])
    assert segment.event is source
    assert source.start_date == date(2026, 1, 20)


def test_end_before_start_is_rejected():
    with pytest.raises(ValueError):
        event("E1", "2026-01-28", "2026-01-26")


def test_week_row_must_be_seven_consecutive_dates():
    assert validate_week(WEEK)[0] == date(2026, 1, 25)
    with pytest.raises(AcadSchedValueError):
        validate_week(WEEK[:6])
    with pytest.raises(AcadSchedValueError):
        validate_week(WEEK[:6] + [date(2026, 2, 2)])
