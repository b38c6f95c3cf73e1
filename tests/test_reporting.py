from datetime import date

from acadsched.calendar import RangeEvent, layout_month
from acadsched.recurrence import CompletionRecord, TodoItem
from acadsched.reporting import (
    agenda_dataframe,
    month_layout_dataframe,
    occurrence_dataframe,
    timetable_dataframe,
)
from acadsched.scheduling.timeline import TimetableEntry, WeeklySchedule


def test_timetable_dataframe_rows_per_block():
    entry = TimetableEntry(
        entity_id="C-ENG",
        label="English Reading",
        schedule=WeeklySchedule.from_clock(
            ["fri", "mon"], "16:00", "17:30", overrides={"fri": ("17:15", "18:30")}
        ),
    )
    frame = timetable_dataframe([entry])
    assert list(frame["weekday"]) == ["mon", "fri"]
    assert list(frame["start_time"]) == ["16:00", "17:15"]
    assert list(frame["slot_span"]) == [3, 3]
    assert list(frame["on_grid"]) == [True, False]


def test_month_layout_dataframe():
    events = [RangeEvent(id="E-EXAM", start_date="2026-01-12", end_date="2026-01-14")]
    frame = month_layout_dataframe(layout_month(2026, 1, events))
    assert len(frame) == 1
    row = frame.iloc[0]
    assert row["week_index"] == 2
    assert row["display_start"] == "2026-01-12"
    assert row["span"] == 3


def test_agenda_and_occurrence_frames():
    todo = TodoItem(id="TD-1", title="Report", recurrence="weekly", due_date="2026-01-05")
    ledgers = {"TD-1": [CompletionRecord(occurrence_date="2026-01-12", assignee_id="T-KIM")]}
    agenda = agenda_dataframe([todo], ledgers, date(2026, 1, 12))
    assert agenda.iloc[0]["completed"]
    assert agenda.iloc[0]["recurrence"] == "weekly"

    occurrences = occurrence_dataframe([todo], date(2026, 1, 1), date(2026, 1, 31))
    assert list(occurrences["occurrence_date"]) == [
        "2026-01-05",
        "2026-01-12",
        "2026-01-19",
        "2026-01-26",
    ]
