import itertools

import pytest

from acadsched.core.types import Weekday
from acadsched.scheduling.timeline import (
    TIME_SLOTS,
    TimeInterval,
    TimetableEntry,
    WeeklySchedule,
    effective_interval_for,
    entries_in_slot,
    entries_starting_in_slot,
    overlaps,
    slot_label,
    slot_span,
)


def interval(start: int, end: int) -> TimeInterval:
    return TimeInterval(start_minutes=start, end_minutes=end)


def test_touching_intervals_do_not_overlap():
    assert not overlaps(interval(0, 60), interval(60, 120))
    assert overlaps(interval(0, 61), interval(60, 120))


def test_overlap_is_symmetric():
    samples = [
        interval(0, 60),
        interval(30, 90),
        interval(60, 120),
        interval(90, 100),
        interval(0, 1439),
        interval(600, 660),
    ]
    for a, b in itertools.product(samples, repeat=2):
        assert overlaps(a, b) == overlaps(b, a)


def test_contained_interval_overlaps():
    assert overlaps(interval(600, 720), interval(630, 660))
    assert interval(600, 720).overlaps(interval(630, 660))


@pytest.mark.parametrize("start,end", [(60, 60), (120, 60), (-1, 30), (0, 1440)])
def test_interval_rejects_malformed_ranges(start, end):
    with pytest.raises(ValueError):
        TimeInterval(start_minutes=start, end_minutes=end)


def test_interval_from_clock_strings():
    block = TimeInterval.from_clock("14:30", "16:00")
    assert block.start_minutes == 870
    assert block.end_minutes == 960
    assert block.duration_minutes == 90
    assert str(block) == "14:30-16:00"


@pytest.mark.parametrize("start,end", [("16:00", "14:30"), ("25:00", "26:00"), ("2pm", "3pm")])
def test_interval_from_clock_rejects_bad_input(start, end):
    with pytest.raises(ValueError):
        TimeInterval.from_clock(start, end)


def test_effective_interval_prefers_override():
    schedule = WeeklySchedule.from_clock(
        ["mon", "wed", "fri"], "16:00", "17:30", overrides={"fri": ("17:00", "18:30")}
    )
    assert effective_interval_for(schedule, Weekday.MON) == TimeInterval.from_clock("16:00", "17:30")
    assert schedule.effective_interval_for(Weekday.FRI) == TimeInterval.from_clock("17:00", "18:30")
    assert effective_interval_for(schedule, Weekday.TUE) is None


def test_override_for_unscheduled_weekday_is_rejected():
    with pytest.raises(ValueError):
        WeeklySchedule.from_clock(["mon"], "10:00", "11:00", overrides={"tue": ("10:00", "11:00")})


def test_override_with_inverted_times_is_rejected():
    with pytest.raises(ValueError):
        WeeklySchedule.from_clock(["mon"], "10:00", "11:00", overrides={"mon": ("12:00", "11:00")})


def test_unknown_weekday_tag_is_rejected():
    with pytest.raises(ValueError):
        WeeklySchedule.from_clock(["monday"], "10:00", "11:00")


def test_iter_blocks_is_monday_first():
    schedule = WeeklySchedule.from_clock(["sun", "wed", "mon"], "09:00", "10:00")
    assert [day for day, _ in schedule.iter_blocks()] == [Weekday.MON, Weekday.WED, Weekday.SUN]


def test_time_slots_cover_afternoon_grid():
    assert len(TIME_SLOTS) == 28
    assert slot_label(TIME_SLOTS[0]) == "09:00"
    assert slot_label(TIME_SLOTS[-1]) == "22:30"


def test_slot_span_rounds_up_to_half_hours():
    assert slot_span(TimeInterval.from_clock("14:30", "16:00")) == 3
    assert slot_span(TimeInterval.from_clock("14:00", "14:45")) == 2
    assert slot_span(TimeInterval.from_clock("14:00", "14:10")) == 1


def test_slot_membership_is_half_open():
    algebra = TimetableEntry(
        entity_id="C-ALG",
        label="Algebra I",
        schedule=WeeklySchedule.from_clock(["mon"], "14:30", "16:00"),
    )
    assert entries_in_slot([algebra], Weekday.MON, 14 * 60 + 30) == [algebra]
    assert entries_in_slot([algebra], Weekday.MON, 15 * 60 + 30) == [algebra]
    assert entries_in_slot([algebra], Weekday.MON, 16 * 60) == []
    assert entries_in_slot([algebra], Weekday.TUE, 15 * 60) == []
    assert entries_starting_in_slot([algebra], Weekday.MON, 14 * 60 + 30) == [algebra]
    assert entries_starting_in_slot([algebra], Weekday.MON, 15 * 60) == []


def test_schedules_with_overrides_are_hashable():
    schedule = WeeklySchedule.from_clock(
        ["mon", "fri"], "16:00", "17:30", overrides={"fri": ("17:00", "18:30")}
    )
    same = WeeklySchedule.from_clock(
        ["fri", "mon"], "16:00", "17:30", overrides={"fri": ("17:00", "18:30")}
    )
    assert schedule == same
    assert hash(schedule) == hash(same)
    entry = TimetableEntry(entity_id="C-ENG", label="English Reading", schedule=schedule)
    twin = TimetableEntry(entity_id="C-ENG", label="English Reading", schedule=same)
    assert len({entry, twin}) == 1
    assert schedule.override_for(Weekday.FRI) == TimeInterval.from_clock("17:00", "18:30")
    assert schedule.override_for(Weekday.MON) is None


def test_duplicate_override_weekdays_are_rejected():
    block = TimeInterval.from_clock("10:00", "11:00")
    with pytest.raises(ValueError):
        WeeklySchedule(
            weekdays=frozenset({Weekday.MON}),
            default_interval=block,
            overrides=((Weekday.MON, block), (Weekday.MON, block)),
        )
