from datetime import date, timedelta

import pytest

from acadsched.core.errors import AcadSchedValueError, RecurrenceConfigError
from acadsched.core.types import RecurrenceKind, Weekday, parse_civil_date, weekday_of
from acadsched.recurrence import RecurrenceRule, applies_on, marked_dates, occurrences_between


def test_one_off_rule_applies_inside_its_window():
    rule = RecurrenceRule(kind="none", due_date="2026-01-10", start_date="2026-01-08")
    assert not rule.applies_on("2026-01-07")
    assert rule.applies_on("2026-01-08")
    assert rule.applies_on(date(2026, 1, 9))
    assert rule.applies_on("2026-01-10")
    assert not rule.applies_on("2026-01-11")


def test_one_off_rule_without_start_is_a_single_day():
    rule = RecurrenceRule(due_date="2026-01-12")
    assert rule.kind == RecurrenceKind.NONE
    assert occurrences_between(rule, "2026-01-01", "2026-01-31") == [date(2026, 1, 12)]


def test_weekly_rule_repeats_every_seven_days_from_anchor():
    rule = RecurrenceRule(kind="weekly", due_date="2026-01-05")
    anchor = date(2026, 1, 5)
    assert rule.anchor_date == anchor
    for offset in range(-14, 60):
        day = anchor + timedelta(days=offset)
        expected = offset >= 0 and offset % 7 == 0
        assert applies_on(rule, day) is expected


def test_weekly_rule_honours_explicit_anchor():
    rule = RecurrenceRule(kind="weekly", due_date="2026-01-20", anchor_date="2026-01-06")
    assert rule.applies_on("2026-01-06")
    assert rule.applies_on("2026-01-13")
    assert not rule.applies_on("2026-01-19")
    assert not rule.applies_on("2025-12-30")


def test_monthly_rule_matches_day_of_month():
    rule = RecurrenceRule(kind="monthly", due_date="2026-01-15")
    hits = occurrences_between(rule, "2025-12-01", "2026-04-30")
    assert hits == [date(2026, 1, 15), date(2026, 2, 15), date(2026, 3, 15), date(2026, 4, 15)]


def test_monthly_rule_skips_months_without_the_anchor_day():
    rule = RecurrenceRule(kind="monthly", due_date="2026-01-31")
    hits = occurrences_between(rule, "2026-01-01", "2026-05-31")
    assert hits == [date(2026, 1, 31), date(2026, 3, 31), date(2026, 5, 31)]


def test_anchor_after_due_date_is_rejected():
    with pytest.raises(ValueError):
        RecurrenceRule(kind="weekly", due_date="2026-01-05", anchor_date="2026-01-12")


def test_one_off_start_after_due_date_is_rejected():
    with pytest.raises(ValueError):
        RecurrenceRule(kind="none", due_date="2026-01-05", start_date="2026-01-06")


def test_unknown_kind_is_rejected_on_validation():
    with pytest.raises(ValueError):
        RecurrenceRule(kind="daily", due_date="2026-01-05")


def test_unvalidated_unknown_kind_raises_configuration_error():
    rule = RecurrenceRule.model_construct(kind="daily", due_date=date(2026, 1, 5))
    with pytest.raises(RecurrenceConfigError):
        applies_on(rule, "2026-01-05")


@pytest.mark.parametrize("value", ["2026-1-5", "2026/01/05", "tomorrow", "2026-02-30"])
def test_malformed_dates_are_rejected(value):
    with pytest.raises(ValueError):
        parse_civil_date(value)


def test_occurrence_window_must_be_ordered():
    rule = RecurrenceRule(due_date="2026-01-05")
    with pytest.raises(AcadSchedValueError):
        occurrences_between(rule, "2026-01-31", "2026-01-01")


def test_marked_dates_unions_all_rules():
    rules = [
        RecurrenceRule(kind="weekly", due_date="2026-01-05"),
        RecurrenceRule(kind="monthly", due_date="2026-01-31"),
        RecurrenceRule(kind="none", due_date="2026-01-10", start_date="2026-01-08"),
        RecurrenceRule(kind="none", due_date="2026-01-12"),
    ]
    marks = marked_dates(rules, date(2026, 1, 1), date(2026, 1, 31))
    assert sorted(day.isoformat() for day in marks) == [
        "2026-01-05",
        "2026-01-08",
        "2026-01-09",
        "2026-01-10",
        "2026-01-12",
        "2026-01-19",
        "2026-01-26",
        "2026-01-31",
    ]


def test_weekday_of_civil_dates():
    assert weekday_of(date(2026, 1, 5)) == Weekday.MON
    assert weekday_of(date(2026, 1, 25)) == Weekday.SUN


def test_is_recurring():
    assert RecurrenceRule(kind="monthly", due_date="2026-01-15").is_recurring
    assert not RecurrenceRule(due_date="2026-01-15").is_recurring
