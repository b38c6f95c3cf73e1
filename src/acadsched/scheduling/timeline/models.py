"""Weekly time-block primitives (time-of-day intervals and weekly schedules)."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from acadsched.core.types import MINUTES_PER_DAY, Weekday, format_clock, parse_clock


class TimeInterval(BaseModel):
    """Half-open time-of-day range ``[start_minutes, end_minutes)``.

    Attributes
    ----------
    start_minutes:
        Minutes since midnight at which the block starts (``0 <= start < 1440``).
    end_minutes:
        Minutes since midnight at which the block ends; must be strictly after the start.
    """

    model_config = ConfigDict(frozen=True)

    start_minutes: int
    end_minutes: int

    @field_validator("start_minutes", "end_minutes")
    @classmethod
    def _within_day(cls, value: int) -> int:
        if not 0 <= value < MINUTES_PER_DAY:
            raise ValueError(f"minute offset {value} must lie within [0, {MINUTES_PER_DAY})")
        return value

    @model_validator(mode="after")
    def _start_before_end(self) -> TimeInterval:
        if self.start_minutes >= self.end_minutes:
            raise ValueError(
                f"interval start {format_clock(self.start_minutes)} must be before end "
                f"{format_clock(self.end_minutes)}"
            )
        return self

    @classmethod
    def from_clock(cls, start: str, end: str) -> TimeInterval:
        """Build an interval from ``HH:MM`` wall-clock strings."""
        return cls(start_minutes=parse_clock(start), end_minutes=parse_clock(end))

    @property
    def start_time(self) -> str:
        return format_clock(self.start_minutes)

    @property
    def end_time(self) -> str:
        return format_clock(self.end_minutes)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: TimeInterval) -> bool:
        return overlaps(self, other)

    def contains_minute(self, minute: int) -> bool:
        return self.start_minutes <= minute < self.end_minutes

    def __str__(self) -> str:
        return f"{self.start_time}-{self.end_time}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Return ``True`` when two half-open intervals share at least one minute.

    Touching endpoints (09:00-10:00 and 10:00-11:00) do not overlap.
    """
    return a.start_minutes < b.end_minutes and b.start_minutes < a.end_minutes


class WeeklySchedule(BaseModel):
    """Weekdays a class occupies, with a default interval and per-weekday overrides.

    Attributes
    ----------
    weekdays:
        Weekdays on which the entity meets.
    default_interval:
        Interval used on every scheduled weekday without an override.
    overrides:
        Weekday-specific intervals layered over ``default_interval``, stored as Monday-first
        ``(weekday, interval)`` pairs so the schedule stays hashable. A mapping is accepted on
        input. Every weekday must also appear in ``weekdays``.
    """

    model_config = ConfigDict(frozen=True)

    weekdays: frozenset[Weekday]
    default_interval: TimeInterval
    overrides: tuple[tuple[Weekday, TimeInterval], ...] = ()

    @field_validator("overrides", mode="before")
    @classmethod
    def _freeze_overrides(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            pairs = [(Weekday(day), interval) for day, interval in value.items()]
            return tuple(sorted(pairs, key=lambda pair: pair[0].index))
        return value

    @model_validator(mode="after")
    def _overrides_scheduled(self) -> WeeklySchedule:
        days = [day for day, _ in self.overrides]
        if len(set(days)) != len(days):
            raise ValueError("overrides list a weekday more than once")
        stray = set(days) - set(self.weekdays)
        if stray:
            names = ", ".join(sorted(day.value for day in stray))
            raise ValueError(f"overrides reference unscheduled weekdays: {names}")
        return self

    @classmethod
    def from_clock(
        cls,
        days: Iterable[Weekday | str],
        start: str,
        end: str,
        overrides: Mapping[Weekday | str, tuple[str, str]] | None = None,
    ) -> WeeklySchedule:
        """Build a schedule from wall-clock strings, e.g. ``(["mon", "wed"], "14:00", "15:30")``."""
        override_intervals = {
            Weekday(day): TimeInterval.from_clock(o_start, o_end)
            for day, (o_start, o_end) in (overrides or {}).items()
        }
        return cls(
            weekdays=frozenset(Weekday(day) for day in days),
            default_interval=TimeInterval.from_clock(start, end),
            overrides=override_intervals,
        )

    def effective_interval_for(self, weekday: Weekday) -> TimeInterval | None:
        return effective_interval_for(self, weekday)

    def iter_blocks(self) -> Iterator[tuple[Weekday, TimeInterval]]:
        """Yield ``(weekday, effective interval)`` pairs in Monday-first order."""
        for day in sorted(self.weekdays, key=lambda d: d.index):
            override = self.override_for(day)
            yield day, self.default_interval if override is None else override

    def override_for(self, weekday: Weekday) -> TimeInterval | None:
        for day, interval in self.overrides:
            if day == weekday:
                return interval
        return None

    def is_empty(self) -> bool:
        return not self.weekdays


def effective_interval_for(schedule: WeeklySchedule, weekday: Weekday) -> TimeInterval | None:
    """Return the override for ``weekday`` if present, else the default; ``None`` if unscheduled."""
    weekday = Weekday(weekday)
    if weekday not in schedule.weekdays:
        return None
    override = schedule.override_for(weekday)
    return schedule.default_interval if override is None else override


__all__ = [
    "TimeInterval",
    "WeeklySchedule",
    "overlaps",
    "effective_interval_for",
]
