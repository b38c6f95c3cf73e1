"""Scheduling and recurrence engine for academy timetables, to-dos, and calendars."""

__version__ = "0.1.0"

__all__ = ["__version__"]
