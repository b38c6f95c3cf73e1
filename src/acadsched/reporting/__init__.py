"""Reporting helpers that turn engine decisions into DataFrames."""

from .frames import (
    agenda_dataframe,
    month_layout_dataframe,
    occurrence_dataframe,
    timetable_dataframe,
)

__all__ = [
    "agenda_dataframe",
    "month_layout_dataframe",
    "occurrence_dataframe",
    "timetable_dataframe",
]
