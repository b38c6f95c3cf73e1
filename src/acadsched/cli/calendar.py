"""Calendar layout CLI commands."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console
from rich.table import Table

from acadsched.calendar import (
    RangeEvent,
    RangeSegment,
    WeekLayout,
    grid_bounds,
    layout_month,
    layout_week,
    visible_events,
)
from acadsched.cli._utils import open_workspace, parse_day, parse_month
from acadsched.core.types import Weekday
from acadsched.reporting import month_layout_dataframe
from acadsched.telemetry import DecisionLogger
from acadsched.workspace import ScheduleStore

console = Console()
calendar_app = typer.Typer(
    add_completion=False, no_args_is_help=True, help="Lay out range events on week rows."
)

WEEK_START_CHOICE = click.Choice([day.value for day in Weekday], case_sensitive=False)


def _segment_table(title: str, segments: list[RangeSegment]) -> Table:
    table = Table(title=title)
    for column in ("Event", "Cols", "Span", "Lane", "From prev", "To next"):
        table.add_column(column)
    for segment in segments:
        table.add_row(
            segment.event.title or segment.event.id,
            f"{segment.start_col}-{segment.end_col}",
            str(segment.span),
            str(segment.lane),
            "<" if segment.continues_from_prev else "",
            ">" if segment.continues_to_next else "",
        )
    return table


def _grid_events(
    store: ScheduleStore, year: int, month: int, week_start: Weekday
) -> list[RangeEvent]:
    first, last = grid_bounds(year, month, week_start)
    return store.events_between(first, last)


def _week_containing(day: date, week_start: Weekday) -> list[date]:
    offset = (day.weekday() - week_start.index) % 7
    first = day - timedelta(days=offset)
    return [first + timedelta(days=index) for index in range(7)]


@calendar_app.command("week")
def week(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    day: str = typer.Argument(..., help="Any date (YYYY-MM-DD) inside the week to lay out."),
    week_start: Annotated[
        str,
        typer.Option("--week-start", click_type=WEEK_START_CHOICE, help="First weekday column."),
    ] = Weekday.SUN.value,
) -> None:
    """Lay out the multi-day events of the week containing DAY."""
    workspace = open_workspace(workspace_path)
    week_dates = _week_containing(parse_day(day), Weekday(week_start.lower()))
    segments = layout_week(week_dates, workspace.events)
    title = f"Week {week_dates[0].isoformat()} - {week_dates[-1].isoformat()}"
    if not segments:
        console.print(f"{title}: no multi-day events")
        return
    console.print(_segment_table(title, segments))


@calendar_app.command("month")
def month(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    month_value: str = typer.Argument(..., metavar="MONTH", help="Month to lay out (YYYY-MM)."),
    week_start: Annotated[
        str,
        typer.Option("--week-start", click_type=WEEK_START_CHOICE, help="First weekday column."),
    ] = Weekday.SUN.value,
    out_csv: Annotated[
        Path | None,
        typer.Option("--out-csv", help="Optional path to write the segment layout CSV."),
    ] = None,
    telemetry_log: Annotated[
        Path | None,
        typer.Option("--telemetry-log", help="Append decision records to this JSONL file."),
    ] = None,
) -> None:
    """Lay out every week row of MONTH (bars for multi-day, cells for single-day events)."""
    workspace = open_workspace(workspace_path)
    year, month_num = parse_month(month_value)
    start_day = Weekday(week_start.lower())
    with DecisionLogger(
        telemetry_log,
        command="calendar.month",
        workspace=workspace.name,
        context={"month": month_value, "week_start": week_start},
    ) as logger:
        events = _grid_events(workspace, year, month_num, start_day)
        layouts: list[WeekLayout] = layout_month(year, month_num, events, start_day)
        logger.log_decision(
            "month_layout",
            outcome="ok",
            weeks=len(layouts),
            segments=sum(len(layout.segments) for layout in layouts),
        )

    for layout in layouts:
        title = f"Week {layout.week_dates[0].isoformat()} - {layout.week_dates[-1].isoformat()}"
        if layout.segments:
            console.print(_segment_table(title, layout.segments))
        for cell_day, cell_events in sorted(layout.single_day.items()):
            shown, overflow = visible_events(cell_events)
            names = ", ".join(event.title or event.id for event in shown)
            suffix = f" (+{overflow} more)" if overflow else ""
            console.print(f"  {cell_day.isoformat()}: {names}{suffix}")

    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        month_layout_dataframe(layouts).to_csv(out_csv, index=False)
        console.print(f"Wrote layout to {out_csv}")
