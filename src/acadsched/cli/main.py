from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from acadsched.cli._utils import open_workspace
from acadsched.cli.calendar import calendar_app
from acadsched.cli.conflicts import conflicts_app
from acadsched.cli.todos import todos_app
from acadsched.core.types import Weekday
from acadsched.reporting import timetable_dataframe
from acadsched.scheduling.timeline import (
    TIME_SLOTS,
    entries_in_slot,
    entries_starting_in_slot,
    slot_label,
)

app = typer.Typer(add_completion=False, no_args_is_help=True)
app.add_typer(conflicts_app, name="conflicts")
app.add_typer(todos_app, name="todos")
app.add_typer(calendar_app, name="calendar")
console = Console()


@app.command("timetable")
def timetable(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    teacher_id: Annotated[
        str | None, typer.Option("--teacher", "-t", help="Show one teacher's classes.")
    ] = None,
    student_id: Annotated[
        str | None, typer.Option("--student", "-s", help="Show one student's enrolled classes.")
    ] = None,
    out_csv: Annotated[
        Path | None,
        typer.Option("--out-csv", help="Optional path to write the timetable blocks CSV."),
    ] = None,
) -> None:
    """Render the weekly timetable grid (30-minute slots, 09:00-22:30)."""
    workspace = open_workspace(workspace_path)
    entries = workspace.timetable_entries(teacher_id=teacher_id, student_id=student_id)
    if not entries:
        console.print("No classes to show")
        return

    table = Table(title=f"Timetable: {workspace.name}")
    table.add_column("Time")
    for day in Weekday:
        table.add_column(day.value.capitalize())
    for slot in TIME_SLOTS:
        cells = []
        for day in Weekday:
            starting = entries_starting_in_slot(entries, day, slot)
            if starting:
                cells.append(", ".join(entry.label for entry in starting))
            elif entries_in_slot(entries, day, slot):
                cells.append("|")
            else:
                cells.append("")
        if any(cells):
            table.add_row(slot_label(slot), *cells)
    console.print(table)

    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        timetable_dataframe(entries).to_csv(out_csv, index=False)
        console.print(f"Wrote timetable to {out_csv}")


if __name__ == "__main__":
    app()
