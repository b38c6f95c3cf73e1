"""To-do agenda CLI commands (daily view, month marks, completion toggles)."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console
from rich.table import Table

from acadsched.calendar.grid import month_bounds
from acadsched.cli._utils import bool_mark, open_workspace, parse_day, parse_month
from acadsched.core.errors import AcadSchedValueError
from acadsched.recurrence import (
    is_completed,
    marked_dates,
    overdue_todos,
    todo_completed,
    todos_for_date,
)
from acadsched.reporting import agenda_dataframe
from acadsched.telemetry import DecisionLogger
from acadsched.workspace import ScheduleStore, write_completions

console = Console()
todos_app = typer.Typer(
    add_completion=False, no_args_is_help=True, help="Inspect and update to-do occurrences."
)

SORT_CHOICE = click.Choice(["priority", "date"], case_sensitive=False)


def _occurrence_state(
    store: ScheduleStore, todo_id: str, day: date, assignee_id: str
) -> tuple[bool, bool]:
    """Return ``(is an occurrence, completed by assignee)`` for one to-do date."""
    rule, records = store.rule_and_records(todo_id)
    return rule.applies_on(day), is_completed(rule, records, day, assignee_id)


@todos_app.command("day")
def day_view(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    day: str = typer.Argument(..., help="Civil date (YYYY-MM-DD) to list."),
    assignee: Annotated[
        str | None,
        typer.Option("--assignee", "-a", help="Restrict to one assignee (default: everyone)."),
    ] = None,
    sort: Annotated[
        str, typer.Option("--sort", click_type=SORT_CHOICE, help="Order by priority or due date.")
    ] = "priority",
    today: Annotated[
        str | None,
        typer.Option("--today", help="Reference date for overdue items (defaults to DAY)."),
    ] = None,
    out_csv: Annotated[
        Path | None, typer.Option("--out-csv", help="Optional path to write the agenda CSV.")
    ] = None,
) -> None:
    """List the to-dos that occur on DAY plus open overdue one-off items."""
    workspace = open_workspace(workspace_path)
    target = parse_day(day)
    reference = parse_day(today) if today else target
    ledgers = workspace.ledgers()

    selected = todos_for_date(workspace.todos, target, assignee_id=assignee, sort=sort.lower())
    overdue = overdue_todos(workspace.todos, ledgers, reference, assignee_id=assignee)

    if overdue:
        console.print(f"[yellow]Overdue ({len(overdue)}):[/]")
        for todo in overdue:
            console.print(f" - {todo.title} ({todo.priority.value}, due {todo.due_date})")

    if not selected:
        console.print(f"No to-dos on {target.isoformat()}")
    else:
        table = Table(title=f"To-dos on {target.isoformat()}")
        table.add_column("ID")
        table.add_column("Title")
        table.add_column("Priority")
        table.add_column("Recurrence")
        table.add_column("Done")
        for todo in selected:
            done = todo_completed(todo, ledgers.get(todo.id, ()), target, assignee)
            table.add_row(
                todo.id, todo.title, todo.priority.value, todo.rule.kind.value, bool_mark(done)
            )
        console.print(table)

    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        agenda_dataframe(selected, ledgers, target, assignee).to_csv(out_csv, index=False)
        console.print(f"Wrote agenda to {out_csv}")


@todos_app.command("marks")
def marks(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    month: str = typer.Argument(..., help="Month to scan (YYYY-MM)."),
    assignee: Annotated[
        str | None, typer.Option("--assignee", "-a", help="Restrict to one assignee.")
    ] = None,
) -> None:
    """Print the dates in MONTH that have at least one to-do occurrence."""
    workspace = open_workspace(workspace_path)
    year, month_num = parse_month(month)
    first, last = month_bounds(year, month_num)
    rules = [
        todo.rule
        for todo in workspace.todos
        if assignee is None or assignee in todo.assignee_ids
    ]
    dates: list[date] = sorted(marked_dates(rules, first, last))
    if not dates:
        console.print(f"No occurrences in {month}")
        return
    console.print(" ".join(value.isoformat() for value in dates))


@todos_app.command("toggle")
def toggle_completion(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    todo_id: str = typer.Argument(..., help="To-do whose occurrence is toggled."),
    day: str = typer.Argument(..., help="Occurrence date (YYYY-MM-DD)."),
    assignee: str = typer.Argument(..., help="Assignee completing (or un-completing) it."),
    out_completions: Annotated[
        Path | None,
        typer.Option(
            "--out-completions",
            help="Write the updated completion ledger (all to-dos) to this CSV path.",
        ),
    ] = None,
    telemetry_log: Annotated[
        Path | None,
        typer.Option("--telemetry-log", help="Append decision records to this JSONL file."),
    ] = None,
) -> None:
    """Toggle the completion of one occurrence for one assignee."""
    workspace = open_workspace(workspace_path)
    target = parse_day(day)
    with DecisionLogger(
        telemetry_log,
        command="todos.toggle",
        workspace=workspace.name,
        context={"todo_id": todo_id, "day": target.isoformat(), "assignee": assignee},
    ) as logger:
        try:
            updated = workspace.with_toggle(todo_id, target, assignee)
        except AcadSchedValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        occurs, done = _occurrence_state(updated, todo_id, target, assignee)
        if not occurs:
            console.print(
                f"[yellow]Note:[/] {target.isoformat()} is not an occurrence of {todo_id}"
            )
        logger.log_decision(
            "completion_toggle",
            outcome="completed" if done else "reopened",
            todo_id=todo_id,
            day=target.isoformat(),
            assignee=assignee,
        )
    state = "[green]completed[/]" if done else "[yellow]reopened[/]"
    console.print(f"{todo_id} on {target.isoformat()} for {assignee}: {state}")
    if out_completions:
        write_completions(updated, out_completions)
        console.print(f"Wrote completions to {out_completions}")
