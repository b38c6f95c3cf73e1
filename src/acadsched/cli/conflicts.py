"""Booking conflict CLI commands (student enrolment, teacher assignment)."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from acadsched.cli._utils import open_workspace
from acadsched.core.errors import AcadSchedValueError
from acadsched.scheduling import BookingConflict
from acadsched.telemetry import DecisionLogger

console = Console()
conflicts_app = typer.Typer(
    add_completion=False, no_args_is_help=True, help="Check weekly booking conflicts."
)

TelemetryOption = Annotated[
    Path | None,
    typer.Option("--telemetry-log", help="Append decision records to this JSONL file."),
]


def _report(
    conflict: BookingConflict | None,
    logger: DecisionLogger,
    *,
    kind: str,
    subject: str,
    class_id: str,
) -> bool:
    if conflict is None:
        logger.log_decision(kind, outcome="accepted", subject=subject, class_id=class_id)
        console.print(f"[bold green]No conflict[/]: {class_id} fits {subject}'s timetable")
        return True
    logger.log_decision(
        kind,
        outcome="conflict",
        subject=subject,
        class_id=class_id,
        conflicts_with=conflict.conflicts_with,
        weekday=conflict.weekday.value,
    )
    console.print(f"[bold red]Conflict[/]: {class_id} {conflict.message()}")
    return False


@conflicts_app.command("enroll")
def enroll(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    student_id: str = typer.Argument(..., help="Student to enrol."),
    class_id: str = typer.Argument(..., help="Class the student wants to join."),
    telemetry_log: TelemetryOption = None,
) -> None:
    """Check whether a student can enrol in a class without a time overlap."""
    workspace = open_workspace(workspace_path)
    with DecisionLogger(
        telemetry_log,
        command="conflicts.enroll",
        workspace=workspace.name,
        context={"student_id": student_id, "class_id": class_id},
    ) as logger:
        try:
            conflict = workspace.check_enrollment(student_id, class_id)
        except AcadSchedValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        accepted = _report(
            conflict, logger, kind="enrollment_check", subject=student_id, class_id=class_id
        )
    if not accepted:
        raise typer.Exit(code=1)


@conflicts_app.command("teacher")
def teacher(
    workspace_path: Path = typer.Argument(..., help="Path to workspace YAML file."),
    class_id: str = typer.Argument(..., help="Class being created or reassigned."),
    teacher_id: Annotated[
        str | None,
        typer.Option("--teacher", "-t", help="Teacher to assign (defaults to the class's own)."),
    ] = None,
    telemetry_log: TelemetryOption = None,
) -> None:
    """Check whether a class fits the teacher's other classes."""
    workspace = open_workspace(workspace_path)
    with DecisionLogger(
        telemetry_log,
        command="conflicts.teacher",
        workspace=workspace.name,
        context={"class_id": class_id, "teacher_id": teacher_id},
    ) as logger:
        try:
            conflict = workspace.check_teacher_assignment(class_id, teacher_id)
            subject = teacher_id or workspace.class_by_id(class_id).teacher_id or "?"
        except AcadSchedValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        accepted = _report(
            conflict, logger, kind="teacher_check", subject=subject, class_id=class_id
        )
    if not accepted:
        raise typer.Exit(code=1)
