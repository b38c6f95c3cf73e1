"""CLI helper utilities for acadsched."""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

import typer
from pydantic import ValidationError

from acadsched.core.errors import AcadSchedValueError
from acadsched.core.types import parse_civil_date
from acadsched.workspace import Workspace, load_workspace

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into ``(year, month)``."""
    match = _MONTH_RE.match(value.strip())
    if match is None:
        raise typer.BadParameter(f"Expected YYYY-MM, got {value!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise typer.BadParameter(f"Month out of range in {value!r}")
    return year, month


def parse_day(value: str) -> date:
    try:
        return parse_civil_date(value)
    except AcadSchedValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def open_workspace(path: Path) -> Workspace:
    """Load a workspace, surfacing validation failures as CLI parameter errors."""
    try:
        return load_workspace(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"File not found: {exc}") from exc
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid workspace {path}:\n{exc}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def bool_mark(value: bool) -> str:
    return "[green]yes[/]" if value else "[dim]no[/]"


__all__ = ["parse_month", "parse_day", "open_workspace", "bool_mark"]
