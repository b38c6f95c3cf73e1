"""Workspace loading utilities (YAML metadata + optional CSV tables)."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from acadsched.workspace.contract.models import Workspace

__all__ = ["SECTIONS", "load_workspace", "read_csv", "write_completions"]

SECTIONS = ("classes", "enrollments", "todos", "completions", "events")
COMPLETION_COLUMNS = ["todo_id", "occurrence_date", "assignee_id"]


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV table as strings so ids and ``HH:MM`` values are not coerced."""
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def _clean_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{key: value for key, value in row.items() if not _is_blank(value)} for row in rows]


def _resolve_table(root: Path, value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def load_workspace(yaml_path: str | Path) -> Workspace:
    """Load a :class:`Workspace` from a YAML file.

    Each section (``classes``, ``enrollments``, ``todos``, ``completions``, ``events``) is read
    either from a CSV table listed under ``data:`` (resolved relative to the YAML file) or from
    an inline list of mappings at the top level. Blank CSV cells are dropped so model defaults
    apply.
    """
    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise ValueError(f"Workspace file {base_path} must contain a mapping")
    root = base_path.parent
    data_section = meta.get("data") or {}

    payload: dict[str, Any] = {"name": meta.get("name") or base_path.stem}
    for section in SECTIONS:
        if section in data_section:
            table = read_csv(_resolve_table(root, data_section[section]))
            rows = table.to_dict("records")
        else:
            rows = meta.get(section) or []
        payload[section] = _clean_rows([dict(row) for row in rows])
    return Workspace.model_validate(payload)


def write_completions(workspace: Workspace, path: str | Path) -> Path:
    """Write the workspace's completion ledger as a CSV table."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [
        {
            "todo_id": completion.todo_id,
            "occurrence_date": completion.occurrence_date.isoformat(),
            "assignee_id": completion.assignee_id,
        }
        for completion in workspace.completions
    ]
    pd.DataFrame(rows, columns=COMPLETION_COLUMNS).to_csv(path, index=False)
    return path
