"""Workspace snapshots: input contract and YAML/CSV loaders."""

from .contract import ClassRecord, Enrollment, ScheduleStore, TodoCompletion, Workspace
from .io import load_workspace, write_completions

__all__ = [
    "ClassRecord",
    "Enrollment",
    "ScheduleStore",
    "TodoCompletion",
    "Workspace",
    "load_workspace",
    "write_completions",
]
