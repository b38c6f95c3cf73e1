"""Workspace IO helpers."""

from .loaders import load_workspace, read_csv, write_completions

__all__ = ["load_workspace", "read_csv", "write_completions"]
