"""Context manager for capturing engine decision telemetry."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from .jsonl import append_jsonl


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class DecisionLogger(AbstractContextManager["DecisionLogger"]):
    """Record engine decisions (conflict checks, toggles, layouts) for one session.

    Parameters
    ----------
    log_path:
        JSONL path where decision and session records are appended. ``None`` disables
        writing, so callers can hold a logger unconditionally.
    command:
        Name of the operation driving the session (e.g., ``"conflicts.enroll"``).
    workspace:
        Human-readable workspace name.
    context:
        Additional metadata (CLI arguments, actor ids).
    """

    log_path: Path | None
    command: str
    workspace: str | None = None
    context: Mapping[str, Any] | None = None
    schema_version: str = "1.0"
    session_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    decisions: int = field(default=0, init=False)
    _start_time: float = field(default=0.0, init=False)
    _start_timestamp: str | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.log_path is not None:
            self.log_path = Path(self.log_path)

    def __enter__(self) -> "DecisionLogger":
        self._start_time = time.perf_counter()
        self._start_timestamp = _iso_now()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type:
            self._close(status="error", error=repr(exc))
            return False
        self._close(status="ok", error=None)
        return False

    @property
    def enabled(self) -> bool:
        return self.log_path is not None

    def log_decision(self, kind: str, *, outcome: str, **details: Any) -> None:
        """Append one decision record (``kind`` such as ``"conflict_check"``)."""
        self.decisions += 1
        if self.log_path is None:
            return
        record = {
            "record_type": "decision",
            "schema_version": self.schema_version,
            "session_id": self.session_id,
            "timestamp": _iso_now(),
            "command": self.command,
            "kind": kind,
            "outcome": outcome,
            "details": details,
        }
        append_jsonl(self.log_path, record)

    def elapsed(self) -> float:
        """Return the elapsed wall-clock seconds since the session started."""
        return time.perf_counter() - self._start_time

    def _close(self, *, status: str, error: str | None) -> None:
        if self._closed:
            return
        self._closed = True
        if self.log_path is None:
            return
        duration = self.elapsed() if self._start_time else 0.0
        record = {
            "record_type": "session",
            "schema_version": self.schema_version,
            "session_id": self.session_id,
            "command": self.command,
            "workspace": self.workspace,
            "status": status,
            "decisions": self.decisions,
            "context": dict(self.context or {}),
            "error": error,
            "started_at": self._start_timestamp,
            "finished_at": _iso_now(),
            "duration_seconds": round(duration, 3),
        }
        append_jsonl(self.log_path, record)


__all__ = ["DecisionLogger"]
