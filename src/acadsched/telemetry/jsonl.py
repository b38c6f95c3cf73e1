"""JSON Lines helpers for decision telemetry."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any


def encode_record(record: Mapping[str, Any]) -> str:
    """Serialise one record as a compact JSON line; dates and paths fall back to ``str``."""
    return json.dumps(dict(record), ensure_ascii=False, separators=(",", ":"), default=str)


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> str:
    """Append ``record`` to ``path`` (parents created on demand) and return the written line."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    line = encode_record(record)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
    return line


def read_jsonl(path: str | Path) -> list[dict[str, Any]]:
    """Read every JSON object line from ``path``; blank lines are skipped."""
    with Path(path).open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


__all__ = ["encode_record", "append_jsonl", "read_jsonl"]
