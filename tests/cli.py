"""Shared CLI testing utilities."""

from __future__ import annotations

import re
from typing import Any

_ANSI_RE = re.compile(r"\x1B\[[0-9;?]*[ -/]*[@-~]")


def cli_text(result: Any, *, strip_ansi: bool = True) -> str:
    """Return the CLI output (stdout, plus stderr where the runner mixes it) for assertions."""

    text = result.output or ""
    if strip_ansi:
        text = _ANSI_RE.sub("", text)
    return text


__all__ = ["cli_text"]
