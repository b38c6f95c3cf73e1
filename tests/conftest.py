from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "examples"


@pytest.fixture
def demo_workspace_path() -> Path:
    """Path to the bundled demo academy workspace (YAML + CSV tables)."""

    return EXAMPLES_DIR / "demo_academy" / "workspace.yaml"
