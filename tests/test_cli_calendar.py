import pandas as pd
from typer.testing import CliRunner

from acadsched.cli.main import app
from acadsched.telemetry import read_jsonl
from tests.cli import cli_text

runner = CliRunner()


def test_month_layout_csv(demo_workspace_path, tmp_path):
    out_csv = tmp_path / "layout.csv"
    log_path = tmp_path / "decisions.jsonl"
    result = runner.invoke(
        app,
        [
            "calendar",
            "month",
            str(demo_workspace_path),
            "2026-01",
            "--out-csv",
            str(out_csv),
            "--telemetry-log",
            str(log_path),
        ],
    )
    assert result.exit_code == 0
    assert "2026-01-01: New Year" in cli_text(result)
    frame = pd.read_csv(out_csv)
    assert list(frame["event_id"]) == ["E-EXAM", "E-CAMP"]
    assert list(frame["week_index"]) == [2, 4]
    assert list(frame["continues_to_next"]) == [False, True]
    decision, _session = read_jsonl(log_path)
    assert decision["details"]["weeks"] == 5


def test_month_layout_monday_start(demo_workspace_path, tmp_path):
    out_csv = tmp_path / "layout.csv"
    result = runner.invoke(
        app,
        [
            "calendar",
            "month",
            str(demo_workspace_path),
            "2026-02",
            "--week-start",
            "mon",
            "--out-csv",
            str(out_csv),
        ],
    )
    assert result.exit_code == 0
    frame = pd.read_csv(out_csv)
    assert list(frame["event_id"]) == ["E-CAMP", "E-CAMP"]
    assert list(frame["display_start"]) == ["2026-01-30", "2026-02-02"]
    assert list(frame["continues_from_prev"]) == [False, True]
    assert list(frame["show_title"]) == [True, False]


def test_month_rejects_bad_month(demo_workspace_path):
    result = runner.invoke(app, ["calendar", "month", str(demo_workspace_path), "2026-13"])
    assert result.exit_code == 2


def test_week_without_multi_day_events(demo_workspace_path):
    result = runner.invoke(app, ["calendar", "week", str(demo_workspace_path), "2026-01-20"])
    assert result.exit_code == 0
    assert "no multi-day events" in cli_text(result)


def test_month_includes_events_on_neighbouring_month_days(tmp_path):
    workspace = tmp_path / "padded.yaml"
    workspace.write_text(
        "events:\n"
        "  - {id: E-DEC, title: Year-end recital,\n"
        '     start_date: "2025-12-28", end_date: "2025-12-30"}\n'
        '  - {id: E-FEB, title: Open day, start_date: "2026-02-01"}\n',
        encoding="utf-8",
    )
    out_csv = tmp_path / "layout.csv"
    result = runner.invoke(
        app,
        [
            "calendar",
            "month",
            str(workspace),
            "2026-01",
            "--week-start",
            "mon",
            "--out-csv",
            str(out_csv),
        ],
    )
    assert result.exit_code == 0
    assert "2026-02-01: Open day" in cli_text(result)
    (row,) = pd.read_csv(out_csv).to_dict("records")
    assert row["event_id"] == "E-DEC"
    assert (row["week_index"], row["start_col"], row["end_col"]) == (0, 0, 1)
    assert row["continues_from_prev"]
