"""
Minimal smoke tests for the lift-records CLI.

Tests basic functionality:
- App runs and lists exercise types
- Sets validate per type
- History file creates
- Sessions can be logged and report PRs
- History can be checked, recalculated and shown
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from lift_records.cli.main import app


runner = CliRunner()


@pytest.fixture
def plank_history(tmp_path) -> Path:
    """A static-hold history file with no sessions yet."""
    path = tmp_path / "plank_history.jsonl"
    result = runner.invoke(app, ["init", str(path), "--title", "Plank", "--type", "static_hold"])
    assert result.exit_code == 0, result.output
    return path


def _log_hold(path: Path, seconds: int, sets: int, date: str):
    return runner.invoke(app, [
        "log", str(path),
        "--time", str(seconds),
        "--sets", str(sets),
        "--date", date,
    ])


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "personal-record" in result.output.lower()

    def test_types_lists_every_type(self):
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        assert "static_hold" in result.output
        assert "cardio" in result.output

    def test_validate_normalizes_hold(self):
        result = runner.invoke(app, ["validate", "--type", "static_hold", "--time", "45"])
        assert result.exit_code == 0
        assert '"reps": 1' in result.output

    def test_validate_rejects_out_of_range(self):
        result = runner.invoke(app, ["validate", "--type", "cardio", "--reps", "49"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_validate_unknown_type(self):
        result = runner.invoke(app, ["validate", "--type", "yoga", "--reps", "5"])
        assert result.exit_code == 1
        assert "Unknown exercise type" in result.output

    def test_init_creates_history(self, plank_history):
        assert plank_history.exists()

    def test_init_twice_fails(self, plank_history):
        result = runner.invoke(app, ["init", str(plank_history), "--title", "Plank"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_log_reports_prs_and_suggestion(self, plank_history):
        first = _log_hold(plank_history, 40, 3, "2026-01-01")
        assert first.exit_code == 0, first.output

        second = _log_hold(plank_history, 45, 3, "2026-01-02")
        assert second.exit_code == 0, second.output
        assert "Logged #2" in second.output
        assert "Best" in second.output
        assert "Volume PR!" in second.output
        assert "Try 47s × 3 sets" in second.output

    def test_log_tie_reports_no_records(self, plank_history):
        _log_hold(plank_history, 40, 1, "2026-01-01")
        result = _log_hold(plank_history, 40, 1, "2026-01-02")
        assert result.exit_code == 0
        assert "No new personal records" in result.output

    def test_log_rejects_invalid_set(self, plank_history):
        result = _log_hold(plank_history, 0, 3, "2026-01-01")
        assert result.exit_code == 1
        assert "time:" in result.output

    def test_log_without_init(self, tmp_path):
        result = _log_hold(tmp_path / "missing.jsonl", 30, 1, "2026-01-01")
        assert result.exit_code == 1
        assert "History file not found" in result.output

    def test_log_accepts_dates_with_offset(self, plank_history):
        assert _log_hold(plank_history, 30, 1, "2026-03-01").exit_code == 0
        result = _log_hold(plank_history, 35, 1, "2026-03-02T10:00:00+00:00")
        assert result.exit_code == 0, result.output
        assert "Logged #2" in result.output
        assert "Best" in result.output

        history = runner.invoke(app, ["show-history", str(plank_history)])
        assert history.exit_code == 0, history.output

    def test_check_and_recalc(self, plank_history):
        _log_hold(plank_history, 40, 3, "2026-01-01")
        _log_hold(plank_history, 40, 3, "2026-01-02")
        _log_hold(plank_history, 50, 3, "2026-01-03")

        check = runner.invoke(app, ["check", str(plank_history), "--log-id", "1"])
        assert check.exit_code == 0
        assert "Volume PR!" in check.output

        missing = runner.invoke(app, ["check", str(plank_history), "--log-id", "9"])
        assert missing.exit_code == 1

        recalc = runner.invoke(app, ["recalc", str(plank_history)])
        assert recalc.exit_code == 0
        assert "#1, #3" in recalc.output

    def test_show_history(self, plank_history):
        _log_hold(plank_history, 40, 3, "2026-01-01")
        result = runner.invoke(app, ["show-history", str(plank_history)])
        assert result.exit_code == 0
        assert "Lift History" in result.output

    def test_regular_lift_flow(self, tmp_path):
        path = tmp_path / "bench.jsonl"
        assert runner.invoke(app, ["init", str(path), "--title", "Bench Press"]).exit_code == 0
        result = runner.invoke(app, [
            "log", str(path), "--weight", "100", "--reps", "5", "--sets", "3", "--date", "2026-01-01",
        ])
        assert result.exit_code == 0, result.output
        assert "NEW PR!" in result.output

        history = runner.invoke(app, ["show-history", str(path)])
        assert history.exit_code == 0
        assert "1RM" in history.output
