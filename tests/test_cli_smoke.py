"""
Minimal smoke tests for the commitment-engine CLI.

Tests basic functionality:
- App runs and shows help
- Targets and scores are computed from raw inputs
- Day progress, streaks and missed days read log and group files
- Bad input exits with an error
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from commitment_engine.cli.main import app


runner = CliRunner()


def _entry(on: str, points: int) -> str:
    return json.dumps({
        "date": on,
        "exercise_ref": "push_up",
        "count_or_duration": points,
        "computed_points": points,
    })


@pytest.fixture
def data_dir():
    """Group starting Monday 2026-01-05 with no rest days; insane targets met on days 1-3."""
    with tempfile.TemporaryDirectory() as tmpdir:
        d = Path(tmpdir)
        (d / "group.json").write_text(
            json.dumps({"start_date": "2026-01-05", "penalty_amount": 5}),
            encoding="utf-8",
        )
        lines = [_entry("2026-01-05", 2), _entry("2026-01-06", 3), _entry("2026-01-07", 5)]
        (d / "logs.jsonl").write_text("\n".join(lines) + "\n", encoding="utf-8")
        yield d


def _files(d: Path) -> list[str]:
    return ["--logs", str(d / "logs.jsonl"), "--group", str(d / "group.json")]


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "streak" in result.output

    def test_target_from_raw_inputs(self):
        result = runner.invoke(app, ["target", "--day", "10", "--weekday", "3", "--mode", "insane", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["target"] == 15

    def test_target_rest_day(self):
        result = runner.invoke(app, ["target", "--day", "10", "--weekday", "1", "--rest-days", "1", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["target"] == 0

    def test_target_from_group(self, data_dir):
        result = runner.invoke(app, [
            "target", "--group", str(data_dir / "group.json"), "--date", "2026-01-07", "--json",
        ])
        assert result.exit_code == 0, result.output
        out = json.loads(result.stdout)
        assert out["day"] == 3
        assert out["target"] == 3
        assert out["group"]["penalty_amount"] == 5.0

    def test_score_weighted(self):
        result = runner.invoke(app, ["score", "--exercise", "pull_up", "--quantity", "10", "--weight", "15", "--json"])
        assert result.exit_code == 0, result.output
        out = json.loads(result.stdout)
        assert out["weight_multiplier"] == 2.0
        assert out["points"] == 80

    def test_score_unknown_exercise(self):
        result = runner.invoke(app, ["score", "--exercise", "levitation", "--quantity", "1"])
        assert result.exit_code == 1

    def test_exercises_listing(self):
        result = runner.invoke(app, ["exercises", "--json"])
        assert result.exit_code == 0, result.output
        ids = [e["exercise_id"] for e in json.loads(result.stdout)]
        assert "pull_up" in ids

    def test_exercises_category_filter(self):
        result = runner.invoke(app, ["exercises", "--category", "recovery", "--json"])
        assert result.exit_code == 0, result.output
        assert {e["category"] for e in json.loads(result.stdout)} == {"recovery"}

    def test_day_progress(self, data_dir):
        result = runner.invoke(app, ["day", *_files(data_dir), "--date", "2026-01-07", "--json"])
        assert result.exit_code == 0, result.output
        out = json.loads(result.stdout)
        assert out["target"] == 3
        assert out["total"] == 5
        assert out["met"] is True
        # 5 points also meets the insane target of day 3
        assert out["should_promote"] is True

    def test_day_progress_table(self, data_dir):
        result = runner.invoke(app, ["day", *_files(data_dir), "--date", "2026-01-07"])
        assert result.exit_code == 0, result.output

    def test_streak(self, data_dir):
        result = runner.invoke(app, ["streak", *_files(data_dir), "--today", "2026-01-08", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"current_streak": 3, "longest_streak": 3}

    def test_missed(self, data_dir):
        result = runner.invoke(app, [
            "missed", *_files(data_dir), "--from", "2026-01-05", "--to", "2026-01-09", "--json",
        ])
        assert result.exit_code == 0, result.output
        out = json.loads(result.stdout)
        assert [d["date"] for d in out["missed"]] == ["2026-01-08", "2026-01-09"]
        assert out["penalty_total"] == 10.0

    def test_missed_table(self, data_dir):
        result = runner.invoke(app, ["missed", *_files(data_dir), "--from", "2026-01-05", "--to", "2026-01-09"])
        assert result.exit_code == 0, result.output
        # 2026-01-08 is a Thursday
        assert "Thu" in result.output
        assert "penalty 10" in result.output

    def test_missing_log_file(self, data_dir):
        result = runner.invoke(app, [
            "streak", "--logs", str(data_dir / "nope.jsonl"), "--group", str(data_dir / "group.json"),
        ])
        assert result.exit_code == 1

    def test_non_finite_points_in_log(self, data_dir):
        bad = data_dir / "bad.jsonl"
        bad.write_text(
            '{"date":"2026-01-05","exercise_ref":"push_up","count_or_duration":1,"computed_points":NaN}\n',
            encoding="utf-8",
        )
        result = runner.invoke(app, ["streak", "--logs", str(bad), "--group", str(data_dir / "group.json")])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)

    def test_invalid_mode(self, data_dir):
        result = runner.invoke(app, ["day", *_files(data_dir), "--mode", "crazy"])
        assert result.exit_code == 1
