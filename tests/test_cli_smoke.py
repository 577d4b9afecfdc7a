"""
Minimal smoke tests for week-scheduler CLI.

Tests basic functionality:
- App runs without errors
- Goals can be stored
- A week is generated and re-generated
- Workouts can be logged, shown and deleted
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from week_scheduler.cli.main import app
from week_scheduler.io.workout_store import WorkoutStore


runner = CliRunner()


@pytest.fixture
def temp_store_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _invoke(store_dir: Path, args: list[str], **kwargs):
    env = {"HOME": str(store_dir), "WEEK_SCHEDULER_LOG_LEVEL": "WARNING"}
    return runner.invoke(app, args + ["--store-dir", str(store_dir)], env=env, **kwargs)


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "generate-week" in result.output

    def test_generate_week_creates_rows(self, temp_store_dir):
        result = _invoke(temp_store_dir, [
            "generate-week",
            "--user-id", "u1",
            "--start-date", "2026-03-02",
            "--goal", "get stronger",
        ])
        assert result.exit_code == 0, result.output
        assert "5 created, 0 updated" in result.output

        store = WorkoutStore(temp_store_dir)
        assert len(store.list_workouts("u1", "2026-03-02", "2026-03-08")) == 5

    def test_generate_week_json(self, temp_store_dir):
        args = [
            "generate-week",
            "-u", "u1",
            "-d", "2026-03-02",
            "-n", "3",
            "-g", "strength",
            "-e", "advanced",
            "--plan-id", "block-1",
            "--json",
        ]
        result = _invoke(temp_store_dir, args)
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["days"] == 3
        assert data["plan_id"] == "block-1"
        assert [d["type"] for d in data["created"]] == ["Push", "Pull", "Legs"]
        bench = data["created"][0]["sets"][0]
        assert bench["movement"] == "Barbell Bench Press"
        assert bench["target_sets"] == 5

        again = json.loads(_invoke(temp_store_dir, args).stdout)
        assert all(d["existed"] for d in again["created"])

    def test_generate_week_requires_user(self, temp_store_dir):
        result = _invoke(temp_store_dir, ["generate-week", "-d", "2026-03-02"])
        assert result.exit_code == 1
        assert "--user-id" in result.output

    def test_generate_week_rejects_bad_experience(self, temp_store_dir):
        result = _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-e", "elite"])
        assert result.exit_code == 1

    def test_generate_week_rejects_bad_date(self, temp_store_dir):
        result = _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-d", "03/02/2026"])
        assert result.exit_code == 1
        assert "Invalid input" in result.output

    def test_set_goal_used_by_generate(self, temp_store_dir):
        result = _invoke(temp_store_dir, ["set-goal", "u1", "build muscle"])
        assert result.exit_code == 0
        assert "hypertrophy" in result.output

        result = _invoke(temp_store_dir, ["show-goal", "u1"])
        assert "build muscle" in result.output

        result = _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-d", "2026-03-02", "--json"])
        assert json.loads(result.stdout)["goal_type"] == "hypertrophy"

    def test_log_workout_and_show_week(self, temp_store_dir):
        result = _invoke(temp_store_dir, [
            "log-workout", "u1",
            "--type", "Legs",
            "--volume", "12",
            "--date", "2026-02-27",
        ])
        assert result.exit_code == 0, result.output
        assert "Logged" in result.output

        result = _invoke(temp_store_dir, [
            "log-workout", "u1", "-t", "Legs", "-V", "14", "--date", "2026-02-27",
        ])
        assert "Updated" in result.output

        result = _invoke(temp_store_dir, ["show-week", "u1", "-d", "2026-02-23", "--json"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert len(rows) == 1
        assert rows[0]["target_volume"] == 14
        assert rows[0]["sets"] == []

    def test_log_workout_rejects_negative_volume(self, temp_store_dir):
        result = _invoke(temp_store_dir, ["log-workout", "u1", "-t", "Push", "--volume=-1"])
        assert result.exit_code == 1

    def test_delete_workout(self, temp_store_dir):
        _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-d", "2026-03-02", "-g", "strength"])

        result = _invoke(temp_store_dir, ["delete-workout", "u1", "2026-03-02"], input="n\n")
        assert "Cancelled" in result.output

        result = _invoke(temp_store_dir, ["delete-workout", "u1", "2026-03-02", "--force"])
        assert result.exit_code == 0
        assert "Deleted" in result.output

        store = WorkoutStore(temp_store_dir)
        assert store.find_workout("u1", "2026-03-02") is None

        result = _invoke(temp_store_dir, ["delete-workout", "u1", "2026-03-02", "--force"])
        assert result.exit_code == 1

    def test_log_workout_over_generated_day_drops_sets(self, temp_store_dir):
        _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-d", "2026-03-02", "-g", "strength"])

        result = _invoke(temp_store_dir, [
            "log-workout", "u1", "-t", "Legs", "-V", "4", "--date", "2026-03-02",
        ])
        assert result.exit_code == 0, result.output
        assert "Updated" in result.output

        store = WorkoutStore(temp_store_dir)
        row = store.find_workout("u1", "2026-03-02")
        assert row.type == "Legs"
        assert store.load_sets(row.id) == []

    def test_log_workout_same_type_keeps_sets(self, temp_store_dir):
        _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-d", "2026-03-02", "-g", "strength"])

        _invoke(temp_store_dir, ["log-workout", "u1", "-t", "Push", "-V", "9", "--date", "2026-03-02"])

        store = WorkoutStore(temp_store_dir)
        row = store.find_workout("u1", "2026-03-02")
        assert row.target_volume == 9
        assert [s.movement for s in store.load_sets(row.id)] == [
            "Barbell Bench Press", "Overhead Press", "Triceps Dip",
        ]

    def test_corrupt_sets_file_is_reported(self, temp_store_dir):
        (temp_store_dir / "workout_sets.jsonl").write_text("[1, 2]\n")

        result = _invoke(temp_store_dir, ["generate-week", "-u", "u1", "-d", "2026-03-02"])
        assert result.exit_code == 1
        assert "Invalid input" in result.output
        assert isinstance(result.exception, SystemExit)
