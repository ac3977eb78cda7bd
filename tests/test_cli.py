"""Tests for the click commands."""

from datetime import date

import click
import pytest
from click.testing import CliRunner

from gymflow.cli import main
from gymflow.commands.workout import parse_set
from gymflow.models import day_of_week


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner against a fresh data directory."""
    monkeypatch.setenv("GYMFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("GYMFLOW_USER", "ana")
    return CliRunner()


class TestParseSet:
    """Tests for the REPSxWEIGHT set syntax."""

    def test_reps_and_weight(self):
        """Test parsing reps with a weight."""
        assert parse_set("10x62.5") == (10, 62.5)
        assert parse_set("8X40") == (8, 40.0)

    def test_reps_only(self):
        """Test bodyweight sets."""
        assert parse_set("15") == (15, 0.0)

    def test_garbage(self):
        """Test that bad input is a usage error."""
        with pytest.raises(click.BadParameter):
            parse_set("lots")


class TestCommands:
    """Tests for a full CLI session."""

    def test_requires_init(self, runner):
        """Test that commands refuse to run before init."""
        result = runner.invoke(main, ["schedule", "today"])
        assert result.exit_code == 1
        assert "gymflow init" in result.output

    def test_train_and_review(self, runner):
        """Test init, scheduling, a workout and the progress view."""
        assert runner.invoke(main, ["init"]).exit_code == 0
        assert runner.invoke(main, ["profile", "add", "ana", "--name", "Ana", "--gym", "g1"]).exit_code == 0

        today = str(day_of_week(date.today()))
        created = runner.invoke(main, ["routine", "create", "Legs", "-e", "15", "-d", today])
        assert created.exit_code == 0, created.output
        assert "Created routine 1" in created.output

        schedule = runner.invoke(main, ["schedule", "today"])
        assert "Legs (#1, own)" in schedule.output

        started = runner.invoke(main, ["workout", "start"])
        assert "Started session 1" in started.output
        assert "Resuming open session 1" in runner.invoke(main, ["workout", "start"]).output

        logged = runner.invoke(main, ["workout", "log", "1", "15", "-s", "5x100", "-s", "5x100"])
        assert logged.exit_code == 0, logged.output

        assert "Completed session 1" in runner.invoke(main, ["workout", "complete", "1", "--duration", "40"]).output
        assert "already completed" in runner.invoke(main, ["workout", "complete", "1"]).output

        history = runner.invoke(main, ["workout", "history"])
        assert "Legs" in history.output
        assert "Streak: 1 days" in history.output

        progress = runner.invoke(main, ["progress"])
        assert progress.exit_code == 0, progress.output
        assert "Current streak: 1" in progress.output

    def test_catalog_and_planning(self, runner):
        """Test profiles, catalog search, routine listing and the week view."""
        runner.invoke(main, ["init"])
        runner.invoke(main, ["profile", "add", "ana", "--name", "Ana", "--gym", "g1"])
        assert "already has a profile" in runner.invoke(main, ["profile", "add", "ana"]).output
        assert "Ana" in runner.invoke(main, ["profile", "list"]).output

        found = runner.invoke(main, ["exercises", "squat"])
        assert "Squat" in found.output
        assert "legs" in found.output
        assert "No exercises found" in runner.invoke(main, ["exercises", "zzz"]).output

        runner.invoke(main, ["routine", "create", "Core", "-e", "1"])
        assert "scheduled on Monday" in runner.invoke(main, ["routine", "assign", "1", "1"]).output
        assert "already on Monday" in runner.invoke(main, ["routine", "assign", "1", "1"]).output

        listed = runner.invoke(main, ["routine", "list"])
        assert "Core" in listed.output
        assert "Mon" in listed.output

        week = runner.invoke(main, ["schedule", "week"])
        assert week.exit_code == 0, week.output
        assert "Core (#1, own)" in week.output
        assert "rest" in week.output

    def test_domain_error_exit_code(self, runner):
        """Test that domain errors print and exit with 1."""
        runner.invoke(main, ["init"])
        result = runner.invoke(main, ["workout", "start", "--user", "nobody"])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
