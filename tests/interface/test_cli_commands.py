"""Tests for CLI commands: help, config, simulate and intervals."""

import json

from typer.testing import CliRunner

from lexeme.interface.cli import app

runner = CliRunner()

START = "2024-01-01T10:00:00+00:00"


def _lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.strip()]


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "spaced-repetition scheduling" in result.stdout
    assert "simulate" in result.stdout
    assert "config" in result.stdout


# --- Config ---


def test_config_show_command(mock_home, monkeypatch):
    monkeypatch.setenv("LEXEME_DAILY_NEW", "15")

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    output_data = json.loads(result.stdout)
    assert output_data["daily_new"] == 15
    assert output_data["learning_steps"] == [1, 10]
    assert output_data["retrievability_targets"]["good"] == 0.85
    assert output_data["log_level"] == "WARNING"


def test_config_show_invalid_env(mock_home, monkeypatch):
    monkeypatch.setenv("LEXEME_DAILY_NEW", "-4")

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 2


def test_config_path_command(mock_home):
    (mock_home / ".lexeme.toml").write_text("daily_new = 3\n")

    result = runner.invoke(app, ["config", "path"])

    assert result.exit_code == 0
    assert f"* {mock_home / '.lexeme.toml'}" in result.stdout


# --- Simulate ---


def test_simulate_graduation(mock_home):
    result = runner.invoke(
        app, ["simulate", "good", "good", "good", "--no-jitter", "--start", START]
    )

    assert result.exit_code == 0
    steps = _lines(result.stdout)
    assert [s["status"] for s in steps] == ["learning", "learning", "review"]
    assert [s["learning_step"] for s in steps] == [0, 1, None]
    assert steps[0]["due"] == "2024-01-01T10:01:00+00:00"
    assert steps[1]["due"] == "2024-01-01T10:11:00+00:00"
    assert steps[2]["interval"] == 2
    assert steps[2]["due_in"] == "2d"


def test_simulate_lapse(mock_home):
    result = runner.invoke(
        app,
        ["simulate", "2", "2", "2", "2", "again", "--no-jitter", "--start", START],
    )

    assert result.exit_code == 0
    last = _lines(result.stdout)[-1]
    assert last["from"] == "review"
    assert last["status"] == "relearning"
    assert last["lapses"] == 1
    assert last["interval"] == 0


def test_simulate_seed_reproducible(mock_home):
    args = ["simulate"] + ["good"] * 7 + ["--seed", "3", "--start", START]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)

    assert first.exit_code == 0
    assert first.stdout == second.stdout


def test_simulate_rejects_bad_rating(mock_home):
    result = runner.invoke(app, ["simulate", "good", "perfect"])

    assert result.exit_code == 2


def test_simulate_rejects_bad_start(mock_home):
    result = runner.invoke(app, ["simulate", "good", "--start", "yesterday"])

    assert result.exit_code == 2


# --- Intervals ---


def test_intervals_table(mock_home):
    result = runner.invoke(app, ["intervals", "--reviews", "3"])

    assert result.exit_code == 0
    rows = result.stdout.splitlines()
    assert rows[0].split() == ["rep", "ease", "interval"]
    assert rows[1].split() == ["1", "2.66", "1d"]
    assert rows[2].split() == ["2", "2.82", "6d"]
    # 6 * 2.98 = 17.88
    assert rows[3].split() == ["3", "2.98", "18d"]


def test_intervals_rejects_again(mock_home):
    result = runner.invoke(app, ["intervals", "--rating", "again"])

    assert result.exit_code == 2
