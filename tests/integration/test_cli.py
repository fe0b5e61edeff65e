"""Integration tests for the scene-mapper command line."""

import json

import pytest
from click.testing import CliRunner

from scene_mapper.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fast_env(monkeypatch):
    monkeypatch.setenv("PROCESSING_STAGE_DELAY", "0")
    monkeypatch.setenv("RENDER_CONNECT_DELAY", "0")


class TestInterpretCommand:

    def test_summary(self, runner, scenario_text):
        result = runner.invoke(cli, ["interpret", scenario_text, "--seed", "1"])
        assert result.exit_code == 0
        assert "=== Crime Scene Analyzed ===" in result.output
        assert "Elements: 5" in result.output
        assert "Body [body]" in result.output

    def test_json(self, runner, monkeypatch, scenario_text):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        result = runner.invoke(cli, ["interpret", scenario_text, "--seed", "1", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output[result.output.index("{"):])
        assert len(data["scene"]["elements"]) == 5
        assert data["confidence"]["source"] == "estimated"

    def test_report(self, runner, scenario_text):
        result = runner.invoke(
            cli, ["interpret", scenario_text, "--confidence", "0.5", "--report"]
        )
        assert result.exit_code == 0
        assert "Automated Forensic Reconstruction" in result.output
        assert "Confidence: 50% (low)" in result.output

    def test_blank_text_rejected(self, runner):
        result = runner.invoke(cli, ["interpret", "  "])
        assert result.exit_code == 2
        assert "Scene description is empty" in result.output


class TestAnimateCommand:

    def test_phases_printed(self, runner, fast_env, scenario_text):
        result = runner.invoke(cli, ["animate", scenario_text, "--seed", "4"])
        assert result.exit_code == 0, result.output
        assert "Analyzing description..." in result.output
        assert "Scene mapped" in result.output
        assert "phase=APPEARING visible_elements=5" in result.output
        assert "phase=INTERACTIVE" in result.output

    def test_edits_applied(self, runner, fast_env, scenario_text):
        result = runner.invoke(
            cli,
            ["animate", scenario_text, "--seed", "4", "--add", "Fingerprint", "--remove", "0"],
        )
        assert result.exit_code == 0, result.output
        assert "phase=APPEARING visible_elements=5" in result.output

    def test_blank_text_rejected(self, runner, fast_env):
        result = runner.invoke(cli, ["animate", " "])
        assert result.exit_code == 2
        assert "Scene description is empty" in result.output
        assert "phase=" not in result.output


class TestInfoCommands:

    def test_catalog(self, runner):
        result = runner.invoke(cli, ["catalog"])
        assert result.exit_code == 0
        assert "Body (#1e90ff, user)" in result.output
        assert "Room (#4a5568, home)" in result.output

    def test_config(self, runner, monkeypatch):
        monkeypatch.setenv("RANDOM_SEED", "9")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "Random seed: 9" in result.output
        assert "Spawn area: x 100-500, y 100-400" in result.output
