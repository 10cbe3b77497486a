"""Unit tests for vtrans.cli — the translate, validate, roundtrip, formats
and version commands.

Coverage targets
----------------
- vtrans/cli/main.py
"""
from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from vtrans.cli.main import cli

_SCENARIO = "Given a user with role admin\nWhen they access /api/users\nThen access is granted"


def _make_runner() -> CliRunner:
    return CliRunner()


class TestCLIGroup:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_help_lists_commands(self) -> None:
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("translate", "validate", "roundtrip", "formats", "version"):
            assert command in result.output

    def test_version_command(self) -> None:
        result = self.runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "vtrans" in result.output
        assert "0.1.0" in result.output

    def test_formats_command(self) -> None:
        result = self.runner.invoke(cli, ["formats"])
        assert result.exit_code == 0
        for value in ("gherkin", "pytest", "json"):
            assert value in result.output

    def test_verbose_flag_accepted(self) -> None:
        result = self.runner.invoke(cli, ["--verbose", "formats"])
        assert result.exit_code == 0


class TestCLITranslateCommand:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_basic_translation(self) -> None:
        result = self.runner.invoke(
            cli, ["translate", _SCENARIO, "--from", "gherkin", "--to", "json"]
        )
        assert result.exit_code == 0
        assert "confidence" in result.output

    def test_json_output(self) -> None:
        result = self.runner.invoke(
            cli, ["translate", _SCENARIO, "-f", "gherkin", "-t", "natural_language", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["source_format"] == "gherkin"
        assert data["target_format"] == "natural_language"
        assert data["used_language_model"] is False
        assert data["content"].startswith("The system should validate that")

    def test_file_input(self, tmp_path: Path) -> None:
        source = tmp_path / "login.feature"
        source.write_text(_SCENARIO, encoding="utf-8")
        result = self.runner.invoke(
            cli, ["translate", str(source), "--file", "-f", "gherkin", "-t", "pytest", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["metadata"]["test_name"] == "test_access_is_granted"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = self.runner.invoke(
            cli,
            ["translate", str(tmp_path / "absent.feature"), "--file", "-f", "gherkin", "-t", "json"],
        )
        assert result.exit_code == 1

    def test_unknown_format_rejected(self) -> None:
        result = self.runner.invoke(cli, ["translate", "x", "-f", "gherkin", "-t", "yaml"])
        assert result.exit_code == 2

    def test_format_options_required(self) -> None:
        result = self.runner.invoke(cli, ["translate", "x"])
        assert result.exit_code == 2

    def test_llm_provider_falls_back_to_heuristics(self) -> None:
        result = self.runner.invoke(
            cli,
            ["translate", _SCENARIO, "-f", "gherkin", "-t", "json", "--provider", "llm"],
        )
        assert result.exit_code == 0

    def test_config_file_applied(self, tmp_path: Path) -> None:
        config = tmp_path / "vtrans.yaml"
        config.write_text("round_trip_threshold: 0.5\n", encoding="utf-8")
        result = self.runner.invoke(
            cli,
            ["translate", _SCENARIO, "-f", "gherkin", "-t", "json", "--config", str(config)],
        )
        assert result.exit_code == 0

    def test_bad_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("no_such_setting: 1\n", encoding="utf-8")
        result = self.runner.invoke(
            cli,
            ["translate", _SCENARIO, "-f", "gherkin", "-t", "json", "--config", str(config)],
        )
        assert result.exit_code == 1


class TestCLIValidateCommand:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_valid_translation(self) -> None:
        result = self.runner.invoke(
            cli, ["validate", _SCENARIO, _SCENARIO, "-f", "gherkin", "-t", "gherkin"]
        )
        assert result.exit_code == 0
        assert "VALID" in result.output

    def test_invalid_translation_exits_one(self) -> None:
        result = self.runner.invoke(
            cli,
            ["validate", _SCENARIO, "access", "-f", "gherkin", "-t", "natural_language", "--json"],
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["is_valid"] is False
        assert data["warnings"]

    def test_files_flag(self, tmp_path: Path) -> None:
        original = tmp_path / "a.feature"
        translated = tmp_path / "b.feature"
        original.write_text(_SCENARIO, encoding="utf-8")
        translated.write_text(_SCENARIO, encoding="utf-8")
        result = self.runner.invoke(
            cli,
            ["validate", str(original), str(translated), "--files", "-f", "gherkin", "-t", "gherkin"],
        )
        assert result.exit_code == 0


class TestCLIRoundtripCommand:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_acceptable_round_trip(self) -> None:
        result = self.runner.invoke(cli, ["roundtrip", _SCENARIO, "-f", "gherkin", "-t", "json"])
        assert result.exit_code == 0
        assert "Preservation" in result.output

    def test_json_output(self) -> None:
        result = self.runner.invoke(
            cli, ["roundtrip", _SCENARIO, "-f", "gherkin", "-t", "json", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["preservation_score"] == 1.0
        assert data["acceptable"] is True
        assert data["differences"] == []

    def test_unacceptable_round_trip_exits_one(self) -> None:
        # Unlabelled test code loses its assertion text through prose.
        code = "def test_totals():\n    assert invoice.total == basket.subtotal + shipping\n"
        result = self.runner.invoke(
            cli, ["roundtrip", code, "-f", "pytest", "-t", "natural_language", "--json"]
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["acceptable"] is False
        assert data["differences"][0].startswith("Lost terms:")
