"""Integration tests for the openings CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from openings.application import set_factory
from openings.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def scene_file(tmp_path: Path, scene_dict) -> Path:
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_dict))
    return path


def _write(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps(data))
    return path


class TestPlaceCommand:
    """Tests for `openings place`."""

    def test_prints_report(self, runner: CliRunner, scene_file: Path) -> None:
        result = runner.invoke(app, ["place", str(scene_file)])

        assert result.exit_code == 0
        assert "OPENINGS FOR DUCTS" in result.output
        assert "Total           4 opening(s)" in result.output

    def test_policy_and_tie_break_options(self, runner: CliRunner, scene_file: Path) -> None:
        result = runner.invoke(
            app,
            ["place", str(scene_file), "--policy", "abort_category", "--tie-break", "nearest"],
        )
        assert result.exit_code == 0

    def test_invalid_policy_rejected(self, runner: CliRunner, scene_file: Path) -> None:
        result = runner.invoke(app, ["place", str(scene_file), "--policy", "retry"])
        assert result.exit_code == 2

    def test_settings_file(self, runner: CliRunner, scene_file: Path, tmp_path: Path) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"categories": ["pipe"]}))

        result = runner.invoke(app, ["place", str(scene_file), "--settings", str(settings)])

        assert result.exit_code == 0
        assert "OPENINGS FOR DUCTS" not in result.output
        assert "Total           1 opening(s)" in result.output

    def test_missing_precondition_exits_1(
        self, runner: CliRunner, tmp_path: Path, scene_dict
    ) -> None:
        scene_dict["views"] = []
        result = runner.invoke(app, ["place", str(_write(tmp_path, scene_dict))])

        assert result.exit_code == 1
        assert "No 3D view found" in result.output

    def test_host_query_failure_exits_1(
        self, runner: CliRunner, scene_file: Path, broken_oracle_factory
    ) -> None:
        set_factory(broken_oracle_factory)
        try:
            result = runner.invoke(app, ["place", str(scene_file)])
        finally:
            set_factory(None)

        assert result.exit_code == 1
        assert "Error: Oracle returned tuple, expected RawHit" in result.output

    def test_missing_file_exits_1(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["place", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_export_formats(self, runner: CliRunner, scene_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            [
                "place",
                str(scene_file),
                "--output-formats",
                "all",
                "--output-dir",
                str(out),
                "--project-name",
                "tower",
            ],
        )

        assert result.exit_code == 0
        assert (out / "tower_json.json").exists()
        assert (out / "tower_dxf.dxf").exists()

    def test_unknown_export_format(self, runner: CliRunner, scene_file: Path) -> None:
        result = runner.invoke(app, ["place", str(scene_file), "--output-formats", "stl"])
        assert result.exit_code == 1
        assert "Unknown formats: stl" in result.output

    def test_formats_command(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["formats"])
        assert result.exit_code == 0
        assert result.output.split() == ["dxf", "json"]


class TestValidateCommand:
    """Tests for `openings validate`."""

    def test_warnings_exit_2(self, runner: CliRunner, scene_file: Path) -> None:
        """The sample scene has an arc pipe, which is a warning."""
        result = runner.invoke(app, ["validate", str(scene_file)])

        assert result.exit_code == 2
        assert "Validation passed with 1 warning(s)" in result.output
        assert "arc geometry" in result.output

    def test_clean_scene_exit_0(
        self, runner: CliRunner, tmp_path: Path, scene_dict
    ) -> None:
        scene_dict["linked_models"][1]["pipes"].pop()
        result = runner.invoke(app, ["validate", str(_write(tmp_path, scene_dict))])

        assert result.exit_code == 0
        assert "Validation passed. Scene is valid." in result.output

    def test_precondition_errors_exit_1(
        self, runner: CliRunner, tmp_path: Path, scene_dict
    ) -> None:
        scene_dict["opening_families"] = []
        result = runner.invoke(app, ["validate", str(_write(tmp_path, scene_dict))])

        assert result.exit_code == 1
        assert "opening_families" in result.output

    def test_invalid_json_exit_1(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{")
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
