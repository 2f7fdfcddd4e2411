"""Tests for the image-modules command line."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from image_modules.logging_setup import JsonlHandler
from image_modules.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in [h for h in root.handlers if isinstance(h, JsonlHandler)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)


def _write_settings(work_dir, data):
    settings_file = work_dir / ".image-modules" / "settings.yaml"
    settings_file.parent.mkdir(exist_ok=True)
    settings_file.write_text(yaml.safe_dump(data))


class TestTiersCommand:
    def test_lists_all_tiers(self, runner):
        """Test every tier label is listed."""
        result = runner.invoke(cli, ["tiers"])
        assert result.exit_code == 0
        for label in ("bootmodules", "extmodules", "appmodules"):
            assert label in result.output


class TestShowCommand:
    """Tests for `image-modules show`."""

    def test_renders_tables(self, runner, isolated_settings, write_layout, sample_layout):
        """Test tables are printed with base module first."""
        result = runner.invoke(cli, ["show", str(write_layout(sample_layout))])

        assert result.exit_code == 0, result.output
        assert "bootmodules" in result.output
        assert "extmodules: no modules" in result.output
        assert "java/util/logging" in result.output
        assert result.output.index("java.base") < result.output.index("java.logging")

    def test_json_output(self, runner, isolated_settings, write_layout, sample_layout):
        """Test --json prints views keyed by tier label."""
        result = runner.invoke(cli, ["show", str(write_layout(sample_layout)), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert list(data) == ["bootmodules", "extmodules", "appmodules"]
        assert list(data["bootmodules"]) == ["java.base", "java.logging"]
        assert data["bootmodules"]["java.base"] == ["java/lang", "java/lang/invoke", "java/util"]
        assert data["extmodules"] == {}

    def test_single_tier(self, runner, isolated_settings, write_layout, sample_layout):
        """Test --tier restricts output to one tier."""
        result = runner.invoke(cli, ["show", str(write_layout(sample_layout)), "--tier", "app", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "appmodules": {"com.example.app": ["com/example/app", "com/example/app/internal"]}
        }

    def test_missing_packages_fails_with_module_name(self, runner, isolated_settings, write_layout):
        """Test a module without package data fails the run and is named."""
        layout = write_layout({"boot": ["m1"]})

        result = runner.invoke(cli, ["show", str(layout)])

        assert result.exit_code == 1
        assert "No package data" in result.output
        assert "m1" in result.output

    def test_all_missing_modules_reported(self, runner, isolated_settings, write_layout):
        """Test every module lacking package data is listed, across tiers."""
        layout = write_layout(
            {
                "boot": ["java.base", "m2", "m1"],
                "app": ["app.one", "app.two"],
                "packages": {"java.base": ["java.lang"], "app.two": ["app.two"]},
            }
        )

        result = runner.invoke(cli, ["show", str(layout), "--json"])

        assert result.exit_code == 1
        assert "bootmodules: m1, m2" in result.output
        assert "appmodules: app.one" in result.output
        assert "java.base" not in result.output
        assert "{" not in result.output

    def test_missing_modules_only_checked_for_selected_tier(self, runner, isolated_settings, write_layout):
        """Test --tier ignores missing data in other tiers."""
        layout = write_layout({"boot": ["m1"], "app": ["a"], "packages": {"a": ["a.b"]}})

        result = runner.invoke(cli, ["show", str(layout), "--tier", "app", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"appmodules": {"a": ["a/b"]}}

    def test_invalid_layout_fails(self, runner, isolated_settings, write_layout):
        """Test schema errors exit 1 with a message."""
        result = runner.invoke(cli, ["show", str(write_layout({"bogus": 1}))])
        assert result.exit_code == 1
        assert "Invalid layout" in result.output

    def test_non_utf8_layout_fails_cleanly(self, runner, isolated_settings, tmp_path):
        """Test an undecodable manifest exits 1 without a traceback."""
        layout = tmp_path / "layout.yaml"
        layout.write_bytes(b"boot: [\xff\xfe]\n")

        result = runner.invoke(cli, ["show", str(layout)])

        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_base_module_flag(self, runner, isolated_settings, write_layout):
        """Test --base-module reorders the tier."""
        layout = write_layout({"app": ["a", "core"], "packages": {"a": ["a"], "core": ["core"]}})

        result = runner.invoke(cli, ["show", str(layout), "--json", "--base-module", "core"])

        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)["appmodules"]) == ["core", "a"]

    def test_base_module_from_settings(self, runner, isolated_settings, write_layout):
        """Test base_module from project settings applies."""
        _write_settings(isolated_settings, {"base_module": "core"})
        layout = write_layout({"app": ["a", "core"], "packages": {"a": ["a"], "core": ["core"]}})

        result = runner.invoke(cli, ["show", str(layout), "--json"])

        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)["appmodules"]) == ["core", "a"]

    def test_non_utf8_settings_ignored(self, runner, isolated_settings, write_layout, sample_layout):
        """Test an undecodable settings file does not break the run."""
        settings_file = isolated_settings / ".image-modules" / "settings.yaml"
        settings_file.parent.mkdir()
        settings_file.write_bytes(b"base_module: \xff\n")

        result = runner.invoke(cli, ["show", str(write_layout(sample_layout)), "--json"])

        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)["bootmodules"]) == ["java.base", "java.logging"]

    def test_log_file(self, runner, isolated_settings, write_layout, sample_layout, tmp_path, restore_root_logger):
        """Test --log-file writes JSONL records."""
        log_file = tmp_path / "run.jsonl"

        result = runner.invoke(cli, ["show", str(write_layout(sample_layout)), "--json", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert "Built 3 tier views" in log_file.read_text()

    def test_numeric_log_level_from_settings(
        self, runner, isolated_settings, write_layout, sample_layout, tmp_path, restore_root_logger
    ):
        """Test a numeric logging.level in settings is honoured."""
        log_file = tmp_path / "settings.jsonl"
        _write_settings(isolated_settings, {"logging": {"level": 10, "path": str(log_file)}})

        result = runner.invoke(cli, ["show", str(write_layout(sample_layout)), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["extmodules"] == {}
        assert restore_root_logger.level == logging.DEBUG
        assert '"lvl": "DEBUG"' in log_file.read_text()

    def test_missing_layout_file(self, runner, isolated_settings, tmp_path):
        """Test a nonexistent layout path is a usage error."""
        result = runner.invoke(cli, ["show", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 2
