# -*- coding: utf-8 -*-
"""npmup CLI 测试"""
import logging
import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.logging import RichHandler
from typer.testing import CliRunner

import npmup.npmup_updater.main as main_mod
from npmup.npmup_utils.output import OutputType


runner = CliRunner()


@pytest.fixture
def mock_run():
    with patch("npmup.npmup_updater.executor.shutil.which", return_value=None), patch(
        "npmup.npmup_updater.executor.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0),
    ) as mocked:
        yield mocked


def called_argvs(mocked):
    return [c.args[0] for c in mocked.call_args_list]


class TestNpmupCLI:
    def test_update_deps_with_packages(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)

        result = runner.invoke(main_mod.app, ["--deps", "--packages", "a"])

        assert result.exit_code == 0
        assert called_argvs(mock_run) == [
            ["npm", "uninstall", "--save", "a"],
            ["npm", "install", "--save", "a"],
        ]
        assert len(list(project_dir.glob("package-backup-*.json"))) == 1

    def test_tokens_reach_parser_in_order(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)
        result = runner.invoke(
            main_mod.app, ["--devdeps", "--nobackup", "--exclude", "b", "--deps"]
        )
        assert result.exit_code == 0
        assert called_argvs(mock_run) == [
            ["npm", "uninstall", "--save", "a"],
            ["npm", "install", "--save", "a"],
            ["npm", "uninstall", "--save-dev", "jest"],
            ["npm", "install", "--save-dev", "jest"],
        ]

    def test_help_is_handled_by_npmup(self, tmp_path, monkeypatch, mock_run):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(main_mod.app, ["--help"])
        assert result.exit_code == 0
        assert "--nobackup" in result.output
        mock_run.assert_not_called()

    def test_missing_manifest_exits_non_zero(self, tmp_path, monkeypatch, mock_run):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(main_mod.app, ["--deps"])
        assert result.exit_code == 1
        mock_run.assert_not_called()

    def test_usage_error_exits_zero(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)
        result = runner.invoke(main_mod.app, ["--nobackup"])
        assert result.exit_code == 0
        mock_run.assert_not_called()

    def test_command_failure_exits_zero(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=1)
        result = runner.invoke(main_mod.app, ["--deps", "--nobackup"])
        assert result.exit_code == 0
        assert len(mock_run.call_args_list) == 1

    def test_restore_without_backup_exits_zero(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)
        result = runner.invoke(main_mod.app, ["--restore"])
        assert result.exit_code == 0
        mock_run.assert_not_called()

    def test_package_manager_from_config_file(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)
        Path(os.environ["NPMUP_CONFIG"]).write_text("package_manager: pnpm\n")

        result = runner.invoke(main_mod.app, ["--deps", "--nobackup"])

        assert result.exit_code == 0
        assert called_argvs(mock_run)[0] == ["pnpm", "uninstall", "--save", "a", "b"]

    def test_env_overrides_config_file(self, project_dir, monkeypatch, mock_run):
        monkeypatch.chdir(project_dir)
        Path(os.environ["NPMUP_CONFIG"]).write_text("package_manager: pnpm\n")
        monkeypatch.setenv("NPMUP_PACKAGE_MANAGER", "yarn")

        runner.invoke(main_mod.app, ["--deps", "--nobackup"])

        assert called_argvs(mock_run)[0][0] == "yarn"

    def test_broken_config_falls_back_to_defaults(
        self, project_dir, monkeypatch, mock_run
    ):
        monkeypatch.chdir(project_dir)
        Path(os.environ["NPMUP_CONFIG"]).write_text("package_manager: [unclosed\n")

        result = runner.invoke(main_mod.app, ["--deps", "--nobackup"])

        assert result.exit_code == 0
        assert called_argvs(mock_run)[0][0] == "npm"

    def test_restore_with_empty_dependency_dir_keeps_project(
        self, project_dir, monkeypatch, mock_run
    ):
        monkeypatch.chdir(project_dir)
        monkeypatch.setenv("NPMUP_DEPENDENCY_DIR", "")
        (project_dir / "package-backup-1.json").write_bytes(b'{"v": 1}')
        (project_dir / "src.js").write_text("console.log(1)")

        result = runner.invoke(main_mod.app, ["--restore"])

        assert result.exit_code == 0
        assert (project_dir / "src.js").exists()
        assert (project_dir / "package.json").read_bytes() == b'{"v": 1}'
        assert called_argvs(mock_run) == [["npm", "install"]]


@pytest.fixture
def bare_root_logger():
    """移除根日志处理器，使 logging.basicConfig 真正生效"""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers = []
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)


class TestInitEnv:
    def test_valid_log_level_attaches_rich_handler(self, monkeypatch, bare_root_logger):
        monkeypatch.setenv("NPMUP_LOG_LEVEL", "debug")

        main_mod.init_env()

        assert any(isinstance(h, RichHandler) for h in bare_root_logger.handlers)
        assert bare_root_logger.level == logging.DEBUG

    @pytest.mark.parametrize("value", ["1", "verbose"])
    def test_invalid_log_level_warns(
        self, monkeypatch, bare_root_logger, output_sink, value
    ):
        monkeypatch.setenv("NPMUP_LOG_LEVEL", value)

        main_mod.init_env()

        assert bare_root_logger.handlers == []
        warnings = output_sink.texts(OutputType.WARNING)
        assert len(warnings) == 1
        assert "log_level" in warnings[0]

    def test_no_log_level_no_handler(self, bare_root_logger):
        main_mod.init_env()
        assert bare_root_logger.handlers == []

    def test_invalid_log_level_does_not_stop_cli(
        self, project_dir, monkeypatch, mock_run, bare_root_logger
    ):
        monkeypatch.chdir(project_dir)
        monkeypatch.setenv("NPMUP_LOG_LEVEL", "1")

        result = runner.invoke(main_mod.app, ["--deps", "--nobackup"])

        assert result.exit_code == 0
        assert called_argvs(mock_run)[0] == ["npm", "uninstall", "--save", "a", "b"]
