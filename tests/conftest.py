# -*- coding: utf-8 -*-
"""pytest 配置文件"""
import json
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

# 将项目src目录添加到 Python 路径
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from npmup.npmup_updater.errors import CommandError  # noqa: E402
from npmup.npmup_updater.executor import CommandRunner  # noqa: E402
from npmup.npmup_utils import config as config_mod  # noqa: E402
from npmup.npmup_utils.output import PrettyOutput, RecordingOutputSink  # noqa: E402


class FakeRunner(CommandRunner):
    """记录命令而不真正执行的CommandRunner；fail_on 中的子命令会失败。"""

    def __init__(self, cwd, fail_on: Optional[Sequence[str]] = None) -> None:
        super().__init__(cwd)
        self.commands: List[List[str]] = []
        self.fail_on = list(fail_on or [])

    def run(self, command: Sequence[str]) -> None:
        self.commands.append(list(command))
        if len(command) > 1 and command[1] in self.fail_on:
            raise CommandError(command, returncode=1)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """自动隔离配置，避免读取用户主目录下的配置文件"""
    config_dir = tmp_path_factory.mktemp("npmup_config")
    monkeypatch.setenv("NPMUP_CONFIG", str(config_dir / "config.yaml"))
    for key in list(os.environ):
        if key.upper().startswith("NPMUP_") and key.upper() != "NPMUP_CONFIG":
            monkeypatch.delenv(key)
    config_mod.set_global_env_data({"pretty_output": False})
    yield
    config_mod.set_global_env_data({})


@pytest.fixture
def output_sink():
    """注册一个记录输出事件的后端"""
    sink = RecordingOutputSink()
    PrettyOutput.add_sink(sink)
    yield sink
    PrettyOutput.remove_sink(sink)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """带有package.json的临时项目目录"""
    manifest = {
        "name": "demo",
        "dependencies": {"a": "1.0.0", "b": "2.0.0"},
        "devDependencies": {"b": "^3.0.0", "jest": "^29.0.0"},
    }
    (tmp_path / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    return tmp_path


@pytest.fixture
def fake_runner(project_dir) -> FakeRunner:
    return FakeRunner(project_dir)


@pytest.fixture
def runner_factory(project_dir):
    """创建FakeRunner的工厂，可指定失败的子命令"""

    def factory(fail_on: Optional[Sequence[str]] = None) -> FakeRunner:
        return FakeRunner(project_dir, fail_on=fail_on)

    return factory
