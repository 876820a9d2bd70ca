# -*- coding: utf-8 -*-
"""配置管理模块。

配置来源按优先级从低到高：
1. 内置默认值
2. YAML配置文件（默认 ~/.npmup/config.yaml，可用 NPMUP_CONFIG 指定）
3. NPMUP_<KEY> 形式的环境变量
"""
import os
import platform
from pathlib import Path
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import cast

import yaml

from npmup.npmup_utils.collections import CaseInsensitiveDict

ENV_PREFIX = "NPMUP_"
DEFAULT_CONFIG_FILE = "~/.npmup/config.yaml"

# 全局配置存储
GLOBAL_CONFIG_DATA: CaseInsensitiveDict = CaseInsensitiveDict()


def set_global_env_data(env_data: Dict[str, Any]) -> None:
    """设置全局配置数据"""
    global GLOBAL_CONFIG_DATA
    GLOBAL_CONFIG_DATA = CaseInsensitiveDict(env_data)


def set_config(key: str, value: Any) -> None:
    """设置配置"""
    GLOBAL_CONFIG_DATA[key] = value


def get_config_file() -> Path:
    """
    获取配置文件路径。

    返回:
        Path: NPMUP_CONFIG 环境变量指定的路径，未设置时为 ~/.npmup/config.yaml
    """
    return Path(os.path.expanduser(os.environ.get("NPMUP_CONFIG", DEFAULT_CONFIG_FILE)))


def _load_config_file(config_file: Path) -> Dict[str, Any]:
    """读取并解析YAML格式的配置文件

    参数:
        config_file: 配置文件路径

    返回:
        dict: 解析后的配置字典

    异常:
        yaml.YAMLError: 文件内容不是合法的YAML
        ValueError: 顶层不是映射
    """
    with open(config_file, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f.read()) or {}
    if not isinstance(config_data, dict):
        raise ValueError(f"{config_file}: top level must be a mapping")
    return config_data


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for key, value in environ.items():
        if key.upper().startswith(ENV_PREFIX) and key.upper() != "NPMUP_CONFIG":
            overrides[key[len(ENV_PREFIX) :]] = _coerce_env_value(value)
    return overrides


def _coerce_env_value(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    return value


def load_config(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """
    加载配置到全局配置存储。

    配置文件不存在时使用默认值；配置文件无法解析时抛出异常，由调用方决定如何提示。

    参数:
        config_file: 配置文件路径，默认为 get_config_file() 的结果
        environ: 环境变量映射，默认为 os.environ
    """
    config_path = config_file if config_file is not None else get_config_file()
    data: Dict[str, Any] = {}
    try:
        if config_path.exists():
            data = _load_config_file(config_path)
    finally:
        # 即使配置文件损坏，环境变量覆盖依然生效
        merged = CaseInsensitiveDict(data)
        merged.update(_env_overrides(os.environ if environ is None else environ))
        set_global_env_data(dict(merged.items()))


def get_package_manager() -> str:
    """
    获取包管理器可执行文件名称。

    返回:
        str: 包管理器名称，默认为 npm
    """
    return cast(str, GLOBAL_CONFIG_DATA.get("package_manager", "npm")).strip() or "npm"


def get_dependency_dir() -> str:
    """
    获取本地依赖缓存目录名称（恢复时会被整体删除）。

    返回:
        str: 目录名，未配置或为空时为 node_modules
    """
    value = GLOBAL_CONFIG_DATA.get("dependency_dir", "node_modules")
    if not isinstance(value, str):
        return "node_modules"
    return value.strip() or "node_modules"


def get_pretty_output() -> bool:
    """
    获取是否启用PrettyOutput。

    返回：
        bool: 如果启用PrettyOutput则返回True，默认为True
    """
    # Windows系统强制设置为False
    if platform.system() == "Windows":
        return False

    return GLOBAL_CONFIG_DATA.get("pretty_output", True) is not False


def is_print_error_traceback() -> bool:
    """
    获取是否在错误输出时打印回溯调用链。

    返回：
        bool: 如果打印回溯则返回True，默认为False（不打印）
    """
    return GLOBAL_CONFIG_DATA.get("print_error_traceback", False) is True


def get_log_level() -> Optional[str]:
    """获取日志级别，未配置时返回None（不安装日志处理器）"""
    level = GLOBAL_CONFIG_DATA.get("log_level")
    return str(level).upper() if level else None
