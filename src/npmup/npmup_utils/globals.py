# -*- coding: utf-8 -*-
"""
全局控制台模块
该模块持有npmup的rich控制台，普通输出写入stdout，诊断输出写入stderr。
"""
from rich.console import Console
from rich.theme import Theme

# 使用自定义主题配置rich控制台
custom_theme = Theme(
    {
        "INFO": "yellow",
        "WARNING": "yellow",
        "ERROR": "red",
        "SUCCESS": "green",
        "COMMAND": "cyan",
        "RESULT": "blue",
    }
)
console = Console(theme=custom_theme)
error_console = Console(theme=custom_theme, stderr=True)
