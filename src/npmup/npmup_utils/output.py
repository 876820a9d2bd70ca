# -*- coding: utf-8 -*-
"""
输出格式化模块
该模块为npmup提供了文本格式化和显示工具。
包含：
- 用于分类不同输出类型的OutputType枚举
- 输出事件与输出后端（Sink）机制
- 用于格式化和显示样式化输出的PrettyOutput类
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List

from rich.panel import Panel
from rich.text import Text

from npmup.npmup_utils.config import get_pretty_output, is_print_error_traceback
from npmup.npmup_utils.globals import console, error_console


class OutputType(Enum):
    """
    输出类型枚举，用于分类和样式化不同类型的消息。

    属性：
        INFO: 普通提示
        COMMAND: 即将执行的外部命令
        RESULT: 结果信息（如帮助文本）
        SUCCESS: 成功信息
        WARNING: 警告信息（写入诊断流）
        ERROR: 错误信息（写入诊断流）
    """

    INFO = "INFO"
    COMMAND = "COMMAND"
    RESULT = "RESULT"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


# 写入stderr的输出类型
DIAGNOSTIC_TYPES = (OutputType.WARNING, OutputType.ERROR)


@dataclass
class OutputEvent:
    """
    输出事件的通用结构，供不同输出后端（Sink）消费。
    - text: 文本内容
    - output_type: 输出类型
    - timestamp: 是否显示时间戳
    """

    text: str
    output_type: OutputType
    timestamp: bool = True


class OutputSink(ABC):
    """输出后端抽象接口"""

    @abstractmethod
    def emit(self, event: OutputEvent) -> None:  # pragma: no cover - 抽象方法
        raise NotImplementedError


class ConsoleOutputSink(OutputSink):
    """默认控制台输出实现：普通输出写stdout，警告和错误写stderr。"""

    def emit(self, event: OutputEvent) -> None:
        target = error_console if event.output_type in DIAGNOSTIC_TYPES else console
        style = event.output_type.value
        if get_pretty_output():
            panel = Panel(
                Text(event.text, style=style),
                title=Text(
                    PrettyOutput._format(event.output_type, event.timestamp),
                    style=style,
                ),
                title_align="left",
                border_style=style,
                padding=(0, 1),
            )
            target.print(panel)
        else:
            target.print(Text(event.text, style=style))
        # 在except块中报告错误时附带当前异常的堆栈
        if event.output_type == OutputType.ERROR and is_print_error_traceback():
            try:
                target.print_exception()
            except ValueError:
                # 当前没有正在处理的异常
                pass


class RecordingOutputSink(OutputSink):
    """把输出事件保存在内存中的后端，便于测试或上层收集输出。"""

    def __init__(self) -> None:
        self.events: List[OutputEvent] = []

    def emit(self, event: OutputEvent) -> None:
        self.events.append(event)

    def texts(self, output_type: OutputType) -> List[str]:
        return [e.text for e in self.events if e.output_type == output_type]


# 模块级输出分发器（默认注册控制台后端）
_output_sinks: List[OutputSink] = [ConsoleOutputSink()]


def emit_output(event: OutputEvent) -> None:
    """向所有已注册的输出后端广播事件。"""
    for sink in list(_output_sinks):
        try:
            sink.emit(event)
        except Exception as e:
            # 后端故障不影响其他后端
            error_console.print(f"[输出后端错误] {sink.__class__.__name__}: {e}")


class PrettyOutput:
    """
    使用rich库格式化和显示文本输出的类。
    """

    # 不同输出类型的图标
    _ICONS = {
        OutputType.INFO: "ℹ️",
        OutputType.COMMAND: "▶",
        OutputType.RESULT: "✨",
        OutputType.SUCCESS: "✅",
        OutputType.WARNING: "⚠️",
        OutputType.ERROR: "❌",
    }

    @staticmethod
    def _format(output_type: OutputType, timestamp: bool = True) -> str:
        """
        使用时间戳和图标格式化输出头。

        参数：
            output_type: 输出类型
            timestamp: 是否包含时间戳

        返回：
            str: 格式化后的输出头
        """
        icon = PrettyOutput._ICONS.get(output_type, "")
        formatted = f"{icon}  "
        if timestamp:
            formatted += f"[{datetime.now().strftime('%H:%M:%S')}]"
        formatted += f"[{output_type.value}]"
        return formatted

    @staticmethod
    def print(
        text: str,
        output_type: OutputType,
        timestamp: bool = True,
    ) -> None:
        """打印格式化输出（通过事件 + Sink 机制分发）。"""
        emit_output(
            OutputEvent(
                text=text,
                output_type=output_type,
                timestamp=timestamp,
            )
        )

    @staticmethod
    def add_sink(sink: OutputSink) -> None:
        """注册一个新的输出后端。"""
        _output_sinks.append(sink)

    @staticmethod
    def remove_sink(sink: OutputSink) -> None:
        """移除一个已注册的输出后端。"""
        if sink in _output_sinks:
            _output_sinks.remove(sink)

