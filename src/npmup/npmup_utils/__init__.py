"""
npmup工具模块
该模块提供了npmup中使用的通用工具。
该模块组织为以下几个子模块：
- collections: 大小写不敏感的配置字典
- config: 配置管理
- globals: 全局控制台
- output: 输出格式化
"""
import colorama
from rich.traceback import install as install_rich_traceback

# 初始化colorama以支持跨平台的彩色文本
colorama.init()
# 安装rich traceback处理器以获得更好的错误信息
install_rich_traceback()
