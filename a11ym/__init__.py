"""
a11ym - 可访问性与 HTML 标记合规性检查工具

同时运行 pa11y 可访问性引擎和 Nu Html Checker，合并、过滤结果并交给报告器。
"""

__version__ = "0.3.0"
