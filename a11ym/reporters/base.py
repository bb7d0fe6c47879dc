"""
报告器基类 - 定义报告器接口

聚合器只调用 results() 和 error()，不关心具体使用哪种报告器。
"""

from typing import Protocol, Sequence

from a11ym.core.errors import A11ymError
from a11ym.core.models import Finding

CSV_COLUMNS = ["url", "type", "level", "code", "context", "selector", "message"]


class Reporter(Protocol):
    """报告器协议"""

    def results(self, findings: Sequence[Finding], url: str) -> None:
        """记录一个 URL 合并后的结果"""
        ...

    def error(self, errors: Sequence[A11ymError], url: str) -> None:
        """记录一个 URL 的错误"""
        ...

    def close(self) -> None:
        """结束运行，持久化报告器在此写出汇总"""
        ...


def summarize(findings: Sequence[Finding]) -> dict[str, int]:
    """按级别统计"""
    summary = {"total": len(findings), "error": 0, "warning": 0, "notice": 0}
    for finding in findings:
        if finding.level in summary:
            summary[finding.level] += 1
    return summary
