"""
Reporters Layer - 报告层

包含 Rich 终端、CSV、JSON 和 HTML 报告器。
"""

from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console

from a11ym.core.config import ReportFormat
from a11ym.core.errors import ConfigurationError
from a11ym.reporters.base import Reporter, summarize
from a11ym.reporters.csv_reporter import CsvReporter
from a11ym.reporters.html_reporter import HtmlReporter
from a11ym.reporters.json_reporter import JsonReporter
from a11ym.reporters.rich_reporter import RichReporter


def create_reporter(
    report_format: ReportFormat | str,
    output_directory: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> Reporter:
    """
    按报告格式创建报告器

    Raises:
        ConfigurationError: 未知格式，或 html 报告缺少输出目录
    """
    if not isinstance(report_format, ReportFormat):
        report_format = ReportFormat.parse(report_format)

    if report_format is ReportFormat.CLI:
        return RichReporter(Console(file=stream) if stream else None)
    if report_format is ReportFormat.CSV:
        return CsvReporter(stream)
    if report_format is ReportFormat.JSON:
        return JsonReporter(stream)
    if output_directory is None:
        raise ConfigurationError("The html report requires an output directory")
    return HtmlReporter(output_directory)


__all__ = [
    "Reporter",
    "summarize",
    "create_reporter",
    "RichReporter",
    "CsvReporter",
    "JsonReporter",
    "HtmlReporter",
]
