"""
JSON 报告器 - 每个 URL 输出一个 JSON 文档
"""

import json
import sys
from typing import Sequence, TextIO

from a11ym.core.errors import A11ymError
from a11ym.core.models import Finding
from a11ym.reporters.base import summarize


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None, errors: TextIO | None = None):
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr

    def results(self, findings: Sequence[Finding], url: str) -> None:
        """输出 JSON 格式结果"""
        report_data = {
            "url": url,
            "findings": [finding.to_dict() for finding in findings],
            "summary": summarize(findings),
        }
        print(json.dumps(report_data, ensure_ascii=False), file=self.output)

    def error(self, errors: Sequence[A11ymError], url: str) -> None:
        report_data = {
            "url": url,
            "errors": [str(error) for error in errors],
        }
        print(json.dumps(report_data, ensure_ascii=False), file=self.errors)

    def close(self) -> None:
        self.output.flush()
