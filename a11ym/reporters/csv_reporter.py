"""
CSV 报告器 - 每条结果一行，首行为表头
"""

import csv
import sys
from typing import Sequence, TextIO

from a11ym.core.errors import A11ymError
from a11ym.core.models import Finding
from a11ym.reporters.base import CSV_COLUMNS


class CsvReporter:
    """CSV 报告器"""

    def __init__(self, output: TextIO | None = None, errors: TextIO | None = None):
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr
        self._writer = csv.writer(self.output)
        self._header_written = False

    def results(self, findings: Sequence[Finding], url: str) -> None:
        if not self._header_written:
            self._writer.writerow(CSV_COLUMNS)
            self._header_written = True

        for finding in findings:
            row = finding.to_dict()
            self._writer.writerow([
                url,
                row["type"],
                row["level"],
                row["code"] or "",
                row["context"],
                row["selector"] or "",
                row["message"],
            ])

    def error(self, errors: Sequence[A11ymError], url: str) -> None:
        for error in errors:
            print(f"Error: {error}", file=self.errors)

    def close(self) -> None:
        self.output.flush()
