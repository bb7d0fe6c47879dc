"""
HTML 报告器 - 在输出目录中为每个 URL 写一个页面

运行结束时（close）写出 index.html，列出所有 URL 及各级别数量。
"""

import hashlib
import html
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from a11ym.core.errors import A11ymError
from a11ym.core.models import Finding
from a11ym.reporters.base import summarize

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


@dataclass
class PageEntry:
    """index.html 中的一行"""
    url: str
    file_name: str
    summary: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


def page_file_name(url: str) -> str:
    """由 URL 生成稳定且唯一的文件名"""
    slug = re.sub(r"[^a-zA-Z0-9]+", "-", url.split("://", 1)[-1]).strip("-")[:60]
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:8]
    return f"{slug or 'page'}-{digest}.html"


class HtmlReporter:
    """持久化 HTML 报告器，跨多个 URL 累积"""

    def __init__(self, output_directory: Path):
        self.output_directory = Path(output_directory)
        self._entries: dict[str, PageEntry] = {}

    def _entry(self, url: str) -> PageEntry:
        if url not in self._entries:
            self._entries[url] = PageEntry(url=url, file_name=page_file_name(url))
        return self._entries[url]

    def results(self, findings: Sequence[Finding], url: str) -> None:
        entry = self._entry(url)
        entry.summary = summarize(findings)

        rows = "\n".join(
            "<tr><td>{level}</td><td>{type}</td><td>{code}</td><td>{message}</td>"
            "<td><code>{selector}</code></td><td><pre>{context}</pre></td></tr>".format(
                level=html.escape(finding.level),
                type=finding.type.value,
                code=html.escape(finding.code or ""),
                message=html.escape(finding.message),
                selector=html.escape(finding.selector or ""),
                context=html.escape(finding.context),
            )
            for finding in findings
        )
        body = (
            f"<p>{entry.summary['error']} errors, {entry.summary['warning']} warnings, "
            f"{entry.summary['notice']} notices</p>\n"
            "<table>\n<tr><th>Level</th><th>Type</th><th>Code</th><th>Message</th>"
            f"<th>Selector</th><th>Context</th></tr>\n{rows}\n</table>"
        )
        self._write(entry.file_name, html.escape(url), body)

    def error(self, errors: Sequence[A11ymError], url: str) -> None:
        entry = self._entry(url)
        entry.errors.extend(str(error) for error in errors)

    def close(self) -> None:
        """写出 index.html"""
        rows = []
        for entry in self._entries.values():
            link = f'<a href="{entry.file_name}">{html.escape(entry.url)}</a>'
            if not entry.summary:
                link = html.escape(entry.url)
            rows.append(
                "<tr><td>{link}</td><td>{error}</td><td>{warning}</td><td>{notice}</td>"
                "<td>{errors}</td></tr>".format(
                    link=link,
                    error=entry.summary.get("error", ""),
                    warning=entry.summary.get("warning", ""),
                    notice=entry.summary.get("notice", ""),
                    errors=html.escape("; ".join(entry.errors)),
                )
            )

        body = (
            "<table>\n<tr><th>URL</th><th>Errors</th><th>Warnings</th><th>Notices</th>"
            "<th>Failures</th></tr>\n" + "\n".join(rows) + "\n</table>"
        )
        self._write("index.html", "a11ym report", body)

    def _write(self, file_name: str, title: str, body: str) -> None:
        self.output_directory.mkdir(parents=True, exist_ok=True)
        path = self.output_directory / file_name
        path.write_text(PAGE_TEMPLATE.format(title=title, body=body), encoding="utf-8")
        logger.debug("Wrote %s", path)
