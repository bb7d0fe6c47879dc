"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式

每个 URL 一张结果表，运行结束时输出汇总面板。
"""

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from a11ym.core.errors import A11ymError
from a11ym.core.models import Finding
from a11ym.reporters.base import summarize

LEVEL_STYLES = {
    "error": ("❌", "red"),
    "warning": ("⚠️", "yellow"),
    "notice": ("ℹ️", "cyan"),
}


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None, max_context: int = 80):
        self.console = console or Console()
        self.max_context = max_context
        self._urls = 0
        self._failed_urls = 0
        self._totals = {"error": 0, "warning": 0, "notice": 0}

    def results(self, findings: Sequence[Finding], url: str) -> None:
        """输出一个 URL 的结果表"""
        self._urls += 1
        summary = summarize(findings)
        for level in self._totals:
            self._totals[level] += summary[level]

        self.console.print()
        # URL、选择器、上下文与错误信息都可能含有方括号，不能当作 markup 解析
        self.console.rule(f"[bold cyan]{escape(url)}[/bold cyan]")

        if not findings:
            self.console.print("[green]✓ No issues found[/green]")
            return

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("级别", width=10)
        table.add_column("来源", style="dim", width=13)
        table.add_column("问题")
        table.add_column("位置", style="dim")

        for finding in findings:
            icon, style = LEVEL_STYLES.get(finding.level, ("•", "white"))
            message = Text(finding.message)
            if finding.code:
                message.append(f"\n{finding.code}", style="dim")
            location = Text(finding.selector or self._shorten(finding.context))
            table.add_row(
                f"[{style}]{icon} {finding.level}[/{style}]",
                finding.type.value,
                message,
                location,
            )

        self.console.print(table)
        self.console.print(
            f"[red]{summary['error']}[/red] errors, "
            f"[yellow]{summary['warning']}[/yellow] warnings, "
            f"[cyan]{summary['notice']}[/cyan] notices"
        )

    def error(self, errors: Sequence[A11ymError], url: str) -> None:
        self._failed_urls += 1
        for error in errors:
            self.console.print(f"[red]Error:[/red] {escape(str(error))}")

    def close(self) -> None:
        """输出汇总面板"""
        if not self._urls and not self._failed_urls:
            return

        content = Text()
        content.append(f"URLs checked: {self._urls}\n", style="bold")
        if self._failed_urls:
            content.append(f"URLs with errors: {self._failed_urls}\n", style="bold red")
        content.append(f"{self._totals['error']} errors", style="red")
        content.append(" · ")
        content.append(f"{self._totals['warning']} warnings", style="yellow")
        content.append(" · ")
        content.append(f"{self._totals['notice']} notices", style="cyan")

        color = "red" if self._totals["error"] or self._failed_urls else "green"
        self.console.print()
        self.console.print(Panel(content, title="[bold]a11ym[/bold]", border_style=color))

    def _shorten(self, context: str) -> str:
        context = " ".join(context.split())
        if len(context) > self.max_context:
            return context[: self.max_context - 1] + "…"
        return context
