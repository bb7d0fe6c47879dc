"""
CLI 入口模块 - 使用 Typer 构建命令行界面

检查流程：
1. 合并选项文件与命令行选项
2. 构建并校验运行配置
3. 并发检查每个 URL
4. 生成报告并设置退出码
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from a11ym.core.config import RunOptions, build_configuration, load_options_file
from a11ym.core.errors import ConfigurationError
from a11ym.core.tester import Tester
from a11ym.reporters import create_reporter

# 退出码
EXIT_OK = 0
EXIT_CHECKER_ERROR = 1
EXIT_FATAL = 2

# 创建 Typer 应用实例
app = typer.Typer(
    name="a11ym",
    help="a11ym: accessibility and HTML conformance checks for web pages.",
    add_completion=False,
)

# Rich Console 用于输出错误信息
console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """安装 Rich 日志处理器"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def check(
    urls: list[str] = typer.Argument(
        ...,
        help="URLs to check",
    ),
    report: Optional[str] = typer.Option(
        None,
        "--report",
        "-r",
        help="Report format: cli (default), csv, json or html",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (required by the html report)",
    ),
    standards: Optional[str] = typer.Option(
        None,
        "--standards",
        "-s",
        help="Comma-separated standards, e.g. WCAG2AA,HTML (HTML enables markup validation)",
    ),
    sniffers: Optional[str] = typer.Option(
        None,
        "--sniffers",
        help="Path or URL of the HTML_CodeSniffer build used by pa11y",
    ),
    error_level: Optional[str] = typer.Option(
        None,
        "--error-level",
        "-e",
        help="Minimum level to report: notice, warning or error",
    ),
    filter_by_codes: Optional[str] = typer.Option(
        None,
        "--filter-by-codes",
        help="Only report these codes (comma or space separated)",
    ),
    exclude_by_codes: Optional[str] = typer.Option(
        None,
        "--exclude-by-codes",
        help="Never report these codes (comma or space separated)",
    ),
    http_auth_user: Optional[str] = typer.Option(
        None,
        "--http-auth-user",
        help="HTTP basic-auth user name",
    ),
    http_auth_password: Optional[str] = typer.Option(
        None,
        "--http-auth-password",
        help="HTTP basic-auth password",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-URL timeout in seconds",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        help="Number of URLs checked at the same time",
    ),
    vnu_jar: Optional[str] = typer.Option(
        None,
        "--vnu-jar",
        help="Path to vnu.jar (default: $A11YM_VNU_JAR or resource/vnu/vnu.jar)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with default option values",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug output",
    ),
) -> None:
    """
    Check one or more URLs for accessibility and markup issues.

    Examples:
        a11ym check https://example.org
        a11ym check https://example.org -s WCAG2AA -e error
        a11ym check https://example.org/a https://example.org/b -r html -o report/
    """
    configure_logging(verbose)

    overrides = {
        "report": report,
        "output": output,
        "standards": standards,
        "sniffers": sniffers,
        "error_level": error_level,
        "filter_by_codes": filter_by_codes,
        "exclude_by_codes": exclude_by_codes,
        "http_auth_user": http_auth_user,
        "http_auth_password": http_auth_password,
        "timeout": timeout,
        "concurrency": concurrency,
        "vnu_jar": vnu_jar,
    }

    try:
        options = RunOptions()
        if config is not None:
            options = options.merge(load_options_file(config))
        options = options.merge(overrides)
        configuration = build_configuration(options)
        reporter = create_reporter(configuration.report_format, configuration.output_directory)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FATAL)

    tester = Tester(configuration, reporter)
    try:
        outcomes = asyncio.run(tester.run_many(urls))
    finally:
        reporter.close()

    if any(outcome.fatal is not None for outcome in outcomes):
        raise typer.Exit(EXIT_FATAL)
    if any(outcome.errors for outcome in outcomes):
        raise typer.Exit(EXIT_CHECKER_ERROR)
    raise typer.Exit(EXIT_OK)


@app.command()
def version() -> None:
    """Show the version of a11ym."""
    from a11ym import __version__
    Console().print(f"[bold]a11ym[/bold] v{__version__}")


if __name__ == "__main__":
    app()
