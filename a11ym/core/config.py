"""
运行配置 - 从调用方选项构建只读的 RunConfiguration

选项来源：
1. 命令行参数
2. YAML 选项文件（--config），命令行参数优先
3. 环境变量（外部工具路径）
"""

import logging
import os
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from a11ym.core.errors import ConfigurationError
from a11ym.core.filters import CodeFilter
from a11ym.core.severity import LEVEL_NAMES, rank

logger = logging.getLogger(__name__)

HTML_STANDARD = "HTML"
USER_AGENT = "liip/a11ym"
NO_LEVEL = "none"

DEFAULT_VNU_JAR = Path(__file__).resolve().parents[2] / "resource" / "vnu" / "vnu.jar"


class ReportFormat(str, Enum):
    """可选的报告器类型"""
    CLI = "cli"
    CSV = "csv"
    JSON = "json"
    HTML = "html"

    @classmethod
    def parse(cls, value: str) -> "ReportFormat":
        try:
            return cls(value.lower())
        except ValueError:
            choices = ", ".join(item.value for item in cls)
            raise ConfigurationError(
                f"Unknown report format: {value!r} (expected one of: {choices})"
            ) from None


@dataclass
class RunOptions:
    """调用方提供的原始选项（命令行或选项文件中的字符串）"""
    report: str = "cli"
    output: Optional[str] = None
    standards: str = "WCAG2AA,HTML"
    sniffers: Optional[str] = None
    error_level: str = "notice"
    filter_by_codes: Optional[str] = None
    exclude_by_codes: Optional[str] = None
    http_auth_user: Optional[str] = None
    http_auth_password: Optional[str] = None
    timeout: Optional[float] = None
    concurrency: int = 4
    vnu_jar: Optional[str] = None
    java: Optional[str] = None
    pa11y: Optional[str] = None

    def merge(self, overrides: Mapping[str, Any]) -> "RunOptions":
        """返回应用了非空覆盖值的新选项"""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if value is not None:
                values[key] = value
        return RunOptions(**values)


@dataclass(frozen=True)
class RunConfiguration:
    """
    一次运行的只读配置

    Attributes:
        a11y_standard: 可访问性标准，None 表示禁用可访问性检查
        html_enabled: 是否运行 HTML 标记检查
        sniffers: HTML_CodeSniffer 脚本路径或 URL
        minimum_rank: 最低级别序数，0 表示不过滤
        include_codes: 包含代码过滤器
        exclude_codes: 排除代码过滤器
        http_auth_user: HTTP Basic 认证用户名
        http_auth_password: HTTP Basic 认证密码
        headers: 发送给页面的 HTTP 头
        report_format: 报告器类型
        output_directory: 报告输出目录（html 报告器必需）
        vnu_jar: vnu.jar 路径
        java_command: java 可执行文件
        pa11y_command: pa11y 可执行文件
        timeout: 单个 URL 的超时（秒），None 表示不限制
        concurrency: 同时检查的 URL 数
    """
    a11y_standard: Optional[str] = None
    html_enabled: bool = False
    sniffers: Optional[str] = None
    minimum_rank: int = 0
    include_codes: CodeFilter = field(default_factory=CodeFilter)
    exclude_codes: CodeFilter = field(default_factory=lambda: CodeFilter(exclude=True))
    http_auth_user: Optional[str] = None
    http_auth_password: Optional[str] = None
    headers: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"User-Agent": USER_AGENT})
    )
    report_format: ReportFormat = ReportFormat.CLI
    output_directory: Optional[Path] = None
    vnu_jar: Path = DEFAULT_VNU_JAR
    java_command: str = "java"
    pa11y_command: str = "pa11y"
    timeout: Optional[float] = None
    concurrency: int = 4

    def accepts_level(self, level: Optional[str]) -> bool:
        return rank(level) >= self.minimum_rank

    def accepts_code(self, code: Optional[str]) -> bool:
        return self.include_codes(code) and self.exclude_codes(code)


def parse_standards(standards: str) -> tuple[Optional[str], bool]:
    """
    拆分标准列表

    保留字 HTML 启用标记检查，其余最多一个可访问性标准。

    Returns:
        (可访问性标准或 None, 是否启用 HTML 检查)
    """
    names = [name.strip() for name in standards.split(",") if name.strip()]
    html_enabled = HTML_STANDARD in names
    a11y_names = [name for name in names if name != HTML_STANDARD]

    if len(a11y_names) > 1:
        raise ConfigurationError(
            f"Only one accessibility standard can be selected, got: {', '.join(a11y_names)}"
        )

    return (a11y_names[0] if a11y_names else None), html_enabled


def parse_error_level(error_level: Optional[str]) -> int:
    """将最低级别名称转换为序数"""
    if error_level is None or error_level.lower() in ("", NO_LEVEL):
        return 0
    level = error_level.lower()
    if level not in LEVEL_NAMES:
        raise ConfigurationError(
            f"Unknown error level: {error_level!r} (expected one of: {', '.join(LEVEL_NAMES)})"
        )
    return rank(level)


# 数值选项允许的类型及说明，其余选项均为字符串
NUMERIC_OPTIONS = {
    "timeout": ((int, float), "a number"),
    "concurrency": ((int,), "an integer"),
}


def check_option_type(name: str, value: Any, path: Path) -> None:
    """选项文件中的值必须与 RunOptions 字段类型一致"""
    expected, kind = NUMERIC_OPTIONS.get(name, ((str,), "a string"))
    # YAML 的 true/false 是 bool，而 bool 是 int 的子类
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ConfigurationError(
            f"Option {name.replace('_', '-')!r} in {path} must be {kind}, "
            f"got {type(value).__name__}: {value!r}"
        )


def load_options_file(path: Path) -> dict[str, Any]:
    """
    读取 YAML 选项文件

    键名与命令行选项一致，短横线和下划线均可，例如 error-level 或 error_level。

    Raises:
        ConfigurationError: 文件不可读、不是合法 YAML、包含未知键或值类型错误
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read options file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in options file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Options file {path} must contain a mapping")

    known = {f.name for f in fields(RunOptions)}
    options: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigurationError(f"Unknown option {key!r} in {path}")
        if value is not None:
            check_option_type(name, value, path)
        options[name] = value

    logger.debug("Loaded %d option(s) from %s", len(options), path)
    return options


def build_configuration(options: RunOptions) -> RunConfiguration:
    """
    校验选项并构建 RunConfiguration

    所有错误（未知级别、报告格式、过滤模式等）都在这里提前抛出。

    Raises:
        ConfigurationError: 选项无效
        FilterConfigurationError: include/exclude 模式无效
    """
    a11y_standard, html_enabled = parse_standards(options.standards)
    report_format = ReportFormat.parse(options.report)

    output_directory = Path(options.output) if options.output else None
    if report_format is ReportFormat.HTML and output_directory is None:
        raise ConfigurationError("The html report requires an output directory")

    if options.concurrency < 1:
        raise ConfigurationError("Concurrency must be at least 1")
    if options.timeout is not None and options.timeout <= 0:
        raise ConfigurationError("Timeout must be a positive number of seconds")

    vnu_jar = options.vnu_jar or os.environ.get("A11YM_VNU_JAR")

    configuration = RunConfiguration(
        a11y_standard=a11y_standard,
        html_enabled=html_enabled,
        sniffers=options.sniffers,
        minimum_rank=parse_error_level(options.error_level),
        include_codes=CodeFilter.include(options.filter_by_codes),
        exclude_codes=CodeFilter.excluding(options.exclude_by_codes),
        http_auth_user=options.http_auth_user,
        http_auth_password=options.http_auth_password,
        report_format=report_format,
        output_directory=output_directory,
        vnu_jar=Path(vnu_jar) if vnu_jar else DEFAULT_VNU_JAR,
        java_command=options.java or os.environ.get("A11YM_JAVA", "java"),
        pa11y_command=options.pa11y or os.environ.get("A11YM_PA11Y", "pa11y"),
        timeout=options.timeout,
        concurrency=options.concurrency,
    )

    logger.debug(
        "Configuration: standard=%s html=%s minimum_rank=%d",
        configuration.a11y_standard,
        configuration.html_enabled,
        configuration.minimum_rank,
    )
    return configuration
