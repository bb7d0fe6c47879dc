"""
Core Layer - 核心层

包含数据模型、严重程度分级、代码过滤器、运行配置和结果聚合器。
"""

from a11ym.core.errors import (
    A11ymError,
    AdapterError,
    AggregationFatalError,
    ConfigurationError,
    EngineError,
    FilterConfigurationError,
    ValidatorError,
)
from a11ym.core.models import EpisodeOutcome, Finding, FindingType
from a11ym.core.severity import LEVEL_NAMES, accepts, rank
from a11ym.core.filters import CodeFilter
from a11ym.core.config import (
    ReportFormat,
    RunConfiguration,
    RunOptions,
    build_configuration,
    load_options_file,
)

__all__ = [
    # errors
    "A11ymError",
    "AdapterError",
    "AggregationFatalError",
    "ConfigurationError",
    "EngineError",
    "FilterConfigurationError",
    "ValidatorError",
    # models
    "EpisodeOutcome",
    "Finding",
    "FindingType",
    # severity
    "LEVEL_NAMES",
    "accepts",
    "rank",
    # filters
    "CodeFilter",
    # config
    "ReportFormat",
    "RunConfiguration",
    "RunOptions",
    "build_configuration",
    "load_options_file",
]
