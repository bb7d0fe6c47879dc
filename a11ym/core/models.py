"""
检查结果数据模型

两个检查器的原始输出都会被规范化为 Finding，
过滤器和报告器只接触这一种结构。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from a11ym.core.errors import A11ymError


class FindingType(str, Enum):
    """结果来源"""
    ACCESSIBILITY = "accessibility"
    MARKUP = "markup"


@dataclass(frozen=True)
class Finding:
    """
    规范化后的单条检查结果

    Attributes:
        type: 来源检查器
        level: 严重程度 (error, warning, notice)
        code: 规则代码，例如 WCAG2AA.Principle1.Guideline1_1.1_1_1.H37；标记检查没有代码
        context: 相关的 HTML 片段，可能为空字符串
        selector: DOM 路径，例如 'html > head > title'；标记检查没有选择器
        message: 问题描述
    """
    type: FindingType
    level: str
    code: Optional[str]
    context: str
    selector: Optional[str]
    message: str

    def to_dict(self) -> dict[str, Any]:
        """序列化为字典"""
        return {
            "type": self.type.value,
            "level": self.level,
            "code": self.code,
            "context": self.context,
            "selector": self.selector,
            "message": self.message,
        }


@dataclass
class EpisodeOutcome:
    """
    单个 URL 的聚合结果

    Attributes:
        url: 被检查的 URL
        findings: 成功通道合并后的结果
        errors: 错误通道合并后的错误
        fatal: 致命错误（调度异常或超时）
    """
    url: str
    findings: list[Finding] = field(default_factory=list)
    errors: list[A11ymError] = field(default_factory=list)
    fatal: Optional[A11ymError] = None

    @property
    def ok(self) -> bool:
        return self.fatal is None and not self.errors
