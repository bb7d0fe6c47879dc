"""
Checkers Layer - 检查器层

把 pa11y 和 Nu Html Checker 的原始输出规范化为 Finding。
"""

from a11ym.checkers.accessibility import (
    AccessibilityChecker,
    AccessibilityEngine,
    Pa11yEngine,
)
from a11ym.checkers.markup import MarkupValidator

__all__ = [
    "AccessibilityChecker",
    "AccessibilityEngine",
    "Pa11yEngine",
    "MarkupValidator",
]
