"""
规则代码过滤器

从逗号/空白分隔的代码列表构建大小写不敏感、按整词匹配的谓词，
例如 "1_1" 不会匹配 "1_12"。
"""

import re
from dataclasses import dataclass
from typing import Optional

from a11ym.core.errors import FilterConfigurationError

CODE_SEPARATOR = re.compile(r"[\s,]+")


def split_codes(pattern: str) -> list[str]:
    """拆分原始代码列表，忽略空项"""
    return [code for code in CODE_SEPARATOR.split(pattern) if code]


def compile_codes(pattern: str) -> re.Pattern:
    """
    构建整词匹配的正则

    Raises:
        FilterConfigurationError: 列表中没有任何代码
    """
    codes = split_codes(pattern)
    if not codes:
        raise FilterConfigurationError(f"No codes found in filter pattern: {pattern!r}")
    alternation = "|".join(re.escape(code) for code in codes)
    return re.compile(rf"\b({alternation})\b", re.IGNORECASE)


@dataclass(frozen=True)
class CodeFilter:
    """
    include / exclude 谓词

    未配置模式时接受一切；已配置时没有代码的结果不被接受。
    """
    regex: Optional[re.Pattern] = None
    exclude: bool = False

    @classmethod
    def include(cls, pattern: Optional[str]) -> "CodeFilter":
        if pattern is None:
            return cls()
        return cls(regex=compile_codes(pattern))

    @classmethod
    def excluding(cls, pattern: Optional[str]) -> "CodeFilter":
        if pattern is None:
            return cls(exclude=True)
        return cls(regex=compile_codes(pattern), exclude=True)

    @property
    def active(self) -> bool:
        return self.regex is not None

    def matches(self, code: Optional[str]) -> bool:
        """代码是否命中模式"""
        if self.regex is None or not code:
            return False
        return self.regex.search(code) is not None

    def __call__(self, code: Optional[str]) -> bool:
        if self.regex is None:
            return True
        if not code:
            return False
        if self.exclude:
            return not self.matches(code)
        return self.matches(code)
