"""
严重程度分级 - 将级别名称映射为序数

notice < warning < error，未知级别为 0（不过滤）。
"""

from typing import Optional

LEVEL_RANKS: dict[str, int] = {
    "notice": 1,
    "warning": 2,
    "error": 3,
}

LEVEL_NAMES: list[str] = list(LEVEL_RANKS)


def rank(level: Optional[str]) -> int:
    """返回级别对应的序数，未识别的输入返回 0"""
    if level is None:
        return 0
    return LEVEL_RANKS.get(level, 0)


def accepts(level: Optional[str], minimum_rank: int) -> bool:
    """判断某个级别是否达到最低级别要求"""
    return rank(level) >= minimum_rank
