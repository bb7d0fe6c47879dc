"""Severity ranks and minimum-level filtering."""

from __future__ import annotations

import pytest

from a11ym.core.severity import LEVEL_NAMES, accepts, rank


def test_known_levels_are_ordered() -> None:
    assert rank("notice") == 1
    assert rank("warning") == 2
    assert rank("error") == 3
    assert rank("notice") < rank("warning") < rank("error")


@pytest.mark.parametrize("level", ["unknown", "", "ERROR", "info", None])
def test_unrecognized_levels_rank_zero(level: str | None) -> None:
    assert rank(level) == 0


def test_level_names_cover_ranks() -> None:
    assert LEVEL_NAMES == ["notice", "warning", "error"]


@pytest.mark.parametrize("level", ["notice", "warning", "error", "bogus"])
def test_zero_minimum_accepts_everything(level: str) -> None:
    assert accepts(level, 0)


def test_minimum_level_threshold() -> None:
    assert accepts("error", 3)
    assert not accepts("warning", 3)
    assert accepts("warning", 2)
    assert not accepts("notice", 2)
