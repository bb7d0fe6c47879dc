"""Include/exclude code filters."""

from __future__ import annotations

import pytest

from a11ym.core.errors import FilterConfigurationError
from a11ym.core.filters import CodeFilter, split_codes


def test_split_accepts_commas_and_whitespace() -> None:
    assert split_codes("1_1, 1_2\t1_3,,") == ["1_1", "1_2", "1_3"]


def test_include_matches_whole_words_only() -> None:
    include = CodeFilter.include("1_1,1_2")

    assert include("WCAG2AA.1_1.title")
    assert include("WCAG2AA.1_2.H37")
    assert not include("WCAG2AA.1_12.title")


def test_include_is_case_insensitive() -> None:
    include = CodeFilter.include("h37")

    assert include("WCAG2AA.Principle1.Guideline1_1.1_1_1.H37")


def test_underscore_continuation_breaks_the_boundary() -> None:
    include = CodeFilter.include("1_2")

    assert not include("WCAG2AA.1_2_extra")
    assert include("WCAG2AA.1_2.extra")


def test_inactive_filters_accept_everything() -> None:
    include = CodeFilter.include(None)
    exclude = CodeFilter.excluding(None)

    assert not include.active
    assert include("anything")
    assert include(None)
    assert exclude("anything")
    assert exclude(None)


def test_active_include_rejects_missing_code() -> None:
    assert not CodeFilter.include("1_1")(None)


def test_exclude_rejects_matching_codes() -> None:
    exclude = CodeFilter.excluding("H37 G18")

    assert not exclude("WCAG2AA.Principle1.Guideline1_1.1_1_1.H37")
    assert not exclude("WCAG2AA.Principle1.Guideline1_4.1_4_3.G18.Fail")
    assert exclude("WCAG2AA.Principle2.Guideline2_4.2_4_2.H25.1.NoTitleEl")


def test_include_and_exclude_combine() -> None:
    include = CodeFilter.include("Guideline1_1")
    exclude = CodeFilter.excluding("H37")
    code_h37 = "WCAG2AA.Principle1.Guideline1_1.1_1_1.H37"
    code_h30 = "WCAG2AA.Principle1.Guideline1_1.1_1_1.H30.2"

    assert not (include(code_h37) and exclude(code_h37))
    assert include(code_h30) and exclude(code_h30)


def test_regex_metacharacters_are_literal() -> None:
    include = CodeFilter.include("1.1")

    assert include("WCAG2AA.1.1.title")
    assert not include("WCAG2AA.1x1.title")


def test_pattern_with_unbalanced_parenthesis_compiles() -> None:
    include = CodeFilter.include("(H37")

    assert not include("WCAG2AA.H37")


@pytest.mark.parametrize("pattern", ["", " , ", "\t"])
def test_empty_patterns_are_rejected(pattern: str) -> None:
    with pytest.raises(FilterConfigurationError):
        CodeFilter.include(pattern)
    with pytest.raises(FilterConfigurationError):
        CodeFilter.excluding(pattern)
