"""Building the run configuration from caller options."""

from __future__ import annotations

from pathlib import Path

import pytest

from a11ym.core.config import (
    DEFAULT_VNU_JAR,
    USER_AGENT,
    ReportFormat,
    RunOptions,
    build_configuration,
    load_options_file,
    parse_error_level,
    parse_standards,
)
from a11ym.core.errors import ConfigurationError, FilterConfigurationError


def test_defaults_enable_both_checkers() -> None:
    configuration = build_configuration(RunOptions())

    assert configuration.a11y_standard == "WCAG2AA"
    assert configuration.html_enabled
    assert configuration.minimum_rank == 1
    assert configuration.report_format is ReportFormat.CLI
    assert configuration.headers["User-Agent"] == USER_AGENT


@pytest.mark.parametrize(
    ("standards", "expected"),
    [
        ("WCAG2AA,HTML", ("WCAG2AA", True)),
        ("HTML,WCAG2AAA", ("WCAG2AAA", True)),
        ("WCAG2A", ("WCAG2A", False)),
        ("HTML", (None, True)),
        (" WCAG2AA , HTML ", ("WCAG2AA", True)),
        ("", (None, False)),
    ],
)
def test_parse_standards(standards: str, expected: tuple) -> None:
    assert parse_standards(standards) == expected


def test_several_accessibility_standards_are_rejected() -> None:
    with pytest.raises(ConfigurationError):
        parse_standards("WCAG2A,WCAG2AA")


@pytest.mark.parametrize(
    ("level", "expected"),
    [("notice", 1), ("warning", 2), ("error", 3), ("ERROR", 3), ("none", 0), ("", 0), (None, 0)],
)
def test_parse_error_level(level: str | None, expected: int) -> None:
    assert parse_error_level(level) == expected


def test_unknown_error_level_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_configuration(RunOptions(error_level="fatal"))


def test_unknown_report_format_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_configuration(RunOptions(report="xml"))


def test_html_report_requires_output_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        build_configuration(RunOptions(report="html"))

    configuration = build_configuration(RunOptions(report="html", output=str(tmp_path)))
    assert configuration.output_directory == tmp_path


def test_malformed_code_pattern_fails_eagerly() -> None:
    with pytest.raises(FilterConfigurationError):
        build_configuration(RunOptions(filter_by_codes=" , "))


def test_code_filters_are_combined() -> None:
    configuration = build_configuration(
        RunOptions(filter_by_codes="Guideline1_1", exclude_by_codes="H37")
    )

    assert configuration.accepts_code("WCAG2AA.Principle1.Guideline1_1.1_1_1.H30")
    assert not configuration.accepts_code("WCAG2AA.Principle1.Guideline1_1.1_1_1.H37")
    assert not configuration.accepts_code("WCAG2AA.Principle2.Guideline2_4.2_4_2.H25")


def test_configuration_is_read_only() -> None:
    configuration = build_configuration(RunOptions())

    with pytest.raises(AttributeError):
        configuration.minimum_rank = 0  # type: ignore[misc]
    with pytest.raises(TypeError):
        configuration.headers["X-Test"] = "1"  # type: ignore[index]


def test_tool_locations_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("A11YM_VNU_JAR", "/opt/vnu/vnu.jar")
    monkeypatch.setenv("A11YM_JAVA", "/usr/lib/jvm/bin/java")
    monkeypatch.delenv("A11YM_PA11Y", raising=False)

    configuration = build_configuration(RunOptions())

    assert configuration.vnu_jar == Path("/opt/vnu/vnu.jar")
    assert configuration.java_command == "/usr/lib/jvm/bin/java"
    assert configuration.pa11y_command == "pa11y"


def test_default_vnu_jar(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("A11YM_VNU_JAR", raising=False)

    assert build_configuration(RunOptions()).vnu_jar == DEFAULT_VNU_JAR


def test_invalid_timeout_and_concurrency() -> None:
    with pytest.raises(ConfigurationError):
        build_configuration(RunOptions(timeout=0))
    with pytest.raises(ConfigurationError):
        build_configuration(RunOptions(concurrency=0))


def test_merge_ignores_none_values() -> None:
    options = RunOptions(error_level="error").merge({"error_level": None, "report": "csv"})

    assert options.error_level == "error"
    assert options.report == "csv"


def test_load_options_file(tmp_path: Path) -> None:
    path = tmp_path / "a11ym.yml"
    path.write_text(
        "standards: WCAG2AAA\nerror-level: warning\nexclude_by_codes: H37\n",
        encoding="utf-8",
    )

    options = RunOptions().merge(load_options_file(path))

    assert options.standards == "WCAG2AAA"
    assert options.error_level == "warning"
    assert options.exclude_by_codes == "H37"


def test_empty_options_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_options_file(path) == {}


@pytest.mark.parametrize(
    "content",
    [
        "- a\n- b\n",
        "standards: [unclosed\n",
        "colour: red\n",
        "concurrency: '4'\n",
        "concurrency: 2.5\n",
        "concurrency: true\n",
        "error-level: 3\n",
        "standards: [WCAG2AA, HTML]\n",
        "timeout: soon\n",
        "report: {format: json}\n",
    ],
)
def test_bad_options_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_options_file(path)


def test_missing_options_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_options_file(tmp_path / "missing.yml")


def test_options_file_numbers_and_nulls(tmp_path: Path) -> None:
    path = tmp_path / "a11ym.yml"
    path.write_text("concurrency: 2\ntimeout: 30\nsniffers:\n", encoding="utf-8")

    options = RunOptions().merge(load_options_file(path))

    assert options.concurrency == 2
    assert options.timeout == 30
    assert options.sniffers is None
    assert build_configuration(options).timeout == 30


def test_options_file_type_error_names_the_option(tmp_path: Path) -> None:
    path = tmp_path / "a11ym.yml"
    path.write_text("error-level: 3\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="'error-level'.*must be a string"):
        load_options_file(path)
