"""Markup validation with the Nu Html Checker (vnu.jar).

The checker is run as `java -jar vnu.jar --format json <url>`. It writes its
JSON report to stderr, not stdout, and any exit triggers parsing.
"""

import json
import logging
from typing import Any, Optional

from a11ym.core.config import RunConfiguration
from a11ym.core.errors import ValidatorError
from a11ym.core.models import Finding, FindingType
from a11ym.process.executor import ProcessExecutor, ProcessStatus

logger = logging.getLogger(__name__)


def normalize_message(message: dict[str, Any]) -> Finding:
    """Map one vnu message to a markup finding."""
    return Finding(
        type=FindingType.MARKUP,
        level=str(message.get("type", "")).replace("info", "notice"),
        code=None,
        context=(message.get("extract") or "").strip(),
        selector=None,
        message=message.get("message", ""),
    )


def parse_report(report: str, url: str) -> list[Finding]:
    """
    Parse a vnu JSON report.

    Raises:
        ValidatorError: The report is not JSON or has no messages list
    """
    try:
        data = json.loads(report)
    except json.JSONDecodeError as e:
        logger.warning("Unparsable vnu output for %s: %s", url, e)
        raise ValidatorError(f"Validator output is not valid JSON: {e}", url) from e

    messages = data.get("messages") if isinstance(data, dict) else None
    if not isinstance(messages, list):
        raise ValidatorError("Validator output has no 'messages' list", url)

    return [normalize_message(message) for message in messages if isinstance(message, dict)]


class MarkupValidator:
    """Markup validator adapter."""

    def __init__(
        self,
        configuration: RunConfiguration,
        executor: Optional[ProcessExecutor] = None,
    ):
        self.configuration = configuration
        self.executor = executor or ProcessExecutor()

    @property
    def enabled(self) -> bool:
        return self.configuration.html_enabled

    def command(self, url: str) -> list[str]:
        return [
            self.configuration.java_command,
            "-jar",
            str(self.configuration.vnu_jar),
            "--format",
            "json",
            url,
        ]

    async def validate(self, url: str) -> list[Finding]:
        """
        Validate the markup of a URL.

        Returns an empty list without spawning anything when markup
        validation is disabled.

        Raises:
            ValidatorError: Java is missing or the report is unusable
        """
        if not self.enabled:
            return []

        result = await self.executor.execute(self.command(url))
        if result.status is ProcessStatus.NOT_FOUND:
            raise ValidatorError(f"Cannot run the validator: {result.stderr}", url)

        findings = parse_report(result.stderr, url)
        return [
            finding for finding in findings
            if self.configuration.accepts_level(finding.level)
        ]
