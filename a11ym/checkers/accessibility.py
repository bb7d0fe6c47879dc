"""Accessibility checking with pa11y.

The adapter builds the engine options from the run configuration, asks
the engine to run against a URL and normalizes the raw issues.
"""

import base64
import json
import logging
import os
import tempfile
from typing import Any, Optional, Protocol

from a11ym.core.config import RunConfiguration
from a11ym.core.errors import EngineError
from a11ym.core.models import Finding, FindingType
from a11ym.process.executor import ProcessExecutor, ProcessStatus

logger = logging.getLogger(__name__)

# pa11y exits with 2 when the page has issues
PA11Y_ISSUES_EXIT_CODE = 2


class AccessibilityEngine(Protocol):
    """Engine protocol"""

    async def run(self, url: str, options: dict[str, Any]) -> list[dict[str, Any]]:
        """Run the engine and return its raw issues."""
        ...


class Pa11yEngine:
    """Runs the pa11y command line tool and reads its JSON report from stdout."""

    def __init__(self, command: str = "pa11y", executor: Optional[ProcessExecutor] = None):
        self.command = command
        self.executor = executor or ProcessExecutor()

    @staticmethod
    def cli_config(options: dict[str, Any]) -> dict[str, Any]:
        """
        Translate engine options into a pa11y config file.

        Headers and basic-auth credentials are sent as top-level headers as
        well, since current pa11y releases read them from there.
        """
        config = dict(options)
        page = options.get("page", {})
        headers = dict(page.get("headers", {}))
        settings = page.get("settings", {})
        if "userName" in settings:
            token = f"{settings['userName']}:{settings.get('password') or ''}"
            encoded = base64.b64encode(token.encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {encoded}"
        config["headers"] = headers
        return config

    def arguments(self, url: str, options: dict[str, Any], config_path: str) -> list[str]:
        args = [
            self.command,
            "--reporter", "json",
            "--include-warnings",
            "--include-notices",
            "--config", config_path,
        ]
        if options.get("standard"):
            args.extend(["--standard", options["standard"]])
        args.append(url)
        return args

    async def run(self, url: str, options: dict[str, Any]) -> list[dict[str, Any]]:
        fd, config_path = tempfile.mkstemp(prefix="a11ym-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.cli_config(options), f)
            result = await self.executor.execute(self.arguments(url, options, config_path))
        finally:
            os.unlink(config_path)

        if result.status is ProcessStatus.NOT_FOUND:
            raise EngineError(f"Cannot run pa11y: {result.stderr}", url)
        if result.exit_code not in (0, PA11Y_ISSUES_EXIT_CODE):
            detail = result.stderr.strip() or result.stdout.strip()
            raise EngineError(f"pa11y exited with {result.exit_code}: {detail}", url)

        try:
            issues = json.loads(result.stdout or "[]")
        except json.JSONDecodeError as e:
            logger.warning("Unparsable pa11y output for %s: %s", url, e)
            raise EngineError(f"pa11y output is not valid JSON: {e}", url) from e

        if not isinstance(issues, list):
            raise EngineError("pa11y output is not a list of issues", url)
        return issues


def normalize_issue(issue: dict[str, Any]) -> Finding:
    """Map one raw engine issue to an accessibility finding."""
    return Finding(
        type=FindingType.ACCESSIBILITY,
        # error, warning or notice
        level=issue.get("type", ""),
        # e.g. WCAG2AA.PrincipleX.GuidelineX_Y.X_Y_Z
        code=issue.get("code"),
        # e.g. <title>Foobar</title>
        context=issue.get("context") or "",
        # e.g. 'html > head > title'
        selector=issue.get("selector"),
        message=issue.get("message", ""),
    )


class AccessibilityChecker:
    """Accessibility adapter."""

    def __init__(
        self,
        configuration: RunConfiguration,
        engine: Optional[AccessibilityEngine] = None,
    ):
        self.configuration = configuration
        self.engine = engine or Pa11yEngine(configuration.pa11y_command)
        self.options = self.build_options(configuration)

    @property
    def enabled(self) -> bool:
        return bool(self.configuration.a11y_standard)

    @staticmethod
    def build_options(configuration: RunConfiguration) -> dict[str, Any]:
        """Build the engine options for a configuration."""
        settings: dict[str, str] = {}
        if configuration.http_auth_user is not None:
            settings["userName"] = configuration.http_auth_user
            settings["password"] = configuration.http_auth_password or ""

        options: dict[str, Any] = {
            "standard": configuration.a11y_standard,
            "allowedStandards": [configuration.a11y_standard],
            "page": {
                "headers": dict(configuration.headers),
                "settings": settings,
            },
        }
        if configuration.sniffers:
            options["htmlcs"] = configuration.sniffers
        return options

    def accepts(self, finding: Finding) -> bool:
        return (
            self.configuration.accepts_level(finding.level)
            and self.configuration.accepts_code(finding.code)
        )

    async def check(self, url: str) -> list[Finding]:
        """
        Check the accessibility of a URL.

        Returns an empty list when no standard is configured.

        Raises:
            EngineError: The engine reported an error
        """
        if not self.enabled:
            return []

        try:
            issues = await self.engine.run(url, self.options)
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(str(e), url) from e

        findings = [normalize_issue(issue) for issue in issues]
        return [finding for finding in findings if self.accepts(finding)]
