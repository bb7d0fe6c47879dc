"""Shared fixtures."""

from __future__ import annotations

import pytest

from a11ym.core.errors import EngineError

from tests.fakes import RecordingReporter


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def engine_error() -> EngineError:
    return EngineError("browser crashed", "https://example.org")
