"""Asynchronous subprocess execution.

This module runs the external checkers (Nu Html Checker, pa11y) with:
- Non-blocking execution on the asyncio event loop
- Full capture of both output streams
- Guaranteed reaping of the child process, including on cancellation
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

logger = logging.getLogger(__name__)


class ProcessStatus(Enum):
    """Process execution status."""
    SUCCESS = "success"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass
class ProcessResult:
    """Result of a process execution."""
    args: list[str]
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int
    status: ProcessStatus

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "args": self.args,
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "duration_ms": self.duration_ms,
            "status": self.status.value,
        }


class ProcessExecutor:
    """Runs external commands without blocking the event loop."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def execute(self, args: Sequence[str]) -> ProcessResult:
        """
        Execute a command and wait for it to exit.

        The child is killed and reaped if the awaiting task is cancelled.

        Args:
            args: Program followed by its arguments

        Returns:
            ProcessResult with both streams decoded
        """
        args = list(args)
        start_time = time.monotonic()
        logger.debug("Spawning: %s", " ".join(args))

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug("Could not spawn %s: %s", args[0], e)
            return ProcessResult(
                args=args,
                exit_code=-1,
                stdout="",
                stderr=str(e),
                duration_ms=0,
                status=ProcessStatus.NOT_FOUND,
            )

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                logger.debug("Killing pid %s", process.pid)
                process.kill()
            await process.wait()
            raise

        duration_ms = int((time.monotonic() - start_time) * 1000)
        exit_code = process.returncode
        logger.debug("%s exited with %s after %d ms", args[0], exit_code, duration_ms)

        return ProcessResult(
            args=args,
            exit_code=exit_code,
            stdout=stdout.decode(self.encoding, errors="replace"),
            stderr=stderr.decode(self.encoding, errors="replace"),
            duration_ms=duration_ms,
            status=ProcessStatus.SUCCESS if exit_code == 0 else ProcessStatus.FAILED,
        )
