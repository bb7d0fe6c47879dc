"""Process execution module.

This module runs the external checker programs asynchronously.
"""

from a11ym.process.executor import (
    ProcessExecutor,
    ProcessResult,
    ProcessStatus,
)

__all__ = [
    "ProcessExecutor",
    "ProcessResult",
    "ProcessStatus",
]
