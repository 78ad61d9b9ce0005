"""Core / service layer — run orchestration and output analysis.

Rules
-----
* No ``print()`` calls.
* No process spawning; the executor is injected.
* No imports from ``cli`` or ``infra``.
"""

from doctest_bisect.core.models import (
    DEFAULT_COMMAND,
    RunResult,
    RunnerConfig,
    WarningOccurrence,
)
from doctest_bisect.core.protocols import CommandExecutor
from doctest_bisect.core.runner_service import RunnerService
from doctest_bisect.core.warning_scan import find_duplicate_warnings

__all__: list[str] = [
    "DEFAULT_COMMAND",
    "CommandExecutor",
    "RunResult",
    "RunnerConfig",
    "RunnerService",
    "WarningOccurrence",
    "find_duplicate_warnings",
]
