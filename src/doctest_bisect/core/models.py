"""Domain models for doctest-bisect.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and trivial derived properties.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_COMMAND: tuple[str, ...] = ("cargo", "test", "--doc")
"""The documentation-test invocation run when no override is given."""


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunnerConfig:
    """Everything the runner needs to perform one invocation."""

    command: tuple[str, ...] = DEFAULT_COMMAND
    """Base command line; the first element is the executable."""

    extra_args: tuple[str, ...] = ()
    """Arguments appended verbatim after :attr:`command`."""

    cwd: Path | None = None
    """Working directory for the child, or ``None`` for the current one."""

    echo: bool = True
    """Trace the command line to stderr before running it."""

    check_duplicate_warnings: bool = False
    """Capture output and fail when a warning is reported twice."""

    @property
    def argv(self) -> tuple[str, ...]:
        return self.command + self.extra_args


# ---------------------------------------------------------------------------
# Run outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of a single command invocation."""

    argv: tuple[str, ...]
    returncode: int
    output: str | None = None
    """Captured combined output; ``None`` when output was not captured."""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Warning scan entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WarningOccurrence:
    """A distinct compiler warning and how often it was reported."""

    message: str
    """Header text after ``warning:``, stripped."""

    location: str | None
    """``path:line:col`` from the ``-->`` marker, when present."""

    count: int
