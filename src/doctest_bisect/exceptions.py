"""Custom exception hierarchy for doctest-bisect.

All exceptions that cross layer boundaries must inherit from
:class:`DoctestBisectError`.  Raw OS exceptions (e.g. from
:mod:`subprocess`) must NEVER propagate beyond the infrastructure
layer — they are caught and re-raised as a typed subclass defined here.

Hierarchy
---------
DoctestBisectError
├── SubprocessFailure
├── CommandNotFoundError
│   └── ToolchainNotFoundError
├── InvalidWorkingDirectoryError
├── DuplicateWarningError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doctest_bisect.core.models import WarningOccurrence


class DoctestBisectError(Exception):
    """Base exception for all doctest-bisect errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Child process ---------------------------------------------------------

class SubprocessFailure(DoctestBisectError):
    """Raised when the documentation-test command exits non-zero.

    The CLI renders nothing for this error: the child already printed
    its own report, and the process exits with :attr:`returncode`.
    """

    def __init__(self, returncode: int, argv: Sequence[str] = ()) -> None:
        super().__init__(f"command exited with status {returncode}")
        self.returncode: int = returncode
        self.argv: tuple[str, ...] = tuple(argv)


class CommandNotFoundError(DoctestBisectError):
    """Raised when the command executable cannot be resolved or run."""


class InvalidWorkingDirectoryError(DoctestBisectError):
    """Raised when the requested working directory does not exist."""


# --- Toolchain -------------------------------------------------------------

class ToolchainNotFoundError(CommandNotFoundError):
    """Raised when the toolchain executable is not on the system PATH."""


# --- Output checks ---------------------------------------------------------

class DuplicateWarningError(DoctestBisectError):
    """Raised when the same compiler warning is reported more than once."""

    def __init__(self, duplicates: Sequence[WarningOccurrence]) -> None:
        first = duplicates[0]
        message = (
            f"{len(duplicates)} warning(s) reported more than once; "
            f"first: {first.message!r} x{first.count}"
        )
        super().__init__(message)
        self.duplicates: tuple[WarningOccurrence, ...] = tuple(duplicates)


# --- Environment -----------------------------------------------------------

class EnvironmentError(DoctestBisectError):
    """Raised when an optional runtime dependency is not available."""
