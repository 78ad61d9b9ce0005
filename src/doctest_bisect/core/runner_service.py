"""Core runner service — one strict invocation of the doctest command.

The service delegates process execution to a
:class:`~doctest_bisect.core.protocols.CommandExecutor` injected at
construction time.  It is responsible for:

* Tracing the command line before it runs (shell ``-x`` format).
* Running the command exactly once.
* Turning a non-zero status into :class:`SubprocessFailure`.
* Optionally scanning captured output for duplicated warnings.

Guarantees
----------
* No ``print()``; the trace goes through the injected callback.
* No retries.  The first failure ends the run.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence

from doctest_bisect.core.models import RunnerConfig, RunResult
from doctest_bisect.core.protocols import CommandExecutor
from doctest_bisect.core.warning_scan import find_duplicate_warnings
from doctest_bisect.exceptions import (
    CommandNotFoundError,
    DuplicateWarningError,
    SubprocessFailure,
)


class RunnerService:
    """Stateless service that performs a single documentation-test run.

    Parameters
    ----------
    executor:
        Any object satisfying the :class:`CommandExecutor` protocol.
    trace:
        Callable receiving the ``+ cmd`` trace line.  ``None`` disables
        tracing regardless of :attr:`RunnerConfig.echo`.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        trace: Callable[[str], None] | None = None,
    ) -> None:
        self._executor: CommandExecutor = executor
        self._trace: Callable[[str], None] | None = trace

    @staticmethod
    def format_trace(argv: Sequence[str]) -> str:
        """Render *argv* the way ``set -x`` does: ``+ cmd arg ...``."""
        return f"+ {shlex.join(argv)}"

    def run(self, config: RunnerConfig) -> RunResult:
        """Run the configured command once.

        Raises
        ------
        SubprocessFailure
            When the command exits non-zero.
        CommandNotFoundError
            When the command line is empty or its executable is missing.
        DuplicateWarningError
            When scanning is enabled and a warning is reported twice.
        """
        argv = config.argv
        if not argv:
            raise CommandNotFoundError("No command to run.")

        if config.echo and self._trace is not None:
            self._trace(self.format_trace(argv))

        returncode, output = self._executor.execute(
            argv,
            cwd=config.cwd,
            capture=config.check_duplicate_warnings,
        )
        result = RunResult(argv=argv, returncode=returncode, output=output)

        if not result.succeeded:
            raise SubprocessFailure(returncode, argv)

        if config.check_duplicate_warnings:
            duplicates = find_duplicate_warnings(output or "")
            if duplicates:
                raise DuplicateWarningError(duplicates)

        return result
