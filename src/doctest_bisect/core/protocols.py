"""Protocols (interfaces) consumed by the core layer.

Core code depends ONLY on these protocols — never on concrete
implementations — so tests can drive the runner without spawning
processes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class CommandExecutor(Protocol):
    """Contract for child-process backends."""

    def execute(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> tuple[int, str | None]:
        """Run *argv* once and return ``(returncode, captured_output)``.

        When *capture* is false the child's output goes straight to the
        terminal and the second element is ``None``.  When true, output
        is still echoed as it arrives and is also returned.

        Raises
        ------
        CommandNotFoundError
            When ``argv[0]`` cannot be resolved or executed.
        InvalidWorkingDirectoryError
            When *cwd* does not exist.
        """
        ...  # pragma: no cover
