""":mod:`subprocess` backed implementation of
:class:`~doctest_bisect.core.protocols.CommandExecutor`.

This module is the **only** place in the codebase that spawns a child
process.  Every spawn-time :class:`OSError` is re-raised as
:class:`~doctest_bisect.exceptions.CommandNotFoundError` or
:class:`~doctest_bisect.exceptions.InvalidWorkingDirectoryError`.
"""

from __future__ import annotations

import locale
import os
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from doctest_bisect.exceptions import (
    CommandNotFoundError,
    DoctestBisectError,
    InvalidWorkingDirectoryError,
)
from doctest_bisect.infra.toolchain_detector import install_hint_for


def normalize_returncode(returncode: int) -> int:
    """Map ``-N`` (killed by signal N) to ``128 + N`` like a POSIX shell."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def _is_cwd_error(exc: OSError, cwd: Path | None) -> bool:
    """Whether *exc* was caused by entering *cwd* rather than by the executable."""
    if cwd is None:
        return False
    if exc.filename is not None and Path(exc.filename) == cwd:
        return True
    return not os.access(cwd, os.X_OK)


def spawn_error(argv: Sequence[str], cwd: Path | None, exc: OSError) -> DoctestBisectError:
    """Translate a spawn-time :class:`OSError` into a domain error."""
    if _is_cwd_error(exc, cwd):
        return InvalidWorkingDirectoryError(
            f"Working directory is not accessible: {cwd} ({exc.strerror})",
        )
    if isinstance(exc, FileNotFoundError):
        return CommandNotFoundError(
            f"{argv[0]}: command not found",
            hint=install_hint_for(argv[0]),
        )
    return CommandNotFoundError(
        f"{argv[0]}: cannot execute: {exc.strerror or exc}",
        hint=install_hint_for(argv[0]),
    )


class SubprocessExecutor:
    """Concrete :class:`CommandExecutor` backed by :mod:`subprocess`.

    Satisfies the protocol structurally — no explicit inheritance.
    """

    def execute(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> tuple[int, str | None]:
        """Run *argv* once and return ``(returncode, captured_output)``.

        Raises
        ------
        CommandNotFoundError
            When the executable is missing or cannot be executed.
        InvalidWorkingDirectoryError
            When *cwd* is not an existing, enterable directory.
        """
        if cwd is not None and not cwd.is_dir():
            raise InvalidWorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
            )

        pipes: dict[str, int] = {}
        if capture:
            pipes = {"stdout": subprocess.PIPE, "stderr": subprocess.STDOUT}
        try:
            proc = subprocess.Popen(list(argv), cwd=cwd, **pipes)
        except OSError as exc:
            raise spawn_error(argv, cwd, exc) from exc

        with proc:
            output = self._tee(proc) if capture else None
            returncode = proc.wait()

        return normalize_returncode(returncode), output

    @staticmethod
    def _tee(proc: subprocess.Popen[bytes]) -> str:
        """Copy the child's merged output to our stdout while collecting it.

        Bytes are decoded line by line so carriage returns survive.
        """
        encoding = locale.getpreferredencoding(False)
        chunks: list[str] = []
        for raw in proc.stdout or ():
            line = raw.decode(encoding, errors="replace")
            sys.stdout.write(line)
            sys.stdout.flush()
            chunks.append(line)
        return "".join(chunks)
