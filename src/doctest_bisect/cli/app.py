"""CLI application entry point and command routing for doctest-bisect.

This module is the **sole error boundary** for the entire application.
It catches :class:`~doctest_bisect.exceptions.DoctestBisectError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, and returns
well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core and
  infrastructure layers.
* A failing documentation-test command is reported by the command
  itself; the boundary only copies its exit status.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from doctest_bisect.cli import exit_codes
from doctest_bisect.cli.console import console
from doctest_bisect.exceptions import (
    CommandNotFoundError,
    DoctestBisectError,
    SubprocessFailure,
)
from doctest_bisect.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``doctest-bisect``             — run ``cargo test --doc``
    * ``doctest-bisect -- ARGS...``  — same, with extra arguments appended
    * ``doctest-bisect doctor``      — environment diagnostics
    * ``doctest-bisect --version``
    """
    parser = argparse.ArgumentParser(
        prog="doctest-bisect",
        description=(
            "Run a project's documentation tests and exit with their status. "
            "Suitable for 'git bisect run'."
        ),
        epilog="Arguments after '--' are appended to the test command.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=None,
        metavar="DIR",
        help="Run the command in DIR instead of the current directory.",
    )
    parser.add_argument(
        "--no-echo",
        dest="echo",
        action="store_false",
        help="Do not trace the command line before running it.",
    )
    parser.add_argument(
        "--check-duplicate-warnings",
        action="store_true",
        help="Fail when the same compiler warning is reported more than once.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        choices=["doctor"],
        help="'doctor' to run diagnostics; omit to run the documentation tests.",
    )
    return parser


def _split_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split *argv* at the first ``--`` into (own args, passthrough args)."""
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_run(args: argparse.Namespace, extra_args: list[str]) -> int:
    """Run the documentation tests once.

    Raises :class:`SubprocessFailure` when the command fails; the
    boundary in :func:`cli` turns that into the same exit status.
    A missing Rust toolchain is reported before anything is spawned.
    """
    from doctest_bisect.core.models import RunnerConfig
    from doctest_bisect.core.runner_service import RunnerService
    from doctest_bisect.infra.subprocess_executor import SubprocessExecutor
    from doctest_bisect.infra.toolchain_detector import RUST_TOOLS, require_toolchain

    config = RunnerConfig(
        extra_args=tuple(extra_args),
        cwd=args.directory,
        echo=args.echo,
        check_duplicate_warnings=args.check_duplicate_warnings,
    )
    if config.argv[0] in RUST_TOOLS:
        require_toolchain(config.argv[0])

    service = RunnerService(SubprocessExecutor(), trace=console.trace)
    service.run(config)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from doctest_bisect.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the doctest-bisect CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    own_args, extra_args = _split_passthrough(
        list(sys.argv[1:] if argv is None else argv),
    )
    parser = _build_parser()
    args = parser.parse_args(own_args)

    if args.target == "doctor":
        return _handle_doctor()

    return _handle_run(args, extra_args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except SubprocessFailure as exc:
        sys.exit(exc.returncode)
    except CommandNotFoundError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.COMMAND_NOT_FOUND)
    except DoctestBisectError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
