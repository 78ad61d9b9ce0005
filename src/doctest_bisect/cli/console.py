"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) and the runner itself keep working when
Rich is not installed.  All output goes to stderr; stdout belongs to
the child process.
"""

from __future__ import annotations

import sys
from typing import Any

from doctest_bisect.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def trace(self, line: str) -> None:
        """Write a command trace line verbatim (no markup, emoji or highlighting)."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(line, file=sys.stderr, flush=True)
            return
        rich_console.out(line, highlight=False)


console = _ConsoleProxy()
