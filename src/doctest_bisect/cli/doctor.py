"""``doctest-bisect doctor`` — can this machine run the doctests?

Each row is a :class:`CheckRow`.  The toolchain is looked up once per
executable and the resulting :class:`ToolchainStatus` feeds both its
row and the install guidance printed underneath the table.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass

from doctest_bisect.cli import exit_codes
from doctest_bisect.cli.console import console
from doctest_bisect.infra.toolchain_detector import ToolchainStatus, detect_toolchain
from doctest_bisect.version import __version__

OK, WARN, FAIL = "OK", "WARN", "FAIL"

_LEVEL_STYLE: dict[str, str] = {OK: "green", WARN: "yellow", FAIL: "red"}

REQUIRED_TOOLS: tuple[str, ...] = ("cargo",)
OPTIONAL_TOOLS: tuple[str, ...] = ("rustdoc",)


@dataclass(frozen=True, slots=True)
class CheckRow:
    component: str
    value: str
    level: str
    note: str = ""


# ---------------------------------------------------------------------------
# Row builders
# ---------------------------------------------------------------------------

def python_row() -> CheckRow:
    ok = sys.version_info[:2] >= (3, 10)
    return CheckRow(
        "Python",
        platform.python_version(),
        OK if ok else FAIL,
        "" if ok else ">=3.10 required",
    )


def toolchain_row(status: ToolchainStatus, *, required: bool) -> CheckRow:
    """Map a detection result to a row; a missing required tool is fatal."""
    if status.found:
        return CheckRow(status.executable, str(status.path or "found"), OK)
    return CheckRow(status.executable, status.version_hint, FAIL if required else WARN)


def os_row() -> CheckRow:
    system = {"Darwin": "macOS"}.get(platform.system(), platform.system())
    return CheckRow("OS", f"{system} {platform.release()} ({platform.machine()})", OK)


def collect(statuses: dict[str, ToolchainStatus]) -> list[CheckRow]:
    rows = [CheckRow("doctest-bisect", __version__, OK), python_row()]
    rows.extend(toolchain_row(statuses[name], required=True) for name in REQUIRED_TOOLS)
    rows.extend(toolchain_row(statuses[name], required=False) for name in OPTIONAL_TOOLS)
    rows.append(os_row())
    return rows


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_rich(rows: list[CheckRow]) -> bool:
    """Print *rows* as a Rich table; return ``False`` if Rich is missing."""
    try:
        from rich.table import Table
        from rich.text import Text
    except ModuleNotFoundError:
        return False

    table = Table(title="doctest-bisect doctor", header_style="bold cyan", border_style="dim")
    table.add_column("Component", style="bold")
    table.add_column("Value")
    table.add_column("Status", justify="center")
    for row in rows:
        label = f"{row.level} ({row.note})" if row.note else row.level
        table.add_row(row.component, row.value, Text(label, style=_LEVEL_STYLE[row.level]))
    console.print(table)
    return True


def _render_plain(rows: list[CheckRow]) -> None:
    width = max(len(row.component) for row in rows) + 2
    console.print("doctest-bisect doctor")
    for row in rows:
        note = f"  {row.note}" if row.note else ""
        console.print(f"  {row.component:<{width}}{row.level:<6}{row.value}{note}")


def run_doctor() -> int:
    """Run every check, print the summary and return the exit code.

    Only FAIL rows (missing cargo, old Python) make the command fail.
    """
    statuses = {name: detect_toolchain(name) for name in REQUIRED_TOOLS + OPTIONAL_TOOLS}
    rows = collect(statuses)

    if not _render_rich(rows):
        _render_plain(rows)

    for status in statuses.values():
        if not status.found and status.install_hint:
            console.print(status.install_hint)

    if any(row.level == FAIL for row in rows):
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR
    console.print("All checks passed.")
    return exit_codes.SUCCESS
