"""Infrastructure: toolchain detection and platform guidance.

Locates the documentation-test toolchain (``cargo`` and ``rustdoc``) on
the system PATH and provides platform-specific installation guidance
when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from doctest_bisect.exceptions import ToolchainNotFoundError

RUST_TOOLS: frozenset[str] = frozenset({"cargo", "rustdoc", "rustc", "rustup"})


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolchainStatus:
    """Result of a toolchain detection probe.

    Attributes
    ----------
    executable : str
        The name that was looked up.
    found : bool
        Whether the executable was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    version_hint : str
        Human-readable status string (``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the toolchain on the
        current platform.  Empty when the executable is present.
    """

    executable: str
    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]

    @property
    def install_hint(self) -> str | None:
        """Multi-line install guidance, or ``None`` when nothing applies."""
        return _format_hint(self.executable, self.install_commands)


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_toolchain(executable: str = "cargo") -> ToolchainStatus:
    """Probe the system for *executable*.

    Returns a :class:`ToolchainStatus` whether or not it is present —
    the caller decides whether to abort or merely warn.
    """
    result = shutil.which(executable)

    if result is not None:
        resolved = Path(result).resolve()
        return ToolchainStatus(
            executable=executable,
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return ToolchainStatus(
        executable=executable,
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(executable),
    )


def require_toolchain(executable: str = "cargo") -> Path:
    """Locate *executable* or raise :class:`ToolchainNotFoundError`.

    Used as a pre-flight check before running a Rust tool so a missing
    toolchain is reported with install guidance instead of a bare
    spawn failure.
    """
    status = detect_toolchain(executable)
    if not status.found or status.path is None:
        raise ToolchainNotFoundError(
            f"{executable} is not installed or not on PATH.",
            hint=status.install_hint,
        )
    return status.path


def install_hint_for(executable: str) -> str | None:
    """Return install guidance for *executable*, or ``None`` if unknown."""
    return _format_hint(executable, _platform_install_commands(executable))


def _format_hint(executable: str, commands: tuple[str, ...]) -> str | None:
    if not commands:
        return None
    lines = [f"Install {executable} using one of:"]
    lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands(executable: str = "cargo") -> tuple[str, ...]:
    """Return install commands appropriate for the current OS.

    Only the Rust toolchain has known guidance; other executables get
    an empty tuple.
    """
    if executable not in RUST_TOOLS:
        return ()
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Rustlang.Rustup",
            "choco install rustup.install",
        )
    if system in ("linux", "darwin"):
        return ("curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh",)
    return ("Please install Rust from https://rustup.rs",)
