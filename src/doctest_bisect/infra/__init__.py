"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: spawning
the toolchain and locating executables on PATH.  Every raw OS exception
is caught here and re-raised as a
:class:`~doctest_bisect.exceptions.DoctestBisectError` subclass.

Rules
-----
* No imports from ``cli``.
* No Rich rendering; the only output is the child's own, passed through.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from doctest_bisect.infra.subprocess_executor import SubprocessExecutor
from doctest_bisect.infra.toolchain_detector import (
    ToolchainStatus,
    detect_toolchain,
    require_toolchain,
)

__all__: list[str] = [
    "SubprocessExecutor",
    "ToolchainStatus",
    "detect_toolchain",
    "require_toolchain",
]
