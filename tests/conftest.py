"""Shared pytest fixtures and configuration for the doctest-bisect test suite.

Guidelines
----------
* Never spawn the real toolchain; fake the executor or use the running
  Python interpreter as the child.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state (PATH lookups are patched).
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

import pytest

PYTHON: str = sys.executable

SAMPLE_DUPLICATED_OUTPUT: str = """\
   Compiling typed_floats v1.0.0 (/work/typed_floats)
warning: unused import: `core::ops::Neg`
 --> typed_floats/src/lib.rs:12:5
  |
12 | use core::ops::Neg;
  |     ^^^^^^^^^^^^^^
  |
  = note: `#[warn(unused_imports)]` on by default

warning: unused import: `core::ops::Neg`
 --> typed_floats/src/lib.rs:12:5
  |
12 | use core::ops::Neg;
  |     ^^^^^^^^^^^^^^

warning: `typed_floats` (lib doc) generated 2 warnings
    Finished test [unoptimized + debuginfo] target(s) in 0.42s
   Doc-tests typed_floats
test result: ok. 3 passed; 0 failed; 0 ignored; 0 measured; 0 filtered out
"""

SAMPLE_CLEAN_OUTPUT: str = """\
warning: unused import: `core::ops::Neg`
 --> typed_floats/src/lib.rs:12:5
  |
12 | use core::ops::Neg;
  |     ^^^^^^^^^^^^^^

warning: `typed_floats` (lib doc) generated 1 warning
   Doc-tests typed_floats
test result: ok. 3 passed; 0 failed; 0 ignored; 0 measured; 0 filtered out
"""


class FakeExecutor:
    """Records every call and replays a fixed ``(returncode, output)``."""

    def __init__(self, returncode: int = 0, output: str | None = None) -> None:
        self.returncode = returncode
        self.output = output
        self.calls: list[tuple[tuple[str, ...], Path | None, bool]] = []

    def execute(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> tuple[int, str | None]:
        self.calls.append((tuple(argv), cwd, capture))
        return self.returncode, (self.output if capture else None)


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def cargo_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every toolchain lookup succeed without touching the real PATH."""
    monkeypatch.setattr(
        "doctest_bisect.infra.toolchain_detector.shutil.which",
        lambda name: f"/usr/bin/{name}",
    )
