"""Tests for the subprocess executor (infra/subprocess_executor.py).

The child is always the running Python interpreter, never the real
toolchain.

Coverage:
* Exit status passthrough (0, 101).
* Missing executable → ``CommandNotFoundError``.
* Missing working directory → ``InvalidWorkingDirectoryError``.
* Capture mode echoes and collects merged output.
* Signal deaths normalised to ``128 + N``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from doctest_bisect.exceptions import CommandNotFoundError, InvalidWorkingDirectoryError
from doctest_bisect.infra.subprocess_executor import (
    SubprocessExecutor,
    normalize_returncode,
)

from tests.conftest import PYTHON


def _py(code: str) -> list[str]:
    return [PYTHON, "-c", code]


# ---------------------------------------------------------------------------
# Exit status
# ---------------------------------------------------------------------------

class TestExitStatus:
    def test_zero(self) -> None:
        code, output = SubprocessExecutor().execute(_py("pass"))
        assert code == 0
        assert output is None

    def test_test_failure_code_passes_through(self) -> None:
        code, _ = SubprocessExecutor().execute(_py("import sys; sys.exit(101)"))
        assert code == 101

    def test_same_code_twice(self) -> None:
        executor = SubprocessExecutor()
        argv = _py("import sys; sys.exit(3)")
        assert executor.execute(argv)[0] == executor.execute(argv)[0] == 3

    def test_cwd_is_used(self, tmp_path: Path) -> None:
        marker = tmp_path / "marker.txt"
        marker.write_text("x")
        code, _ = SubprocessExecutor().execute(
            _py("import os, sys; sys.exit(0 if os.path.exists('marker.txt') else 1)"),
            cwd=tmp_path,
        )
        assert code == 0


# ---------------------------------------------------------------------------
# Spawn failures
# ---------------------------------------------------------------------------

class TestSpawnFailures:
    @pytest.mark.parametrize("capture", [False, True])
    def test_missing_executable(self, capture: bool) -> None:
        with pytest.raises(CommandNotFoundError, match="command not found"):
            SubprocessExecutor().execute(
                ["doctest-bisect-no-such-binary-xyz"], capture=capture,
            )

    @patch("doctest_bisect.infra.subprocess_executor.subprocess.Popen")
    def test_missing_cargo_carries_install_hint(self, mock_popen: MagicMock) -> None:
        mock_popen.side_effect = FileNotFoundError(2, "No such file", "cargo")
        with pytest.raises(CommandNotFoundError) as exc_info:
            SubprocessExecutor().execute(["cargo", "test", "--doc"])
        assert exc_info.value.hint is not None
        assert "Install cargo" in exc_info.value.hint

    @patch("doctest_bisect.infra.subprocess_executor.subprocess.Popen")
    def test_permission_error_mapped(self, mock_popen: MagicMock) -> None:
        original = PermissionError(13, "Permission denied")
        mock_popen.side_effect = original
        with pytest.raises(CommandNotFoundError) as exc_info:
            SubprocessExecutor().execute(["./not-executable"])
        assert exc_info.value.__cause__ is original

    def test_missing_cwd(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidWorkingDirectoryError):
            SubprocessExecutor().execute(_py("pass"), cwd=tmp_path / "nope")

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX exec semantics")
    @pytest.mark.parametrize("capture", [False, True])
    def test_exec_format_error_mapped(self, tmp_path: Path, capture: bool) -> None:
        binary = tmp_path / "cargo-corrupt"
        binary.write_bytes(b"\x00\x01garbage")
        binary.chmod(0o755)
        with pytest.raises(CommandNotFoundError, match="cannot execute") as exc_info:
            SubprocessExecutor().execute([str(binary), "test", "--doc"], capture=capture)
        assert isinstance(exc_info.value.__cause__, OSError)

    @patch("doctest_bisect.infra.subprocess_executor.subprocess.Popen")
    def test_other_os_error_mapped(self, mock_popen: MagicMock) -> None:
        mock_popen.side_effect = NotADirectoryError(20, "Not a directory", "bin/cargo")
        with pytest.raises(CommandNotFoundError, match="Not a directory"):
            SubprocessExecutor().execute(["bin/cargo", "test", "--doc"])

    @patch("doctest_bisect.infra.subprocess_executor.subprocess.Popen")
    def test_unenterable_cwd_is_not_command_not_found(
        self, mock_popen: MagicMock, tmp_path: Path,
    ) -> None:
        mock_popen.side_effect = PermissionError(13, "Permission denied", str(tmp_path))
        with pytest.raises(InvalidWorkingDirectoryError, match="not accessible"):
            SubprocessExecutor().execute(["cargo", "test", "--doc"], cwd=tmp_path)

    @patch("doctest_bisect.infra.subprocess_executor.os.access", return_value=False)
    @patch("doctest_bisect.infra.subprocess_executor.subprocess.Popen")
    def test_unenterable_cwd_detected_by_access_check(
        self, mock_popen: MagicMock, _mock_access: MagicMock, tmp_path: Path,
    ) -> None:
        mock_popen.side_effect = PermissionError(13, "Permission denied")
        with pytest.raises(InvalidWorkingDirectoryError):
            SubprocessExecutor().execute(["cargo"], cwd=tmp_path)


# ---------------------------------------------------------------------------
# Capture mode
# ---------------------------------------------------------------------------

class TestCapture:
    def test_output_collected_and_echoed(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code, output = SubprocessExecutor().execute(
            _py(
                "import sys; print('to stdout'); sys.stdout.flush(); "
                "print('to stderr', file=sys.stderr)"
            ),
            capture=True,
        )
        assert code == 0
        assert output is not None
        assert "to stdout" in output
        assert "to stderr" in output
        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stderr" in captured.out

    def test_carriage_returns_preserved(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code, output = SubprocessExecutor().execute(
            _py("import sys; sys.stdout.buffer.write(b'50%\\r100%\\r\\ndone\\n')"),
            capture=True,
        )
        assert code == 0
        assert output == "50%\r100%\r\ndone\n"
        assert "50%\r100%" in capsys.readouterr().out

    def test_capture_keeps_failure_code(self) -> None:
        code, output = SubprocessExecutor().execute(
            _py("import sys; print('boom'); sys.exit(101)"), capture=True,
        )
        assert code == 101
        assert output is not None and "boom" in output


# ---------------------------------------------------------------------------
# Return-code normalisation
# ---------------------------------------------------------------------------

class TestNormalizeReturncode:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(0, 0), (1, 1), (101, 101), (-2, 130), (-9, 137), (-15, 143)],
    )
    def test_values(self, raw: int, expected: int) -> None:
        assert normalize_returncode(raw) == expected

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
    def test_killed_child(self) -> None:
        code, _ = SubprocessExecutor().execute(
            _py("import os, signal; os.kill(os.getpid(), signal.SIGTERM)"),
        )
        assert code == 143
