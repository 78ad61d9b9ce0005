"""Exit-code constants used by the CLI layer.

A failing documentation-test command is not listed here: its own exit
status is propagated unchanged.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — the command succeeded."""

GENERAL_ERROR: int = 1
"""A known DoctestBisectError was caught. User-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

COMMAND_NOT_FOUND: int = 127
"""The command could not be resolved.  Same value a POSIX shell uses."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
