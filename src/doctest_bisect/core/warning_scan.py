"""Detect compiler warnings that are reported more than once.

The documentation-test runner has regressed in the past by printing the
same warning twice.  This module works on captured text only; it never
runs anything.

Block grammar
-------------
A diagnostic block starts at a ``warning:`` or ``error:`` header (an
optional lint code in brackets is allowed) and ends at a blank line or
the next header.  The first ``--> path:line:col`` marker inside a
warning block is its location.
"""

from __future__ import annotations

import re

from doctest_bisect.core.models import WarningOccurrence

_HEADER_RE = re.compile(r"^(?P<kind>warning|error)(?:\[[^\]]*\])?:\s*(?P<text>.*)$")
_LOCATION_RE = re.compile(r"^\s*-->\s*(?P<location>\S+)")
_SUMMARY_RE = re.compile(
    r"generated \d+ warnings?"
    r"|\d+ warnings? emitted"
    r"|^build failed"
)


def _is_summary(text: str) -> bool:
    return _SUMMARY_RE.search(text) is not None


def find_duplicate_warnings(output: str) -> list[WarningOccurrence]:
    """Return warnings that appear more than once in *output*.

    Entries are keyed by ``(message, location)`` and returned in order
    of first appearance.  Cargo's per-crate summary lines are ignored.
    """
    counts: dict[tuple[str, str | None], int] = {}
    message: str | None = None
    location: str | None = None

    def _close() -> None:
        if message is not None:
            key = (message, location)
            counts[key] = counts.get(key, 0) + 1

    for raw_line in output.splitlines():
        line = raw_line.rstrip()
        header = _HEADER_RE.match(line)
        if header is not None:
            _close()
            text = header.group("text").strip()
            if header.group("kind") == "warning" and not _is_summary(text):
                message, location = text, None
            else:
                message, location = None, None
            continue

        if not line:
            _close()
            message, location = None, None
            continue

        if message is not None and location is None:
            marker = _LOCATION_RE.match(line)
            if marker is not None:
                location = marker.group("location")

    _close()

    return [
        WarningOccurrence(message=msg, location=loc, count=count)
        for (msg, loc), count in counts.items()
        if count > 1
    ]
