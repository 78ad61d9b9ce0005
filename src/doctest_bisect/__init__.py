"""doctest-bisect — documentation-test runner for ``git bisect run``.

Runs a project's documentation tests through its toolchain and exits
with the toolchain's own status.
"""

from doctest_bisect.version import __version__

__all__: list[str] = ["__version__"]
