"""Allow ``python -m doctest_bisect`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m doctest_bisect`` behaves identically to the
``doctest-bisect`` console script.
"""

from __future__ import annotations

from doctest_bisect.cli.app import cli

if __name__ == "__main__":
    cli()
