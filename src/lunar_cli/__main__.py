"""Allow ``python -m lunar_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m lunar_cli`` behaves identically to the ``lunar``
console script.
"""

from __future__ import annotations

from lunar_cli.cli.app import cli

if __name__ == "__main__":
    cli()
