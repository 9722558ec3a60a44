"""Allow ``python -m box_ascii`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m box_ascii`` behaves identically to the ``box-ascii``
console script.
"""

from __future__ import annotations

from box_ascii.cli.app import cli

if __name__ == "__main__":
    cli()
