"""Shared Rich console for status output.

Status messages, progress bars, logs and errors all go to **stderr** so
that stdout carries nothing but the rendered image.
"""

from __future__ import annotations

from rich.console import Console


def get_rich_console() -> Console:
    """Create a Rich console instance targeting stderr."""
    return Console(stderr=True)


console = get_rich_console()
