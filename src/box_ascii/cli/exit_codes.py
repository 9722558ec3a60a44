"""Exit-code constants used by the CLI layer.

Every exit path uses one of these well-known, tested values.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: the image was rendered, or help/diagnostics completed."""

GENERAL_ERROR: int = 1
"""A known BoxAsciiError was caught. User-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
