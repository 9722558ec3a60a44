"""Custom exception hierarchy for box-ascii.

All exceptions that cross layer boundaries must inherit from
:class:`BoxAsciiError`.  Raw third-party exceptions (httpx, Pillow,
cryptography, PyJWT, pydantic) must never propagate beyond the
infrastructure or config layer; they are caught there and re-raised as
a typed subclass defined here, chained with ``from exc``.

Hierarchy
---------
BoxAsciiError
├── KeyFormatError
├── AuthError
├── ImageDecodeError
├── EmptyResultError
├── BoxApiError
└── ConfigError
"""

from __future__ import annotations


class BoxAsciiError(Exception):
    """Base exception for all box-ascii errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Credentials / token exchange -------------------------------------------

class KeyFormatError(BoxAsciiError):
    """Raised when a private key cannot be parsed or is not RSA."""


class AuthError(BoxAsciiError):
    """Raised when the token exchange fails or returns a malformed body."""


# --- Box API -----------------------------------------------------------------

class BoxApiError(BoxAsciiError):
    """Raised when a folder listing or file download request fails."""


class EmptyResultError(BoxAsciiError):
    """Raised when a folder holds no renderable images."""


# --- Imaging -----------------------------------------------------------------

class ImageDecodeError(BoxAsciiError):
    """Raised for empty, malformed, or unsupported image payloads."""


# --- Configuration -----------------------------------------------------------

class ConfigError(BoxAsciiError):
    """Raised when the Box app config file is missing or invalid."""
