"""Core / service layer — key parsing, claims, selection and rendering.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Third-party imports only for pure computation: ``cryptography`` and
  ``jwt`` for keys and signing, ``rich.color`` / ``rich.style`` for ANSI
  escape strings. No ``httpx``, no ``PIL``, no ``rich.console``.
* Randomness and time are passed in, never read from hidden globals.
"""

from box_ascii.core.ascii_renderer import GLYPH_RAMP, render
from box_ascii.core.assertion import build_claims, sign_assertion
from box_ascii.core.gallery_service import GalleryService
from box_ascii.core.key_loader import parse_key
from box_ascii.core.models import (
    BearerToken,
    Credentials,
    FolderItem,
    PixelGrid,
    RenderedImage,
)
from box_ascii.core.protocols import ImageDecoder, StorageProvider

__all__: list[str] = [
    "GLYPH_RAMP",
    "BearerToken",
    "Credentials",
    "FolderItem",
    "GalleryService",
    "ImageDecoder",
    "PixelGrid",
    "RenderedImage",
    "StorageProvider",
    "build_claims",
    "parse_key",
    "render",
    "sign_assertion",
]
