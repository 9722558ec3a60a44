"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from box_ascii.core.models import FolderItem, PixelGrid


class StorageProvider(Protocol):
    """Contract for an authorized cloud-storage backend.

    Any object that implements these methods satisfies the protocol
    structurally (no explicit inheritance required).  Implementations
    must map backend-specific exceptions to
    :class:`~box_ascii.exceptions.BoxAsciiError` subclasses.
    """

    def list_folder_items(self, folder_id: str) -> list[FolderItem]:
        """Return every item in *folder_id*.

        Raises
        ------
        BoxApiError
            When the listing request fails or the payload is malformed.
        """
        ...  # pragma: no cover

    def download_file(
        self,
        file_id: str,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
        label: str | None = None,
    ) -> bytes:
        """Return the full content of *file_id*.

        Parameters
        ----------
        file_id:
            Backend identifier of the file.
        progress_callback:
            Optional callable invoked with progress dicts carrying
            ``status``, ``downloaded_bytes``, ``total_bytes`` and
            ``filename``.
        label:
            Display name reported as ``filename``; defaults to *file_id*.

        Raises
        ------
        BoxApiError
            When the download fails for any reason.
        """
        ...  # pragma: no cover


class ImageDecoder(Protocol):
    """Contract for raster decoding plus aspect-preserving resize."""

    def decode_and_resize(self, data: bytes, target_width: int) -> PixelGrid:
        """Decode *data* and resample it to *target_width* columns.

        Raises
        ------
        ImageDecodeError
            For empty, malformed, or unsupported payloads.
        """
        ...  # pragma: no cover
