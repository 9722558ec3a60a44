"""Core gallery service — list, pick and fetch one image from a folder.

This service delegates all backend work to a
:class:`~box_ascii.core.protocols.StorageProvider` injected at
construction time.  It is responsible for:

* Filtering the listing down to renderable images.
* Picking one image with a caller-supplied random source.
* Ensuring only :class:`~box_ascii.exceptions.BoxAsciiError` subclasses
  escape.

Guarantees
----------
* Pure orchestration: no I/O of its own, no ``print()``.
* No httpx import.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import Any

from box_ascii.core.models import FolderItem
from box_ascii.core.protocols import StorageProvider
from box_ascii.core.selection import choose_random, filter_image_items
from box_ascii.exceptions import BoxApiError, BoxAsciiError, EmptyResultError

logger = logging.getLogger(__name__)


class GalleryService:
    """Stateless service over a storage backend.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`StorageProvider` protocol.
    """

    def __init__(self, provider: StorageProvider) -> None:
        self._provider: StorageProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_images(self, folder_id: str) -> list[FolderItem]:
        """Return the image files in *folder_id*, in listing order.

        Raises
        ------
        BoxApiError
            If the backend listing fails.
        """
        if not folder_id.strip():
            raise BoxApiError("Folder ID must not be empty.")

        try:
            items = self._provider.list_folder_items(folder_id)
        except BoxAsciiError:
            raise
        except Exception as exc:
            raise BoxApiError(f"Unexpected listing error: {exc}") from exc

        images = filter_image_items(items)
        logger.debug(
            "folder %s: %d items, %d images", folder_id, len(items), len(images),
        )
        return images

    @staticmethod
    def pick_image(items: list[FolderItem], rng: random.Random) -> FolderItem:
        """Pick one image with *rng*.

        Raises
        ------
        EmptyResultError
            If *items* is empty.
        """
        chosen = choose_random(items, rng)
        if chosen is None:
            raise EmptyResultError(
                "No images found in the specified folder.",
                hint="Supported extensions: jpg, jpeg, png, gif.",
            )
        return chosen

    def pick_random_image(
        self,
        folder_id: str,
        rng: random.Random,
    ) -> FolderItem:
        """List *folder_id* and pick one image from it."""
        return self.pick_image(self.list_images(folder_id), rng)

    def fetch_image(
        self,
        item: FolderItem,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> bytes:
        """Download the bytes of *item*.

        Raises
        ------
        BoxApiError
            When the download fails for any reason.
        """
        try:
            data = self._provider.download_file(
                item.id,
                progress_callback=progress_callback,
                label=item.name,
            )
        except BoxAsciiError:
            raise
        except Exception as exc:
            raise BoxApiError(f"Unexpected download error: {exc}") from exc

        logger.debug("downloaded %s (%d bytes)", item.name, len(data))
        return data
