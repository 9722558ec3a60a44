"""Pure folder-item filtering and random selection.

Every function in this module is a pure transformation: no I/O and no
hidden global state.  Randomness comes from an explicitly passed
:class:`random.Random`, so a fixed seed gives a reproducible pick.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from box_ascii.core.models import FolderItem

IMAGE_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif"})


def is_image_item(item: FolderItem) -> bool:
    """A file whose extension names a supported raster format."""
    return item.type == "file" and item.extension.lower() in IMAGE_EXTENSIONS


def filter_image_items(items: Sequence[FolderItem]) -> list[FolderItem]:
    """Keep only image files, preserving listing order."""
    return [item for item in items if is_image_item(item)]


def choose_random(
    items: Sequence[FolderItem],
    rng: random.Random,
) -> FolderItem | None:
    """Return one element of *items* chosen by *rng*, or ``None`` if empty."""
    if not items:
        return None
    return items[rng.randrange(len(items))]
