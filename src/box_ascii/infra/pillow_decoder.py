"""Pillow-backed implementation of :class:`~box_ascii.core.protocols.ImageDecoder`.

This module is the only place that imports Pillow.  Format detection
is done by Pillow from the content itself, never from a file
extension.  Every Pillow failure is re-raised as
:class:`~box_ascii.exceptions.ImageDecodeError`.
"""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from box_ascii.core.models import Pixel, PixelGrid
from box_ascii.exceptions import ImageDecodeError

logger = logging.getLogger(__name__)

_SIXTEEN_BIT_MAX = 65535


def auto_height(source_width: int, source_height: int, target_width: int) -> int:
    """Height that keeps the source aspect ratio at *target_width* columns."""
    return max(1, int(0.7 + source_height * target_width / source_width))


class PillowImageDecoder:
    """Decode raster bytes and resample them with a Lanczos kernel.

    16-bit grayscale sources keep their native depth
    (``max_value=65535``); everything else is converted to 8-bit RGB.
    Animated formats contribute their first frame.
    """

    def __init__(
        self,
        resample: Image.Resampling = Image.Resampling.LANCZOS,
    ) -> None:
        self._resample = resample

    def decode_and_resize(self, data: bytes, target_width: int) -> PixelGrid:
        """Decode *data* and resample it to *target_width* columns.

        Raises
        ------
        ValueError
            If *target_width* is not positive.
        ImageDecodeError
            For empty, malformed, truncated, or unsupported payloads.
        """
        if target_width <= 0:
            raise ValueError(f"target_width must be positive, got {target_width}")
        if not data:
            raise ImageDecodeError("image payload is empty")

        image = self._open(data)
        height = auto_height(image.width, image.height, target_width)
        logger.debug(
            "decoded %s %dx%d (%s), resizing to %dx%d",
            image.format, image.width, image.height, image.mode,
            target_width, height,
        )

        try:
            if _is_sixteen_bit_gray(image):
                working = image.convert("I").resize(
                    (target_width, height), resample=self._resample,
                )
                return _gray_grid(working)
            working = image.convert("RGB").resize(
                (target_width, height), resample=self._resample,
            )
            return _rgb_grid(working)
        except (OSError, ValueError) as exc:
            raise ImageDecodeError(f"failed to resize image: {exc}") from exc

    @staticmethod
    def _open(data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except UnidentifiedImageError as exc:
            raise ImageDecodeError(
                "unsupported or unrecognised image format",
                hint="Supported formats include JPEG, PNG and GIF.",
            ) from exc
        except Image.DecompressionBombError as exc:
            raise ImageDecodeError(f"image is too large to decode: {exc}") from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise ImageDecodeError(f"failed to decode image: {exc}") from exc
        return image


# ---------------------------------------------------------------------------
# Pixel extraction
# ---------------------------------------------------------------------------

def _is_sixteen_bit_gray(image: Image.Image) -> bool:
    return image.mode.startswith("I;16") or image.mode == "I"


def _rgb_grid(image: Image.Image) -> PixelGrid:
    access = image.load()
    rows: list[tuple[Pixel, ...]] = []
    for y in range(image.height):
        row: list[Pixel] = []
        for x in range(image.width):
            r, g, b = access[x, y]
            row.append((r, g, b))
        rows.append(tuple(row))
    return PixelGrid(
        width=image.width,
        height=image.height,
        pixels=tuple(rows),
        max_value=255,
    )


def _gray_grid(image: Image.Image) -> PixelGrid:
    access = image.load()
    rows: list[tuple[Pixel, ...]] = []
    for y in range(image.height):
        row: list[Pixel] = []
        for x in range(image.width):
            value = max(0, min(_SIXTEEN_BIT_MAX, int(access[x, y])))
            row.append((value, value, value))
        rows.append(tuple(row))
    return PixelGrid(
        width=image.width,
        height=image.height,
        pixels=tuple(rows),
        max_value=_SIXTEEN_BIT_MAX,
    )
