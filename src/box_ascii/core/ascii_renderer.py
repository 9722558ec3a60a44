"""Pixel-to-glyph rendering.

Each pixel becomes one glyph from :data:`GLYPH_RAMP`, picked by the
unweighted mean of its three channels, and is wrapped in a foreground
color escape carrying the pixel's own RGB value.

Luminance is intentionally ``(r + g + b) // 3`` rather than a perceptual
weighting; changing it changes which glyph every pixel gets.
"""

from __future__ import annotations

from functools import lru_cache

from rich.color import Color, ColorSystem
from rich.style import Style

from box_ascii.core.models import Pixel, PixelGrid, RenderedImage

GLYPH_RAMP: str = " .:-=+*#%@"
"""Glyphs from lowest to highest visual density."""


# ---------------------------------------------------------------------------
# Per-pixel mapping (pure)
# ---------------------------------------------------------------------------

def luminance(pixel: Pixel) -> int:
    r, g, b = pixel
    return (r + g + b) // 3


def glyph_index(lum: int, max_value: int, ramp_length: int = len(GLYPH_RAMP)) -> int:
    """Map *lum* linearly onto ``[0, ramp_length - 1]``, clamped."""
    index = lum * (ramp_length - 1) // max_value
    return max(0, min(ramp_length - 1, index))


def glyph_for(pixel: Pixel, max_value: int = 255) -> str:
    return GLYPH_RAMP[glyph_index(luminance(pixel), max_value)]


def to_8bit(value: int, max_value: int) -> int:
    """Scale a channel from the grid's native depth down to 0..255."""
    if max_value == 255:
        scaled = value
    else:
        scaled = value * 255 // max_value
    return max(0, min(255, scaled))


@lru_cache(maxsize=4096)
def _foreground(r: int, g: int, b: int, color_system: ColorSystem) -> Style:
    # Style memoizes its ANSI codes on first render, so one Style per mode.
    return Style(color=Color.from_rgb(r, g, b).downgrade(color_system))


def colorize(
    glyph: str,
    rgb: Pixel,
    color_system: ColorSystem | None = ColorSystem.TRUECOLOR,
) -> str:
    """Wrap *glyph* in an ANSI foreground escape for the 8-bit *rgb*.

    ``color_system=None`` returns the glyph unchanged.
    """
    if color_system is None:
        return glyph
    r, g, b = rgb
    return _foreground(r, g, b, color_system).render(glyph, color_system=color_system)


# ---------------------------------------------------------------------------
# Grid rendering
# ---------------------------------------------------------------------------

def render_row(
    row: tuple[Pixel, ...],
    max_value: int,
    color_system: ColorSystem | None = ColorSystem.TRUECOLOR,
) -> str:
    cells: list[str] = []
    for pixel in row:
        glyph = glyph_for(pixel, max_value)
        rgb = (
            to_8bit(pixel[0], max_value),
            to_8bit(pixel[1], max_value),
            to_8bit(pixel[2], max_value),
        )
        cells.append(colorize(glyph, rgb, color_system))
    return "".join(cells)


def render(
    grid: PixelGrid,
    *,
    color_system: ColorSystem | None = ColorSystem.TRUECOLOR,
) -> RenderedImage:
    """Render *grid* row-major into colorized glyph lines.

    The result always has ``grid.height`` lines of ``grid.width`` glyphs.
    """
    lines = tuple(
        render_row(row, grid.max_value, color_system) for row in grid.pixels
    )
    return RenderedImage(lines=lines, width=grid.width, height=grid.height)
