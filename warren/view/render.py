"""Pixel sinks: where generation stages report their tile writes.

The generator never reads from a sink. A sink only mirrors tile changes as
coloured pixels, so a host can animate generation or save the result as an
image.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np
from PIL import Image as PILImage

from warren.environment.tile_types import get_color_map

if TYPE_CHECKING:
    from warren.environment.grid import Grid
    from warren.types import RGB

logger = logging.getLogger(__name__)


@runtime_checkable
class PixelSink(Protocol):
    """Receives pixels in grid coordinates (origin at the bottom-left)."""

    def set_pixel(self, x: int, y: int, color: RGB) -> None: ...

    def apply(self) -> None:
        """Present the pixels received since the last call."""
        ...


class NullPixelSink:
    """Discards everything."""

    def set_pixel(self, x: int, y: int, color: RGB) -> None:
        pass

    def apply(self) -> None:
        pass


def _to_image(pixels: np.ndarray, scale: int) -> PILImage.Image:
    """Convert an (x, y, 3) bottom-left-origin buffer into a Pillow image."""
    if scale < 1:
        raise ValueError(f"Image scale must be >= 1, got {scale}")
    # Pillow wants rows top-down.
    rows = np.ascontiguousarray(np.flipud(pixels.transpose(1, 0, 2)))
    image = PILImage.fromarray(rows)
    if scale > 1:
        image = image.resize(
            (image.width * scale, image.height * scale), PILImage.Resampling.NEAREST
        )
    return image


class ImagePixelSink:
    """Keeps an RGB pixel buffer that can be saved as an image.

    Attributes:
        frames: Number of times ``apply()`` has been called. A host animating
            generation would present one frame per call.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.pixels = np.zeros((width, height, 3), dtype=np.uint8)
        self.frames = 0

    def set_pixel(self, x: int, y: int, color: RGB) -> None:
        self.pixels[x, y] = color

    def apply(self) -> None:
        self.frames += 1

    def get_pixel(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[x, y]
        return (int(r), int(g), int(b))

    def to_image(self, scale: int = 1) -> PILImage.Image:
        return _to_image(self.pixels, scale)

    def save(self, path: str | Path, scale: int = 1) -> None:
        self.to_image(scale).save(path)
        logger.info(f"Saved {self.width}x{self.height} image to {path}")


def render_grid(grid: Grid, scale: int = 1) -> PILImage.Image:
    """Render a finished grid straight from its tiles, without a sink."""
    return _to_image(get_color_map(grid.tiles), scale)
