"""In-memory images to draw on and textures loaded from PNG files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from PIL import Image as _PILImage

_log = logging.getLogger(__name__)


@dataclass
class Image:
    """A width x height canvas of 32-bit RGBA colours."""

    width: int
    height: int
    pixels: List[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = [0] * (self.width * self.height)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; raises IndexError outside the image."""
        self.pixels[self._index(x, y)] = color & 0xFFFFFFFF

    def safe_put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel, silently ignoring coordinates outside the image."""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            _log.debug("pixel (%d, %d) out of bounds", x, y)
            return
        self.pixels[y * self.width + x] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour of one pixel."""
        return self.pixels[self._index(x, y)]


@dataclass(frozen=True)
class Texture:
    """Decoded RGBA pixel data, four bytes per pixel, row by row."""

    width: int
    height: int
    data: bytes = field(repr=False)

    def pixel(self, x: int, y: int) -> int:
        """Return a pixel's four bytes read as a little-endian 32-bit value."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"texel ({x}, {y}) outside {self.width}x{self.height} texture")
        start = (y * self.width + x) * 4
        return int.from_bytes(self.data[start:start + 4], "little")


def load_png(path: Union[str, Path]) -> Texture:
    """Load an image file as an RGBA texture; raises OSError on failure."""
    with _PILImage.open(path) as img:
        rgba = img.convert("RGBA")
        return Texture(rgba.width, rgba.height, rgba.tobytes())