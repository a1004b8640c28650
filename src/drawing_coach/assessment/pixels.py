from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from drawing_coach.data_models import Bounds
from drawing_coach.errors import InvalidInputError


class PixelBuffer:
    """
    Read-only RGBA raster, row-major, one byte per channel.

    Wraps a numpy array of shape (height, width, 4) so region statistics can
    be computed without any windowing or canvas dependency.
    """

    def __init__(self, pixels: np.ndarray):
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != 4:
            raise InvalidInputError(
                f"Pixel buffer must have shape (height, width, 4), got {array.shape}"
            )
        self._pixels = np.array(array, dtype=np.uint8)
        self._pixels.flags.writeable = False

    @classmethod
    def from_rgba_bytes(
        cls, data: bytes | bytearray | Sequence[int], width: int, height: int
    ) -> "PixelBuffer":
        """Build a buffer from contiguous RGBA bytes as captured from a canvas snapshot."""
        flat = np.frombuffer(bytes(data), dtype=np.uint8)
        expected = width * height * 4
        if width <= 0 or height <= 0 or flat.size != expected:
            raise InvalidInputError(
                f"Expected {expected} bytes for a {width}x{height} RGBA buffer, got {flat.size}"
            )
        return cls(flat.reshape(height, width, 4))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        return cls(np.array(image.convert("RGBA")))

    @classmethod
    def open(cls, path: Path | str) -> "PixelBuffer":
        """Read a canvas snapshot from an image file; unreadable files raise `InvalidInputError`."""
        try:
            with Image.open(path) as image:
                return cls.from_image(image)
        except (UnidentifiedImageError, OSError) as exc:
            raise InvalidInputError(f"Cannot read snapshot image {path}: {exc}") from exc

    @classmethod
    def filled(
        cls, width: int, height: int, rgba: Tuple[int, int, int, int] = (255, 255, 255, 255)
    ) -> "PixelBuffer":
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(pixels)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def get(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self._pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def with_region(self, bounds: Bounds, rgba: Tuple[int, int, int, int]) -> "PixelBuffer":
        """Copy of this buffer with the clipped `bounds` painted a solid color."""
        pixels = self._pixels.copy()
        x0, y0, x1, y1 = self.clip(bounds)
        pixels[y0:y1, x0:x1] = rgba
        return PixelBuffer(pixels)

    def clip(self, bounds: Bounds) -> Tuple[int, int, int, int]:
        """Integer pixel window (x0, y0, x1, y1) covered by `bounds`, clipped to the raster."""
        x0 = max(0, math.floor(bounds.x))
        y0 = max(0, math.floor(bounds.y))
        x1 = min(self.width, math.floor(bounds.x + bounds.width))
        y1 = min(self.height, math.floor(bounds.y + bounds.height))
        return x0, y0, max(x0, x1), max(y0, y1)

    def region(self, bounds: Bounds) -> np.ndarray:
        """Pixels inside `bounds` flattened row-major to shape (n, 4)."""
        x0, y0, x1, y1 = self.clip(bounds)
        return self._pixels[y0:y1, x0:x1].reshape(-1, 4)
