"""Pixel grids backed by numpy arrays.

`PixelSource` and `PixelSink` describe what the builder and the compositor
need from an image; `PixelGrid` implements both over an ``(height, width, 3)``
``uint8`` array.
"""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple

import numpy as np

RGB = Tuple[int, int, int]


class PixelSource(Protocol):
    """Read access to an RGB grid addressed by ``(x, y)``."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get(self, x: int, y: int) -> RGB: ...


class PixelSink(PixelSource, Protocol):
    """Read/write access to an RGB grid addressed by ``(x, y)``."""

    def set(self, x: int, y: int, rgb: Sequence[int]) -> None: ...


class PixelGrid:
    """RGB pixel grid stored as a ``(height, width, 3)`` ``uint8`` array.

    Args:
        pixels: Array-like of shape ``(height, width, 3)``, or
            ``(height, width, 4)`` whose alpha channel is dropped. Values must
            fit ``[0, 255]``.

    Raises:
        ValueError: If the shape is not an RGB(A) image or values are out of range.
    """

    def __init__(self, pixels) -> None:
        arr = np.asarray(pixels)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(
                f"Pixel array must have shape (height, width, 3), got {arr.shape}"
            )
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Pixel grid must have at least one pixel")
        if arr.dtype != np.uint8:
            if arr.size and (arr.min() < 0 or arr.max() > 255):
                raise ValueError("Pixel channel values must lie in [0, 255]")
            arr = arr.astype(np.uint8)
        self._pixels = np.array(arr[:, :, :3], dtype=np.uint8)

    @classmethod
    def blank(cls, width: int, height: int) -> PixelGrid:
        """Return a black grid of the given size."""
        return cls(np.zeros((height, width, 3), dtype=np.uint8))

    @classmethod
    def filled(cls, width: int, height: int, rgb: Sequence[int]) -> PixelGrid:
        """Return a grid where every pixel has color ``rgb``."""
        arr = np.empty((height, width, 3), dtype=np.uint8)
        arr[:, :] = rgb
        return cls(arr)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """``(width, height)``."""
        return self.width, self.height

    @property
    def array(self) -> np.ndarray:
        """Underlying ``(height, width, 3)`` array (not a copy)."""
        return self._pixels

    def get(self, x: int, y: int) -> RGB:
        r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def set(self, x: int, y: int, rgb: Sequence[int]) -> None:
        self._pixels[y, x] = rgb[:3]

    def copy(self) -> PixelGrid:
        return PixelGrid(self._pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"


def as_array(image: PixelSource) -> np.ndarray:
    """Return an ``(height, width, 3)`` ``int32`` array for any pixel source."""
    if isinstance(image, PixelGrid):
        return image.array.astype(np.int32)
    arr = np.empty((image.height, image.width, 3), dtype=np.int32)
    for y in range(image.height):
        for x in range(image.width):
            arr[y, x] = image.get(x, y)
    return arr
