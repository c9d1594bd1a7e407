"""Image file I/O with Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from seamcut.image.grid import PixelGrid, PixelSource, as_array
from seamcut.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def load_image(path: PathLike) -> PixelGrid:
    """Read an image file and convert it to an RGB `PixelGrid`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        PIL.UnidentifiedImageError: If the file is not a readable image.
    """
    path = Path(path)
    with Image.open(path) as img:
        grid = PixelGrid(np.asarray(img.convert("RGB")))
    logger.debug(f"Loaded {path} ({grid.width}x{grid.height})")
    return grid


def save_image(image: PixelSource, path: PathLike) -> Path:
    """Write ``image`` as an RGB file; the format follows the file suffix.

    Missing parent directories are created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(as_array(image).astype(np.uint8)).save(path)
    logger.debug(f"Saved {path}")
    return path
