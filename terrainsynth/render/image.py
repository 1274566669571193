"""Pixel buffer encoding to raster image files."""
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..errors import InvalidResolutionError

logger = logging.getLogger(__name__)


def to_image(buffer: np.ndarray) -> Image.Image:
    """Wrap an RGB pixel buffer [rows, columns, 3] as a Pillow image.

    Image width is the column count and height the row count.
    """
    pixels = np.asarray(buffer)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise InvalidResolutionError(f"Pixel buffer must have shape (rows, columns, 3), got {pixels.shape}")
    # uint8 (rows, columns, 3) arrays map to RGB images
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def save_pixel_buffer(buffer: np.ndarray, path: Union[str, Path]) -> Path:
    """Encode a pixel buffer to disk; the format follows the file extension.

    Errors from Pillow or the filesystem (e.g. a missing directory) are
    raised to the caller unchanged.

    Returns:
        Absolute path of the written file
    """
    path = Path(path).resolve()
    to_image(buffer).save(path)
    logger.info("Wrote %s", path)
    return path
