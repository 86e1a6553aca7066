"""PNG export of 8-bit RGB pixel buffers via Pillow."""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def save_png(pixels: npt.NDArray[np.uint8], filepath: str | os.PathLike[str]) -> None:
    """Save a pixel buffer as a PNG file.

    The buffer is written as-is; no tone mapping or gamma correction is
    applied.

    Args:
        pixels: Array of shape (height, width, 3).
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the buffer does not have shape (height, width, 3).
        OSError: If the file cannot be written.
    """
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Pixel buffer must have shape (height, width, 3), got {pixels.shape}")

    image_uint8 = np.ascontiguousarray(pixels, dtype=np.uint8)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath, format="PNG")
