"""Plain PPM (P3) encoding of 8-bit RGB pixel buffers.

The format is ASCII:

    P3
    <width> <height>
    255
    R G B          <- one line per pixel, row-major from the top row

Example:
    >>> import numpy as np
    >>> from raycaster.output.ppm import encode_ppm
    >>> pixels = np.zeros((1, 2, 3), dtype=np.uint8)
    >>> print(encode_ppm(pixels), end="")
    P3
    2 1
    255
    0 0 0
    0 0 0
"""

from __future__ import annotations

import os
from typing import TextIO

import numpy as np
import numpy.typing as npt

# Maximum channel value written in the header
MAX_COLOR_VALUE = 255


def _check_pixels(pixels: npt.NDArray[np.integer]) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Pixel buffer must have shape (height, width, 3), got {pixels.shape}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ValueError(f"Pixel buffer must not be empty, got {pixels.shape}")


def encode_ppm(pixels: npt.NDArray[np.integer]) -> str:
    """Encode a pixel buffer as plain PPM text.

    Args:
        pixels: Array of shape (height, width, 3). Values are written as
            integers and must already lie in [0, 255].

    Returns:
        The complete PPM document, ending with a newline.

    Raises:
        ValueError: If the buffer does not have shape (height, width, 3).
    """
    pixels = np.asarray(pixels)
    _check_pixels(pixels)

    height, width = pixels.shape[:2]
    lines = ["P3", f"{width} {height}", str(MAX_COLOR_VALUE)]
    for r, g, b in pixels.reshape(-1, 3).tolist():
        lines.append(f"{r} {g} {b}")
    return "\n".join(lines) + "\n"


def write_ppm(
    pixels: npt.NDArray[np.integer],
    destination: str | os.PathLike[str] | TextIO,
) -> None:
    """Write a pixel buffer as plain PPM to a file path or text stream.

    Args:
        pixels: Array of shape (height, width, 3).
        destination: File path, or an open text stream such as sys.stdout.
            Streams are flushed but not closed.

    Raises:
        ValueError: If the buffer does not have shape (height, width, 3).
        OSError: If the destination cannot be opened or written.
    """
    document = encode_ppm(pixels)

    if isinstance(destination, (str, os.PathLike)):
        with open(destination, "w", encoding="ascii", newline="\n") as f:
            f.write(document)
    else:
        destination.write(document)
        destination.flush()
