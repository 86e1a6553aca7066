"""Output module for finished pixel buffers.

Components:
    ppm: Plain-text PPM (P3) encoder and writer
    png: PNG export via Pillow

Both consume the (height, width, 3) uint8 buffer produced by the renderer,
with row 0 at the top of the image. Neither module declares Taichi fields,
so this package can be imported before ti.init().
"""

from .png import save_png
from .ppm import encode_ppm, write_ppm

__all__ = [
    "encode_ppm",
    "write_ppm",
    "save_png",
]
