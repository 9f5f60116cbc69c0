"""
Bitmap Loader
=============
Decodes raster images with PyMuPDF (fitz) into a row-major matrix of
packed ARGB integers:

    (alpha << 24) | (red << 16) | (green << 8) | blue

Images without an alpha channel are treated as fully opaque, so plain
white reads as 0xFFFFFFFF.
"""

from __future__ import annotations

import logging
import os

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


class ImageLoadError(RuntimeError):
    """Raised when an image file is missing or cannot be decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load image {path}: {reason}")
        self.path = path
        self.reason = reason


def open_rgb_pixmap(path: str) -> fitz.Pixmap:
    """
    Open an image file as an RGB pixmap (alpha kept if present).

    Raises:
        ImageLoadError: If the file is missing or not a decodable image.
    """
    if not os.path.isfile(path):
        raise ImageLoadError(path, "file not found")

    try:
        pix = fitz.Pixmap(path)
    except Exception as e:
        raise ImageLoadError(path, str(e)) from e

    if pix.colorspace is None:
        raise ImageLoadError(path, "image has no color channels")

    # Gray, CMYK, indexed...
    if pix.colorspace.n != 3:
        logger.debug(
            f"Converting {os.path.basename(path)} from "
            f"{pix.colorspace.name} to RGB"
        )
        pix = fitz.Pixmap(fitz.csRGB, pix)

    return pix


def load_pixel_matrix(path: str) -> list[list[int]]:
    """
    Load an image as a height x width matrix of ARGB values.

    Raises:
        ImageLoadError: If the image cannot be loaded.
    """
    pix = open_rgb_pixmap(path)
    width, height = pix.width, pix.height
    n, stride, has_alpha = pix.n, pix.stride, bool(pix.alpha)
    samples = pix.samples

    matrix: list[list[int]] = []
    for y in range(height):
        offset = y * stride
        row = []
        for _ in range(width):
            r, g, b = samples[offset], samples[offset + 1], samples[offset + 2]
            a = samples[offset + 3] if has_alpha else 0xFF
            row.append((a << 24) | (r << 16) | (g << 8) | b)
            offset += n
        matrix.append(row)

    logger.debug(f"Loaded {width}x{height} pixel matrix from {path}")
    return matrix


def image_size(path: str) -> tuple[int, int]:
    """(width, height) of an image file."""
    pix = open_rgb_pixmap(path)
    return pix.width, pix.height
