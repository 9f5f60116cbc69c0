"""
Separation Overlay
==================
Paints detected separators onto a copy of the source image for visual
checking: rows in red, columns in green. Columns are drawn last.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .bitmap import open_rgb_pixmap

logger = logging.getLogger(__name__)

RED = (255, 0, 0)
GREEN = (0, 255, 0)


def render_overlay(
    image_path: str,
    rows: list[int],
    columns: list[int],
    output_path: str,
    row_color: tuple[int, int, int] = RED,
    column_color: tuple[int, int, int] = GREEN,
) -> str:
    """
    Draw separator lines and save the result.

    Args:
        image_path: Source image.
        rows: Whitespace row indices.
        columns: Whitespace column indices.
        output_path: Destination file; the format follows its extension
            (PNG recommended).
        row_color: RGB for rows.
        column_color: RGB for columns.

    Returns:
        The output path.

    Raises:
        ImageLoadError: If the source image cannot be loaded.
    """
    pix = open_rgb_pixmap(image_path)
    width, height = pix.width, pix.height

    # set_pixel wants one value per channel, alpha included
    opaque = (255,) if pix.alpha else ()
    row_value = tuple(row_color) + opaque
    column_value = tuple(column_color) + opaque

    for y in rows:
        for x in range(width):
            pix.set_pixel(x, y, row_value)

    for x in columns:
        for y in range(height):
            pix.set_pixel(x, y, column_value)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    pix.save(output_path)
    logger.info(
        f"Saved overlay with {len(rows)} rows and {len(columns)} columns: "
        f"{output_path}"
    )
    return output_path
