"""
Pixel Separation Analyzer
=========================
Finds whitespace rows and columns in a bitmap of text by turning the pixel
grid into a weighted graph and running two shortest-path searches.

Graph encoding:
    - one vertex per pixel (row, col)
    - edges to the up/down/left/right neighbors, weight 1 when both pixels
      are whitespace and 100 otherwise
    - HORIZONTAL_SOURCE -> every pixel in column 0, weight 0
    - VERTICAL_SOURCE   -> every pixel in row 0, weight 0

A row i is whitespace when the distance from HORIZONTAL_SOURCE to
(i, cols - 1) is exactly cols - 1, i.e. the cheapest way across is made
only of whitespace steps. Columns are the same from VERTICAL_SOURCE to
(rows - 1, j).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from .graph import WeightedGraph

logger = logging.getLogger(__name__)

# Opaque white as a packed ARGB value
WHITESPACE = 0xFFFFFFFF

WHITESPACE_WEIGHT = 1
INK_WEIGHT = 100

# Coordinates are never negative, so these cannot collide with a pixel
HORIZONTAL_SOURCE = (-1, -1)
VERTICAL_SOURCE = (-2, -2)

Pixel = tuple[int, int]
PixelMatrix = Sequence[Sequence[int]]


class PixelSeparationAnalyzer:
    """
    Classifies rows and columns of a pixel matrix as whitespace.

    Builds exactly one graph per call and runs exactly two shortest-path
    searches, whatever the image size.
    """

    def __init__(self, whitespace_color: int = WHITESPACE):
        self.whitespace_color = whitespace_color
        self.last_graph_size: Optional[tuple[int, int]] = None

    def find_separation(
        self, matrix: PixelMatrix
    ) -> tuple[list[int], list[int]]:
        """
        Detect whitespace rows and columns.

        Args:
            matrix: Row-major grid of color values. Only read.

        Returns:
            (rows, columns), both ascending.
        """
        rows = len(matrix)
        cols = len(matrix[0]) if rows else 0

        graph = self.build_graph(matrix)
        self.last_graph_size = (graph.vertex_count(), graph.edge_count())
        logger.debug(
            f"Pixel graph for {rows}x{cols} image: "
            f"{graph.vertex_count()} vertices, {graph.edge_count()} edges"
        )

        horizontal = graph.shortest_paths(HORIZONTAL_SOURCE)
        vertical = graph.shortest_paths(VERTICAL_SOURCE)

        whitespace_rows = [
            i for i in range(rows)
            if horizontal.get((i, cols - 1)) == cols - 1
        ]
        whitespace_cols = [
            j for j in range(cols)
            if vertical.get((rows - 1, j)) == rows - 1
        ]

        logger.info(
            f"Found {len(whitespace_rows)} row separations and "
            f"{len(whitespace_cols)} column separations"
        )
        return whitespace_rows, whitespace_cols

    def build_graph(self, matrix: PixelMatrix) -> WeightedGraph[Pixel]:
        """Pixel grid graph plus the two synthetic sources."""
        rows = len(matrix)
        cols = len(matrix[0]) if rows else 0

        pixels = [(i, j) for i in range(rows) for j in range(cols)]
        graph: WeightedGraph[Pixel] = WeightedGraph(pixels)
        graph.add_vertex(HORIZONTAL_SOURCE)
        graph.add_vertex(VERTICAL_SOURCE)

        for i, j in pixels:
            pixel = (i, j)
            for di, dj in ((0, -1), (0, 1), (-1, 0), (1, 0)):
                ni, nj = i + di, j + dj
                if 0 <= ni < rows and 0 <= nj < cols:
                    neighbor = (ni, nj)
                    graph.add_edge(
                        pixel, neighbor, self._weight(pixel, neighbor, matrix)
                    )

            if j == 0:
                graph.add_edge(HORIZONTAL_SOURCE, pixel, 0)
            if i == 0:
                graph.add_edge(VERTICAL_SOURCE, pixel, 0)

        return graph

    def _weight(self, a: Pixel, b: Pixel, matrix: PixelMatrix) -> int:
        """Cheap between two whitespace pixels, expensive otherwise."""
        if (
            matrix[a[0]][a[1]] == self.whitespace_color
            and matrix[b[0]][b[1]] == self.whitespace_color
        ):
            return WHITESPACE_WEIGHT
        return INK_WEIGHT


def find_separation(
    matrix: PixelMatrix, whitespace_color: int = WHITESPACE
) -> tuple[list[int], list[int]]:
    """Shortcut for PixelSeparationAnalyzer(whitespace_color).find_separation."""
    return PixelSeparationAnalyzer(whitespace_color).find_separation(matrix)
