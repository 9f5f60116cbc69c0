"""
Character Separator
===================
Whitespace row/column detection for bitmap images of text.

Architecture:
    - Weighted Graph: Directed graph with Dijkstra shortest paths
    - Pixel Analyzer: Encodes the pixel grid as a graph and classifies
      rows/columns whose cheapest crossing is pure whitespace
    - Bitmap Loader: Decodes images into ARGB matrices (PyMuPDF)
    - Overlay: Paints detected separators for visual checking
    - Engine / CLI: Orchestration, JSON output and command line

Version: 1.0.0
"""

__version__ = "1.0.0"
