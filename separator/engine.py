"""
Separation Engine
=================
Orchestrates loading, analysis and output for a single image.

Usage:
    engine = SeparationEngine(config)
    result = engine.analyze("path/to/text.bmp")
    # result is a SeparationResult with rows, columns and metadata

Architecture:
    Image → load_pixel_matrix → PixelSeparationAnalyzer →
    SeparationResult (JSON) [+ overlay PNG]
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import __version__
from .analyzer import WHITESPACE, PixelSeparationAnalyzer
from .bitmap import load_pixel_matrix
from .models import AnalysisVersion, ImageMetadata, SeparationResult
from .overlay import GREEN, RED, render_overlay

logger = logging.getLogger(__name__)


def _default_output_dir() -> str:
    return os.environ.get("SEPARATOR_OUTPUT_DIR", "output")


def parse_color(text: str) -> int:
    """
    Parse a color value.

    Accepts "0xAARRGGBB", "#RRGGBB" (opaque) or a decimal integer.

    Raises:
        ValueError: If the text is not a valid color.
    """
    value = text.strip()
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) != 6:
            raise ValueError(f"Expected #RRGGBB, got: {text}")
        return 0xFF000000 | int(digits, 16)
    color = int(value, 0)
    if not 0 <= color <= 0xFFFFFFFF:
        raise ValueError(f"Color out of 32-bit range: {text}")
    return color


@dataclass
class SeparatorConfig:
    """Configuration for the separation engine."""

    # Analysis
    whitespace_color: int = WHITESPACE

    # Output settings
    output_dir: str = field(default_factory=_default_output_dir)
    save_json: bool = True
    save_overlay: bool = False
    row_color: tuple[int, int, int] = RED
    column_color: tuple[int, int, int] = GREEN

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


class SeparationEngine:
    """
    Main separation engine.

    Runs the full pipeline:
        1. Image loading
        2. Whitespace row/column detection
        3. Result assembly
        4. Output (JSON, optional overlay)

    Each analyze() call builds its own graph, so one engine can serve
    several threads.
    """

    def __init__(self, config: Optional[SeparatorConfig] = None):
        self.config = config or SeparatorConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        package_logger = logging.getLogger("separator")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(formatter)
            package_logger.addHandler(console)
        else:
            for handler in package_logger.handlers:
                handler.setLevel(log_level)

        # File handler
        if self.config.log_file:
            log_path = Path(self.config.log_file)
            already_attached = any(
                isinstance(h, logging.FileHandler)
                and Path(h.baseFilename) == log_path.resolve()
                for h in package_logger.handlers
            )
            if not already_attached:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path, encoding="utf-8")
                file_handler.setLevel(log_level)
                file_handler.setFormatter(formatter)
                package_logger.addHandler(file_handler)

    def analyze(self, image_path: str) -> SeparationResult:
        """
        Detect whitespace rows and columns in an image file.

        Args:
            image_path: Path to the image (BMP, PNG, ...).

        Returns:
            SeparationResult with ascending row and column indices.

        Raises:
            FileNotFoundError: If the image doesn't exist.
            ImageLoadError: If the image cannot be decoded.
        """
        image_path = os.path.abspath(image_path)

        if not os.path.exists(image_path):
            raise FileNotFoundError(f"Image not found: {image_path}")

        start_time = time.time()
        logger.info(f"Starting analysis of: {image_path}")

        # ── Step 1: Load pixels ───────────────────────────────────────
        matrix = load_pixel_matrix(image_path)
        height = len(matrix)
        width = len(matrix[0]) if height else 0

        # ── Step 2: Detect separators ─────────────────────────────────
        analyzer = PixelSeparationAnalyzer(self.config.whitespace_color)
        rows, columns = analyzer.find_separation(matrix)
        vertex_count, edge_count = analyzer.last_graph_size or (0, 0)

        # ── Step 3: Build result ──────────────────────────────────────
        result = SeparationResult(
            image=ImageMetadata(
                source_path=image_path,
                width=width,
                height=height,
                file_hash=self._compute_file_hash(image_path),
                file_size_bytes=os.path.getsize(image_path),
            ),
            version=AnalysisVersion(
                separator_version=__version__,
                vertex_count=vertex_count,
                edge_count=edge_count,
                whitespace_color=self.config.whitespace_color,
            ),
            rows=rows,
            columns=columns,
        )

        elapsed = time.time() - start_time
        logger.info(
            f"Analysis complete in {elapsed:.2f}s: "
            f"{len(rows)} rows, {len(columns)} columns"
        )

        # ── Step 4: Save output ───────────────────────────────────────
        if self.config.save_json or self.config.save_overlay:
            output_dir = Path(self.config.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            stem = Path(image_path).stem

            if self.config.save_json:
                self._save_json(result, output_dir / f"{stem}_separation.json")

            if self.config.save_overlay:
                self._save_overlay(
                    result, output_dir / f"{stem}_separation.png"
                )

        return result

    def _compute_file_hash(self, filepath: str) -> str:
        """Compute SHA-256 hash of a file."""
        sha256 = hashlib.sha256()
        with open(filepath, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()

    def _save_json(self, result: SeparationResult, filepath: Path):
        """Save SeparationResult to JSON file."""
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(result.model_dump(), f, indent=2, default=str)
            logger.info(f"Saved JSON output: {filepath}")
        except OSError as e:
            logger.error(f"Failed to save JSON: {e}")

    def _save_overlay(self, result: SeparationResult, filepath: Path):
        """Save the separator overlay image."""
        try:
            render_overlay(
                result.image.source_path,
                result.rows,
                result.columns,
                str(filepath),
                row_color=self.config.row_color,
                column_color=self.config.column_color,
            )
        except (OSError, RuntimeError) as e:
            logger.error(f"Failed to save overlay: {e}")
