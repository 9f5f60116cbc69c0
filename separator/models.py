"""
Data Models
===========
Pydantic models for separation results.
All models serialize to JSON via model_dump().
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field


def index_runs(indices: list[int]) -> list[tuple[int, int]]:
    """
    Collapse ascending indices into inclusive runs of consecutive values.

    [0, 1, 2, 5] -> [(0, 2), (5, 5)]
    """
    runs: list[tuple[int, int]] = []
    for index in indices:
        if runs and index == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], index)
        else:
            runs.append((index, index))
    return runs


# ─── Metadata Models ──────────────────────────────────────────────────────────


class ImageMetadata(BaseModel):
    """Metadata about the source image."""
    source_path: str = ""
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
    file_hash: str = ""
    file_size_bytes: int = 0


class AnalysisVersion(BaseModel):
    """Version and graph statistics for an analysis run."""
    separator_version: str = "1.0.0"
    analysis_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    vertex_count: int = 0
    edge_count: int = 0
    whitespace_color: int = 0xFFFFFFFF


# ─── Result Model ─────────────────────────────────────────────────────────────


class SeparationResult(BaseModel):
    """
    Complete output of one image analysis.
    Row and column indices are ascending.
    """
    image: ImageMetadata
    version: AnalysisVersion = Field(default_factory=AnalysisVersion)
    rows: list[int] = Field(default_factory=list)
    columns: list[int] = Field(default_factory=list)

    @computed_field
    @property
    def row_count(self) -> int:
        return len(self.rows)

    @computed_field
    @property
    def column_count(self) -> int:
        return len(self.columns)

    @computed_field
    @property
    def row_runs(self) -> list[tuple[int, int]]:
        """Horizontal gaps, e.g. the space between text lines."""
        return index_runs(self.rows)

    @computed_field
    @property
    def column_runs(self) -> list[tuple[int, int]]:
        """Vertical gaps, e.g. the space between characters."""
        return index_runs(self.columns)
