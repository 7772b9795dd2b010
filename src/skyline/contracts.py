"""Contracts for the skyline geometry pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from skyline.errors import ConfigError

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class ActivityCell:
    """One day of activity inside a time bucket."""

    count: int
    date: Optional[str] = None  # ISO YYYY-MM-DD when known
    is_future: bool = False

    def __post_init__(self):
        if self.count < 0:
            raise ConfigError(f"Activity count must be non-negative, got {self.count}")


# Columns (weeks) of cells (days); the final column may be shorter.
ActivityGrid = Sequence[Sequence[ActivityCell]]


@dataclass(frozen=True)
class RenderConfig:
    """Placement and extrusion settings shared by the pixel generators."""

    origin_x: float = 0.0
    origin_y: float = 0.0
    origin_z: float = 0.0
    voxel_scale: float = 1.0
    depth: float = 1.0

    def __post_init__(self):
        if self.voxel_scale <= 0:
            raise ConfigError(f"voxel_scale must be positive, got {self.voxel_scale}")
        if self.depth <= 0:
            raise ConfigError(f"depth must be positive, got {self.depth}")

    @property
    def origin(self) -> Vec3:
        return (float(self.origin_x), float(self.origin_y), float(self.origin_z))


@dataclass(frozen=True)
class TextRenderConfig(RenderConfig):
    """Text rasterization settings."""

    text: str = ""
    label: str = ""
    font_size: float = 10.0       # main text size in canvas pixels
    label_scale: float = 0.75     # secondary label size relative to font_size
    label_gap_px: int = 4
    coverage_threshold: float = 0.5
    font_path: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        if self.font_size <= 0:
            raise ConfigError(f"font_size must be positive, got {self.font_size}")
        if self.label_scale <= 0:
            raise ConfigError(f"label_scale must be positive, got {self.label_scale}")
        if not 0.0 <= self.coverage_threshold < 1.0:
            raise ConfigError(
                f"coverage_threshold must be in [0, 1), got {self.coverage_threshold}"
            )


@dataclass(frozen=True)
class ImageRenderConfig(RenderConfig):
    """Bas-relief settings; ``depth`` is the height of a full-intensity pixel."""

    image_path: str = ""
    max_size: Optional[int] = None  # downsample longest side; None keeps every pixel

    def __post_init__(self):
        super().__post_init__()
        if self.max_size is not None and self.max_size < 1:
            raise ConfigError(f"max_size must be >= 1, got {self.max_size}")


@dataclass(frozen=True)
class LayoutPolicy:
    """Spatial layout of the activity grid (millimetres)."""

    voxel_scale: float = 2.5      # footprint of one cell
    max_height: float = 25.0      # height of a TOP-level cell
    base_height: float = 3.0      # platform thickness
    padding: float = 2.5          # platform margin around the cells
    rows_per_column: int = 7
    origin: Vec3 = (0.0, 0.0, 0.0)
    merge_runs: bool = False

    def __post_init__(self):
        if self.voxel_scale <= 0:
            raise ConfigError(f"voxel_scale must be positive, got {self.voxel_scale}")
        if self.max_height <= 0:
            raise ConfigError(f"max_height must be positive, got {self.max_height}")
        if self.base_height <= 0:
            raise ConfigError(f"base_height must be positive, got {self.base_height}")
        if self.padding < 0:
            raise ConfigError(f"padding must be non-negative, got {self.padding}")
        if self.rows_per_column < 1:
            raise ConfigError(f"rows_per_column must be >= 1, got {self.rows_per_column}")


@dataclass(frozen=True)
class PeriodInput:
    """One time bucket to render (e.g. a calendar year)."""

    grid: ActivityGrid
    label: str
    context_max: Optional[int] = None  # None: use the grid's own maximum


@dataclass(frozen=True)
class SkylineConfig:
    """Everything the pipeline needs for one generation run."""

    username: str
    output_path: str
    layout: LayoutPolicy = field(default_factory=LayoutPolicy)
    font_size: float = 10.0
    text_voxel_scale: float = 0.5
    text_depth: float = 1.0
    label_margin: float = 2.0
    font_path: Optional[str] = None
    range_label: Optional[str] = None  # None: derived from the period labels
    image_path: Optional[str] = None
    image_voxel_scale: float = 0.5
    image_depth: float = 1.5
    image_max_size: Optional[int] = None
    period_gap: float = 0.0
    max_workers: int = 1

    def __post_init__(self):
        if self.text_voxel_scale <= 0 or self.image_voxel_scale <= 0:
            raise ConfigError("Text and image voxel scales must be positive")
        if self.text_depth <= 0 or self.image_depth <= 0:
            raise ConfigError("Text and image depths must be positive")
        if self.label_margin < 0 or self.period_gap < 0:
            raise ConfigError("label_margin and period_gap must be non-negative")
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")


@dataclass
class SkylineResult:
    """Outcome of a generation run."""

    output_path: Path
    triangle_count: int
    period_triangle_counts: List[int]
    label_triangle_count: int
    relief_triangle_count: int = 0
    warnings: List[str] = field(default_factory=list)
    summary: Dict[str, object] = field(default_factory=dict)
