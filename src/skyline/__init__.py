"""Public API for the contribution skyline geometry pipeline."""

from skyline.contracts import (
    ActivityCell,
    LayoutPolicy,
    PeriodInput,
    SkylineConfig,
    SkylineResult,
)
from skyline.errors import ConfigError, FontError, ImageDecodeError, SkylineError
from skyline.levels import HeightLevel, quantize
from skyline.mesh import Mesh, Triangle
from skyline.pipeline import build_skyline_mesh, generate_skyline

__all__ = [
    "ActivityCell",
    "ConfigError",
    "FontError",
    "HeightLevel",
    "ImageDecodeError",
    "LayoutPolicy",
    "Mesh",
    "PeriodInput",
    "SkylineConfig",
    "SkylineError",
    "SkylineResult",
    "Triangle",
    "build_skyline_mesh",
    "generate_skyline",
    "quantize",
]
