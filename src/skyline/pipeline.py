"""Single-run pipeline: activity periods -> composed skyline -> STL file."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from skyline.composer import compose
from skyline.contracts import PeriodInput, SkylineConfig, SkylineResult
from skyline.errors import SkylineError
from skyline.grid import build_grid
from skyline.mesh import Mesh
from skyline.naming import format_year_range
from skyline.relief import build_image
from skyline.solids import build_box
from skyline.stl_io import write_stl
from skyline.text import create_3d_text

logger = logging.getLogger(__name__)


def range_label(periods: Sequence[PeriodInput]) -> str:
    """``"2024"``, ``"2014-24"`` for year labels, else ``"first-last"``."""
    if not periods:
        return ""
    first, last = periods[0].label, periods[-1].label
    if first == last:
        return first
    try:
        return format_year_range(int(first), int(last))
    except ValueError:
        return f"{first}-{last}"


def on_plaque(mesh: Mesh, margin: float, thickness: float) -> Mesh:
    """Put *mesh* on a plate of *thickness* below z=min, *margin* wider on each side."""
    if mesh.is_empty:
        return mesh
    (x0, y0, z0), (x1, y1, _) = mesh.bounds
    plate = build_box(
        x0 - margin,
        y0 - margin,
        z0 - thickness,
        (x1 - x0) + 2 * margin,
        (y1 - y0) + 2 * margin,
        thickness,
    )
    return Mesh.concatenate([plate, mesh])


def build_period_meshes(periods: Sequence[PeriodInput], config: SkylineConfig) -> List[Mesh]:
    """Grid mesh per period, in period order; any failure aborts the run."""

    def _build(period: PeriodInput) -> Mesh:
        mesh = build_grid(period.grid, period.context_max, config.layout)
        logger.debug("Period %s: %d triangles", period.label, len(mesh))
        return mesh

    if config.max_workers > 1 and len(periods) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            return list(pool.map(_build, periods))
    return [_build(period) for period in periods]


def build_label_mesh(config: SkylineConfig, label: str) -> Mesh:
    text = create_3d_text(
        config.username,
        label,
        config.font_size,
        config.text_depth,
        voxel_scale=config.text_voxel_scale,
        font_path=config.font_path,
    )
    return on_plaque(text, config.label_margin, config.layout.base_height)


def build_relief_mesh(config: SkylineConfig) -> Tuple[Optional[Mesh], Optional[str]]:
    """Relief on its plaque, or (None, warning) when the image cannot be used."""
    if not config.image_path:
        return None, None
    try:
        relief = build_image(
            config.image_path,
            config.image_voxel_scale,
            config.image_depth,
            max_size=config.image_max_size,
        )
    except (SkylineError, OSError) as exc:
        message = f"Skipping image relief: {exc}"
        logger.warning(message)
        return None, message
    return on_plaque(relief, config.label_margin, config.layout.base_height), None


def build_skyline_mesh(
    periods: Sequence[PeriodInput],
    config: SkylineConfig,
) -> Tuple[Mesh, SkylineResult]:
    """Compose the full model in memory; the result's output path is not written yet."""
    period_meshes = build_period_meshes(periods, config)
    label = build_label_mesh(config, config.range_label or range_label(periods))
    relief, warning = build_relief_mesh(config)

    mesh = compose(period_meshes, label, relief, gap=config.period_gap)
    result = SkylineResult(
        output_path=Path(config.output_path),
        triangle_count=len(mesh),
        period_triangle_counts=[len(m) for m in period_meshes],
        label_triangle_count=len(label),
        relief_triangle_count=0 if relief is None else len(relief),
        warnings=[warning] if warning else [],
        summary=mesh.summary(),
    )
    return mesh, result


def generate_skyline(periods: Sequence[PeriodInput], config: SkylineConfig) -> SkylineResult:
    """Build every mesh, compose them and write the STL file."""
    started = time.perf_counter()
    logger.info("Generating skyline for %s (%d periods)", config.username, len(periods))

    mesh, result = build_skyline_mesh(periods, config)
    result.output_path = write_stl(mesh, config.output_path)

    logger.info(
        "Skyline done: %d triangles in %.2fs", result.triangle_count,
        time.perf_counter() - started,
    )
    return result
