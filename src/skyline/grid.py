"""
Activity grid -> skyline mesh.

Each column (week) becomes a row of prisms along +Y standing on a shared
platform. Inside a column empty days are moved to the front ("sky") and
active days keep their order behind them, so every column rises from the
same back baseline regardless of which weekday was busiest.
"""
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from skyline.contracts import ActivityCell, ActivityGrid, LayoutPolicy
from skyline.levels import context_max_of, level_for_cell, level_height
from skyline.mesh import Mesh
from skyline.solids import build_box, build_boxes

logger = logging.getLogger(__name__)


def column_heights(
    column: Sequence[ActivityCell],
    context_max: int,
    max_height: float,
) -> List[float]:
    """Extrusion height of every cell in source order."""
    return [level_height(level_for_cell(cell, context_max), max_height) for cell in column]


def reorder_column(heights: Sequence[float]) -> List[float]:
    """Stable partition: empty cells first, non-empty cells after in source order."""
    order = sorted(range(len(heights)), key=lambda i: heights[i] > 0)
    return [heights[i] for i in order]


def grid_rows(grid: ActivityGrid, layout: LayoutPolicy) -> int:
    return max([layout.rows_per_column] + [len(column) for column in grid])


def platform_box(grid: ActivityGrid, layout: LayoutPolicy) -> Tuple[np.ndarray, np.ndarray]:
    """(origin, size) of the base platform under the whole grid footprint."""
    s = layout.voxel_scale
    ox, oy, oz = layout.origin
    n_columns = max(len(grid), 1)
    width = n_columns * s + 2 * layout.padding
    depth = grid_rows(grid, layout) * s + 2 * layout.padding
    origin = np.array([ox - layout.padding, oy - layout.padding, oz - layout.base_height])
    size = np.array([width, depth, layout.base_height])
    return origin, size


def _column_runs(heights: Sequence[float], merge: bool) -> List[Tuple[int, int, float]]:
    """(first_slot, slot_count, height) for every prism to emit."""
    runs: List[Tuple[int, int, float]] = []
    for slot, height in enumerate(heights):
        if height <= 0:
            continue
        if merge and runs:
            start, count, run_height = runs[-1]
            if start + count == slot and run_height == height:
                runs[-1] = (start, count + 1, height)
                continue
        runs.append((slot, 1, height))
    return runs


def build_grid(
    grid: ActivityGrid,
    context_max: Optional[int] = None,
    layout: Optional[LayoutPolicy] = None,
) -> Mesh:
    """Build the skyline mesh for one period.

    Args:
        grid: Columns of activity cells in chronological order.
        context_max: Quantization maximum; defaults to the grid's own maximum.
        layout: Spatial layout; defaults to ``LayoutPolicy()``.

    Returns:
        Mesh whose first 12 triangles are the platform, followed by one box
        per non-empty cell (or per merged run when ``layout.merge_runs``).
    """
    if layout is None:
        layout = LayoutPolicy()
    if context_max is None:
        context_max = context_max_of(grid)

    s = layout.voxel_scale
    ox, oy, oz = layout.origin
    rows = grid_rows(grid, layout)

    platform_origin, platform_size = platform_box(grid, layout)
    platform = build_box(*platform_origin, *platform_size)

    origins = []
    sizes = []
    for col_idx, column in enumerate(grid):
        heights = reorder_column(column_heights(column, context_max, layout.max_height))
        # Short (ragged) columns are aligned to the back baseline.
        slot_offset = rows - len(heights)
        for start, count, height in _column_runs(heights, layout.merge_runs):
            origins.append([ox + col_idx * s, oy + (slot_offset + start) * s, oz])
            sizes.append([s, count * s, height])

    cells = build_boxes(np.array(origins).reshape(-1, 3), np.array(sizes).reshape(-1, 3))
    logger.debug(
        "Grid: %d columns, %d rows, context max %d -> %d boxes",
        len(grid), rows, context_max, len(origins),
    )
    return Mesh.concatenate([platform, cells])
