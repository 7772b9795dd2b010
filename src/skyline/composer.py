"""
Composition of period, label and relief meshes into one model.

Pure translation and concatenation: periods are laid end to end along +X,
the label and optional relief sit on a strip in front of the grid (-Y) on
the same ground plane. Seams between parts are left unwelded.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np
from shapely.geometry import Polygon, box

from skyline.mesh import Mesh

logger = logging.getLogger(__name__)


def period_offsets(widths: Sequence[float], gap: float = 0.0) -> List[float]:
    """X offset of each period's minimum edge: prefix sums of widths plus gaps."""
    offsets: List[float] = []
    cursor = 0.0
    for width in widths:
        offsets.append(cursor)
        cursor += float(width) + gap
    return offsets


def footprint(mesh: Mesh) -> Polygon:
    """XY bounding rectangle of *mesh* (empty polygon for an empty mesh)."""
    bounds = mesh.bounds
    if bounds is None:
        return Polygon()
    return box(bounds[0][0], bounds[0][1], bounds[1][0], bounds[1][1])


def _overlaps(a: Polygon, b: Polygon) -> bool:
    return not a.is_empty and not b.is_empty and a.intersection(b).area > 1e-9


def layout_periods(periods: Sequence[Mesh], gap: float = 0.0) -> List[Mesh]:
    """Translate each period so they line up along +X without overlapping."""
    widths = [float(m.extents[0]) for m in periods]
    placed = []
    for mesh, offset in zip(periods, period_offsets(widths, gap)):
        if mesh.is_empty:
            placed.append(mesh)
            continue
        placed.append(mesh.translated([offset - mesh.bounds[0][0], 0.0, 0.0]))
    return placed


def compose(
    periods: Sequence[Mesh],
    label: Mesh,
    relief: Optional[Mesh] = None,
    gap: float = 0.0,
) -> Mesh:
    """Merge periods, label and relief into a single triangle soup.

    The label is left-aligned with the grid and the relief right-aligned,
    both with their back edge ``gap`` in front of the grid's front edge and
    their bottom on the grid's ground plane. A relief that would collide
    with the label is moved further to the front.
    """
    placed = layout_periods(periods, gap)
    grid = Mesh.concatenate(placed)
    parts = [grid]

    grid_bounds = grid.bounds
    if grid_bounds is None:
        grid_bounds = np.zeros((2, 3))
    gx0, gy0, gz0 = grid_bounds[0]
    gx1 = grid_bounds[1][0]

    placed_label = Mesh.empty()
    if not label.is_empty:
        lb = label.bounds
        placed_label = label.translated([gx0 - lb[0][0], (gy0 - gap) - lb[1][1], gz0 - lb[0][2]])
        parts.append(placed_label)

    if relief is not None and not relief.is_empty:
        rb = relief.bounds
        placed_relief = relief.translated(
            [gx1 - rb[1][0], (gy0 - gap) - rb[1][1], gz0 - rb[0][2]]
        )
        if _overlaps(footprint(placed_relief), footprint(placed_label)):
            front = placed_label.bounds[0][1] - gap
            placed_relief = placed_relief.translated(
                [0.0, front - placed_relief.bounds[1][1], 0.0]
            )
            logger.debug("Relief moved in front of the label to avoid overlap")
        parts.append(placed_relief)

    composed = Mesh.concatenate(parts)
    logger.debug(
        "Composed %d periods (+label %d, +relief %d) -> %d triangles",
        len(periods), len(label), 0 if relief is None else len(relief), len(composed),
    )
    return composed
