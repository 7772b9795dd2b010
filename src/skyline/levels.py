"""
Activity quantization shared by the mesh pipeline and any preview renderer.

Counts are bucketed relative to the period maximum:

    count == 0                  -> NONE
    0 < ratio < 1/3             -> LOW
    1/3 <= ratio < 2/3          -> MEDIUM
    2/3 <= ratio < 1            -> HIGH
    ratio >= 1                  -> TOP
    future day (any count)      -> FUTURE

A preview renderer must import these functions rather than re-deriving the
thresholds so both outputs agree cell for cell.
"""
from enum import IntEnum
from typing import Dict

from skyline.contracts import ActivityCell, ActivityGrid

LOW_THRESHOLD = 1.0 / 3.0
HIGH_THRESHOLD = 2.0 / 3.0


class HeightLevel(IntEnum):
    """Ordinal activity level; FUTURE is the no-data sentinel."""
    FUTURE = -1
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    TOP = 4


# Fraction of the layout's max_height used for each level.
LEVEL_HEIGHT_FRACTIONS: Dict[HeightLevel, float] = {
    HeightLevel.FUTURE: 0.0,
    HeightLevel.NONE: 0.0,
    HeightLevel.LOW: 0.25,
    HeightLevel.MEDIUM: 0.50,
    HeightLevel.HIGH: 0.75,
    HeightLevel.TOP: 1.0,
}


def quantize(count: int, context_max: int, is_future: bool = False) -> HeightLevel:
    """Map a raw count to its HeightLevel.

    Total over non-negative inputs. With ``context_max <= 0`` every positive
    count is treated as the period maximum.
    """
    if is_future:
        return HeightLevel.FUTURE
    if count <= 0:
        return HeightLevel.NONE
    if context_max <= 0:
        return HeightLevel.TOP

    ratio = count / context_max
    if ratio >= 1.0:
        return HeightLevel.TOP
    if ratio >= HIGH_THRESHOLD:
        return HeightLevel.HIGH
    if ratio >= LOW_THRESHOLD:
        return HeightLevel.MEDIUM
    return HeightLevel.LOW


def level_for_cell(cell: ActivityCell, context_max: int) -> HeightLevel:
    return quantize(cell.count, context_max, cell.is_future)


def level_height(level: HeightLevel, max_height: float) -> float:
    """Numeric extrusion height for *level*; 0 means no prism."""
    return LEVEL_HEIGHT_FRACTIONS[level] * max_height


def context_max_of(grid: ActivityGrid) -> int:
    """Largest count among the grid's non-future cells (0 for an empty grid)."""
    return max(
        (cell.count for column in grid for cell in column if not cell.is_future),
        default=0,
    )
