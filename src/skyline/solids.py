"""
Axis-aligned box primitive.

Every generator emits its geometry through here so triangle winding and
normals come from a single face table. Corner indices:

    0 (x0,y0,z0)  1 (x1,y0,z0)  2 (x1,y1,z0)  3 (x0,y1,z0)
    4 (x0,y0,z1)  5 (x1,y0,z1)  6 (x1,y1,z1)  7 (x0,y1,z1)

Each face is two counter-clockwise triangles seen from outside, so
``cross(v1 - v0, v2 - v0)`` points along the stored outward normal.
"""
import numpy as np

from skyline.errors import ConfigError
from skyline.mesh import Mesh

TRIANGLES_PER_BOX = 12

_UNIT_CORNERS = np.array([
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [1.0, 1.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 0.0, 1.0],
    [1.0, 0.0, 1.0],
    [1.0, 1.0, 1.0],
    [0.0, 1.0, 1.0],
])

_FACE_TRIANGLES = np.array([
    [0, 3, 2], [0, 2, 1],  # bottom
    [4, 5, 6], [4, 6, 7],  # top
    [0, 1, 5], [0, 5, 4],  # front (y0)
    [3, 7, 6], [3, 6, 2],  # back (y1)
    [0, 4, 7], [0, 7, 3],  # left (x0)
    [1, 2, 6], [1, 6, 5],  # right (x1)
])

_FACE_NORMALS = np.array([
    [0.0, 0.0, -1.0], [0.0, 0.0, -1.0],
    [0.0, 0.0, 1.0], [0.0, 0.0, 1.0],
    [0.0, -1.0, 0.0], [0.0, -1.0, 0.0],
    [0.0, 1.0, 0.0], [0.0, 1.0, 0.0],
    [-1.0, 0.0, 0.0], [-1.0, 0.0, 0.0],
    [1.0, 0.0, 0.0], [1.0, 0.0, 0.0],
])


def build_boxes(origins: np.ndarray, sizes: np.ndarray) -> Mesh:
    """Build one closed box per row.

    Args:
        origins: (N, 3) minimum corners.
        sizes: (N, 3) width (x), depth (y) and height (z), all positive.

    Returns:
        Mesh with ``12 * N`` triangles, box by box in input order.
    """
    origins = np.asarray(origins, dtype=np.float64).reshape(-1, 3)
    sizes = np.asarray(sizes, dtype=np.float64).reshape(-1, 3)
    if origins.shape != sizes.shape:
        raise ConfigError(
            f"Box origins {origins.shape} and sizes {sizes.shape} do not match"
        )
    if len(origins) == 0:
        return Mesh.empty()
    if not np.all(sizes > 0):
        bad = sizes[~np.all(sizes > 0, axis=1)][0]
        raise ConfigError(f"Box dimensions must be positive, got {bad.tolist()}")

    # (N, 8, 3) corner positions
    corners = origins[:, None, :] + _UNIT_CORNERS[None, :, :] * sizes[:, None, :]
    vertices = corners[:, _FACE_TRIANGLES, :]  # (N, 12, 3, 3)
    normals = np.broadcast_to(_FACE_NORMALS, (len(origins), TRIANGLES_PER_BOX, 3))
    return Mesh(normals.reshape(-1, 3), vertices.reshape(-1, 3, 3))


def build_box(
    x0: float,
    y0: float,
    z0: float,
    width: float,
    depth: float,
    height: float,
) -> Mesh:
    """Closed rectangular prism with its minimum corner at (x0, y0, z0)."""
    if width <= 0 or depth <= 0 or height <= 0:
        raise ConfigError(
            f"Box dimensions must be positive, got width={width} depth={depth} height={height}"
        )
    return build_boxes([[x0, y0, z0]], [[width, depth, height]])
