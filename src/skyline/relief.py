"""
Raster image -> bas-relief solid.

Unlike the grid and text generators the height is continuous: each pixel's
perceptual intensity (Rec. 709 luminance scaled by alpha) maps linearly to
``[0, depth]``. Every visible pixel costs 12 triangles, so large images
should be downsampled with ``max_size``.
"""
import logging
from typing import Optional, Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError

from skyline.contracts import ImageRenderConfig
from skyline.errors import ImageDecodeError
from skyline.mesh import Mesh
from skyline.text import extrude_heightfield

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])
HEIGHT_DECIMALS = 3


def pixel_intensity(rgba: np.ndarray) -> np.ndarray:
    """Intensity in [0, 1] of RGBA values in [0, 1]; shape (..., 4) -> (...)."""
    rgba = np.asarray(rgba, dtype=np.float64)
    luminance = rgba[..., :3] @ LUMA_WEIGHTS
    return np.clip(luminance * rgba[..., 3], 0.0, 1.0)


def intensity_to_height(intensity, depth: float):
    return np.asarray(intensity, dtype=np.float64) * depth


def load_intensity(image_path: str, max_size: Optional[int] = None) -> np.ndarray:
    """Decode *image_path* into a (rows, cols) intensity field.

    Raises:
        ImageDecodeError: missing file, unsupported/corrupt image data or an
            image over Pillow's pixel limit.
    """
    try:
        with Image.open(image_path) as img:
            img = img.convert("RGBA")
            if max_size is not None:
                img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
            rgba = np.asarray(img, dtype=np.float64) / 255.0
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Cannot decode image {image_path}: {exc}") from exc
    return pixel_intensity(rgba)


def render_image(config: ImageRenderConfig) -> Mesh:
    intensity = load_intensity(config.image_path, config.max_size)
    heights = intensity_to_height(intensity, config.depth)
    heights = np.where(np.round(heights, HEIGHT_DECIMALS) == 0, 0.0, heights)
    mesh = extrude_heightfield(heights, config)
    logger.debug(
        "Relief %s: %s pixels, %d raised",
        config.image_path, intensity.shape, int(np.count_nonzero(heights)),
    )
    return mesh


def build_image(
    image_path: str,
    voxel_scale: float,
    depth: float,
    *,
    origin: Sequence[float] = (0.0, 0.0, 0.0),
    max_size: Optional[int] = None,
) -> Mesh:
    """Bas-relief mesh of *image_path*; brighter, more opaque pixels stand taller."""
    config = ImageRenderConfig(
        origin_x=float(origin[0]),
        origin_y=float(origin[1]),
        origin_z=float(origin[2]),
        voxel_scale=voxel_scale,
        depth=depth,
        image_path=str(image_path),
        max_size=max_size,
    )
    return render_image(config)
