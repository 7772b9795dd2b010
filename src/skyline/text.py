"""
Text -> embossed voxel solid.

The main text and a smaller secondary label are drawn side by side on an
off-screen greyscale canvas with Pillow. Every pixel whose coverage exceeds
the threshold becomes one ``voxel_scale x voxel_scale x depth`` prism.
Canvas rows grow downward; model Y grows upward, so row 0 lands at the
highest Y.
"""
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from skyline.contracts import RenderConfig, TextRenderConfig
from skyline.errors import FontError
from skyline.mesh import Mesh
from skyline.solids import build_boxes

logger = logging.getLogger(__name__)

# Tried in order after an explicit font path and before Pillow's bundled font.
SYSTEM_FONT_CANDIDATES: Tuple[str, ...] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "C:\\Windows\\Fonts\\arialbd.ttf",
    "DejaVuSans-Bold.ttf",
)


def load_font(size: float, font_path: Optional[str] = None):
    """Load a font at *size* pixels, falling back to system and bundled fonts.

    Raises:
        FontError: if no candidate, including Pillow's default, can be loaded.
    """
    px = max(1, int(round(size)))
    candidates: List[str] = [font_path] if font_path else []
    candidates.extend(SYSTEM_FONT_CANDIDATES)

    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, px)
        except OSError:
            if candidate == font_path:
                logger.warning("Font %s could not be loaded, trying fallbacks", candidate)
            else:
                logger.debug("Font candidate %s unavailable", candidate)

    try:
        font = ImageFont.load_default(size=px)
    except (OSError, ImportError) as exc:
        raise FontError(f"No usable font found (last error: {exc})") from exc
    logger.debug("Using Pillow's bundled default font")
    return font


def _text_size(font, text: str) -> Tuple[Tuple[int, int, int, int], int, int]:
    bbox = font.getbbox(text)
    return bbox, int(bbox[2] - bbox[0]), int(bbox[3] - bbox[1])


def rasterize_text(config: TextRenderConfig) -> np.ndarray:
    """Draw text and label; return coverage in [0, 1] with shape (rows, cols).

    An empty text and label yield a (0, 0) array.
    """
    main_font = load_font(config.font_size, config.font_path)
    label_font = load_font(config.font_size * config.label_scale, config.font_path)

    pieces = []
    for string, font in ((config.text, main_font), (config.label, label_font)):
        if not string:
            continue
        bbox, w, h = _text_size(font, string)
        if w > 0 and h > 0:
            pieces.append((string, font, bbox, w, h))

    if not pieces:
        return np.zeros((0, 0))

    width = sum(p[3] for p in pieces) + config.label_gap_px * (len(pieces) - 1)
    height = max(p[4] for p in pieces)
    canvas = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(canvas)

    x = 0
    for string, font, bbox, w, h in pieces:
        # bottom-align every piece on the canvas baseline
        draw.text((x - bbox[0], height - h - bbox[1]), string, fill=255, font=font)
        x += w + config.label_gap_px

    return np.asarray(canvas, dtype=np.float64) / 255.0


def extrude_heightfield(heights: np.ndarray, config: RenderConfig) -> Mesh:
    """One prism per pixel with positive height.

    Pixel (row, col) occupies ``[col*s, (col+1)*s] x [(rows-1-row)*s, (rows-row)*s]``
    offset by the config origin, from ``origin_z`` up to ``origin_z + height``.
    """
    heights = np.asarray(heights, dtype=np.float64)
    if heights.size == 0:
        return Mesh.empty()

    rows = heights.shape[0]
    s = config.voxel_scale
    ox, oy, oz = config.origin
    pixel_rows, pixel_cols = np.nonzero(heights > 0)

    origins = np.column_stack([
        ox + pixel_cols * s,
        oy + (rows - 1 - pixel_rows) * s,
        np.full(len(pixel_rows), oz),
    ])
    sizes = np.column_stack([
        np.full(len(pixel_rows), s),
        np.full(len(pixel_rows), s),
        heights[pixel_rows, pixel_cols],
    ])
    return build_boxes(origins, sizes)


def render_text(config: TextRenderConfig) -> Mesh:
    """Embossed text mesh for *config*."""
    coverage = rasterize_text(config)
    mask = coverage > config.coverage_threshold
    heights = np.where(mask, config.depth, 0.0)
    mesh = extrude_heightfield(heights, config)
    logger.debug(
        "Text %r/%r: canvas %s, %d covered pixels",
        config.text, config.label, coverage.shape, int(mask.sum()),
    )
    return mesh


def create_3d_text(
    text: str,
    label: str,
    font_size: float,
    depth: float,
    *,
    voxel_scale: float = 1.0,
    origin: Sequence[float] = (0.0, 0.0, 0.0),
    font_path: Optional[str] = None,
) -> Mesh:
    """Embossed ``text`` with a smaller ``label`` (e.g. the year) to its right."""
    config = TextRenderConfig(
        origin_x=float(origin[0]),
        origin_y=float(origin[1]),
        origin_z=float(origin[2]),
        voxel_scale=voxel_scale,
        depth=depth,
        text=text,
        label=label,
        font_size=font_size,
        font_path=font_path,
    )
    return render_text(config)
