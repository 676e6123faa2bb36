"""
Bound an input bitmap to the maximum working resolution.
"""
import logging
import math
from typing import Tuple

from PIL import Image

from settings import settings

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (canvas-style rounding)."""
    return int(math.floor(value + 0.5))


def compute_bounded_size(
    width: int,
    height: int,
    max_width: int = 2500,
    max_height: int = 2500,
) -> Tuple[int, int]:
    if width > max_width or height > max_height:
        scale = min(max_width / width, max_height / height)
        return (
            max(1, round_half_up(width * scale)),
            max(1, round_half_up(height * scale)),
        )
    return width, height


def resize_to_bounds(
    image: Image.Image,
    max_width: int | None = None,
    max_height: int | None = None,
) -> Image.Image:
    """
    Return a new RGBA image no larger than the bounds, keeping aspect ratio.

    Images already inside the bounds come back as an unscaled copy.
    """
    max_width = settings.MAX_WIDTH if max_width is None else max_width
    max_height = settings.MAX_HEIGHT if max_height is None else max_height

    rgba = image.convert("RGBA") if image.mode != "RGBA" else image
    size = compute_bounded_size(rgba.width, rgba.height, max_width, max_height)
    if size == rgba.size:
        return rgba.copy()

    logger.debug("[resize] %sx%s -> %sx%s", rgba.width, rgba.height, size[0], size[1])
    return rgba.resize(size, Image.Resampling.LANCZOS)
