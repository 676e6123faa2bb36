"""
Desaturate the pixels selected by a scribble mask.
"""
import logging
import random
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from services.scribble import create_scribble_pattern

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.3, 0.59, 0.11], dtype=np.float64)


def luminosity(rgb: Tuple[int, int, int]) -> int:
    r, g, b = rgb
    value = float(np.rint(0.3 * r + 0.59 * g + 0.11 * b))
    return int(min(255, max(0, value)))


def apply_grayscale_mask(image: Image.Image, mask: Image.Image) -> Image.Image:
    """
    Return a copy of `image` where every pixel under a black mask pixel
    (red channel == 0) is replaced by its luminosity gray. Alpha is kept.
    """
    if image.size != mask.size:
        raise ValueError(f"mask size {mask.size} does not match image size {image.size}")

    rgba = np.array(image.convert("RGBA"), dtype=np.uint8)
    selected = np.array(mask.getchannel(0), dtype=np.uint8) == 0

    rgb = rgba[..., :3].astype(np.float64)
    gray = np.clip(np.rint(rgb @ LUMA_WEIGHTS), 0, 255).astype(np.uint8)

    out = rgba.copy()
    for channel in range(3):
        out[..., channel] = np.where(selected, gray, rgba[..., channel])
    logger.debug("[grayscale] %d of %d pixels masked", int(selected.sum()), selected.size)
    return Image.fromarray(out)


def apply_scribble_grayscale(image: Image.Image, rng: Optional[random.Random] = None) -> Image.Image:
    mask = create_scribble_pattern(image.width, image.height, rng)
    return apply_grayscale_mask(image, mask)
