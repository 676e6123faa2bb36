"""
Wavy watermark band.

A padded text pattern is shifted column by column along a sine wave and the
result is returned as a transparent overlay the size of the output canvas.
"""
import logging
import math
import random
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from domain.models import WATERMARK_COLOR, WaveParams
from services.resizer import round_half_up
from services.text_layout import pattern_font_size
from services.text_pattern import draw_horizontal_text_pattern

logger = logging.getLogger(__name__)


def sample_wave_params(width: int, height: int, rng: Optional[random.Random] = None) -> WaveParams:
    rng = rng or random.Random()
    return WaveParams(
        amplitude=max(5.0, height / (15 + rng.random() * 5)),
        frequency=max(0.004, (8 + rng.random() * 4) / width),
        phase=rng.random() * 2 * math.pi,
        base_shift=-height * 0.1,
    )


def column_offset(params: WaveParams, x: int) -> int:
    return round_half_up(params.base_shift + params.amplitude * math.sin(params.frequency * x + params.phase))


def column_offsets(params: WaveParams, width: int) -> List[int]:
    return [column_offset(params, x) for x in range(width)]


def warp_text_columns(
    pattern: Image.Image,
    params: WaveParams,
    size: Tuple[int, int],
) -> Image.Image:
    """
    Copy each 1px column of `pattern` to the same x on a new surface of
    `size`, shifted vertically by the wave offset for that column. Rows
    falling outside the surface are clipped.
    """
    out_w, out_h = size
    src = np.asarray(pattern.convert("RGBA"))
    pattern_h, pattern_w = src.shape[:2]
    out = np.zeros((out_h, out_w, 4), dtype=np.uint8)

    for x in range(pattern_w):
        if x >= out_w:
            break
        offset = column_offset(params, x)
        top = max(0, offset)
        bottom = min(out_h, offset + pattern_h)
        if top >= bottom:
            continue
        out[top:bottom, x] = src[top - offset:bottom - offset, x]

    return Image.fromarray(out)


def build_watermark_overlay(
    width: int,
    height: int,
    text: str,
    rng: Optional[random.Random] = None,
) -> Image.Image:
    """Render the tiled, wave-warped watermark band for a `width`x`height` canvas."""
    font_size = pattern_font_size(width, height)
    padding = round_half_up(font_size * 10)
    pattern_w = width + padding * 2
    pattern_h = height + padding * 5

    pattern = draw_horizontal_text_pattern(pattern_w, pattern_h, text, font_size, WATERMARK_COLOR)
    params = sample_wave_params(width, height, rng)
    logger.debug(
        "[wave] pattern=%sx%s font=%.1f amp=%.2f freq=%.5f phase=%.3f shift=%.1f",
        pattern_w,
        pattern_h,
        font_size,
        params.amplitude,
        params.frequency,
        params.phase,
        params.base_shift,
    )
    return warp_text_columns(pattern, params, (width, height))
