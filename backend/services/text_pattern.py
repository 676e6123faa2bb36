"""
Tile a text string across a transparent surface.
"""
import logging
import math
from typing import Tuple

from PIL import Image, ImageDraw

from services.text_layout import load_font

logger = logging.getLogger(__name__)

# Horizontal gap between repetitions, as a fraction of the font size.
TILE_GAP_RATIO = 0.3


def draw_horizontal_text_pattern(
    width: int,
    height: int,
    text: str,
    font_size: float,
    color: Tuple[int, int, int, int],
) -> Image.Image:
    """
    Repeat `text` left-to-right, top-to-bottom with no overlap.

    Rows are `ceil(font_size)` apart; repetitions are the measured text width
    plus a small gap apart. Tiles crossing the right or bottom edge are drawn
    and clipped by the surface.
    """
    pattern = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    if not text:
        return pattern
    draw = ImageDraw.Draw(pattern)
    font = load_font(font_size, bold=True)

    text_width = font.getlength(text)
    step_x = text_width + font_size * TILE_GAP_RATIO
    step_y = math.ceil(font_size)

    rows = 0
    y = 0
    while y < height:
        x = 0.0
        while x < width:
            draw.text((x, y), text, font=font, fill=color)
            x += step_x
        y += step_y
        rows += 1

    logger.debug("[pattern] %sx%s, %d rows, step_x=%.1f", width, height, rows, step_x)
    return pattern
