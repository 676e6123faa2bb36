"""
Font loading, font sizing and caption word-wrapping.

Fonts are loaded per call rather than cached at module level so that
concurrent pipeline runs never share a FreeType face.
"""
import logging
from typing import List

from PIL import ImageFont

from settings import settings

logger = logging.getLogger(__name__)

# Rough average glyph width as a fraction of the font size.
CHAR_WIDTH_RATIO = 0.55


def load_font(size: float, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    path = settings.BOLD_FONT_PATH if bold else settings.FONT_PATH
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.debug("[fonts] %s not found, using Pillow default at %.1fpx", path, size)
        return ImageFont.load_default(size)


def caption_font_size(image_width: int, image_height: int) -> float:
    return max(14.0, min(image_width, image_height) / 50)


def pattern_font_size(canvas_width: int, canvas_height: int) -> float:
    return max(8.0, min(canvas_width, canvas_height) / 70)


def estimate_text_width(text: str, font_size: float) -> float:
    return len(text) * font_size * CHAR_WIDTH_RATIO


def wrap_text(text: str, max_width: float, font_size: float) -> List[str]:
    """
    Greedy word-wrap using the estimated glyph width.

    A word wider than `max_width` on its own is kept whole on its own line.
    """
    words = text.split()
    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if estimate_text_width(candidate, font_size) > max_width:
            if current:
                lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
