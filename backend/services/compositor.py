"""
Watermark compositor.

Pipeline stages:
1. Bound the source image (resizer)
2. Lay out a white canvas with room for caption text under the image
3. Draw the wrapped watermark text and the fixed caption
4. Overlay the wave-warped watermark band
5. Desaturate the scribble-masked pixels
6. Encode to PNG
"""
import logging
import random
from typing import Callable, Optional, Tuple

from PIL import Image, ImageDraw

from domain.models import (
    BACKGROUND_COLOR,
    CAPTION_TEXT,
    TEXT_COLOR,
    WATERMARK_PREFIX,
    CanvasLayout,
    WatermarkResult,
)
from services.grayscale_mask import apply_scribble_grayscale
from services.image_io import encode_png
from services.resizer import resize_to_bounds, round_half_up
from services.text_layout import caption_font_size, load_font, wrap_text
from services.wave_warp import build_watermark_overlay

logger = logging.getLogger(__name__)

CANVAS_WIDTH_RATIO = 1.1
CANVAS_HEIGHT_RATIO = 1.25
IMAGE_TOP_RATIO = 0.15  # share of the extra height placed above the image
TEXT_MARGIN_RATIO = 0.05
TEXT_WIDTH_RATIO = 0.9


def compute_canvas_size(image_width: int, image_height: int) -> Tuple[int, int]:
    return (
        round_half_up(image_width * CANVAS_WIDTH_RATIO),
        round_half_up(image_height * CANVAS_HEIGHT_RATIO),
    )


def compute_layout(image_width: int, image_height: int) -> CanvasLayout:
    canvas_w, canvas_h = compute_canvas_size(image_width, image_height)
    image_x = round_half_up((canvas_w - image_width) / 2)
    image_y = round_half_up((canvas_h - image_height) * IMAGE_TOP_RATIO)
    font_size = caption_font_size(image_width, image_height)
    text_top = image_y + image_height + font_size * 1.5
    return CanvasLayout(
        image_size=(image_width, image_height),
        canvas_size=(canvas_w, canvas_h),
        image_offset=(image_x, image_y),
        font_size=font_size,
        text_x=canvas_w * TEXT_MARGIN_RATIO,
        text_top=text_top,
        caption_top=text_top + font_size * 2,
    )


def _draw_caption_block(canvas: Image.Image, layout: CanvasLayout, watermark_text: str) -> None:
    draw = ImageDraw.Draw(canvas)
    bold = load_font(layout.font_size, bold=True)
    lines = wrap_text(watermark_text, layout.canvas_size[0] * TEXT_WIDTH_RATIO, layout.font_size)
    for index, line in enumerate(lines):
        y = layout.text_top + index * layout.line_height
        draw.text((layout.text_x, y), line, font=bold, fill=TEXT_COLOR, anchor="ls")

    regular = load_font(layout.font_size)
    draw.text((layout.text_x, layout.caption_top), CAPTION_TEXT, font=regular, fill=TEXT_COLOR, anchor="ls")


def process_image(
    image: Optional[Image.Image],
    watermark_text: str,
    on_result: Optional[Callable[[bytes], None]] = None,
    rng: Optional[random.Random] = None,
) -> Optional[WatermarkResult]:
    """
    Produce the watermarked composite for `image`.

    `watermark_text` is used as given; callers substitute the default for
    empty text (see `services.image_io.normalize_watermark_text`). `rng`
    drives every random draw of the run and defaults to a fresh generator.

    Returns None without calling `on_result` when there is no usable image.
    """
    if image is None or image.width <= 0 or image.height <= 0:
        logger.warning("[compositor] no drawable surface, skipping")
        return None
    rng = rng or random.Random()

    resized = resize_to_bounds(image)
    layout = compute_layout(resized.width, resized.height)
    canvas_w, canvas_h = layout.canvas_size

    canvas = Image.new("RGBA", layout.canvas_size, BACKGROUND_COLOR)
    canvas.alpha_composite(resized, dest=layout.image_offset)
    _draw_caption_block(canvas, layout, watermark_text)

    band_text = f"{WATERMARK_PREFIX}{watermark_text}".upper()
    overlay = build_watermark_overlay(canvas_w, canvas_h, band_text, rng)
    canvas = Image.alpha_composite(canvas, overlay)

    final = apply_scribble_grayscale(canvas, rng)
    png = encode_png(final)
    logger.info(
        "[compositor] source=%sx%s canvas=%sx%s png_bytes=%d",
        image.width,
        image.height,
        canvas_w,
        canvas_h,
        len(png),
    )

    if on_result is not None:
        on_result(png)
    return WatermarkResult(image=final, png=png)
