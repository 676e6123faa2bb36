"""
Scribble pattern generator.

Produces a strictly black/white RGB mask of wavy horizontal strokes. Black
areas are the ones the grayscale masker desaturates.
"""
import logging
import math
import random
from typing import List, Optional

from PIL import Image, ImageDraw

from domain.models import ScribbleStroke

logger = logging.getLogger(__name__)

MASK_BLACK = (0, 0, 0)
MASK_WHITE = (255, 255, 255)


def sample_scribble_strokes(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
) -> List[ScribbleStroke]:
    rng = rng or random.Random()
    base_scale = math.sqrt((width * height) / (800 * 800))
    line_spacing = max(5.0, height / 150)
    num_lines = math.floor(height / line_spacing) * 1.2
    frequency = max(0.002, 15 / width)

    strokes: List[ScribbleStroke] = []
    i = 0
    while i < num_lines:
        amplitude = max(10.0, height / 60) * (0.5 + rng.random() * 0.5)
        phase = rng.random() * 2 * math.pi
        line_width = max(1.0, width / 800) + rng.random() * (base_scale * 0.5)
        strokes.append(
            ScribbleStroke(
                base_y=i * line_spacing + line_spacing / 2,
                amplitude=amplitude,
                frequency=frequency,
                phase=phase,
                line_width=line_width,
            )
        )
        i += 1
    return strokes


def _stroke_points(stroke: ScribbleStroke, width: int) -> List[tuple]:
    step = max(2.0, width / 500)
    points = [(0.0, stroke.base_y + stroke.amplitude * math.sin(stroke.phase))]
    x = 1.0
    while x <= width:
        points.append((x, stroke.base_y + stroke.amplitude * math.sin(stroke.phase + stroke.frequency * x)))
        x += step
    return points


def create_scribble_pattern(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
) -> Image.Image:
    mask = Image.new("RGB", (width, height), MASK_BLACK)
    draw = ImageDraw.Draw(mask)
    strokes = sample_scribble_strokes(width, height, rng)

    for stroke in strokes:
        pen = max(1, int(round(stroke.line_width)))
        points = _stroke_points(stroke, width)
        draw.line(points, fill=MASK_WHITE, width=pen, joint="curve")
        if pen > 2:
            # round caps
            r = pen / 2
            for cx, cy in (points[0], points[-1]):
                draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=MASK_WHITE)

    logger.debug("[scribble] %sx%s mask with %d strokes", width, height, len(strokes))
    return mask
