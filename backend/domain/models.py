"""
Core domain models for the watermark compositor.
These are framework-agnostic and shared by every pipeline stage.
"""
from dataclasses import dataclass
from typing import Tuple

from PIL import Image


CAPTION_TEXT = "Protect your documents with DocShield."
WATERMARK_PREFIX = "✧ "
WATERMARK_COLOR = (41, 133, 133, 128)  # rgba(41,133,133,0.5)
BACKGROUND_COLOR = (255, 255, 255, 255)
TEXT_COLOR = (0, 0, 0, 255)


@dataclass(frozen=True)
class WaveParams:
    """Sinusoidal column offset, sampled once per invocation."""
    amplitude: float
    frequency: float
    phase: float
    base_shift: float


@dataclass(frozen=True)
class ScribbleStroke:
    """A single wavy white line of the scribble mask."""
    base_y: float
    amplitude: float
    frequency: float
    phase: float
    line_width: float


@dataclass(frozen=True)
class CanvasLayout:
    """
    Geometry of the composite canvas.

    All positions are in output pixels. `text_top` is the baseline of the
    first wrapped watermark line and `caption_top` the baseline of the
    fixed caption.
    """
    image_size: Tuple[int, int]
    canvas_size: Tuple[int, int]
    image_offset: Tuple[int, int]
    font_size: float
    text_x: float
    text_top: float
    caption_top: float

    @property
    def line_height(self) -> float:
        return self.font_size * 1.2


@dataclass
class WatermarkResult:
    image: Image.Image
    png: bytes

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size
