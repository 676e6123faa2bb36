"""
Thin I/O helpers around the compositor: decode uploads, encode results.
"""
import base64
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageOps

from settings import settings

logger = logging.getLogger(__name__)

PNG_MIME = "image/png"


def register_heif_opener() -> bool:
    """
    Register HEIF/HEIC opener with Pillow if pillow-heif is available.

    Safe to call multiple times or if pillow-heif is not installed.
    """
    if not settings.HEIF_ENABLED:
        return False
    try:
        from pillow_heif import register_heif_opener as _register
        _register()
        return True
    except ImportError:
        return False


def _wide_gray_to_l(img: Image.Image) -> Image.Image:
    arr = np.clip(np.array(img, dtype=np.int64), 0, 65535)
    return Image.fromarray((arr >> 8).astype(np.uint8))


def decode_image(data: bytes) -> Image.Image:
    """
    Decode image bytes into an RGBA image with EXIF orientation applied.
    16-bit grayscale data is scaled down to 8 bits rather than clipped.

    Raises PIL.UnidentifiedImageError for data Pillow cannot read.
    """
    with Image.open(BytesIO(data)) as img:
        img.load()
        oriented = ImageOps.exif_transpose(img)
        if oriented.mode == "I" or oriented.mode.startswith("I;16"):
            oriented = _wide_gray_to_l(oriented)
        return oriented.convert("RGBA")


def load_image(path: Union[str, Path]) -> Image.Image:
    return decode_image(Path(path).read_bytes())


def encode_png(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(png: bytes, mime: str = PNG_MIME) -> str:
    return f"data:{mime};base64,{base64.b64encode(png).decode('ascii')}"


def normalize_watermark_text(text: Optional[str]) -> str:
    """Trim, cap at the configured length, and fall back to the default text."""
    cleaned = (text or "").strip()[: settings.MAX_TEXT_LENGTH].strip()
    return cleaned or settings.DEFAULT_TEXT
