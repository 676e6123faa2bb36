"""Watermark a single image from the command line.

Usage:
    python -m scripts.watermark_image photo.jpg --text "For rental application only"

Writes `protected-document.png` (or --out) in the current directory.
Pass --seed for a reproducible result and --data-url to also print a
preview URL.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before settings are read
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

from PIL import UnidentifiedImageError  # noqa: E402

from services.compositor import process_image  # noqa: E402
from services.image_io import (  # noqa: E402
    load_image,
    normalize_watermark_text,
    register_heif_opener,
    to_data_url,
)
from settings import settings  # noqa: E402

logger = logging.getLogger("watermark_image")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Overlay a DocShield watermark on an image.")
    parser.add_argument("input", help="Path to a PNG/JPEG (or HEIC with pillow-heif) image.")
    parser.add_argument("--text", default="", help="Watermark text (max 100 characters).")
    parser.add_argument("--out", default=settings.OUTPUT_FILENAME, help="Output PNG path.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random wave/scribble draws.")
    parser.add_argument("--data-url", action="store_true", help="Print the result as a data: URL.")
    parser.add_argument("--verbose", action="store_true", help="Log pipeline details.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not logger.handlers:
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    register_heif_opener()
    try:
        image = load_image(args.input)
    except (OSError, UnidentifiedImageError):
        logger.error("Could not read image %s", args.input, exc_info=args.verbose)
        return 1

    text = normalize_watermark_text(args.text)
    rng = random.Random(args.seed) if args.seed is not None else None
    out_path = Path(args.out)

    def _write(png: bytes) -> None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(png)

    result = process_image(image, text, on_result=_write, rng=rng)
    if result is None:
        logger.error("No output produced for %s", args.input)
        return 1

    logger.info("Wrote %s (%sx%s)", out_path, result.size[0], result.size[1])
    if args.data_url:
        print(to_data_url(result.png))
    return 0


if __name__ == "__main__":
    sys.exit(main())
