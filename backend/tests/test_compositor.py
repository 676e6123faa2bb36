import io
import random

from PIL import Image

from domain.models import CAPTION_TEXT
from services import compositor
from services.compositor import compute_canvas_size, compute_layout, process_image
from settings import settings


def test_canvas_size_formula():
    assert compute_canvas_size(100, 100) == (110, 125)
    assert compute_canvas_size(2500, 1250) == (2750, 1563)
    assert compute_canvas_size(1, 1) == (1, 1)


def test_layout_places_image_in_upper_region():
    layout = compute_layout(100, 100)
    assert layout.canvas_size == (110, 125)
    assert layout.image_offset == (5, 4)
    assert layout.font_size == 14
    assert layout.text_x == 5.5
    assert layout.text_top == 4 + 100 + 21
    assert layout.caption_top == layout.text_top + 28
    assert layout.line_height == 14 * 1.2


def test_end_to_end_white_square(rng):
    src = Image.new("RGB", (100, 100), "white")
    received = []
    result = process_image(src, "TEST", on_result=received.append, rng=rng)

    assert result is not None
    assert result.size == (110, 125)
    assert received == [result.png]

    decoded = Image.open(io.BytesIO(result.png))
    assert decoded.format == "PNG"
    assert decoded.size == (110, 125)

    colors = {color for _, color in decoded.convert("RGBA").getcolors(110 * 125)}
    assert len(colors) > 1
    grays = {c for c in colors if c[0] == c[1] == c[2] and c[0] < 255}
    tinted = {c for c in colors if c[0] != c[2]}
    assert grays, "expected desaturated watermark pixels"
    assert tinted, "expected watermark tint where the mask is white"


def test_same_seed_reproduces_output():
    src = Image.new("RGB", (60, 40), (200, 120, 40))
    a = process_image(src, "Seeded", rng=random.Random(9))
    b = process_image(src, "Seeded", rng=random.Random(9))
    assert a.png == b.png


def test_oversized_input_is_downscaled_first(monkeypatch):
    monkeypatch.setattr(settings, "MAX_WIDTH", 50)
    monkeypatch.setattr(settings, "MAX_HEIGHT", 50)
    result = process_image(Image.new("RGB", (200, 100), "blue"), "big", rng=random.Random(2))
    assert result.size == compute_canvas_size(50, 25) == (55, 31)


def test_missing_surface_aborts_silently():
    received = []
    assert process_image(None, "TEST", on_result=received.append) is None
    assert process_image(Image.new("RGB", (0, 10)), "TEST", on_result=received.append) is None
    assert received == []


def test_image_and_caption_drawn_before_overlays(monkeypatch):
    captured = {}

    def fake_overlay(width, height, text, rng=None):
        captured["band"] = text
        return Image.new("RGBA", (width, height), (0, 0, 0, 0))

    monkeypatch.setattr(compositor, "build_watermark_overlay", fake_overlay)
    monkeypatch.setattr(compositor, "apply_scribble_grayscale", lambda image, rng=None: image)

    src = Image.new("RGB", (100, 100), (255, 0, 0))
    result = process_image(src, "test case", rng=random.Random(0))
    img = result.image

    assert captured["band"] == "✧ TEST CASE"
    assert img.getpixel((5, 4)) == (255, 0, 0, 255)
    assert img.getpixel((104, 103)) == (255, 0, 0, 255)
    assert img.getpixel((4, 4)) == (255, 255, 255, 255)
    assert img.getpixel((105, 50)) == (255, 255, 255, 255)
    assert img.getpixel((50, 2)) == (255, 255, 255, 255)


def test_caption_block_renders_wrapped_lines_and_fixed_caption(monkeypatch):
    drawn = []

    class RecordingDraw:
        def __init__(self, image):
            pass

        def text(self, xy, text, **kwargs):
            drawn.append((xy, text))

    monkeypatch.setattr(compositor.ImageDraw, "Draw", RecordingDraw)
    layout = compute_layout(1000, 800)
    canvas = Image.new("RGBA", layout.canvas_size)
    words = " ".join(["watermark"] * 40)
    compositor._draw_caption_block(canvas, layout, words)

    assert drawn[-1] == ((layout.text_x, layout.caption_top), CAPTION_TEXT)
    lines = drawn[:-1]
    assert len(lines) > 1
    for index, ((x, y), _) in enumerate(lines):
        assert x == layout.text_x
        assert y == layout.text_top + index * layout.line_height
