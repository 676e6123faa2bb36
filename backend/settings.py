import os

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


class Settings:
    def __init__(self) -> None:
        self.MAX_WIDTH: int = _as_int(os.getenv("WATERMARK_MAX_WIDTH"), 2500)
        self.MAX_HEIGHT: int = _as_int(os.getenv("WATERMARK_MAX_HEIGHT"), 2500)
        self.FONT_PATH: str = os.getenv("WATERMARK_FONT_PATH", "DejaVuSans.ttf")
        self.BOLD_FONT_PATH: str = os.getenv("WATERMARK_BOLD_FONT_PATH", "DejaVuSans-Bold.ttf")
        self.DEFAULT_TEXT: str = os.getenv("WATERMARK_DEFAULT_TEXT", "Protected by DocShield")
        self.MAX_TEXT_LENGTH: int = _as_int(os.getenv("WATERMARK_MAX_TEXT_LENGTH"), 100)
        self.OUTPUT_FILENAME: str = os.getenv("WATERMARK_OUTPUT_FILENAME", "protected-document.png")
        self.HEIF_ENABLED: bool = _as_bool(os.getenv("WATERMARK_HEIF_ENABLED"), True)


settings = Settings()
