"""Configuration for the pagetext app.

Values come from the environment (a ``.env`` file in the working directory
is loaded first). ``Settings.from_env`` is the only place that reads
environment variables; everything else receives a ``Settings`` instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_RENDER_SCALE = 2.0


def parse_options(raw: str | None) -> dict[str, str]:
    """Parse ``"key=value,key=value"`` into a dict of tesseract variables.

    Blank items are ignored. An item without ``=`` raises ValueError.
    """
    options: dict[str, str] = {}
    if not raw:
        return options
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" not in item:
            raise ValueError(f"Bad tesseract option (expected key=value): {item!r}")
        key, value = item.split("=", 1)
        options[key.strip()] = value.strip()
    return options


@dataclass
class Settings:
    data_dir: str = "data"
    database_uri: str = "sqlite:///data/app.db"
    tessdata_dir: str = "./tessdata"
    language: str = "eng"
    tesseract_options: dict[str, str] = field(default_factory=dict)
    render_scale: float = DEFAULT_RENDER_SCALE
    image_format: str = "png"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        scale = float(os.getenv("RENDER_SCALE", str(DEFAULT_RENDER_SCALE)))
        if scale <= 0:
            raise ValueError(f"RENDER_SCALE must be positive, got {scale}")
        return cls(
            data_dir=os.getenv("PAGETEXT_DATA_DIR", "data"),
            database_uri=os.getenv("DATABASE_URI", "sqlite:///data/app.db"),
            tessdata_dir=os.getenv("TESSDATA_DIR", "./tessdata"),
            language=os.getenv("OCR_LANGUAGE", "eng"),
            tesseract_options=parse_options(os.getenv("TESSERACT_OPTIONS")),
            render_scale=scale,
            image_format=os.getenv("IMAGE_FORMAT", "png").lower().lstrip("."),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
