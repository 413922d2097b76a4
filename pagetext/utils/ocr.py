"""Text recognition on rendered page images (``pytesseract``)."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pytesseract


def build_config(model_dir: str | Path | None, options: Mapping[str, str] | None = None) -> str:
    """Build the tesseract command-line config string.

    ``options`` are engine variables applied before recognition, e.g.
    ``{"user_defined_dpi": "300"}`` becomes ``-c user_defined_dpi=300``.
    """
    parts = []
    if model_dir:
        parts.append(f'--tessdata-dir "{model_dir}"')
    for key, value in (options or {}).items():
        parts.append(f"-c {key}={value}")
    return " ".join(parts)


def recognize(
    image_path: str | Path,
    model_dir: str | Path | None,
    language: str,
    options: Mapping[str, str] | None = None,
) -> str:
    """Return the plain text tesseract reads from the image at ``image_path``.

    The saved file is handed to tesseract as is; it is not re-encoded.
    """
    return pytesseract.image_to_string(str(image_path), lang=language, config=build_config(model_dir, options))
