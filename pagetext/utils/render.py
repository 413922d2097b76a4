"""Page rasterization with ``pypdfium2``.

Pages are walked with a ``PageCursor``: it asks PDFium for the next page
index and stops the first time PDFium refuses to load one. There is no page
count query; "cannot load page" is the end-of-document signal.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pypdfium2 as pdfium
from PIL import Image

from ..errors import DocumentLoadFailed

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)


class PageCursor:
    """Fallible cursor over the pages of an open PDFium document."""

    def __init__(self, pdf: pdfium.PdfDocument):
        self._pdf = pdf
        self.index = 0  # 0-based index of the next page to load

    def next_page(self) -> pdfium.PdfPage | None:
        """Return the next page, or None once PDFium cannot load one."""
        try:
            page = self._pdf.get_page(self.index)
        except (pdfium.PdfiumError, IndexError):
            return None
        self.index += 1
        return page


@contextmanager
def open_pages(path: str | Path) -> Iterator[PageCursor]:
    p = Path(path)
    if not p.is_file():
        raise DocumentLoadFailed(str(p), FileNotFoundError(str(p)))
    try:
        pdf = pdfium.PdfDocument(str(p))
    except pdfium.PdfiumError as e:
        raise DocumentLoadFailed(str(p), e) from e
    try:
        yield PageCursor(pdf)
    finally:
        pdf.close()


def target_size(width: float, height: float, scale: float) -> tuple[int, int]:
    """Pixel size of a page of ``width`` x ``height`` points at ``scale``."""
    return round(width * scale), round(height * scale)


def render_page(page: pdfium.PdfPage, scale: float) -> Image.Image:
    """Render one page on an opaque white canvas, annotations included.

    The transform is scale-only and the output covers the whole page.
    """
    width, height = page.get_size()
    size = target_size(width, height, scale)
    bitmap = page.render(scale=scale, fill_color=WHITE, draw_annots=True)
    try:
        # own the pixels; the PDFium buffer is freed below
        image = bitmap.to_pil().copy()
    finally:
        bitmap.close()
    if image.size != size:
        # PDFium rounds the canvas up; keep the documented round() size
        image = image.resize(size)
    return image


def save_image(image: Image.Image, directory: str | Path, basename: str, page_index: int, fmt: str = "png") -> Path:
    """Write ``image`` as ``<basename>_<page_index>.<fmt>`` inside ``directory``."""
    fmt = fmt.lower().lstrip(".")
    out = Path(directory) / f"{basename}_{page_index}.{fmt}"
    if fmt in ("jpg", "jpeg") and image.mode != "RGB":
        image = image.convert("RGB")
    image.save(out)
    return out
