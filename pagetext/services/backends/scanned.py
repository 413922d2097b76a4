"""Backend for scanned PDFs: render every page, then OCR the image.

Rendered images are written into a working area that only lives for the
duration of one ``get_page_lines`` call. Any failure on a page aborts the
whole document with ``PageProcessingFailed``; no partial result is returned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, ContextManager, Mapping

from ...config import DEFAULT_RENDER_SCALE
from ...errors import PageProcessingFailed
from ...utils import ocr, render
from ...utils.pdf import split_lines
from ..working_area import working_area
from .base import ExtractionMode, PageResult, PageTextSource

logger = logging.getLogger(__name__)

Recognizer = Callable[[Path, "str | None", str, Mapping[str, str]], str]


class ScannedBackend(PageTextSource):
    name = "scanned"
    mode = ExtractionMode.SCANNED

    def __init__(
        self,
        model_dir: str | None = "./tessdata",
        language: str = "eng",
        options: Mapping[str, str] | None = None,
        scale: float = DEFAULT_RENDER_SCALE,
        image_format: str = "png",
        basename: str = "page",
        open_pages: Callable[[str | Path], ContextManager] = render.open_pages,
        render_page: Callable = render.render_page,
        recognizer: Recognizer = ocr.recognize,
        work_dir: str | Path | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ):
        super().__init__(should_cancel)
        if scale <= 0:
            raise ValueError(f"Render scale must be positive, got {scale}")
        self.model_dir = model_dir
        self.language = language
        self.options = dict(options or {})
        self.scale = scale
        self.image_format = image_format
        self.basename = basename
        self.open_pages = open_pages
        self.render_page = render_page
        self.recognizer = recognizer
        self.work_dir = work_dir

    def get_page_lines(self, path: str | Path) -> PageResult:
        result: PageResult = {}
        name = Path(path).name
        with self.open_pages(path) as cursor, working_area(self.work_dir) as area:
            while True:
                page_number = len(result) + 1
                page = cursor.next_page()
                if page is None:
                    break
                try:
                    self.check_cancelled(page_number)
                    try:
                        text = self._recognize_page(page, area, page_number - 1)
                    except Exception as e:
                        logger.warning("scanned_page_failed path=%s page=%s error=%s", name, page_number, e)
                        raise PageProcessingFailed(page_number, e) from e
                finally:
                    close = getattr(page, "close", None)
                    if close is not None:
                        close()
                result[page_number] = split_lines(text)
                logger.debug("scanned_page path=%s page=%s lines=%s", name, page_number, len(result[page_number]))
        logger.info("scanned_done path=%s pages=%s", name, len(result))
        return result

    def _recognize_page(self, page, area: Path, page_index: int) -> str:
        image = self.render_page(page, self.scale)
        image_path = render.save_image(image, area, self.basename, page_index, self.image_format)
        return self.recognizer(image_path, self.model_dir, self.language, self.options)

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "ScannedBackend":
        return cls(
            model_dir=settings.tessdata_dir,
            language=settings.language,
            options=settings.tesseract_options,
            scale=settings.render_scale,
            image_format=settings.image_format,
            **kwargs,
        )
