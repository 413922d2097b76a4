"""Backend for PDFs with a text layer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from ...utils.pdf import iter_pages, split_lines
from .base import ExtractionMode, PageResult, PageTextSource

logger = logging.getLogger(__name__)

# reader(path, before_page) yields page texts, calling before_page(n) ahead of page n
PageReader = Callable[[str | Path, Callable[[int], None]], Iterable[str]]


class SearchableBackend(PageTextSource):
    name = "searchable"
    mode = ExtractionMode.SEARCHABLE

    def __init__(
        self,
        reader: PageReader = iter_pages,
        should_cancel: Callable[[], bool] | None = None,
    ):
        super().__init__(should_cancel)
        self.reader = reader

    def get_page_lines(self, path: str | Path) -> PageResult:
        pages = self.reader(path, self.check_cancelled)
        result: PageResult = {}
        try:
            for number, text in enumerate(pages, start=1):
                result[number] = split_lines(text)
        finally:
            close = getattr(pages, "close", None)
            if close is not None:
                close()
        logger.debug("searchable_pages path=%s pages=%s", Path(path).name, len(result))
        return result
