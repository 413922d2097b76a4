"""Document text pipeline.

This module ties the pieces together: it classifies a PDF (unless the caller
forces a mode), runs the matching backend and returns the recovered lines
page by page, as one flat list or as a single text blob.

Classification happens at most once per call. When the probe already read a
searchable document, its result is reused instead of reading the text layer
a second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import Settings
from ..errors import DocumentLoadFailed
from .backends.base import ExtractionMode, PageResult, PageTextSource
from .backends.scanned import ScannedBackend
from .backends.searchable import SearchableBackend
from .classifier import classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    mode: ExtractionMode
    pages: PageResult

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def lines(self) -> list[str]:
        return [line for number in sorted(self.pages) for line in self.pages[number]]

    def text(self) -> str:
        return "\n".join("\n".join(self.pages[number]) for number in sorted(self.pages))


class DocumentTextPipeline:
    def __init__(
        self,
        searchable: PageTextSource | None = None,
        scanned: PageTextSource | None = None,
    ):
        self.searchable = searchable or SearchableBackend()
        self.scanned = scanned or ScannedBackend()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentTextPipeline":
        return cls(SearchableBackend(), ScannedBackend.from_settings(settings))

    def backend_for(self, mode: ExtractionMode) -> PageTextSource:
        return self.scanned if mode is ExtractionMode.SCANNED else self.searchable

    def classify(self, path: str | Path) -> ExtractionMode:
        _check_readable(path)
        return classify(path, self.searchable).mode

    def extract(self, path: str | Path, mode: ExtractionMode | str | None = None) -> PipelineResult:
        """Run the pipeline once and report the mode that produced the pages."""
        mode = ExtractionMode.coerce(mode)
        _check_readable(path)
        if mode is None:
            verdict = classify(path, self.searchable)
            mode = verdict.mode
            if mode is ExtractionMode.SEARCHABLE:
                return PipelineResult(mode, verdict.probe)
        pages = self.backend_for(mode).get_page_lines(path)
        logger.info("pipeline_done path=%s mode=%s pages=%s", Path(path).name, mode.value, len(pages))
        return PipelineResult(mode, pages)

    def get_text_by_page(self, path: str | Path, mode: ExtractionMode | str | None = None) -> PageResult:
        return self.extract(path, mode).pages

    def get_text(self, path: str | Path, mode: ExtractionMode | str | None = None) -> str:
        """Return the document text; pages are joined by a single newline."""
        return self.extract(path, mode).text()

    def get_lines(self, path: str | Path, mode: ExtractionMode | str | None = None) -> list[str]:
        return self.extract(path, mode).lines()


def _check_readable(path: str | Path) -> None:
    p = Path(path)
    if not p.is_file():
        raise DocumentLoadFailed(str(p), FileNotFoundError(str(p)))
