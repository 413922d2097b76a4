"""Decide whether a PDF is scanned or searchable.

The text layer is probed with the searchable backend. A document counts as
scanned when it has at most two pages and every line on every page is blank.
This is a heuristic: a short digital document with an empty text layer is
reported as scanned, and a long scan (more than two pages) is reported as
searchable. Callers who know better pass an explicit mode to the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import DocumentLoadFailed, ExtractionCancelled, ExtractionFailed
from .backends.base import ExtractionMode, PageResult, PageTextSource

logger = logging.getLogger(__name__)

# only short documents can be classified as scanned
MAX_SCANNED_PAGES = 2


@dataclass(frozen=True)
class Classification:
    mode: ExtractionMode
    probe: PageResult  # what the text-layer probe returned

    @property
    def scanned(self) -> bool:
        return self.mode is ExtractionMode.SCANNED


def looks_scanned(pages: PageResult) -> bool:
    return len(pages) <= MAX_SCANNED_PAGES and all(
        line.strip() == "" for lines in pages.values() for line in lines
    )


def classify(path: str | Path, probe: PageTextSource) -> Classification:
    try:
        pages = probe.get_page_lines(path)
    except (DocumentLoadFailed, ExtractionCancelled):
        raise
    except Exception as e:
        raise ExtractionFailed(str(path), e) from e
    mode = ExtractionMode.SCANNED if looks_scanned(pages) else ExtractionMode.SEARCHABLE
    logger.info("classified path=%s pages=%s mode=%s", Path(path).name, len(pages), mode.value)
    return Classification(mode, pages)


def is_scanned(path: str | Path, probe: PageTextSource) -> bool:
    return classify(path, probe).scanned
