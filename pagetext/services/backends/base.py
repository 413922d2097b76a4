"""Abstract base class for page text backends.

A backend turns a PDF path into a ``PageResult``: a dict mapping the 1-based
page number to the ordered lines of that page. There is one backend per
physical encoding: ``searchable`` reads the text layer, ``scanned`` renders
pages and runs OCR on them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List

from ...errors import ExtractionCancelled

PageResult = Dict[int, List[str]]


class ExtractionMode(str, Enum):
    SCANNED = "scanned"
    SEARCHABLE = "searchable"

    @classmethod
    def coerce(cls, value: "ExtractionMode | str | None") -> "ExtractionMode | None":
        """Accept an enum member, its string value or None."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown extraction mode: {value!r}") from None


class PageTextSource(ABC):
    name: str
    mode: ExtractionMode

    def __init__(self, should_cancel: Callable[[], bool] | None = None):
        self.should_cancel = should_cancel

    @abstractmethod
    def get_page_lines(self, path: str | Path) -> PageResult:
        """Return the lines of every page, keyed by 1-based page number."""
        ...

    def check_cancelled(self, page_number: int) -> None:
        """Stop between pages when the caller asked for it."""
        if self.should_cancel is not None and self.should_cancel():
            raise ExtractionCancelled(page_number)
