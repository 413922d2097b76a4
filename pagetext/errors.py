"""Exceptions raised by the text pipeline.

Every error derives from ``PageTextError`` so callers can catch the whole
family at once. Backends never retry: they raise one of these and let the
caller decide what to do. The underlying engine exception is always kept as
``cause`` (and chained with ``raise ... from``).
"""

from __future__ import annotations


class PageTextError(Exception):
    """Base class for pipeline errors."""


class DocumentLoadFailed(PageTextError):
    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = str(path)
        self.cause = cause
        msg = f"Cannot open document: {self.path}"
        if cause is not None:
            msg += f" ({cause})"
        super().__init__(msg)


class ExtractionFailed(PageTextError):
    """The native-text probe used for classification failed."""

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Native text probe failed for {self.path}: {cause}")


class PageProcessingFailed(PageTextError):
    """Rendering or recognition failed; ``page_number`` is 1-based."""

    def __init__(self, page_number: int, cause: BaseException | None = None):
        self.page_number = page_number
        self.cause = cause
        super().__init__(f"Page {page_number} could not be processed: {cause}")


class LineConversionFailed(PageTextError):
    def __init__(self, line: str, cause: BaseException | str | None = None):
        self.line = line
        self.cause = cause
        super().__init__(f"Cannot convert line {line!r}: {cause}")


class ExtractionCancelled(PageTextError):
    """Raised between pages when the caller asked to stop."""

    def __init__(self, page_number: int):
        self.page_number = page_number
        super().__init__(f"Extraction cancelled before page {page_number}")
