"""Native PDF text helpers.

This module wraps ``pdfplumber`` to read the text layer of a PDF page by
page. It is the engine behind the searchable backend and the scan probe.

pdfminer (which pdfplumber sits on) raises diagnostics on some malformed
content streams while the rest of the document is still readable. Those are
swallowed in ``page_text`` only, one page at a time; errors opening the file
are reported as ``DocumentLoadFailed``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from ..errors import DocumentLoadFailed

logger = logging.getLogger(__name__)

# errors pdfminer raises while interpreting a page's content stream
PAGE_DIAGNOSTICS = (PSException, PdfminerException)


@contextmanager
def open_pdf(path: str | Path) -> Iterator[pdfplumber.PDF]:
    """Open ``path`` with pdfplumber, closing it on exit."""
    p = Path(path)
    if not p.is_file():
        raise DocumentLoadFailed(str(p), FileNotFoundError(str(p)))
    try:
        pdf = pdfplumber.open(p)
    except Exception as e:
        raise DocumentLoadFailed(str(p), e) from e
    with pdf:
        yield pdf


def page_text(page) -> str:
    """Return the text of one pdfplumber page, ignoring engine diagnostics.

    pdfminer's non-fatal noise goes through its logger; ``setup_logging``
    keeps that at WARNING.
    """
    try:
        return page.extract_text() or ""
    except PAGE_DIAGNOSTICS as e:
        logger.debug("pdf_page_diagnostic page=%s error=%s", page.page_number, e)
        return ""


def iter_pages(path: str | Path, before_page: Callable[[int], None] | None = None) -> Iterator[str]:
    """Yield one text blob per page of the PDF, in page order.

    ``before_page`` is called with the 1-based page number before that page's
    text is extracted. Whatever it raises ends the iteration and closes the
    document.
    """
    with open_pdf(path) as pdf:
        for number, page in enumerate(pdf.pages, start=1):
            if before_page is not None:
                before_page(number)
            yield page_text(page)


def read_pages(path: str | Path) -> list[str]:
    """Return one text blob per page of the PDF, in page order."""
    return list(iter_pages(path))


def split_lines(text: str) -> list[str]:
    """Split page text on any line terminator, keeping empty lines.

    A trailing terminator does not produce an extra empty line: ``"a\\n"``
    gives ``["a"]``.
    """
    return text.splitlines()
