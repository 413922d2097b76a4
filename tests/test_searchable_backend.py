from __future__ import annotations

import warnings
from contextlib import contextmanager

import pytest
from pdfminer.psparser import PSSyntaxError

from fakes import FakeReader, touch_pdf
from pagetext.errors import DocumentLoadFailed, ExtractionCancelled
from pagetext.services.backends.searchable import SearchableBackend
from pagetext.utils import pdf as pdf_utils
from pagetext.utils.pdf import page_text, read_pages, split_lines


class _Page:
    page_number = 1

    def __init__(self, result):
        self.result = result

    def extract_text(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def test_pages_are_numbered_from_one(tmp_path):
    path = touch_pdf(tmp_path)
    backend = SearchableBackend(reader=FakeReader({"doc.pdf": ["a\n\nb", "", "c\r\nd"]}))
    assert backend.get_page_lines(path) == {1: ["a", "", "b"], 2: [], 3: ["c", "d"]}


def test_split_lines_keeps_blank_and_untrimmed_lines():
    assert split_lines("  x \n\n y") == ["  x ", "", " y"]
    assert split_lines("") == []


def test_trailing_terminator_adds_no_line():
    assert split_lines("a\n") == ["a"]
    assert split_lines("a\n\n") == ["a", ""]


def test_engine_diagnostics_are_swallowed():
    assert page_text(_Page(PSSyntaxError("bad operator"))) == ""


def test_none_text_becomes_empty():
    assert page_text(_Page(None)) == ""


class _FilterSpy(_Page):
    def extract_text(self):
        self.filters = list(warnings.filters)
        return super().extract_text()


def test_page_text_leaves_warning_filters_alone():
    before = list(warnings.filters)
    page = _FilterSpy("text")
    assert page_text(page) == "text"
    assert page.filters == before


def test_other_errors_propagate():
    with pytest.raises(KeyError):
        page_text(_Page(KeyError("font")))


def test_missing_file(tmp_path):
    with pytest.raises(DocumentLoadFailed):
        read_pages(tmp_path / "nope.pdf")


def test_garbage_file(tmp_path):
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"definitely not a pdf")
    with pytest.raises(DocumentLoadFailed):
        SearchableBackend().get_page_lines(bad)


def test_real_blank_pages(blank_pdf):
    path = blank_pdf(pages=3)
    assert SearchableBackend().get_page_lines(path) == {1: [], 2: [], 3: []}


def test_cancellation(tmp_path):
    path = touch_pdf(tmp_path)
    reader = FakeReader({"doc.pdf": ["a", "b"]})
    backend = SearchableBackend(reader=reader, should_cancel=lambda: True)
    with pytest.raises(ExtractionCancelled) as exc:
        backend.get_page_lines(path)
    assert exc.value.page_number == 1
    assert reader.extracted == []


def _count_extractions(monkeypatch):
    extracted = []

    def counting_page_text(page):
        extracted.append(page.page_number)
        return ""

    monkeypatch.setattr(pdf_utils, "page_text", counting_page_text)
    return extracted


def test_cancel_stops_before_the_next_page_is_read(blank_pdf, monkeypatch):
    extracted = _count_extractions(monkeypatch)
    path = blank_pdf(pages=3)
    backend = SearchableBackend(should_cancel=lambda: len(extracted) >= 2)
    with pytest.raises(ExtractionCancelled) as exc:
        backend.get_page_lines(path)
    assert exc.value.page_number == 3
    assert extracted == [1, 2]


def test_cancel_before_first_page_reads_nothing(blank_pdf, monkeypatch):
    extracted = _count_extractions(monkeypatch)
    path = blank_pdf(pages=3)
    with pytest.raises(ExtractionCancelled):
        SearchableBackend(should_cancel=lambda: True).get_page_lines(path)
    assert extracted == []


def test_cancel_after_last_page_keeps_the_result(blank_pdf, monkeypatch):
    extracted = _count_extractions(monkeypatch)
    path = blank_pdf(pages=2)
    backend = SearchableBackend(should_cancel=lambda: len(extracted) >= 2)
    assert backend.get_page_lines(path) == {1: [], 2: []}


def test_reader_is_closed_when_cancelled(blank_pdf, monkeypatch):
    closed = []
    real_open_pdf = pdf_utils.open_pdf

    @contextmanager
    def tracking_open_pdf(path):
        with real_open_pdf(path) as pdf:
            yield pdf
        closed.append(path)

    monkeypatch.setattr(pdf_utils, "open_pdf", tracking_open_pdf)
    path = blank_pdf(pages=2)
    with pytest.raises(ExtractionCancelled):
        SearchableBackend(should_cancel=lambda: True).get_page_lines(path)
    assert closed == [path]
