from __future__ import annotations

import pytest

from fakes import FakeReader, FakeScanned, touch_pdf
from pagetext.errors import DocumentLoadFailed
from pagetext.services.backends.base import ExtractionMode
from pagetext.services.backends.searchable import SearchableBackend
from pagetext.services.pipeline import DocumentTextPipeline


@pytest.fixture
def hello(tmp_path):
    return touch_pdf(tmp_path, "hello.pdf")


def _pipeline(docs, scanned_pages=None):
    reader = FakeReader(docs)
    scanned = FakeScanned(scanned_pages)
    return DocumentTextPipeline(SearchableBackend(reader=reader), scanned), reader, scanned


def test_text_by_page(hello):
    pipeline, _, _ = _pipeline({"hello.pdf": ["Hello\nWorld", "Foo"]})
    assert pipeline.get_text_by_page(hello) == {1: ["Hello", "World"], 2: ["Foo"]}


def test_text_joins_pages_with_single_newline(hello):
    pipeline, _, _ = _pipeline({"hello.pdf": ["Hello\nWorld", "Foo"]})
    assert pipeline.get_text(hello) == "Hello\nWorld\nFoo"


def test_lines_are_flattened_in_page_order(hello):
    pipeline, _, _ = _pipeline({"hello.pdf": ["Hello\nWorld", "Foo"]})
    assert pipeline.get_lines(hello) == ["Hello", "World", "Foo"]


def test_repeated_calls_give_identical_results(hello):
    pipeline, _, _ = _pipeline({"hello.pdf": ["Hello\nWorld", "Foo"]})
    first = pipeline.get_text_by_page(hello, ExtractionMode.SEARCHABLE)
    second = pipeline.get_text_by_page(hello, ExtractionMode.SEARCHABLE)
    assert first == second


def test_searchable_probe_is_reused(hello):
    pipeline, reader, scanned = _pipeline({"hello.pdf": ["Hello\nWorld", "Foo"]})
    result = pipeline.extract(hello)
    assert result.mode is ExtractionMode.SEARCHABLE
    assert reader.calls == ["hello.pdf"]
    assert scanned.calls == []


def test_blank_document_goes_to_the_scanned_backend(tmp_path):
    path = touch_pdf(tmp_path, "scan.pdf")
    pipeline, reader, scanned = _pipeline({"scan.pdf": [""]}, {1: ["ocr line"]})
    result = pipeline.extract(path)
    assert result.mode is ExtractionMode.SCANNED
    assert result.pages == {1: ["ocr line"]}
    assert reader.calls == ["scan.pdf"]
    assert scanned.calls == ["scan.pdf"]


def test_explicit_mode_skips_classification(tmp_path):
    path = touch_pdf(tmp_path, "scan.pdf")
    pipeline, reader, scanned = _pipeline({"scan.pdf": ["text"]}, {1: ["a"], 2: ["b"]})
    assert pipeline.get_lines(path, "scanned") == ["a", "b"]
    assert reader.calls == []
    assert scanned.calls == ["scan.pdf"]


def test_explicit_searchable_mode(hello):
    pipeline, reader, scanned = _pipeline({"hello.pdf": [""]})
    assert pipeline.get_text_by_page(hello, ExtractionMode.SEARCHABLE) == {1: []}
    assert scanned.calls == []


def test_unknown_mode_is_rejected(hello):
    pipeline, _, _ = _pipeline({"hello.pdf": ["x"]})
    with pytest.raises(ValueError):
        pipeline.get_text(hello, "handwritten")


def test_missing_file_fails_before_any_backend(tmp_path):
    pipeline, reader, scanned = _pipeline({})
    with pytest.raises(DocumentLoadFailed):
        pipeline.get_text_by_page(tmp_path / "nope.pdf")
    assert reader.calls == []
    assert scanned.calls == []


def test_empty_scanned_document_gives_empty_result(tmp_path):
    path = touch_pdf(tmp_path, "empty.pdf")
    pipeline, _, _ = _pipeline({"empty.pdf": []}, {})
    assert pipeline.get_text_by_page(path) == {}
    assert pipeline.get_text(path) == ""
    assert pipeline.get_lines(path) == []


def test_classify_reports_the_verdict(hello):
    pipeline, _, _ = _pipeline({"hello.pdf": ["", ""]})
    assert pipeline.classify(hello) is ExtractionMode.SCANNED


def test_real_blank_pdf_text_layer(blank_pdf):
    path = blank_pdf(pages=2)
    pipeline = DocumentTextPipeline(scanned=FakeScanned({1: [], 2: []}))
    assert pipeline.get_text_by_page(path, ExtractionMode.SEARCHABLE) == {1: [], 2: []}
