"""Generic entry extraction.

An ``EntryTemplate`` describes how to turn the lines of a PDF into records
of some type ``E``. It holds two callables:

* ``select_lines`` picks the lines that represent a record, keeping their
  order (for example every line starting with ``ID:``);
* ``convert_line`` turns one of those lines into an ``E``.

Templates may also carry ``detect``, which looks at the lower-cased text of
a document and says whether the template applies to it. Ingest uses it to
choose a template; ``EntryExtractor`` itself never calls it.

``EntryExtractor`` runs a template against the document text pipeline.
``get_entries`` is fail-fast: the first line that cannot be converted raises
``LineConversionFailed`` and nothing is returned. ``get_entry_results``
isolates failures per line instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Sequence, TypeVar

from ...errors import LineConversionFailed
from ..backends.base import ExtractionMode
from ..pipeline import DocumentTextPipeline

E = TypeVar("E")


@dataclass(frozen=True)
class EntryTemplate(Generic[E]):
    name: str
    select_lines: Callable[[Sequence[str]], list[str]]
    convert_line: Callable[[str], E]
    detect: Callable[[str], bool] | None = None
    mode: ExtractionMode | None = None  # force a backend, skip classification

    def matches(self, lower_text: str) -> bool:
        return self.detect is not None and self.detect(lower_text)


@dataclass(frozen=True)
class EntryResult(Generic[E]):
    line: str
    entry: E | None = None
    error: LineConversionFailed | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert(template: EntryTemplate[E], line: str) -> E:
    """Convert one line, reporting any failure as ``LineConversionFailed``."""
    try:
        return template.convert_line(line)
    except LineConversionFailed:
        raise
    except Exception as e:
        raise LineConversionFailed(line, e) from e


class EntryExtractor(Generic[E]):
    def __init__(self, template: EntryTemplate[E], pipeline: DocumentTextPipeline | None = None):
        self.template = template
        self.pipeline = pipeline or DocumentTextPipeline()

    def get_entries(self, path: str | Path) -> list[E]:
        return self.entries_from_lines(self.pipeline.get_lines(path, self.template.mode))

    def get_entry_results(self, path: str | Path) -> list[EntryResult[E]]:
        return self.results_from_lines(self.pipeline.get_lines(path, self.template.mode))

    def entries_from_lines(self, lines: Sequence[str]) -> list[E]:
        return [convert(self.template, line) for line in self.template.select_lines(lines)]

    def results_from_lines(self, lines: Sequence[str]) -> list[EntryResult[E]]:
        out: list[EntryResult[E]] = []
        for line in self.template.select_lines(lines):
            try:
                out.append(EntryResult(line, entry=convert(self.template, line)))
            except LineConversionFailed as e:
                out.append(EntryResult(line, error=e))
        return out
