"""Ingestion services for the pagetext app.

This module runs the text pipeline over PDF files and stores the result:
the recovered lines of every page and, when a template recognises the
document, the entries it extracts. It exposes functions to ingest a single
file and to ingest all PDFs in a directory.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from typing import Any, Sequence

from sqlalchemy.orm import Session

from ..errors import PageTextError
from ..models import ExtractedEntry, PageLine, SourceFile
from .backends.base import ExtractionMode
from .extractors.base import EntryTemplate, convert
from .extractors.ledger import ledger_template
from .pipeline import DocumentTextPipeline

logger = logging.getLogger(__name__)

# Templates to try, in order. The first whose ``detect`` accepts the text wins.
TEMPLATES: list[EntryTemplate] = [
    ledger_template(),
]


def detect_template(lines: Sequence[str], templates: Sequence[EntryTemplate] | None = None):
    """Return the first template that recognises the document, or None."""
    lower_text = "\n".join(lines).lower()
    for template in TEMPLATES if templates is None else templates:
        if template.matches(lower_text):
            return template
    return None


def already_ingested(session: Session, path: str) -> bool:
    """Return True if a SourceFile with the given path exists in the database."""
    return session.query(SourceFile).filter(SourceFile.path == path).first() is not None


def entry_payload(entry: Any) -> str:
    """Serialise an entry to JSON; dataclasses become objects."""
    if dataclasses.is_dataclass(entry) and not isinstance(entry, type):
        entry = dataclasses.asdict(entry)
    return json.dumps(entry, default=str, ensure_ascii=False)


def ingest_file(
    session: Session,
    path: str,
    pipeline: DocumentTextPipeline,
    templates: Sequence[EntryTemplate] | None = None,
    mode: ExtractionMode | str | None = None,
) -> dict:
    """Ingest a single PDF file into the database.

    The pipeline runs once; its lines are stored page by page. If a template
    recognises the document, its entries are extracted from the same lines
    (fail-fast: a bad line rolls back the whole file). A file that was
    already ingested is skipped.
    """
    fn = os.path.basename(path)
    if already_ingested(session, path):
        return {"file": fn, "status": "skipped", "reason": "already ingested"}

    result = pipeline.extract(path, mode)
    lines = result.lines()
    template = detect_template(lines, templates)
    selected = template.select_lines(lines) if template else []
    entries = [convert(template, line) for line in selected]

    sf = SourceFile(
        path=path,
        mode=result.mode.value,
        page_count=result.page_count,
        template=template.name if template else None,
    )
    for page_number in sorted(result.pages):
        for position, text in enumerate(result.pages[page_number]):
            sf.lines.append(PageLine(page_number=page_number, position=position, text=text))
    for position, (line, entry) in enumerate(zip(selected, entries)):
        sf.entries.append(
            ExtractedEntry(template=template.name, position=position, line=line, payload=entry_payload(entry))
        )
    session.add(sf)
    session.commit()
    logger.info(
        "ingested file=%s mode=%s pages=%s lines=%s entries=%s",
        fn, result.mode.value, result.page_count, len(lines), len(entries),
    )
    return {
        "file": fn,
        "status": "ok",
        "id": sf.id,
        "mode": result.mode.value,
        "pages": result.page_count,
        "lines": len(lines),
        "template": sf.template,
        "entries": len(entries),
    }


def ingest_all(
    session: Session,
    data_dir: str,
    pipeline: DocumentTextPipeline,
    templates: Sequence[EntryTemplate] | None = None,
):
    """Ingest all PDF files in the given directory.

    Files are processed in sorted order. The result is a list of
    dictionaries summarising each file's ingestion status. A file that
    fails is reported with status ``error`` and does not stop the others.
    """
    results = []
    if not os.path.isdir(data_dir):
        return [
            {
                "file": None,
                "status": "error",
                "error": f"missing folder {data_dir}",
            }
        ]
    for fn in sorted(os.listdir(data_dir)):
        if not fn.lower().endswith(".pdf"):
            continue
        path = os.path.join(data_dir, fn)
        try:
            results.append(ingest_file(session, path, pipeline, templates))
        except Exception as e:
            session.rollback()
            logger.warning("ingest_failed file=%s error=%s", fn, e, exc_info=not isinstance(e, PageTextError))
            results.append(
                {
                    "file": fn,
                    "status": "error",
                    "error": str(e),
                }
            )
    return results
