from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repository root and this directory are importable
ROOT = Path(__file__).resolve().parents[1]
for p in (ROOT, Path(__file__).resolve().parent):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


@pytest.fixture
def blank_pdf(tmp_path):
    """Factory writing a real PDF with ``pages`` empty pages (via pypdfium2)."""
    import pypdfium2 as pdfium

    def make(pages: int = 1, size: tuple[float, float] = (100, 50), name: str = "blank.pdf") -> Path:
        pdf = pdfium.PdfDocument.new()
        for _ in range(pages):
            page = pdf.new_page(*size)
            page.close()
        out = tmp_path / name
        pdf.save(str(out))
        pdf.close()
        return out

    return make


@pytest.fixture
def work_dir(tmp_path):
    d = tmp_path / "work"
    d.mkdir()
    return d
