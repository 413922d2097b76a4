"""Template for records written as ``<prefix><value>`` lines.

``prefixed_template("ID:")`` keeps the lines that start with ``ID:`` (after
leading whitespace) and returns what follows the prefix, stripped.
"""

from __future__ import annotations

from typing import Sequence

from ...errors import LineConversionFailed
from .base import EntryTemplate


def prefixed_template(prefix: str, name: str | None = None) -> EntryTemplate[str]:
    if not prefix:
        raise ValueError("prefix must not be empty")

    def select_lines(lines: Sequence[str]) -> list[str]:
        return [line for line in lines if line.lstrip().startswith(prefix)]

    def convert_line(line: str) -> str:
        text = line.lstrip()
        if not text.startswith(prefix):
            raise LineConversionFailed(line, f"missing prefix {prefix!r}")
        return text[len(prefix):].strip()

    def detect(lower_text: str) -> bool:
        return prefix.lower() in lower_text

    return EntryTemplate(
        name=name or f"prefixed:{prefix}",
        select_lines=select_lines,
        convert_line=convert_line,
        detect=detect,
    )
