"""Template for account statement lines.

A ledger line starts with an ISO date, followed by a free-text description
and ends with a signed amount::

    2024-03-01  Opening deposit           1,250.00
    2024-03-04  Card payment BOOKSHOP       -23.90

Lines that start with a date are selected; a selected line whose amount
cannot be read raises ``LineConversionFailed``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ...errors import LineConversionFailed
from ..parsing import parse_date_iso, parse_money_to_float
from .base import EntryTemplate

DATE_START_RX = re.compile(r"^\s*\d{4}-\d{2}-\d{2}\b")
LEDGER_LINE_RX = re.compile(
    r"^\s*(?P<date>\d{4}-\d{2}-\d{2})\s+(?P<desc>.+?)\s+(?P<amount>[-+]?\s?\$?\d[\d,]*(?:\.\d+)?)\s*$"
)


@dataclass(frozen=True)
class LedgerEntry:
    date: date
    description: str
    amount: float


def select_ledger_lines(lines: Sequence[str]) -> list[str]:
    return [line for line in lines if DATE_START_RX.match(line)]


def parse_ledger_line(line: str) -> LedgerEntry:
    m = LEDGER_LINE_RX.match(line)
    if not m:
        raise LineConversionFailed(line, "expected '<date> <description> <amount>'")
    d = parse_date_iso(m.group("date"))
    if d is None:
        raise LineConversionFailed(line, f"bad date {m.group('date')!r}")
    amount = parse_money_to_float(m.group("amount"))
    if amount is None:
        raise LineConversionFailed(line, f"bad amount {m.group('amount')!r}")
    return LedgerEntry(date=d, description=m.group("desc").strip(), amount=amount)


def detect_ledger(lower_text: str) -> bool:
    return "statement" in lower_text and any(DATE_START_RX.match(l) for l in lower_text.splitlines())


def ledger_template() -> EntryTemplate[LedgerEntry]:
    return EntryTemplate(
        name="ledger",
        select_lines=select_ledger_lines,
        convert_line=parse_ledger_line,
        detect=detect_ledger,
    )
