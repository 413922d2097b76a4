"""Small value parsers used by entry templates.

  * ``parse_money_to_float``: parse a monetary string with optional sign.
  * ``parse_date_iso``: parse an ISO date.

These live apart from the templates so new templates can share them.
"""

from __future__ import annotations

import re
from datetime import date, datetime

# Regex to match optional sign and a number containing digits, spaces or commas.
_MONEY_RX = re.compile(r"(?P<sgn>[-+])?\s*\$?\s*(?P<num>(?:\d{1,3}(?:[ ,]?\d{3})+|\d+)(?:\.\d+)?)")


def parse_money_to_float(s: str) -> float | None:
    """Parse a monetary string into a float.

    Examples
    --------
    ``$1,234.56`` → 1234.56
    ``- 2 000`` → -2000.0
    ``+3,000`` → 3000.0

    Returns None if no number is found.
    """
    m = _MONEY_RX.search(s.replace("\u00A0", " "))
    if not m:
        return None
    raw = m.group("num").replace(",", "").replace(" ", "")
    val = float(raw)
    if m.group("sgn") == "-":
        val = -val
    return val


def parse_date_iso(s: str) -> date | None:
    """Parse an ISO date string of the form YYYY-MM-DD."""
    try:
        return datetime.strptime(s.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None
