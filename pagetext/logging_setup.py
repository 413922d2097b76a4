"""Logging setup shared by the app and scripts."""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", force: bool = False) -> None:
    """Configure the root logger once (unless force=True)."""
    if getattr(setup_logging, "_configured", False) and not force:
        return
    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(handler)
    # pdfminer is very chatty at DEBUG about malformed content streams
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
    setup_logging._configured = True  # type: ignore[attr-defined]
