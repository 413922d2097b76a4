"""Transient working directory for rendered page images.

Each scanned-backend run gets its own freshly named directory; it is removed
recursively when the ``with`` block exits, whether the run succeeded or not.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def working_area(parent: str | Path | None = None, prefix: str = "pagetext_") -> Iterator[Path]:
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    logger.debug("working_area_created path=%s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path)
        logger.debug("working_area_removed path=%s", path)
