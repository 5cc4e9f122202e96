"""Single-slot, load-once cache for the CV text."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from pathlib import Path

from cv_mcp.document.extract import extract_pdf_text
from cv_mcp.tools.types import ToolError

logger = logging.getLogger(__name__)

#: Turns raw document bytes into plain text.
Extractor = Callable[[bytes], str]


class DocumentUnavailable(ToolError):
    """Raised when the CV file is missing, unreadable or cannot be parsed.

    ``path`` is the location as configured (e.g. ``./assets/my-cv.pdf``),
    not a normalised Path, so the message shows what the operator set.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Could not load CV file at '{path}'")
        self.path = path


class DocumentCache:
    """Loads the CV once per process and hands out the cached text.

    The first successful load populates the slot for the life of the
    process; there is no invalidation.  A failed load leaves the slot empty
    so the next call retries, which covers files that are mounted late.

    Concurrent first callers share one in-flight load: only one of them
    reads and parses the file, and every caller waiting on it gets the same
    text or the same DocumentUnavailable.

    Usage::

        cache = DocumentCache("./assets/my-cv.pdf")
        text = await cache.get_text()
    """

    def __init__(self, path: str | os.PathLike[str], extractor: Extractor = extract_pdf_text) -> None:
        self._location = os.fspath(path)
        self._path = Path(path)
        self._extractor = extractor
        self._text: str | None = None
        self._inflight: asyncio.Future[str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_loaded(self) -> bool:
        return self._text is not None

    async def get_text(self) -> str:
        """Return the CV text, loading it on first use.

        Raises:
            DocumentUnavailable: if the file cannot be read or parsed.
        """
        if self._text is not None:
            return self._text

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._load_once())
        inflight = self._inflight

        try:
            # Shielded so one cancelled caller does not abort the others' load.
            return await asyncio.shield(inflight)
        finally:
            # Cleared once settled: success is served from the slot, failure
            # leaves the next call free to retry.
            if inflight.done() and self._inflight is inflight:
                self._inflight = None

    async def _load_once(self) -> str:
        try:
            text = await asyncio.to_thread(self._load)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to load CV from %s: %s", self._location, exc)
            raise DocumentUnavailable(self._location) from exc

        self._text = text
        logger.info("CV parsed successfully (%d chars)", len(text))
        return text

    def _load(self) -> str:
        data = self._path.read_bytes()
        return self._extractor(data)
