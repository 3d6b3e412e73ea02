import re

import structlog

from citelight.highlight.chunk_store import AbstractChunkStore, ChunkFilter
from citelight.highlight.types import Chunk

_logger = structlog.get_logger()

_DIGITS = re.compile(r"\d+")

DEFAULT_MAX_FALLBACK_CHUNKS = 8


def page_digits(page: int | str) -> str | None:
    """First run of digits in *page* (``"Page 5"`` -> ``"5"``), if any."""
    match = _DIGITS.search(str(page))
    return match.group(0) if match else None


class ChunkLocator:
    """Find the candidate chunks behind a ``(filename, page)`` citation.

    Tiers run in order and stop at the first non-empty result:

    1. ``metadata.page`` equals the page
    2. ``metadata.loc.pageNumber`` equals the page digits
    3. any chunk of the file, capped at ``max_fallback_chunks``
    """

    def __init__(
        self,
        chunk_store: AbstractChunkStore,
        max_fallback_chunks: int = DEFAULT_MAX_FALLBACK_CHUNKS,
    ) -> None:
        self._chunk_store = chunk_store
        self._max_fallback_chunks = max_fallback_chunks

    @property
    def chunk_store(self) -> AbstractChunkStore:
        return self._chunk_store

    def locate(self, filename: str, page: int | str, org_url: str | None = None) -> list[Chunk]:
        page_value = str(page).strip()

        chunks = self._chunk_store.find(
            ChunkFilter(source=filename, page=page_value, org_url=org_url)
        )
        if chunks:
            _logger.debug("chunks_located", tier="page", count=len(chunks))
            return chunks

        digits = page_digits(page_value)
        if digits is not None:
            chunks = self._chunk_store.find(
                ChunkFilter(source=filename, loc_page_number=digits, org_url=org_url)
            )
            if chunks:
                _logger.debug("chunks_located", tier="loc_page_number", count=len(chunks))
                return chunks

        chunks = self._chunk_store.find(
            ChunkFilter(source=filename, org_url=org_url),
            limit=self._max_fallback_chunks,
        )
        _logger.debug("chunks_located", tier="filename", count=len(chunks))
        return chunks
