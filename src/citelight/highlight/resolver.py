from collections.abc import Callable, Sequence
from typing import TypeAlias

import structlog

from citelight.highlight.chunk_store import AbstractChunkStore
from citelight.highlight.config import HighlightConfig, ResolutionStrategy
from citelight.highlight.extractor import LlmSpanExtractor
from citelight.highlight.locator import ChunkLocator
from citelight.highlight.matcher import find_direct_match
from citelight.highlight.types import (
    Chunk,
    Highlight,
    HighlightInputError,
    HighlightQuery,
    HighlightResult,
)
from citelight.llm.provider.provider import AbstractProvider

_logger = structlog.get_logger()

_Stage: TypeAlias = tuple[str, Callable[[str, Sequence[Chunk]], Highlight | None]]


class HighlightResolver:
    """Turn a citation into the literal source span to highlight.

    Locates the candidate chunks, then tries span extraction and direct
    matching in the configured order. The candidates are always returned,
    so the viewer can fall back to showing them unhighlighted.
    """

    def __init__(
        self,
        config: HighlightConfig,
        chunk_store: AbstractChunkStore,
        llm_provider: AbstractProvider | None = None,
    ) -> None:
        self._config = config
        self._locator = ChunkLocator(chunk_store, max_fallback_chunks=config.max_fallback_chunks)
        self._extractor = LlmSpanExtractor(llm_provider)

    @property
    def locator(self) -> ChunkLocator:
        return self._locator

    def resolve(self, query: HighlightQuery) -> HighlightResult:
        """Resolve *query* into a highlight and its candidate chunks.

        Raises:
            HighlightInputError: ``filename`` or ``page`` is missing.
            ChunkStoreUnavailable: candidates could not be fetched.
        """
        filename, page = _require_fields(query)

        _logger.info(
            "highlight_requested",
            filename=filename,
            page=page,
            org_url=query.org_url,
            snippet_preview=query.answer_snippet[:80],
        )

        chunks = self._locator.locate(filename, page, query.org_url)
        if not chunks:
            _logger.info("highlight_no_chunks", filename=filename, page=page)
            return HighlightResult(highlight=None, chunks=[])

        _logger.debug(
            "highlight_candidates",
            count=len(chunks),
            previews=[{"id": c.id, "preview": c.content[:60]} for c in chunks],
        )

        for stage_name, stage in self._stages():
            highlight = stage(query.answer_snippet, chunks)
            if highlight is not None:
                _logger.info(
                    "highlight_resolved",
                    stage=stage_name,
                    chunk_id=highlight.chunk_id,
                    text_preview=highlight.text[:80],
                )
                return HighlightResult(highlight=highlight, chunks=chunks)

        _logger.info("highlight_unresolved", candidates=len(chunks))
        return HighlightResult(highlight=None, chunks=chunks)

    def _stages(self) -> list[_Stage]:
        direct: _Stage = ("direct", find_direct_match)
        llm: _Stage = ("llm", self._extractor.extract)
        if self._config.strategy == ResolutionStrategy.DIRECT_FIRST:
            return [direct, llm]
        return [llm, direct]


def _require_fields(query: HighlightQuery) -> tuple[str, int | str]:
    filename = query.filename.strip() if isinstance(query.filename, str) else ""
    page = query.page
    if isinstance(page, str):
        page = page.strip()
    elif isinstance(page, float) and page.is_integer():
        page = int(page)
    if not filename or page is None or page == "" or isinstance(page, bool):
        raise HighlightInputError("filename and page are required")
    return filename, page
