from collections.abc import Iterable
from typing import Any
from unittest.mock import MagicMock

from citelight.highlight.chunk_store import AbstractChunkStore
from citelight.highlight.types import Chunk
from citelight.llm.provider.types import TextResponse, TokenUsage


def make_chunk(
    chunk_id: int = 1,
    content: str = "some content",
    source: str = "sales.pdf",
    page: Any = "5",
    **extra: Any,
) -> Chunk:
    metadata: dict[str, Any] = {"source": source}
    if page is not None:
        metadata["page"] = page
    metadata.update(extra)
    return Chunk(id=chunk_id, content=content, metadata=metadata)


def make_store(*tiers: Iterable[Chunk]) -> MagicMock:
    """Chunk store whose successive ``find`` calls return *tiers* in order."""
    store = MagicMock(spec=AbstractChunkStore)
    store.find.side_effect = [list(tier) for tier in tiers]
    return store


def make_provider(content: Any) -> MagicMock:
    provider = MagicMock()
    provider.complete.return_value = TextResponse(
        content=content,
        usage=TokenUsage(input_tokens=10, output_tokens=5),
    )
    return provider
