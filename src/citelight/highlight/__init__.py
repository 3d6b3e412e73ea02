from citelight.highlight.citation import Citation, parse_citations
from citelight.highlight.chunk_store import AbstractChunkStore, ChunkFilter
from citelight.highlight.config import HighlightConfig, ResolutionStrategy, load_highlight_config
from citelight.highlight.extractor import LlmSpanExtractor
from citelight.highlight.locator import ChunkLocator
from citelight.highlight.matcher import find_direct_match
from citelight.highlight.normalize import normalize
from citelight.highlight.resolver import HighlightResolver
from citelight.highlight.types import (
    Chunk,
    ChunkStoreUnavailable,
    Highlight,
    HighlightError,
    HighlightInputError,
    HighlightQuery,
    HighlightResult,
)

__all__ = [
    "AbstractChunkStore",
    "Chunk",
    "ChunkFilter",
    "ChunkLocator",
    "ChunkStoreUnavailable",
    "Citation",
    "Highlight",
    "HighlightConfig",
    "HighlightError",
    "HighlightInputError",
    "HighlightQuery",
    "HighlightResolver",
    "HighlightResult",
    "LlmSpanExtractor",
    "ResolutionStrategy",
    "find_direct_match",
    "load_highlight_config",
    "normalize",
    "parse_citations",
]
