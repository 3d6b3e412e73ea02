import re
from collections.abc import Sequence

import structlog

from citelight.highlight.normalize import normalize
from citelight.highlight.types import Chunk, Highlight

_logger = structlog.get_logger()

_WHITESPACE_RUN = re.compile(r"\s+")


def _whitespace_tolerant_pattern(snippet: str) -> re.Pattern[str]:
    parts = _WHITESPACE_RUN.split(snippet)
    return re.compile(r"\s+".join(re.escape(part) for part in parts), re.IGNORECASE)


def find_direct_match(chunks: Sequence[Chunk], snippet: str) -> Highlight | None:
    """Find *snippet* literally inside one of *chunks*.

    Chunks are tried in the given order. The returned text is the span as it
    appears in the chunk, so casing and spacing follow the source document.
    """
    cleaned = snippet.strip()
    normalized_snippet = normalize(cleaned)
    if not normalized_snippet:
        return None

    pattern = _whitespace_tolerant_pattern(cleaned)

    for chunk in chunks:
        if not chunk.content:
            continue
        if normalized_snippet not in normalize(chunk.content):
            continue

        match = pattern.search(chunk.content)
        if match:
            return Highlight(text=match.group(0), chunk_id=chunk.id)

        # dash variants match only after normalizing
        _logger.debug("direct_match_regex_miss", chunk_id=chunk.id)
        return Highlight(text=cleaned, chunk_id=chunk.id)

    return None
