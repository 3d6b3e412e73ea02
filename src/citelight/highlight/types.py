import math
from dataclasses import dataclass, field
from typing import Any, TypeAlias

ChunkId: TypeAlias = int | str


class HighlightError(Exception):
    """Base class for errors surfaced by highlight resolution."""


class HighlightInputError(HighlightError):
    """Required query fields are missing."""


class ChunkStoreUnavailable(HighlightError):
    """The chunk store could not be queried."""


@dataclass(frozen=True)
class Chunk:
    id: ChunkId
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> str | None:
        value = self.metadata.get("source")
        return value if isinstance(value, str) else None

    @property
    def page(self) -> int | float | None:
        """Numeric page, preferring ``page`` over ``loc.pageNumber``."""
        page = _to_number(self.metadata.get("page"))
        if page is not None:
            return page
        loc = self.metadata.get("loc")
        if isinstance(loc, dict):
            return _to_number(loc.get("pageNumber"))
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.content,
            "page": self.page,
            "source": self.source,
        }


@dataclass(frozen=True)
class HighlightQuery:
    filename: str | None
    page: int | str | None
    answer_snippet: str = ""
    org_url: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "HighlightQuery":
        snippet = raw.get("answerSnippet")
        org_url = raw.get("orgUrl")
        return cls(
            filename=raw.get("filename"),
            page=raw.get("page"),
            answer_snippet=snippet if isinstance(snippet, str) else "",
            org_url=org_url if isinstance(org_url, str) and org_url else None,
        )


@dataclass(frozen=True)
class Highlight:
    text: str
    chunk_id: ChunkId

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "chunkId": self.chunk_id}


@dataclass
class HighlightResult:
    highlight: Highlight | None
    chunks: list[Chunk]

    def to_dict(self) -> dict[str, Any]:
        return {
            "highlight": self.highlight.to_dict() if self.highlight else None,
            "chunks": [chunk.to_dict() for chunk in self.chunks],
        }


def _to_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
        if value.is_integer():
            value = int(value)
    if isinstance(value, int | float) and math.isfinite(value):
        return value
    return None
