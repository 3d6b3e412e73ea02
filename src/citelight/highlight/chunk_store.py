from abc import ABC, abstractmethod
from dataclasses import dataclass

from citelight.highlight.types import Chunk


@dataclass(frozen=True)
class ChunkFilter:
    """Equality filters on chunk metadata. ``None`` fields are not filtered."""

    source: str
    page: str | None = None
    loc_page_number: str | None = None
    org_url: str | None = None


class AbstractChunkStore(ABC):
    @abstractmethod
    def find(self, chunk_filter: ChunkFilter, limit: int | None = None) -> list[Chunk]:
        """Return chunks matching every set field of *chunk_filter*, ordered by id.

        Raises:
            ChunkStoreUnavailable: the backing store could not be queried.
        """
        ...
