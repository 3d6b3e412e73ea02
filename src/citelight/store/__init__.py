from citelight.store.chunk_store import SqlChunkStore
from citelight.store.models import Base, DocumentChunk

__all__ = ["Base", "DocumentChunk", "SqlChunkStore"]
