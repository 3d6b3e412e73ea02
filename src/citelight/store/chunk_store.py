from typing import Any

import structlog
from sqlalchemy import String, cast, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from citelight.highlight.chunk_store import AbstractChunkStore, ChunkFilter
from citelight.highlight.types import Chunk, ChunkStoreUnavailable
from citelight.store.models import DocumentChunk
from citelight.util.db import get_session

_logger = structlog.get_logger()


class SqlChunkStore(AbstractChunkStore):
    """Chunk store over the ``document_chunks`` table.

    Metadata values are compared as text, so ``page: 5`` and ``page: "5"``
    both match ``"5"``.
    """

    def find(self, chunk_filter: ChunkFilter, limit: int | None = None) -> list[Chunk]:
        metadata = DocumentChunk.metadata_
        conditions = [_as_text(metadata["source"].as_string()) == chunk_filter.source]

        if chunk_filter.page is not None:
            conditions.append(_as_text(metadata["page"].as_string()) == chunk_filter.page)
        if chunk_filter.loc_page_number is not None:
            conditions.append(
                _as_text(metadata[("loc", "pageNumber")].as_string())
                == chunk_filter.loc_page_number
            )
        if chunk_filter.org_url is not None:
            conditions.append(_as_text(metadata["orgUrl"].as_string()) == chunk_filter.org_url)

        stmt = select(DocumentChunk).where(*conditions).order_by(DocumentChunk.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            with get_session() as session:
                rows = session.scalars(stmt).all()
        except SQLAlchemyError as e:
            _logger.error("chunk_store_query_failed", error=str(e), source=chunk_filter.source)
            raise ChunkStoreUnavailable("Failed to fetch chunks") from e

        return [
            Chunk(id=row.id, content=row.content or "", metadata=dict(row.metadata_ or {}))
            for row in rows
        ]


def _as_text(expression: ColumnElement[Any]) -> ColumnElement[str]:
    return cast(expression, String)
