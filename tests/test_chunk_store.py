from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

import citelight.util.db as db_module
from citelight.highlight.chunk_store import ChunkFilter
from citelight.highlight.types import ChunkStoreUnavailable
from citelight.store.chunk_store import SqlChunkStore
from citelight.store.models import DocumentChunk


def _insert(content: str, metadata: dict[str, Any]) -> None:
    with db_module.get_session() as session:
        session.add(DocumentChunk(content=content, metadata_=metadata))
        session.commit()


class TestSqlChunkStore:
    def setup_method(self) -> None:
        db_module.configure_engine("sqlite:///:memory:")
        db_module.init_db()

        _insert("page five, acme", {"source": "sales.pdf", "page": "5", "orgUrl": "acme"})
        _insert("page five, numeric", {"source": "sales.pdf", "page": 5, "orgUrl": "acme"})
        _insert("page five, other org", {"source": "sales.pdf", "page": "5", "orgUrl": "other"})
        _insert("loc page six", {"source": "sales.pdf", "loc": {"pageNumber": 6}})
        _insert("other file", {"source": "hr.pdf", "page": "5"})

    def teardown_method(self) -> None:
        db_module._engine = None

    def test_filters_by_source_and_page(self) -> None:
        chunks = SqlChunkStore().find(ChunkFilter(source="sales.pdf", page="5"))

        assert [c.content for c in chunks] == [
            "page five, acme",
            "page five, numeric",
            "page five, other org",
        ]

    def test_filters_by_org(self) -> None:
        chunks = SqlChunkStore().find(ChunkFilter(source="sales.pdf", page="5", org_url="acme"))

        assert [c.content for c in chunks] == ["page five, acme", "page five, numeric"]

    def test_filters_by_loc_page_number(self) -> None:
        chunks = SqlChunkStore().find(ChunkFilter(source="sales.pdf", loc_page_number="6"))

        assert len(chunks) == 1
        assert chunks[0].content == "loc page six"
        assert chunks[0].metadata["loc"] == {"pageNumber": 6}
        assert chunks[0].page == 6

    def test_limit_caps_results(self) -> None:
        chunks = SqlChunkStore().find(ChunkFilter(source="sales.pdf"), limit=2)

        assert len(chunks) == 2
        assert chunks[0].id < chunks[1].id

    def test_no_match(self) -> None:
        assert SqlChunkStore().find(ChunkFilter(source="missing.pdf")) == []

    def test_database_error_raises_unavailable(self) -> None:
        session = MagicMock()
        session.scalars.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with patch("citelight.store.chunk_store.get_session") as mock_get_session:
            mock_get_session.return_value.__enter__ = MagicMock(return_value=session)
            mock_get_session.return_value.__exit__ = MagicMock(return_value=False)

            with pytest.raises(ChunkStoreUnavailable):
                SqlChunkStore().find(ChunkFilter(source="sales.pdf"))
