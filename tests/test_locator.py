from citelight.highlight.chunk_store import ChunkFilter
from citelight.highlight.locator import ChunkLocator, page_digits
from tests.factories import make_chunk, make_store


class TestPageDigits:
    def test_plain_number(self) -> None:
        assert page_digits(5) == "5"

    def test_embedded_digits(self) -> None:
        assert page_digits("Page 12") == "12"

    def test_no_digits(self) -> None:
        assert page_digits("N/A") is None


class TestChunkLocator:
    def test_exact_page_tier_short_circuits(self) -> None:
        chunk = make_chunk()
        store = make_store([chunk])
        locator = ChunkLocator(store)

        chunks = locator.locate("sales.pdf", 5, "acme")

        assert chunks == [chunk]
        store.find.assert_called_once_with(
            ChunkFilter(source="sales.pdf", page="5", org_url="acme")
        )

    def test_falls_back_to_loc_page_number(self) -> None:
        loc_chunk = make_chunk(chunk_id=9, page=None, loc={"pageNumber": "5"})
        store = make_store([], [loc_chunk])
        locator = ChunkLocator(store)

        chunks = locator.locate("sales.pdf", 5, "acme")

        assert chunks == [loc_chunk]
        assert store.find.call_count == 2
        second_filter = store.find.call_args_list[1].args[0]
        assert second_filter == ChunkFilter(
            source="sales.pdf", loc_page_number="5", org_url="acme"
        )

    def test_loc_tier_uses_extracted_digits(self) -> None:
        store = make_store([], [make_chunk()])
        locator = ChunkLocator(store)

        locator.locate("sales.pdf", "Page 5")

        assert store.find.call_args_list[1].args[0].loc_page_number == "5"

    def test_falls_back_to_filename_with_cap(self) -> None:
        fallback = [make_chunk(chunk_id=i, page="N/A") for i in range(3)]
        store = make_store([], [], fallback)
        locator = ChunkLocator(store, max_fallback_chunks=8)

        chunks = locator.locate("sales.pdf", 5)

        assert chunks == fallback
        last_call = store.find.call_args_list[2]
        assert last_call.args[0] == ChunkFilter(source="sales.pdf")
        assert last_call.kwargs["limit"] == 8

    def test_page_without_digits_skips_loc_tier(self) -> None:
        store = make_store([], [make_chunk()])
        locator = ChunkLocator(store, max_fallback_chunks=3)

        chunks = locator.locate("sales.pdf", "N/A")

        assert len(chunks) == 1
        assert store.find.call_count == 2
        assert store.find.call_args_list[1].kwargs["limit"] == 3

    def test_returns_empty_when_nothing_found(self) -> None:
        store = make_store([], [], [])
        locator = ChunkLocator(store)

        assert locator.locate("missing.pdf", 1) == []
        assert store.find.call_count == 3

    def test_org_filter_carried_to_every_tier(self) -> None:
        store = make_store([], [], [])
        locator = ChunkLocator(store)

        locator.locate("sales.pdf", 2, "acme")

        for call in store.find.call_args_list:
            assert call.args[0].org_url == "acme"
