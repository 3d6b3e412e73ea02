from citelight.highlight.citation import (
    has_citation,
    parse_citations,
    representative_snippet,
    strip_citations,
)

_ANSWER = (
    "Pricing objections are common. The sandwich method reduces price resistance "
    "[Source: sales.pdf, Page 5]. Follow-ups should happen within two days! "
    "Always confirm in writing [source: crm guide.pdf, Page: 12]"
)


class TestParseCitations:
    def test_finds_both_page_formats(self) -> None:
        citations = parse_citations(_ANSWER)

        assert [(c.source, c.page) for c in citations] == [
            ("sales.pdf", "5"),
            ("crm guide.pdf", "12"),
        ]

    def test_snippet_is_last_sentence_before_marker(self) -> None:
        citations = parse_citations(_ANSWER)

        assert citations[0].snippet == "The sandwich method reduces price resistance"
        assert citations[1].snippet == "Always confirm in writing"

    def test_snippet_does_not_cross_paragraphs(self) -> None:
        answer = (
            "Pricing overview\n\n[Source: sales.pdf, Page 2] opens the deck.\n\n"
            "Discounts need approval [Source: sales.pdf, Page 3]"
        )

        citations = parse_citations(answer)

        assert [c.snippet for c in citations] == ["", "Discounts need approval"]

    def test_raw_marker_kept(self) -> None:
        citations = parse_citations(_ANSWER)
        assert citations[0].raw == "[Source: sales.pdf, Page 5]"

    def test_no_citations(self) -> None:
        assert parse_citations("Plain answer without sources.") == []

    def test_to_query(self) -> None:
        citation = parse_citations(_ANSWER)[0]

        query = citation.to_query(org_url="acme")

        assert query.filename == "sales.pdf"
        assert query.page == 5
        assert query.answer_snippet == "The sandwich method reduces price resistance"
        assert query.org_url == "acme"

    def test_non_numeric_page_kept_as_text(self) -> None:
        citation = parse_citations("Intro [Source: a.pdf, Page N/A]")[0]

        assert citation.page_number is None
        assert citation.to_query().page == "N/A"


class TestRepresentativeSnippet:
    def test_collapses_whitespace(self) -> None:
        assert representative_snippet("  one\n\n two  ") == "one two"

    def test_takes_last_sentence(self) -> None:
        assert representative_snippet("First. Second? Third part") == "Third part"

    def test_trailing_terminator_keeps_last_sentence(self) -> None:
        assert representative_snippet("First one. Second one.") == "Second one."

    def test_long_sentence_keeps_last_words(self) -> None:
        text = " ".join(f"w{i}" for i in range(50))

        snippet = representative_snippet(text)

        assert snippet.split(" ") == [f"w{i}" for i in range(15, 50)]

    def test_empty(self) -> None:
        assert representative_snippet("   ") == ""


class TestStripCitations:
    def test_removes_markers(self) -> None:
        assert not has_citation(strip_citations(_ANSWER))
        assert has_citation(_ANSWER)

    def test_keeps_surrounding_text(self) -> None:
        assert strip_citations("Text [Source: a.pdf, Page 1] more") == "Text  more"
