import re
from dataclasses import dataclass

from citelight.highlight.types import HighlightQuery

# [Source: file.pdf, Page 4] and [Source: file.pdf, Page: 4]
_CITATION = re.compile(r"\[Source:\s*(.*?),\s*Page(?:\s*:\s*)?\s*([^\]]+)\]", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")

_MAX_SNIPPET_WORDS = 35


@dataclass(frozen=True)
class Citation:
    source: str
    page: str
    snippet: str
    raw: str

    @property
    def page_number(self) -> int | None:
        match = re.match(r"\d+", self.page)
        return int(match.group(0)) if match else None

    def to_query(self, org_url: str | None = None) -> HighlightQuery:
        page: int | str = self.page_number if self.page_number is not None else self.page
        return HighlightQuery(
            filename=self.source,
            page=page,
            answer_snippet=self.snippet,
            org_url=org_url,
        )


def parse_citations(text: str) -> list[Citation]:
    """Find every citation marker in *text*.

    Each citation's snippet is taken from the text between the previous
    marker in the same paragraph and this one.
    """
    citations: list[Citation] = []
    for paragraph in _PARAGRAPH_BREAK.split(text):
        cursor = 0
        for match in _CITATION.finditer(paragraph):
            preceding = paragraph[cursor : match.start()]
            cursor = match.end()
            citations.append(
                Citation(
                    source=match.group(1).strip(),
                    page=match.group(2).strip(),
                    snippet=representative_snippet(preceding),
                    raw=match.group(0),
                )
            )
    return citations


def representative_snippet(text: str) -> str:
    """Last sentence of *text*, cut to its final words when very long."""
    cleaned = _WHITESPACE.sub(" ", text).strip()
    if not cleaned:
        return ""

    sentence = _SENTENCE_BREAK.split(cleaned)[-1]
    words = sentence.split(" ")
    return " ".join(words[-_MAX_SNIPPET_WORDS:])


def strip_citations(text: str) -> str:
    return _CITATION.sub("", text)


def has_citation(text: str) -> bool:
    return _CITATION.search(text) is not None
