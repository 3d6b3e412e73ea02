import re

# \s already covers NBSP (U+00A0) and the other Unicode spaces for str patterns
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile("[‐‑‒–—―]")


def normalize(text: str) -> str:
    """Canonical form used for substring comparison of PDF text.

    Collapses whitespace runs to a single space, folds dash variants to ``-``,
    trims and lower-cases.
    """
    text = _DASHES.sub("-", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip().lower()


def contains_normalized(haystack: str, needle: str) -> bool:
    """True when *needle* occurs in *haystack* after normalizing both."""
    normalized_needle = normalize(needle)
    if not normalized_needle:
        return False
    return normalized_needle in normalize(haystack)
