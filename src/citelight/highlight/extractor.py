import json
from collections.abc import Sequence
from typing import Any

import structlog

from citelight.highlight.normalize import contains_normalized
from citelight.highlight.types import Chunk, Highlight
from citelight.llm.provider.provider import AbstractProvider
from citelight.llm.provider.types import Message, MessageRole

_logger = structlog.get_logger()

_SYSTEM_PROMPT = "Extract literal supporting spans from source chunks."

_NO_MATCH_INDEX = -1


def build_prompt(answer_snippet: str, chunks: Sequence[Chunk]) -> str:
    chunk_descriptions = "\n\n".join(
        f'Chunk {index} (id: {chunk.id}):\n"""{chunk.content}"""'
        for index, chunk in enumerate(chunks)
    )
    return (
        "You will receive an answer snippet from an assistant and several source chunks "
        "that came from a PDF.\n\n"
        'Return a JSON object with exactly these keys: "chunkIndex" (number) and '
        '"exactText" (string).\n'
        '- "chunkIndex" must be the zero-based index of the chunk below that best '
        "supports the answer snippet.\n"
        '- "exactText" must be a literal substring copied from that chunk (including '
        "casing and punctuation). Do not paraphrase.\n"
        f'- If no chunk supports the snippet, respond with {{"chunkIndex": {_NO_MATCH_INDEX}, '
        '"exactText": ""}.\n'
        "- Do not add explanations or commentary outside the JSON object.\n\n"
        f'Answer snippet:\n"""{answer_snippet}"""\n\n'
        f"Source chunks:\n{chunk_descriptions}"
    )


def coerce_completion_text(raw: Any) -> str | None:
    """Flatten a completion payload into a single string.

    Accepts a plain string, a list of content parts (strings, or dicts /
    objects carrying ``text``), or a single dict / object carrying ``text``.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return "".join(_part_text(part) for part in raw)
    if isinstance(raw, dict):
        text = raw.get("text")
        return text if isinstance(text, str) else None
    text = getattr(raw, "text", None)
    return text if isinstance(text, str) else None


def _part_text(part: Any) -> str:
    if isinstance(part, str):
        return part
    if isinstance(part, dict):
        text = part.get("text")
    else:
        text = getattr(part, "text", None)
    return text if isinstance(text, str) else ""


def parse_json_object(text: str) -> dict[str, Any] | None:
    """Parse the span between the first ``{`` and the last ``}``."""
    stripped = text.strip()
    start = stripped.find("{")
    end = stripped.rfind("}")
    if start < 0 or end < start:
        return None
    parsed = json.loads(stripped[start : end + 1])
    return parsed if isinstance(parsed, dict) else None


def validate_span(parsed: dict[str, Any], chunks: Sequence[Chunk]) -> Highlight | None:
    """Accept the model's span only if it really occurs in the chosen chunk."""
    index = parsed.get("chunkIndex")
    exact_text = parsed.get("exactText")

    if isinstance(index, float) and index.is_integer():
        index = int(index)
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if not 0 <= index < len(chunks):
        return None
    if not isinstance(exact_text, str) or not exact_text.strip():
        return None

    chunk = chunks[index]
    if not contains_normalized(chunk.content, exact_text):
        _logger.info(
            "llm_span_rejected",
            chunk_id=chunk.id,
            span_preview=exact_text[:80],
        )
        return None

    return Highlight(text=exact_text, chunk_id=chunk.id)


class LlmSpanExtractor:
    """Ask a language model which chunk supports an answer, and where.

    Every failure (provider error, timeout, malformed output, a span that is
    not in the chunk) yields ``None`` so resolution can fall through to the
    next stage.
    """

    def __init__(self, provider: AbstractProvider | None) -> None:
        self._provider = provider

    @property
    def enabled(self) -> bool:
        return self._provider is not None

    def extract(self, answer_snippet: str, chunks: Sequence[Chunk]) -> Highlight | None:
        if self._provider is None or not answer_snippet.strip() or not chunks:
            return None

        messages = [
            Message(role=MessageRole.SYSTEM, content=_SYSTEM_PROMPT),
            Message(role=MessageRole.USER, content=build_prompt(answer_snippet, chunks)),
        ]

        try:
            response = self._provider.complete(messages)
        except Exception as e:
            _logger.warning("llm_extraction_failed", error=str(e), error_type=type(e).__name__)
            return None

        raw_text = coerce_completion_text(getattr(response, "content", response))
        if not raw_text:
            _logger.info("llm_extraction_empty")
            return None

        try:
            parsed = parse_json_object(raw_text)
        except (ValueError, RecursionError) as e:
            _logger.info("llm_extraction_unparseable", error=str(e), output_preview=raw_text[:120])
            return None

        if parsed is None:
            _logger.info("llm_extraction_unparseable", output_preview=raw_text[:120])
            return None

        return validate_span(parsed, chunks)
