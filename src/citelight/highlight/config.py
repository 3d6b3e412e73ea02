from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from citelight.llm.provider.types import ProviderType
from citelight.util import PROJECT_ROOT, load_yaml_config

_HIGHLIGHT_CONFIG_PATH = PROJECT_ROOT / "config" / "highlight.yaml"


class ResolutionStrategy(StrEnum):
    LLM_FIRST = "llm_first"
    DIRECT_FIRST = "direct_first"


@dataclass
class LlmExtractionConfig:
    provider: ProviderType | None = None


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class HighlightConfig:
    database_url: str
    max_fallback_chunks: int = 8
    strategy: ResolutionStrategy = ResolutionStrategy.LLM_FIRST
    create_schema: bool = False
    llm: LlmExtractionConfig = field(default_factory=LlmExtractionConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_highlight_config() -> HighlightConfig:
    raw = load_yaml_config(
        _HIGHLIGHT_CONFIG_PATH,
        required_vars={"DATABASE_URL"},
    )
    return _parse_config(raw)


def _parse_config(raw: dict[str, Any]) -> HighlightConfig:
    database_url = raw.get("database_url", "")
    if not database_url:
        raise ValueError("Missing 'database_url' in highlight config")

    max_fallback_chunks = int(raw.get("max_fallback_chunks", 8))
    if max_fallback_chunks < 1:
        raise ValueError("'max_fallback_chunks' must be at least 1")

    strategy_key = raw.get("strategy", ResolutionStrategy.LLM_FIRST.value)
    try:
        strategy = ResolutionStrategy(strategy_key)
    except ValueError:
        valid = ", ".join(s.value for s in ResolutionStrategy)
        raise ValueError(f"Invalid 'strategy': {strategy_key}. Must be one of: {valid}") from None

    server_raw = raw.get("server", {}) or {}

    return HighlightConfig(
        database_url=database_url,
        max_fallback_chunks=max_fallback_chunks,
        strategy=strategy,
        create_schema=_parse_flag(raw.get("create_schema", False)),
        llm=_parse_llm(raw.get("llm")),
        server=ServerConfig(
            host=server_raw.get("host", "0.0.0.0"),
            port=int(server_raw.get("port", 8080)),
        ),
    )


def _parse_llm(raw: dict[str, Any] | None) -> LlmExtractionConfig:
    if not raw:
        return LlmExtractionConfig()

    provider_key = raw.get("provider") or None
    return LlmExtractionConfig(provider=ProviderType(provider_key) if provider_key else None)


def _parse_flag(value: Any) -> bool:
    # env placeholders resolve to strings
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
