import structlog
from aiohttp import web

from citelight.api import create_app
from citelight.highlight.config import HighlightConfig, load_highlight_config
from citelight.highlight.resolver import HighlightResolver
from citelight.llm.provider.provider import AbstractProvider
from citelight.llm.provider.registry import ProviderRegistry
from citelight.store import SqlChunkStore
from citelight.util import PROJECT_ROOT, load_yaml_config
from citelight.util.db import configure_engine, init_db
from citelight.util.logging import configure_logging

_logger = structlog.get_logger()
_OBSERVABILITY_CONFIG_PATH = PROJECT_ROOT / "config" / "observability.yaml"


def _init_logging() -> None:
    try:
        obs_config = load_yaml_config(_OBSERVABILITY_CONFIG_PATH)
        logging_config = obs_config.get("logging", {})
    except Exception:
        configure_logging()
        return

    json_output = logging_config.get("json_output", True)
    log_level = logging_config.get("log_level", "INFO")
    configure_logging(json_output=bool(json_output), log_level=str(log_level))


def _init_llm_provider(config: HighlightConfig) -> AbstractProvider | None:
    provider_type = config.llm.provider
    if provider_type is None:
        _logger.info("llm_extraction_disabled", reason="no provider configured")
        return None

    provider = ProviderRegistry().find(provider_type)
    if provider is None:
        _logger.warning(
            "llm_extraction_disabled",
            reason="provider credentials missing",
            provider=provider_type.value,
        )
    return provider


def main() -> None:
    _init_logging()

    config = load_highlight_config()
    configure_engine(config.database_url)
    if config.create_schema:
        init_db()

    resolver = HighlightResolver(
        config=config,
        chunk_store=SqlChunkStore(),
        llm_provider=_init_llm_provider(config),
    )

    _logger.info(
        "highlight_server_starting",
        host=config.server.host,
        port=config.server.port,
        strategy=config.strategy.value,
    )
    web.run_app(
        create_app(resolver),
        host=config.server.host,
        port=config.server.port,
        print=None,
    )


if __name__ == "__main__":
    main()
