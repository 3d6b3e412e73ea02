from pathlib import Path

import structlog

from citelight.llm.provider.config import _DEFAULT_CONFIG, ProviderConfigGenerator
from citelight.llm.provider.factory import ProviderFactory
from citelight.llm.provider.provider import AbstractProvider
from citelight.llm.provider.types import ProviderType

_logger = structlog.get_logger()


class ProviderRegistry:
    """Providers whose credentials are present in the environment.

    An empty registry is valid: span extraction is optional and simply
    stays disabled.
    """

    def __init__(self, config_location: Path = _DEFAULT_CONFIG) -> None:
        self.providers: dict[ProviderType, AbstractProvider] = {}
        self._build(config_location)

    def get(self, provider_type: ProviderType) -> AbstractProvider:
        if provider_type not in self.providers:
            raise ValueError("provider not found", provider_type)
        return self.providers[provider_type]

    def find(self, provider_type: ProviderType | None) -> AbstractProvider | None:
        if provider_type is None:
            return None
        return self.providers.get(provider_type)

    def _build(self, config_location: Path) -> None:
        for provider_config in ProviderConfigGenerator(config_location).generate():
            try:
                provider = ProviderFactory().from_config(provider_config)
                self._register_provider(provider.identify(), provider)
            except (ValueError, ConnectionError, TimeoutError) as e:
                _logger.error(
                    "provider_registration_failed",
                    error=str(e),
                )

        _logger.info("registry_initialized", provider_count=len(self.providers))

    def _register_provider(self, identifier: ProviderType, provider: AbstractProvider) -> None:
        self.providers[identifier] = provider
        _logger.info("provider_registered", identifier=identifier.value)
