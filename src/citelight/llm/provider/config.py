import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypedDict

import structlog

from citelight.llm.provider.types import ProviderType
from citelight.util import PROJECT_ROOT, load_yaml_config

_logger = structlog.get_logger()
_DEFAULT_CONFIG = PROJECT_ROOT / "config" / "llm_provider.yaml"

_DEFAULT_TIMEOUT_SECONDS = 15.0


class _CommonConfig(TypedDict):
    model: str
    temperature: float | None
    max_tokens: int
    api_url: str | None
    timeout_seconds: float


@dataclass
class AbstractProviderConfig(ABC):
    model: str
    temperature: float | None
    max_tokens: int
    api_url: str | None = field(default=None, kw_only=True)
    timeout_seconds: float = field(default=_DEFAULT_TIMEOUT_SECONDS, kw_only=True)

    @classmethod
    def _read_common_config(cls, yaml_config: dict[str, Any]) -> _CommonConfig:
        """Read the fields shared by every provider from the environment.

        *yaml_config* names the environment variables (``model_env``,
        ``temperature_env``, ...) rather than holding the values.
        """
        model = os.getenv(yaml_config["model_env"], "") or yaml_config.get("default_model", "")
        if not model:
            raise ValueError(f"Missing env var: {yaml_config['model_env']}")

        return _CommonConfig(
            model=model,
            temperature=float(temp)
            if (temp := os.getenv(yaml_config.get("temperature_env", "")))
            else 0.0,
            max_tokens=int(os.getenv(yaml_config.get("max_tokens_env", ""), "") or "1000"),
            api_url=os.getenv(yaml_config.get("api_url_env", ""), "") or None,
            timeout_seconds=float(yaml_config.get("timeout_seconds", _DEFAULT_TIMEOUT_SECONDS)),
        )

    @classmethod
    @abstractmethod
    def from_envs(cls, envs: dict[str, Any]) -> "AbstractProviderConfig":
        """Create config from the YAML section plus environment variables."""
        ...


@dataclass
class OpenAIConfig(AbstractProviderConfig):
    api_key: str

    @classmethod
    def from_envs(cls, envs: dict[str, Any]) -> "OpenAIConfig":
        common = cls._read_common_config(envs)

        api_key = os.getenv(envs["api_key_env"])
        if not api_key:
            raise ValueError(f"Missing env var: {envs['api_key_env']}")

        return cls(api_key=api_key, **common)


@dataclass
class BedrockConfig(AbstractProviderConfig):
    region: str
    anthropic_version: str

    @classmethod
    def from_envs(cls, envs: dict[str, Any]) -> "BedrockConfig":
        common = cls._read_common_config(envs)

        region = os.getenv(envs["region_env"])
        if not region:
            raise ValueError(f"Missing env var: {envs['region_env']}")

        anthropic_version = os.getenv(
            envs.get("anthropic_version_env", ""), ""
        ) or envs.get("default_anthropic_version", "bedrock-2023-05-31")

        return cls(region=region, anthropic_version=anthropic_version, **common)


class ProviderConfigGenerator:
    """Yield a config for every provider in the YAML whose env vars are set."""

    def __init__(self, config_location: Path = _DEFAULT_CONFIG) -> None:
        self.config = load_yaml_config(config_location)

    def generate(self) -> Iterator[AbstractProviderConfig]:
        for provider_key, provider_config in self.config.items():
            try:
                match ProviderType(provider_key):
                    case ProviderType.OPENAI:
                        yield OpenAIConfig.from_envs(provider_config)
                    case ProviderType.BEDROCK:
                        yield BedrockConfig.from_envs(provider_config)
            except (ValueError, KeyError):
                _logger.debug("provider_skipped", provider=provider_key)
