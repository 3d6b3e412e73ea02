from citelight.llm.provider.adapters import BedrockProvider, OpenAIProvider
from citelight.llm.provider.config import AbstractProviderConfig, BedrockConfig, OpenAIConfig
from citelight.llm.provider.provider import AbstractProvider


class ProviderFactory:
    def from_config(self, config: AbstractProviderConfig) -> AbstractProvider:
        match config:
            case OpenAIConfig():
                return OpenAIProvider(config)
            case BedrockConfig():
                return BedrockProvider(config)
            case _:
                raise ValueError(f"Unknown provider config class: {config}")
