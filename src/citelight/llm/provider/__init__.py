from citelight.llm.provider.config import (
    AbstractProviderConfig,
    BedrockConfig,
    OpenAIConfig,
)
from citelight.llm.provider.factory import ProviderFactory
from citelight.llm.provider.provider import AbstractProvider
from citelight.llm.provider.registry import ProviderRegistry
from citelight.llm.provider.types import (
    Message,
    MessageRole,
    ProviderType,
    TextResponse,
    TokenUsage,
)

__all__ = [
    "AbstractProvider",
    "AbstractProviderConfig",
    "BedrockConfig",
    "Message",
    "MessageRole",
    "OpenAIConfig",
    "ProviderFactory",
    "ProviderRegistry",
    "ProviderType",
    "TextResponse",
    "TokenUsage",
]
