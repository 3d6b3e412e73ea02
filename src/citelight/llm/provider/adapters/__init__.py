from citelight.llm.provider.adapters.bedrock import BedrockProvider
from citelight.llm.provider.adapters.openai import OpenAIProvider

__all__ = ["BedrockProvider", "OpenAIProvider"]
