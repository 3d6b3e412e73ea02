from typing import Any

import structlog
from openai import OpenAI

from citelight.llm.provider.config import OpenAIConfig
from citelight.llm.provider.provider import AbstractProvider
from citelight.llm.provider.types import Message, ProviderType, TextResponse, TokenUsage

_logger = structlog.get_logger()


class OpenAIProvider(AbstractProvider):
    """OpenAI chat-completions provider."""

    config: OpenAIConfig

    def __init__(self, config: OpenAIConfig) -> None:
        super().__init__(config)
        self.client = OpenAI(
            api_key=config.api_key,
            base_url=config.api_url,
            timeout=config.timeout_seconds,
            max_retries=0,
        )

    def identify(self) -> ProviderType:
        return ProviderType.OPENAI

    def complete(self, messages: list[Message]) -> TextResponse:
        _logger.info(
            "openai_request_starting", model=self.config.model, message_count=len(messages)
        )
        params: dict[str, Any] = {
            "model": self.config.model,
            "messages": [{"role": m.role.value, "content": m.content} for m in messages],
            "max_completion_tokens": self.config.max_tokens,
        }

        if self.config.temperature is not None:
            params["temperature"] = self.config.temperature

        response = self.client.chat.completions.create(**params)
        choice = response.choices[0]

        usage = TokenUsage(
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
        )

        _logger.info(
            "openai_response_finished",
            reason=choice.finish_reason,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
        )
        return TextResponse(content=choice.message.content or "", usage=usage)
