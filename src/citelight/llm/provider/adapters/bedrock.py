import json
from typing import Any

import boto3  # type: ignore[import-untyped]
import structlog
from botocore.config import Config  # type: ignore[import-untyped]

from citelight.llm.provider.config import BedrockConfig
from citelight.llm.provider.provider import AbstractProvider
from citelight.llm.provider.types import (
    Message,
    MessageRole,
    ProviderType,
    TextResponse,
    TokenUsage,
)

_logger = structlog.get_logger()


class BedrockProvider(AbstractProvider):
    """AWS Bedrock provider using the Anthropic Messages API."""

    config: BedrockConfig

    def __init__(self, config: BedrockConfig) -> None:
        super().__init__(config)
        client_kwargs: dict[str, Any] = {
            "region_name": config.region,
            "config": Config(
                connect_timeout=config.timeout_seconds,
                read_timeout=config.timeout_seconds,
                retries={"max_attempts": 1},
            ),
        }
        if config.api_url:
            client_kwargs["endpoint_url"] = config.api_url
        self.client = boto3.client("bedrock-runtime", **client_kwargs)

    def identify(self) -> ProviderType:
        return ProviderType.BEDROCK

    def complete(self, messages: list[Message]) -> TextResponse:
        # Anthropic takes the system prompt as a top-level field
        system = "\n\n".join(m.content for m in messages if m.role == MessageRole.SYSTEM)
        request_body: dict[str, Any] = {
            "anthropic_version": self.config.anthropic_version,
            "messages": [
                {"role": m.role.value, "content": m.content}
                for m in messages
                if m.role != MessageRole.SYSTEM
            ],
            "max_tokens": self.config.max_tokens,
        }
        if system:
            request_body["system"] = system
        if self.config.temperature is not None:
            request_body["temperature"] = self.config.temperature

        response = self.client.invoke_model(
            modelId=self.config.model,
            body=json.dumps(request_body),
        )

        response_body = json.loads(response["body"].read())

        bedrock_usage = response_body.get("usage", {})
        usage = TokenUsage(
            input_tokens=bedrock_usage.get("input_tokens", 0),
            output_tokens=bedrock_usage.get("output_tokens", 0),
        )

        content = ""
        for block in response_body.get("content", []):
            if block.get("type") == "text":
                content += block.get("text", "")

        _logger.info(
            "bedrock_response_finished",
            reason=response_body.get("stop_reason"),
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
        )
        return TextResponse(content=content, usage=usage)
