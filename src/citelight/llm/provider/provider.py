from abc import ABC, abstractmethod

from citelight.llm.provider.config import AbstractProviderConfig
from citelight.llm.provider.types import Message, ProviderType, TextResponse


class AbstractProvider(ABC):
    def __init__(self, config: AbstractProviderConfig) -> None:
        self.config = config

    @abstractmethod
    def identify(self) -> ProviderType: ...

    @abstractmethod
    def complete(self, messages: list[Message]) -> TextResponse:
        """
        Send messages to the model and return its text completion.

        Args:
            messages: System instruction followed by the user prompt

        Returns:
            TextResponse with the raw completion text and token usage

        Raises:
            Whatever the underlying SDK raises on network, auth or timeout
            errors. Callers decide whether a failure is fatal.
        """
        ...
