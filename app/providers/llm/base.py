from abc import ABC, abstractmethod
from typing import Any
import logging


class LLMProvider(ABC):
    """A model provider bound to one caller-supplied API key.

    Providers never read keys from settings: every credential arrives with
    the request that uses it.
    """

    def __init__(self, api_key: str, model: str, **kwargs):
        if not api_key:
            raise LLMProviderAuthError("An API key is required")
        self.api_key = api_key
        self.model = model
        self.logger = logging.getLogger(f"{self.__class__.__name__}")
        self._setup_client(**kwargs)

    @abstractmethod
    def _setup_client(self, **kwargs) -> None:
        """Initialize the provider-specific client"""
        pass

    @abstractmethod
    def chat_model(self) -> Any:
        """Return the langchain chat model the agent graph is bound to"""
        pass

    @abstractmethod
    async def verify_key(self) -> None:
        """Make one minimal request; raise LLMProviderError if it fails"""
        pass


class LLMProviderError(Exception):
    """Base exception for LLM provider errors"""
    pass


class LLMProviderAuthError(LLMProviderError):
    """Raised when authentication fails"""
    pass


class LLMProviderAPIError(LLMProviderError):
    """Raised when API request fails"""
    pass
