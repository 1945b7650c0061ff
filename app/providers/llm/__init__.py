from typing import Dict, Type

from .base import LLMProvider, LLMProviderError, LLMProviderAuthError, LLMProviderAPIError
from .openai import OpenAIProvider

# Registry of available LLM providers
PROVIDER_REGISTRY: Dict[str, Type[LLMProvider]] = {
    "openai": OpenAIProvider,
}


def create_provider(provider_name: str, api_key: str, model: str, **kwargs) -> LLMProvider:
    """Create an LLM provider instance for a caller-supplied key."""

    provider_class = PROVIDER_REGISTRY.get(provider_name.lower())
    if provider_class is None:
        available_providers = ", ".join(PROVIDER_REGISTRY.keys())
        raise ValueError(
            f"Unsupported provider '{provider_name}'. "
            f"Available providers: {available_providers}"
        )
    return provider_class(api_key=api_key, model=model, **kwargs)


__all__ = [
    "LLMProvider",
    "LLMProviderError",
    "LLMProviderAuthError",
    "LLMProviderAPIError",
    "OpenAIProvider",
    "PROVIDER_REGISTRY",
    "create_provider",
]
