from typing import Any, Optional

from .base import LLMProvider, LLMProviderAPIError, LLMProviderAuthError

try:
    import openai
    from langchain_openai import ChatOpenAI
except ImportError:
    openai = None
    ChatOpenAI = None


PROBE_PROMPT = "Hello"


class OpenAIProvider(LLMProvider):
    """OpenAI chat models through langchain-openai."""

    def __init__(self, api_key: str, model: Optional[str] = None, **kwargs):
        if ChatOpenAI is None:
            raise ImportError("langchain-openai package not installed. Install with: pip install langchain-openai")
        if not model:
            raise ValueError("OpenAIProvider requires a model to be specified")

        super().__init__(api_key, model, **kwargs)

    def _setup_client(self, **kwargs) -> None:
        try:
            self.client = ChatOpenAI(model=self.model, api_key=self.api_key, **kwargs)
        except Exception as e:
            self.logger.error(f"Failed to initialize OpenAI client: {e}")
            raise LLMProviderAuthError(f"Failed to initialize OpenAI client: {e}")

    def chat_model(self) -> Any:
        return self.client

    async def verify_key(self) -> None:
        try:
            await self.client.ainvoke(PROBE_PROMPT)
        except openai.AuthenticationError as e:
            raise LLMProviderAuthError(f"OpenAI rejected the API key: {e}")
        except Exception as e:
            raise LLMProviderAPIError(f"OpenAI request failed: {e}")
