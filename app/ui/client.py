"""HTTP client the chat front-ends use to reach the agent API."""

from typing import Any, Dict, Optional, Union

import httpx

from ..config import settings
from ..types import AgentResponse, ApiKeys, CredentialSet, ValidateKeysResponse


def credentials_payload(keys: Union[ApiKeys, CredentialSet]) -> Dict[str, Any]:
    network = keys.network_id
    return {
        "openaiKey": keys.openai_key,
        "walletKeyId": keys.wallet_key_id,
        "walletPrivateKey": keys.wallet_private_key,
        "networkId": getattr(network, "value", network),
    }


class AgentApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=base_url or settings.agent_api_url,
            timeout=timeout or settings.client_timeout_seconds,
            transport=transport,
        )

    def validate_keys(self, keys: Union[ApiKeys, CredentialSet]) -> ValidateKeysResponse:
        response = self._client.post("/validate-keys", json=credentials_payload(keys))
        response.raise_for_status()
        return ValidateKeysResponse.model_validate(response.json())

    def send_message(self, message: str, credentials: CredentialSet) -> AgentResponse:
        response = self._client.post(
            "/agent",
            json={"userMessage": message, "apiKeys": credentials_payload(credentials)},
        )
        response.raise_for_status()
        return AgentResponse.model_validate(response.json())

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "AgentApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
