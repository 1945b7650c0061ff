from .messages import ChatMessage, Sender
from .requests import AgentRequest, ApiKeys, CredentialSet, NetworkId, ValidateKeysRequest
from .responses import AgentResponse, AgentStatusResponse, HealthResponse, ValidateKeysResponse

__all__ = [
    "ChatMessage",
    "Sender",
    "AgentRequest",
    "ApiKeys",
    "CredentialSet",
    "NetworkId",
    "ValidateKeysRequest",
    "AgentResponse",
    "AgentStatusResponse",
    "HealthResponse",
    "ValidateKeysResponse",
]
