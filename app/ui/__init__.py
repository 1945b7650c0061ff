from .client import AgentApiClient
from .session import ChatSession, SessionState

__all__ = [
    "AgentApiClient",
    "ChatSession",
    "SessionState",
]
