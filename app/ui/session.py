"""
Client-side chat state.

``ChatSession`` is the state machine behind both front-ends (Streamlit page
and terminal CLI). It has two states:

- UNCONFIGURED: the credential form is shown. ``configure`` runs the local
  format checks, then asks the server to validate; only a ``valid`` answer
  moves the session to CONFIGURED.
- CONFIGURED: the chat view is shown. ``submit`` appends the user's message
  right away and marks the session as thinking; ``await_reply`` performs the
  request and appends the agent's reply, or the error text as an agent
  message. ``reset`` discards credentials and transcript.

Credentials live only on this object; nothing is written to disk.
"""

from enum import Enum
from typing import List, Optional, Protocol, Tuple

import httpx
from pydantic import ValidationError

from ..core.credentials import check_credential_format
from ..core.errors import AgentKitChatError
from ..types import AgentResponse, ApiKeys, ChatMessage, CredentialSet, NetworkId, Sender, ValidateKeysResponse

VALIDATION_UNAVAILABLE = "Failed to validate API keys. Please check your keys and try again."
INVALID_KEYS = "Invalid API keys"
SEND_FAILED = "I'm sorry, I encountered an issue processing your message. Please try again later."


class AgentClient(Protocol):
    def validate_keys(self, keys: CredentialSet) -> ValidateKeysResponse: ...

    def send_message(self, message: str, credentials: CredentialSet) -> AgentResponse: ...


class SessionState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"


class ChatSession:
    def __init__(self, client: AgentClient):
        self.client = client
        self.state = SessionState.UNCONFIGURED
        self.credentials: Optional[CredentialSet] = None
        self.messages: List[ChatMessage] = []
        self.error: Optional[str] = None
        self.is_thinking = False
        self._pending: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return self.state == SessionState.CONFIGURED

    def configure(
        self,
        openai_key: str,
        wallet_key_id: str,
        wallet_private_key: str,
        network_id: str = NetworkId.TESTNET.value,
    ) -> bool:
        self.error = None
        api_keys = ApiKeys(
            openai_key=openai_key.strip(),
            wallet_key_id=wallet_key_id.strip(),
            wallet_private_key=wallet_private_key.strip(),
            network_id=network_id,
        )
        try:
            check_credential_format(api_keys)
            credentials = api_keys.to_credentials()
        except AgentKitChatError as exc:
            self.error = exc.message
            return False

        try:
            result = self.client.validate_keys(credentials)
        except (httpx.HTTPError, ValidationError, ValueError):
            self.error = VALIDATION_UNAVAILABLE
            return False

        if not result.valid:
            self.error = result.error or INVALID_KEYS
            return False

        self.credentials = credentials
        self.messages = []
        self.state = SessionState.CONFIGURED
        return True

    def reset(self) -> None:
        """Back to the credential form; forget keys and transcript."""
        self.credentials = None
        self.messages = []
        self.error = None
        self.is_thinking = False
        self._pending = None
        self.state = SessionState.UNCONFIGURED

    def submit(self, text: str) -> bool:
        """Queue a message; False when there is nothing to send or a reply is pending."""
        if not self.is_configured or self.is_thinking or not text.strip():
            return False
        self.messages.append(ChatMessage(sender=Sender.USER, text=text))
        self._pending = text
        self.is_thinking = True
        return True

    def await_reply(self) -> Optional[ChatMessage]:
        if self._pending is None:
            return None
        message, self._pending = self._pending, None
        try:
            result = self.client.send_message(message, self.credentials)
            text = result.response if result.ok else result.error
        except (httpx.HTTPError, ValidationError, ValueError):
            # transport failure, non-JSON body or a body of the wrong shape
            text = SEND_FAILED
        finally:
            self.is_thinking = False

        reply = ChatMessage(sender=Sender.AGENT, text=text or "")
        self.messages.append(reply)
        return reply

    def send(self, text: str) -> Optional[ChatMessage]:
        if not self.submit(text):
            return None
        return self.await_reply()

    def transcript(self) -> List[Tuple[str, str]]:
        return [(message.sender.value, message.text) for message in self.messages]
