"""Failure taxonomy shared by the validator, the agent wrapper and the chat handler.

Every error carries a human-readable message that is shown to the user as-is
and a ``kind`` tag that is returned alongside it. None of them is retried.
"""


class AgentKitChatError(Exception):
    """Base exception for request-level failures."""

    kind: str = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(AgentKitChatError):
    """Missing or malformed request fields; raised before any external call."""

    kind = "input"


class CredentialFormatError(AgentKitChatError):
    """Wallet key id or private key fails the local shape checks."""

    kind = "credential_format"


class KeyValidationError(AgentKitChatError):
    """The model provider rejected the liveness probe."""

    kind = "validation"


class ConstructionError(AgentKitChatError):
    """Wallet or agent setup failed."""

    kind = "construction"


class InvocationError(AgentKitChatError):
    """The agent failed while answering a message."""

    kind = "invocation"
