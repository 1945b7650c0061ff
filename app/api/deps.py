"""Request-scoped access to the components ``create_app`` wires onto ``app.state``."""

from fastapi import Request

from ..cache import AgentSessionCache
from ..core.chat import ChatRequestHandler
from ..core.credentials import CredentialValidator


def get_chat_handler(request: Request) -> ChatRequestHandler:
    return request.app.state.chat_handler


def get_credential_validator(request: Request) -> CredentialValidator:
    return request.app.state.credential_validator


def get_session_cache(request: Request) -> AgentSessionCache:
    return request.app.state.session_cache
