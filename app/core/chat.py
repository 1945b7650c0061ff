"""
Chat request handling.

One ``POST /agent`` exchange: validate the body, resolve the agent for the
supplied credentials through the session cache, send the message, and fold
every outcome into an ``AgentResponse``. Failures never escape as
exceptions; the caller tells success from failure by which field is set.
"""

from typing import Any, Optional

import structlog
from pydantic import ValidationError

from ..cache import AgentSessionCache
from ..config import settings
from ..logging_config import get_logger
from ..types import AgentRequest, AgentResponse
from .agent import AgentWrapper
from .agent.wrapper import GENERIC_INVOCATION_ERROR
from .credentials import fingerprint
from .errors import AgentKitChatError, InputError, InvocationError

MISSING_KEYS = "API keys are required. Please configure your API keys first."
INVALID_BODY = "Invalid request body. Send a JSON object with 'userMessage' and 'apiKeys'."
MISSING_MESSAGE = "A message is required."


class ChatRequestHandler:
    def __init__(
        self,
        cache: AgentSessionCache,
        wrapper: AgentWrapper,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
        default_network: Optional[str] = None,
    ):
        self.cache = cache
        self.wrapper = wrapper
        self.logger = logger or get_logger("agent.handler")
        self.default_network = default_network or settings.default_network_id

    def _parse(self, payload: Any) -> AgentRequest:
        if not isinstance(payload, dict):
            raise InputError(INVALID_BODY)
        try:
            return AgentRequest.model_validate(payload)
        except ValidationError:
            raise InputError(INVALID_BODY)

    async def handle(self, payload: Any) -> AgentResponse:
        try:
            request = self._parse(payload)
            if request.api_keys is None:
                raise InputError(MISSING_KEYS)
            credentials = request.api_keys.to_credentials(self.default_network)
            message = request.user_message or ""
            if not message.strip():
                raise InputError(MISSING_MESSAGE)
        except InputError as exc:
            self.logger.info("agent_request_rejected", kind=exc.kind, outcome="rejected", reason=exc.message)
            return AgentResponse.failure(exc.message, exc.kind)

        log = self.logger.bind(fingerprint=fingerprint(credentials), network=credentials.network_id.value)
        try:
            handle = await self.cache.get_or_create(credentials)
            reply = await self.wrapper.send(handle, message)
        except AgentKitChatError as exc:
            log.warning("agent_request_failed", kind=exc.kind, outcome="error", reason=exc.message)
            return AgentResponse.failure(exc.message, exc.kind)
        except Exception:
            log.exception("agent_request_failed", kind=InvocationError.kind, outcome="error")
            return AgentResponse.failure(GENERIC_INVOCATION_ERROR, InvocationError.kind)

        log.info("agent_reply", outcome="ok", reply_chars=len(reply))
        return AgentResponse(response=reply)
