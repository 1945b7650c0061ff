"""Agent construction and message exchange.

``AgentWrapper.construct`` turns a validated credential set into an
``AgentHandle``: it resolves the signing key from the wallet record, hands
the wallet platform its API key through a scoped temp file, and lets a
toolkit factory build the LangGraph agent. ``AgentWrapper.send`` drives one
message through the agent and joins the streamed replies in arrival order.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol

from ...config import settings
from ...logging_config import get_logger
from ...types.requests import CredentialSet, NetworkId
from ..credentials import check_credential_format, fingerprint
from ..errors import AgentKitChatError, ConstructionError, InvocationError
from ..wallet import SigningKey, WalletRecord, WalletStore, materialized_credentials, resolve_signing_key

logger = get_logger(__name__)

GENERIC_INVOCATION_ERROR = (
    "I'm sorry, I encountered an issue processing your message. Please try again later."
)


@dataclass
class AgentBuild:
    """What the wallet platform hands back for one credential set."""

    agent: Any
    wallet_address: str
    tool_count: int = 0


class AgentToolkitFactory(Protocol):
    def build(self, credentials: CredentialSet, signing_key: SigningKey, credential_file: Path) -> AgentBuild:
        ...


@dataclass
class AgentHandle:
    fingerprint: str
    network_id: NetworkId
    wallet_address: str
    agent: Any = field(repr=False)
    thread_id: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _message_text(message: Any) -> str:
    content = message.get("content") if isinstance(message, dict) else getattr(message, "content", "")
    if isinstance(content, list):
        # Content blocks: keep the text parts only
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return content or ""


class AgentWrapper:
    """Owns the external agent integration for the chat handler."""

    def __init__(
        self,
        factory: Optional[AgentToolkitFactory] = None,
        wallet_store: Optional[WalletStore] = None,
        fallback_private_key: Optional[str] = None,
        credential_dir: Optional[str] = None,
        thread_prefix: Optional[str] = None,
    ):
        self._factory = factory
        self.wallet_store = wallet_store or WalletStore(settings.wallet_data_path)
        self.fallback_private_key = (
            settings.private_key if fallback_private_key is None else fallback_private_key
        )
        self.credential_dir = credential_dir if credential_dir is not None else settings.credential_dir
        self.thread_prefix = thread_prefix or settings.agent_thread_prefix

    @property
    def factory(self) -> AgentToolkitFactory:
        if self._factory is None:
            from ...providers.agentkit import AgentKitToolkitFactory

            try:
                self._factory = AgentKitToolkitFactory()
            except ImportError as exc:
                raise ConstructionError(f"Failed to initialize agent: {exc}")
        return self._factory

    async def construct(self, credentials: CredentialSet) -> AgentHandle:
        check_credential_format(credentials)
        key_fingerprint = fingerprint(credentials)
        log = logger.bind(fingerprint=key_fingerprint, network=credentials.network_id.value)

        signing_key = resolve_signing_key(
            self.wallet_store.load(), self.fallback_private_key, self.wallet_store.path
        )
        log.info("agent_construct_started", key_source=signing_key.source)

        factory = self.factory
        try:
            with materialized_credentials(credentials, self.credential_dir) as key_file:
                build = await asyncio.to_thread(factory.build, credentials, signing_key, key_file)
        except AgentKitChatError:
            raise
        except Exception as exc:
            log.error("agent_construct_failed", error_type=type(exc).__name__, error=str(exc))
            raise ConstructionError(f"Failed to initialize agent: {exc}") from exc

        try:
            self.wallet_store.save(
                WalletRecord(private_key=signing_key.private_key, wallet_address=build.wallet_address)
            )
        except OSError as exc:
            log.error("wallet_record_save_failed", error_type=type(exc).__name__)
            raise ConstructionError(f"Failed to save wallet data to {self.wallet_store.path}: {exc}") from exc

        log.info("agent_construct_finished", wallet_address=build.wallet_address, tools=build.tool_count)

        return AgentHandle(
            fingerprint=key_fingerprint,
            network_id=credentials.network_id,
            wallet_address=build.wallet_address,
            agent=build.agent,
            thread_id=f"{self.thread_prefix}-{key_fingerprint}",
        )

    async def send(self, handle: AgentHandle, message: str) -> str:
        """Run one message through the agent and return the joined reply."""
        parts = []
        try:
            stream = handle.agent.astream(
                {"messages": [{"role": "user", "content": message}]},
                config={"configurable": {"thread_id": handle.thread_id}},
            )
            async for chunk in stream:
                if "agent" in chunk:
                    parts.append(_message_text(chunk["agent"]["messages"][0]))
        except Exception as exc:
            logger.error(
                "agent_invocation_failed",
                fingerprint=handle.fingerprint,
                error_type=type(exc).__name__,
            )
            raise InvocationError(str(exc) or GENERIC_INVOCATION_ERROR) from exc
        return "".join(parts)
