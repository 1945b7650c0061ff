import asyncio
from typing import Awaitable, Callable, Dict, Optional, Protocol

from .core.agent import AgentHandle
from .core.credentials import fingerprint
from .logging_config import get_logger
from .types.requests import CredentialSet

logger = get_logger(__name__)


class AgentStore(Protocol):
    async def get(self, key: str) -> Optional[AgentHandle]: ...

    async def set(self, key: str, value: AgentHandle) -> None: ...

    def size(self) -> int: ...


class InMemoryAgentStore:
    """Process-local agent store. Entries are never evicted."""

    def __init__(self):
        self._entries: Dict[str, AgentHandle] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[AgentHandle]:
        async with self._lock:
            return self._entries.get(key)

    async def set(self, key: str, value: AgentHandle) -> None:
        async with self._lock:
            self._entries[key] = value

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def size(self) -> int:
        return len(self._entries)


Builder = Callable[[CredentialSet], Awaitable[AgentHandle]]


class AgentSessionCache:
    """Fingerprint -> AgentHandle, building handles on first use.

    Builds are serialized: the wallet record and the wallet platform's
    process-wide configuration are shared by every build. A caller that waited
    for the build lock re-checks the store, so concurrent misses for the same
    credentials construct once. A failed build stores nothing.
    """

    def __init__(self, builder: Builder, store: Optional[AgentStore] = None):
        self._builder = builder
        self.store = store if store is not None else InMemoryAgentStore()
        self._build_lock = asyncio.Lock()

    async def get_or_create(self, credentials: CredentialSet) -> AgentHandle:
        key = fingerprint(credentials)

        handle = await self.store.get(key)
        if handle is not None:
            logger.debug("agent_cache_hit", fingerprint=key)
            return handle

        async with self._build_lock:
            handle = await self.store.get(key)
            if handle is not None:
                logger.debug("agent_cache_hit", fingerprint=key, waited=True)
                return handle

            logger.info("agent_cache_miss", fingerprint=key)
            handle = await self._builder(credentials)
            await self.store.set(key, handle)
            return handle

    def size(self) -> int:
        return self.store.size()
