"""Bridge: the single dependency injected into every service.

Owns the three handles the reconciliation engine needs: the link table
store, the RCON command executor, and the plugin manager. It also owns
the per-member locks that serialize whole operations for one directory
identity, and a table lock held only while one entry is re-read and
written back, so different identities never overwrite each other.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from whitelink.infrastructure.executor import RemoteExecutor
from whitelink.infrastructure.store import LinkStore

if TYPE_CHECKING:
    from whitelink.config.settings import WlSettings
    from whitelink.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class KeyedLocks:
    """One :class:`asyncio.Lock` per key, dropped when nobody holds or waits on it."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class Bridge:
    """Shared handles for one running bot or CLI invocation.

    Parameters:
        settings: Resolved settings.
        store: Override the link store (defaults to ``settings.store_file``).
        executor: Override the command executor (defaults to RCON).
    """

    def __init__(
        self,
        settings: WlSettings,
        *,
        store: LinkStore | None = None,
        executor: RemoteExecutor | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or LinkStore(settings.store_file)
        self.executor = executor or RemoteExecutor(settings.rcon)
        self.locks = KeyedLocks()
        self._table_lock = asyncio.Lock()
        self._plugin_manager: PluginManager | None = None

    @property
    def role_enabled(self) -> bool:
        return self.settings.roles.enabled

    @property
    def plugin_manager(self) -> PluginManager | None:
        return self._plugin_manager

    def init_plugins(self, *, discover: bool = True) -> PluginManager:
        """Create the plugin manager and load entry-point plugins."""
        from whitelink.plugins.manager import PluginManager

        pm = PluginManager()
        if discover:
            names = pm.discover_and_load()
            if names:
                logger.info("Loaded plugins: %s", ", ".join(names))
        self._plugin_manager = pm
        return pm

    @asynccontextmanager
    async def member(self, directory_identity: str) -> AsyncIterator[None]:
        """Serialize all work on one member's link."""
        async with self.locks.hold(directory_identity):
            yield

    @asynccontextmanager
    async def table(self) -> AsyncIterator[None]:
        """Serialize read-modify-write cycles on the whole link table."""
        async with self._table_lock:
            yield
