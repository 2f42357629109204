"""Per-tenant command serialisation.

Every use case that mutates assignment state runs under the tenant's lock, so
commands for one tenant execute one at a time in submission order. The
transaction commits before the lock is released; the next command always
reads committed state. Reads do not take the lock.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

Commit = Callable[[], Awaitable[None]]


class CommandLock:
    def __init__(self) -> None:
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @asynccontextmanager
    async def hold(self, tenant_id: str, commit: Commit | None = None) -> AsyncIterator[None]:
        """Serialise a command. ``commit`` runs on success, still under the lock."""
        async with self._locks[tenant_id]:
            yield
            if commit is not None:
                await commit()

    def is_busy(self, tenant_id: str) -> bool:
        return tenant_id in self._locks and self._locks[tenant_id].locked()
