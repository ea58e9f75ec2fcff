"""Short-lived cache of pending and resolved secret values."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

log = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(seconds=5)


@dataclass
class CachedSecret:
    task: asyncio.Future[str]
    expires: float

    def expired(self, now: float) -> bool:
        return now >= self.expires


class SecretCache:
    """Keeps each secret's fetch around for a fixed time-to-live.

    The cached entry is the fetch task itself, so concurrent callers asking
    for the same name share one in-flight fetch. A failed fetch is cached
    like a successful one until it expires.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CachedSecret] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, name: str, fetch: Callable[[], Awaitable[str]]) -> str:
        now = self._clock()
        entry = self._entries.get(name)
        if entry is None or entry.expired(now):
            self._evict_expired(now)
            log.debug("Fetching %r", name)
            entry = CachedSecret(
                task=asyncio.ensure_future(fetch()),
                expires=now + self.ttl.total_seconds(),
            )
            self._entries[name] = entry
        return await asyncio.shield(entry.task)

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, entry in self._entries.items() if entry.expired(now)]
        for key in expired:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()
