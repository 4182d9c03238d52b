"""
Cache backends.

Backends store opaque strings under string keys with a TTL. The in-memory
backend is the default; the Valkey backend shares entries across processes
but still offers no durability beyond the TTL window.
"""

import logging
import time
from typing import Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

from valkey.asyncio import Valkey

from .config import ValkeyConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheBackend(Protocol):
    """Minimal async key/value store with per-entry TTL."""

    async def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store a string for ``ttl`` seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete a key; True if it existed."""
        ...

    async def flush(self) -> None:
        """Remove every entry owned by this backend."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...


class InMemoryCacheBackend:
    """
    Process-local cache with TTL expiry.

    Expired entries are dropped lazily on read and before eviction. When
    ``max_entries`` is reached the oldest entry is evicted first. The clock is
    injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        # Re-insert so the key becomes the newest entry
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_entries:
            self._purge_expired()
        while len(self._entries) >= self.max_entries:
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            logger.debug(f"Evicted cache entry {oldest_key}")
        self._entries[key] = (value, self._clock() + ttl)

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def flush(self) -> None:
        self._entries.clear()

    async def close(self) -> None:
        self._entries.clear()

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]


class ValkeyCacheBackend:
    """
    Valkey-backed cache using the asyncio client.

    ``flush`` only removes keys under ``config.namespace``, so a shared
    database is left untouched otherwise.
    """

    def __init__(
        self,
        config: Optional[ValkeyConfig] = None,
        client: Optional[Valkey] = None,
    ):
        self.config = config or ValkeyConfig.from_env()
        self.client = client or Valkey(**self.config.to_connection_kwargs())
        self.namespace = self.config.namespace
        logger.info(f"Initializing Valkey cache backend: {self.config}")

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: int) -> None:
        await self.client.setex(key, ttl, value)

    async def delete(self, key: str) -> bool:
        return bool(await self.client.delete(key))

    async def flush(self) -> None:
        keys = [key async for key in self.client.scan_iter(match=f"{self.namespace}:*")]
        if keys:
            await self.client.delete(*keys)
        logger.info(f"Flushed {len(keys)} keys from Valkey namespace {self.namespace}")

    async def close(self) -> None:
        await self.client.aclose()


__all__ = [
    "CacheBackend",
    "InMemoryCacheBackend",
    "ValkeyCacheBackend",
]
