"""
Cache manager with error handling and graceful degradation.

This module wraps a cache backend with JSON serialization, TTL jitter,
statistics, and an explicit three-way read result. A backend failure or a
corrupt payload is reported as ``UNAVAILABLE`` instead of raising, so callers
can fall back to their source of truth.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..models import CacheLookupStatus
from .backends import CacheBackend
from .utils import TTLCalculator

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheStats:
    """
    Counters for one ``CacheManager``.

    ``error_count`` is the sum of ``read_errors``, ``write_errors`` and
    ``corrupt_entries``; none of them are counted as misses.
    """

    hit_count: int = 0
    miss_count: int = 0
    set_count: int = 0
    delete_count: int = 0
    read_errors: int = 0
    write_errors: int = 0
    corrupt_entries: int = 0
    started_at: datetime = field(default_factory=datetime.now)

    @property
    def error_count(self) -> int:
        return self.read_errors + self.write_errors + self.corrupt_entries

    @property
    def hit_ratio(self) -> float:
        """Hits over clean reads (hits plus misses)."""
        reads = self.hit_count + self.miss_count
        return self.hit_count / reads if reads else 0.0

    def to_dict(self) -> Dict[str, Any]:
        stats = asdict(self)
        stats["started_at"] = self.started_at.isoformat()
        stats["error_count"] = self.error_count
        stats["hit_ratio"] = self.hit_ratio
        return stats


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    """Result of a cache read: hit with a value, miss, or backend unavailable."""

    status: CacheLookupStatus
    value: Optional[T] = None

    @property
    def is_hit(self) -> bool:
        return self.status is CacheLookupStatus.HIT

    @property
    def should_store(self) -> bool:
        """Only a clean miss is followed by a write."""
        return self.status is CacheLookupStatus.MISS


class CorruptCacheEntry(Exception):
    """Stored payload could not be decoded."""
    pass


class CacheManager:
    """
    High-level cache manager over a ``CacheBackend``.

    Values are stored as a JSON envelope ``{"value": ...}`` so a cached
    ``None`` is distinguishable from a missing key. Pydantic models are dumped
    in JSON mode and rebuilt by the decoder passed to ``lookup``.
    """

    def __init__(
        self,
        backend: CacheBackend,
        ttl_jitter: float = 0.0,
    ):
        """
        Wrap a backend.

        Args:
            backend: Storage backend
            ttl_jitter: Jitter applied to every TTL as a fraction (0.0 disables it)
        """
        self.backend = backend
        self.ttl_jitter = ttl_jitter
        self.ttl_calculator = TTLCalculator()
        self.stats = CacheStats()

        logger.info(f"CacheManager initialized with {type(backend).__name__}")

    @staticmethod
    def encode(value: Any) -> str:
        """Serialize a value (pydantic model, None or JSON-compatible data) into an envelope."""
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        return json.dumps({"value": value}, ensure_ascii=False)

    @staticmethod
    def decode(payload: str, decoder: Callable[[Any], T]) -> T:
        """
        Rebuild a value from an envelope.

        Raises:
            CorruptCacheEntry: If the payload is not a valid envelope or the decoder rejects it
        """
        try:
            envelope = json.loads(payload)
        except (json.JSONDecodeError, TypeError) as e:
            raise CorruptCacheEntry(f"Payload is not JSON: {e}") from e
        if not isinstance(envelope, dict) or "value" not in envelope:
            raise CorruptCacheEntry("Payload is not a cache envelope")
        try:
            return decoder(envelope["value"])
        except (ValidationError, TypeError, ValueError) as e:
            raise CorruptCacheEntry(f"Payload failed validation: {e}") from e

    async def lookup(self, key: str, decoder: Callable[[Any], T]) -> CacheLookup[T]:
        """
        Read a key and classify the outcome.

        Args:
            key: Cache key
            decoder: Turns the envelope's ``value`` back into the domain type

        Returns:
            CacheLookup: HIT with the decoded value, MISS, or UNAVAILABLE
        """
        try:
            payload = await self.backend.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed for key {key}: {e}")
            self.stats.read_errors += 1
            return CacheLookup(CacheLookupStatus.UNAVAILABLE)

        if payload is None:
            self.stats.miss_count += 1
            logger.debug(f"Cache miss for key {key}")
            return CacheLookup(CacheLookupStatus.MISS)

        try:
            value = self.decode(payload, decoder)
        except CorruptCacheEntry as e:
            logger.warning(f"Corrupt cache entry for key {key}: {e}")
            self.stats.corrupt_entries += 1
            return CacheLookup(CacheLookupStatus.UNAVAILABLE)

        self.stats.hit_count += 1
        logger.debug(f"Cache hit for key {key}")
        return CacheLookup(CacheLookupStatus.HIT, value)

    async def store(self, key: str, value: Any, ttl: int) -> bool:
        """
        Store a value with TTL; a backend failure is logged and reported as False.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            True if successful, False otherwise
        """
        final_ttl = int(ttl)
        if self.ttl_jitter:
            final_ttl = self.ttl_calculator.calculate_ttl_with_jitter(ttl, self.ttl_jitter)

        try:
            await self.backend.set(key, self.encode(value), final_ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for key {key}: {e}")
            self.stats.write_errors += 1
            return False

        self.stats.set_count += 1
        logger.debug(f"Cached key {key} for {final_ttl}s")
        return True

    async def delete(self, key: str) -> bool:
        """Delete a key; raises if the backend fails."""
        deleted = await self.backend.delete(key)
        if deleted:
            self.stats.delete_count += 1
        return deleted

    async def flush(self) -> None:
        """Remove every entry from the backend."""
        await self.backend.flush()
        logger.info("Cache flushed")

    async def close(self) -> None:
        """Close the backend."""
        await self.backend.close()

    def get_stats(self) -> Dict[str, Any]:
        """Return statistics as a dictionary."""
        return self.stats.to_dict()
