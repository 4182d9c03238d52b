"""
Key naming and TTL helpers for the country cache.

Code lookups get readable keys (``country:code:BR``); list requests get a
digest of their canonical JSON (``country:all:<sha256>``) because a filter,
page window and sort order do not fit a readable key.
"""

import hashlib
import json
import random
from enum import Enum
from typing import Any, Dict, Union


class CacheKeyPrefix(str, Enum):
    """Namespaces of the two cached operations."""

    COUNTRY_LIST = "country:all"
    COUNTRY_CODE = "country:code"


def canonical_json(data: Any) -> str:
    """
    Serialize data to a canonical JSON string.

    Object keys are sorted and whitespace is dropped, so two mappings with the
    same content always produce the same string regardless of insertion order.
    """
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _prefix(prefix: Union[CacheKeyPrefix, str]) -> str:
    return prefix.value if isinstance(prefix, CacheKeyPrefix) else str(prefix)


class CacheKeyBuilder:
    """Colon-joined cache keys under a ``CacheKeyPrefix``."""

    @staticmethod
    def build_key(prefix: Union[CacheKeyPrefix, str], *parts: Any) -> str:
        """
        Join a prefix and parts with colons; ``None`` parts are left out.

            build_key(CacheKeyPrefix.COUNTRY_CODE, "BR")  # "country:code:BR"
        """
        return ":".join([_prefix(prefix)] + [str(part) for part in parts if part is not None])

    @staticmethod
    def build_hash_key(prefix: Union[CacheKeyPrefix, str], data: Dict[str, Any]) -> str:
        """
        Key made of the prefix and the full SHA-256 hex digest of ``canonical_json(data)``.

            build_hash_key(CacheKeyPrefix.COUNTRY_LIST, {"filter": {"region": "Europe"}})
            # "country:all:9c1f..."
        """
        digest = hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()
        return f"{_prefix(prefix)}:{digest}"


class TTLCalculator:
    """Spreads expiry of entries that were written together."""

    @staticmethod
    def calculate_ttl_with_jitter(
        base_ttl: int,
        jitter_percent: float = 0.1,
        min_ttl: int = 1
    ) -> int:
        """
        Randomize a TTL by up to ``jitter_percent`` in either direction.

        Args:
            base_ttl: TTL in seconds before jitter
            jitter_percent: Fraction of ``base_ttl`` (0.1 gives 270..330 for 300)
            min_ttl: Floor for the result

        Returns:
            int: Jittered TTL, never below ``min_ttl``
        """
        base = int(base_ttl)
        spread = int(base * jitter_percent)
        offset = random.randint(-spread, spread) if spread else 0
        return max(base + offset, min_ttl)
