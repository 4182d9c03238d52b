"""
Caching layer for the country facade.

This module contains cache backends, the cache manager with graceful
degradation, and key/TTL utilities.
"""

from .config import ValkeyConfig
from .backends import CacheBackend, InMemoryCacheBackend, ValkeyCacheBackend
from .utils import (
    CacheKeyPrefix,
    CacheKeyBuilder,
    TTLCalculator,
    canonical_json,
)
from .manager import CacheManager, CacheStats, CacheLookup, CorruptCacheEntry

__all__ = [
    # Configuration
    "ValkeyConfig",

    # Backends
    "CacheBackend",
    "InMemoryCacheBackend",
    "ValkeyCacheBackend",

    # Manager
    "CacheManager",
    "CacheStats",
    "CacheLookup",
    "CorruptCacheEntry",

    # Utilities
    "CacheKeyPrefix",
    "CacheKeyBuilder",
    "TTLCalculator",
    "canonical_json",
]
