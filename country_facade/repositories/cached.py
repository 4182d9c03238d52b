"""
Cache-aside repository.

Wraps any ``CountryRepository`` with a read-through cache:

1. Validate the request (before any I/O)
2. Read the cache: HIT returns, MISS and UNAVAILABLE fall through
3. Delegate to the wrapped repository
4. Store the result with the TTL, but only after a clean MISS

Failures of the wrapped repository propagate unchanged and are never cached.
Concurrent misses for the same key may each fetch and store; the last writer
wins, and there is no single-flight coalescing.
"""

import logging
from typing import Any, Dict, Optional

from ..cache import CacheKeyBuilder, CacheKeyPrefix, CacheManager
from ..models import (
    Country,
    CountryFilter,
    CountryListResult,
    CountrySortBy,
    PaginationParams,
)
from ..validation import canonicalize_code, validate_pagination, validate_sort_by
from .base import CountryRepository

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


def _decode_country(value: Any) -> Optional[Country]:
    if value is None:
        return None
    return Country.model_validate(value)


def _decode_list_result(value: Any) -> CountryListResult:
    return CountryListResult.model_validate(value)


class CachedCountryRepository:
    """Cache-aside decorator for a country repository."""

    def __init__(
        self,
        repository: CountryRepository,
        cache: CacheManager,
        default_ttl: int = DEFAULT_TTL_SECONDS,
    ):
        """
        Args:
            repository: Source of truth, usually ``RestCountriesRepository``
            cache: Cache manager owning the backend
            default_ttl: TTL in seconds applied to every stored result
        """
        self.repository = repository
        self.cache = cache
        self.default_ttl = default_ttl
        self.key_builder = CacheKeyBuilder()

    def list_cache_key(
        self,
        country_filter: Optional[CountryFilter] = None,
        pagination: Optional[PaginationParams] = None,
        sort_by: Optional[CountrySortBy] = None,
    ) -> str:
        """
        Canonical key for a list request.

        Unset filter fields are dropped and object keys are sorted, so field
        order never matters while any differing value changes the key.
        Pagination is keyed by its effective values.
        """
        effective = validate_pagination(pagination)
        effective_sort = validate_sort_by(sort_by)
        filter_data: Dict[str, Any] = {}
        if country_filter is not None:
            filter_data = {
                name: value
                for name, value in country_filter.model_dump().items()
                if value
            }
        request = {
            "filter": filter_data,
            "pagination": {"page": effective.page, "per_page": effective.per_page},
            "sort_by": effective_sort.value if effective_sort is not None else None,
        }
        return self.key_builder.build_hash_key(CacheKeyPrefix.COUNTRY_LIST, request)

    def code_cache_key(self, code: str) -> str:
        """Key for a code lookup, after canonicalization so case never splits entries."""
        return self.key_builder.build_key(CacheKeyPrefix.COUNTRY_CODE, canonicalize_code(code))

    async def find_all(
        self,
        country_filter: Optional[CountryFilter] = None,
        pagination: Optional[PaginationParams] = None,
        sort_by: Optional[CountrySortBy] = None,
    ) -> CountryListResult:
        """Cached ``find_all``; see ``RestCountriesRepository.find_all``."""
        cache_key = self.list_cache_key(country_filter, pagination, sort_by)

        lookup = await self.cache.lookup(cache_key, _decode_list_result)
        if lookup.is_hit:
            return lookup.value

        result = await self.repository.find_all(country_filter, pagination, sort_by)

        if lookup.should_store:
            await self.cache.store(cache_key, result, self.default_ttl)
        return result

    async def find_by_code(self, code: str) -> Optional[Country]:
        """
        Cached ``find_by_code``.

        A ``None`` result is cached too, so repeated lookups of an unknown
        code do not reach the provider within the TTL.
        """
        normalized_code = canonicalize_code(code)
        cache_key = self.code_cache_key(normalized_code)

        lookup = await self.cache.lookup(cache_key, _decode_country)
        if lookup.is_hit:
            return lookup.value

        country = await self.repository.find_by_code(normalized_code)

        if lookup.should_store:
            await self.cache.store(cache_key, country, self.default_ttl)
        return country

    async def evict_code(self, code: str) -> bool:
        """Delete the cached lookup for one code; True if an entry existed."""
        return await self.cache.delete(self.code_cache_key(code))

    async def flush(self) -> None:
        """Drop every cached entry."""
        await self.cache.flush()

    @property
    def stats(self) -> Dict[str, Any]:
        """Cache statistics."""
        return self.cache.get_stats()
