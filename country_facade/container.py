"""
Composition root.

Builds the object graph explicitly: HTTP client -> upstream client -> source
repository -> cache backend -> cache manager -> cached repository -> query
handler. Nothing on the read path looks up shared global state.
"""

import logging
from typing import Optional

from .api import CountryQueryHandler
from .cache import (
    CacheBackend,
    CacheManager,
    InMemoryCacheBackend,
    ValkeyCacheBackend,
    ValkeyConfig,
)
from .repositories import CachedCountryRepository, RestCountriesRepository
from .upstream import RestCountriesClient, build_async_client
from .utils.config import AppConfig, load_config

logger = logging.getLogger(__name__)


def build_cache_backend(config: AppConfig) -> CacheBackend:
    """Create the cache backend selected by ``cache_engine``."""
    if config.cache_engine == "valkey":
        return ValkeyCacheBackend(ValkeyConfig.from_app_config(config))
    return InMemoryCacheBackend(max_entries=config.cache_max_entries)


def build_repository(
    config: AppConfig,
    client: Optional[RestCountriesClient] = None,
    backend: Optional[CacheBackend] = None,
) -> CachedCountryRepository:
    """
    Build the cached repository over the provider.

    Args:
        config: Application configuration
        client: Upstream client; built from ``config`` when omitted
        backend: Cache backend; selected by ``cache_engine`` when omitted

    Returns:
        CachedCountryRepository: Source repository wrapped in the cache
    """
    client = client or RestCountriesClient(
        build_async_client(config),
        fields=config.upstream_fields or None,
    )
    cache = CacheManager(
        backend or build_cache_backend(config),
        ttl_jitter=config.cache_ttl_jitter,
    )
    return CachedCountryRepository(
        RestCountriesRepository(client), cache, default_ttl=config.cache_ttl
    )


class CountryFacade:
    """
    Fully wired facade.

    Without a config, settings are read with ``load_config`` from the
    environment and ``.env``.

    Usage:
        async with CountryFacade(config) as facade:
            page = await facade.repository.find_all()
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        client: Optional[RestCountriesClient] = None,
        backend: Optional[CacheBackend] = None,
    ):
        self.config = config or load_config()
        self.client = client or RestCountriesClient(
            build_async_client(self.config),
            fields=self.config.upstream_fields or None,
        )
        self.repository = build_repository(self.config, self.client, backend)
        self.source = self.repository.repository
        self.cache = self.repository.cache
        self.handler = CountryQueryHandler(self.repository)
        logger.debug(
            f"CountryFacade wired: upstream={self.config.upstream_base_url}, "
            f"cache={self.config.cache_engine}, ttl={self.config.cache_ttl}s"
        )

    async def close(self) -> None:
        """Close the HTTP client and the cache backend."""
        try:
            await self.client.aclose()
        finally:
            await self.cache.close()

    async def __aenter__(self) -> "CountryFacade":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
