"""
Country repositories: the upstream-backed source and its cache-aside wrapper.
"""

from .base import CountryRepository
from .rest_countries import RestCountriesRepository
from .cached import CachedCountryRepository, DEFAULT_TTL_SECONDS

__all__ = [
    "CountryRepository",
    "RestCountriesRepository",
    "CachedCountryRepository",
    "DEFAULT_TTL_SECONDS",
]
