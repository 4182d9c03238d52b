"""
Pydantic v2 models for the country facade.

Canonical records and request/result shapes live in ``country``; the raw
provider document lives in ``upstream``.
"""

# Enums
from .enums import (
    CountrySortBy,
    CacheLookupStatus,
)

# Canonical domain models
from .country import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    CountryName,
    Currency,
    Flags,
    Maps,
    Country,
    CountryFilter,
    PaginationParams,
    CountryListResult,
)

# Raw provider models
from .upstream import (
    RawCountryRecord,
    RawName,
    RawNativeName,
    RawCurrency,
    RawFlags,
    RawMaps,
)

__all__ = [
    "CountrySortBy",
    "CacheLookupStatus",
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "CountryName",
    "Currency",
    "Flags",
    "Maps",
    "Country",
    "CountryFilter",
    "PaginationParams",
    "CountryListResult",
    "RawCountryRecord",
    "RawName",
    "RawNativeName",
    "RawCurrency",
    "RawFlags",
    "RawMaps",
]
