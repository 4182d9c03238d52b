"""
Canonical country models.

These are the normalized, read-only snapshots handed to callers. Optional
fields use ``None`` for "absent", which stays distinct from an explicit empty
string or empty tuple through normalization and cache round-trips.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .enums import CountrySortBy

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


class CountryName(BaseModel):
    """Common, official and native country names."""
    model_config = ConfigDict(frozen=True)

    common: str = Field(..., description="Common English name")
    official: str = Field(..., description="Official English name")
    native: Optional[str] = Field(None, description="Common name in a native language")


class Currency(BaseModel):
    """Currency accepted in a country."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="ISO 4217 currency code")
    name: Optional[str] = None
    symbol: Optional[str] = None


class Flags(BaseModel):
    """Flag image URLs."""
    model_config = ConfigDict(frozen=True)

    svg: Optional[str] = None
    png: Optional[str] = None


class Maps(BaseModel):
    """Map links for a country."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    google_maps: Optional[str] = Field(None, alias="googleMaps")
    open_street_maps: Optional[str] = Field(None, alias="openStreetMaps")


class Country(BaseModel):
    """
    Canonical country record.

    ``code2`` and ``code3`` are always present and uppercase. Sequences are
    tuples so a snapshot cannot be changed after construction.
    """
    model_config = ConfigDict(frozen=True)

    code2: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2 code")
    code3: str = Field(..., min_length=3, max_length=3, description="ISO 3166-1 alpha-3 code")
    name: CountryName
    capital: Optional[str] = None
    region: str = Field(..., description="Region, e.g. 'Europe'")
    subregion: Optional[str] = None
    population: int = Field(..., ge=0)
    area: Optional[float] = Field(None, ge=0, description="Area in square kilometres")
    currencies: Tuple[Currency, ...] = ()
    languages: Tuple[str, ...] = ()
    timezones: Tuple[str, ...] = ()
    flags: Optional[Flags] = None
    maps: Optional[Maps] = None


class CountryFilter(BaseModel):
    """
    Optional predicates combined with logical AND.

    A field left as ``None`` places no constraint on the result.
    """
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(None, description="Case-insensitive substring of the common name")
    region: Optional[str] = Field(None, description="Exact region")
    subregion: Optional[str] = Field(None, description="Exact subregion")
    currency: Optional[str] = Field(None, description="Exact currency code")
    language: Optional[str] = Field(None, description="Exact language name")


class PaginationParams(BaseModel):
    """Requested page window; bounds are checked by ``validate_pagination``."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int = DEFAULT_PAGE
    per_page: int = Field(DEFAULT_PER_PAGE, alias="perPage")


class CountryListResult(BaseModel):
    """A page of countries plus the filtered total."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: Tuple[Country, ...] = ()
    total: int = Field(..., ge=0, description="Matches after filtering, before pagination")
    page: int
    per_page: int = Field(..., alias="perPage")


__all__ = [
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
    "CountrySortBy",
]
