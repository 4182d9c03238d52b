"""
Raw provider document models.

REST Countries v3.1 documents are loosely shaped: most keys may be missing and
nested maps arrive in provider order. Every field here is optional; leaf
values use strict types so a wrong type fails instead of being coerced. The
normalizer turns a ``RawCountryRecord`` into a canonical ``Country``.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class RawNativeName(BaseModel):
    model_config = ConfigDict(extra="ignore")

    common: Optional[StrictStr] = None
    official: Optional[StrictStr] = None


class RawName(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    common: Optional[StrictStr] = None
    official: Optional[StrictStr] = None
    native_name: Optional[Dict[str, RawNativeName]] = Field(None, alias="nativeName")


class RawCurrency(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = None
    symbol: Optional[StrictStr] = None


class RawFlags(BaseModel):
    model_config = ConfigDict(extra="ignore")

    svg: Optional[StrictStr] = None
    png: Optional[StrictStr] = None


class RawMaps(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    google_maps: Optional[StrictStr] = Field(None, alias="googleMaps")
    open_street_maps: Optional[StrictStr] = Field(None, alias="openStreetMaps")


class RawCountryRecord(BaseModel):
    """One country document as returned by the provider."""
    model_config = ConfigDict(extra="ignore")

    cca2: Optional[StrictStr] = None
    cca3: Optional[StrictStr] = None
    name: Optional[RawName] = None
    capital: Optional[List[StrictStr]] = None
    region: Optional[StrictStr] = None
    subregion: Optional[StrictStr] = None
    population: Optional[StrictInt] = None
    area: Optional[Union[StrictInt, StrictFloat]] = None
    currencies: Optional[Dict[str, RawCurrency]] = None
    languages: Optional[Dict[str, StrictStr]] = None
    timezones: Optional[List[StrictStr]] = None
    flags: Optional[RawFlags] = None
    maps: Optional[RawMaps] = None
