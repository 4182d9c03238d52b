"""
Upstream normalizer.

Converts one raw REST Countries document into a canonical ``Country``. The
native name, currency and language order follow the provider's map order,
which the provider does not guarantee; callers must not rely on which entry
comes first.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from .errors import NormalizationError
from .models import (
    Country,
    CountryName,
    Currency,
    Flags,
    Maps,
    RawCountryRecord,
)

logger = logging.getLogger(__name__)

MANDATORY_FIELDS = ("cca2", "cca3", "name.common", "name.official", "region", "population")

RawInput = Union[RawCountryRecord, Mapping[str, Any]]


def parse_raw_record(raw: RawInput) -> RawCountryRecord:
    """
    Parse a provider document into the all-optional raw model.

    Raises:
        NormalizationError: If the document is not an object or a field has the wrong type
    """
    if isinstance(raw, RawCountryRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise NormalizationError(
            f"Expected a country document object, got {type(raw).__name__}"
        )

    try:
        return RawCountryRecord.model_validate(dict(raw))
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        code = raw.get("cca3") or raw.get("cca2")
        raise NormalizationError(
            f"Country document {code or '<unknown>'} has invalid fields: {', '.join(fields)}",
            fields=fields,
            code=code if isinstance(code, str) else None,
        ) from e


def _missing_fields(record: RawCountryRecord) -> List[str]:
    present = {
        "cca2": record.cca2,
        "cca3": record.cca3,
        "name.common": record.name.common if record.name else None,
        "name.official": record.name.official if record.name else None,
        "region": record.region,
        "population": record.population,
    }
    return [field for field in MANDATORY_FIELDS if present[field] is None]


def _native_name(record: RawCountryRecord) -> Optional[str]:
    native_names = record.name.native_name
    if not native_names:
        return None
    first = next(iter(native_names.values()))
    return first.common


def normalize_country(raw: RawInput) -> Country:
    """
    Normalize one provider document.

    Args:
        raw: Provider document (dict) or an already parsed RawCountryRecord

    Returns:
        Country: Canonical record

    Raises:
        NormalizationError: If a mandatory field is missing or has the wrong type
    """
    record = parse_raw_record(raw)

    missing = _missing_fields(record)
    if missing:
        code = record.cca3 or record.cca2
        raise NormalizationError(
            f"Country document {code or '<unknown>'} is missing mandatory fields: {', '.join(missing)}",
            fields=missing,
            code=code,
        )
    if record.population < 0:
        raise NormalizationError(
            f"Country document {record.cca3} has a negative population",
            fields=["population"],
            code=record.cca3,
        )

    currencies = tuple(
        Currency(code=code, name=currency.name, symbol=currency.symbol)
        for code, currency in (record.currencies or {}).items()
    )
    languages = tuple((record.languages or {}).values())

    flags = None
    if record.flags is not None:
        flags = Flags(svg=record.flags.svg, png=record.flags.png)

    maps = None
    if record.maps is not None:
        maps = Maps(
            google_maps=record.maps.google_maps,
            open_street_maps=record.maps.open_street_maps,
        )

    try:
        return Country(
            code2=record.cca2.strip().upper(),
            code3=record.cca3.strip().upper(),
            name=CountryName(
                common=record.name.common,
                official=record.name.official,
                native=_native_name(record),
            ),
            capital=record.capital[0] if record.capital else None,
            region=record.region,
            subregion=record.subregion,
            population=record.population,
            area=record.area,
            currencies=currencies,
            languages=languages,
            timezones=tuple(record.timezones or ()),
            flags=flags,
            maps=maps,
        )
    except ValidationError as e:
        # Code length or negative area
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise NormalizationError(
            f"Country document {record.cca3} has invalid values: {', '.join(fields)}",
            fields=fields,
            code=record.cca3,
        ) from e


def normalize_countries(raws: Iterable[RawInput]) -> List[Country]:
    """
    Normalize a whole provider collection.

    Fails on the first bad record instead of dropping it, so a list total is
    never silently under-reported.
    """
    countries = [normalize_country(raw) for raw in raws]
    logger.debug(f"Normalized {len(countries)} country documents")
    return countries
