"""
In-memory query engine over normalized countries.

The pipeline order is fixed: filter, then sort, then paginate. Paginating
first would break the ``total`` contract, so ``run_query`` is the only entry
point repositories use.
"""

import unicodedata
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import (
    Country,
    CountryFilter,
    CountryListResult,
    CountrySortBy,
    PaginationParams,
)
from .validation import validate_pagination, validate_sort_by


def collation_key(text: str) -> Tuple[str, str, str]:
    """
    Locale-aware sort key for display names.

    Compares base letters first (accents and case ignored), then accents,
    then case with lowercase before uppercase, so "Åland Islands" sorts with
    the A's rather than after "Zimbabwe".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def matches_filter(country: Country, country_filter: CountryFilter) -> bool:
    """Check a single country against every present predicate."""
    if country_filter.name:
        if country_filter.name.casefold() not in country.name.common.casefold():
            return False
    if country_filter.region:
        if country.region != country_filter.region:
            return False
    if country_filter.subregion:
        # An absent subregion never satisfies the predicate
        if country.subregion is None or country.subregion != country_filter.subregion:
            return False
    if country_filter.currency:
        if not any(currency.code == country_filter.currency for currency in country.currencies):
            return False
    if country_filter.language:
        if country_filter.language not in country.languages:
            return False
    return True


def apply_filter(
    countries: Iterable[Country],
    country_filter: Optional[CountryFilter],
) -> List[Country]:
    """Keep the countries that satisfy the filter; None keeps everything."""
    if country_filter is None:
        return list(countries)
    return [country for country in countries if matches_filter(country, country_filter)]


def apply_sort(
    countries: Iterable[Country],
    sort_by: Optional[CountrySortBy],
) -> List[Country]:
    """
    Stable sort by the requested order.

    Python's sort is stable for ``reverse=True`` too, so ties keep their
    input order in both directions. None leaves the order untouched.
    """
    items = list(countries)
    if sort_by is None:
        return items

    sort_by = validate_sort_by(sort_by)
    if sort_by in (CountrySortBy.NAME, CountrySortBy.NAME_DESC):
        return sorted(
            items,
            key=lambda country: collation_key(country.name.common),
            reverse=sort_by is CountrySortBy.NAME_DESC,
        )
    return sorted(
        items,
        key=lambda country: country.population,
        reverse=sort_by is CountrySortBy.POPULATION_DESC,
    )


def paginate(
    countries: Sequence[Country],
    pagination: Optional[PaginationParams] = None,
) -> CountryListResult:
    """
    Slice one page out of an already filtered and sorted sequence.

    A page past the end yields no items; ``total``, ``page`` and ``per_page``
    are still reported as requested.
    """
    pagination = validate_pagination(pagination)
    start = (pagination.page - 1) * pagination.per_page
    end = start + pagination.per_page
    return CountryListResult(
        items=tuple(countries[start:end]),
        total=len(countries),
        page=pagination.page,
        per_page=pagination.per_page,
    )


def run_query(
    countries: Iterable[Country],
    country_filter: Optional[CountryFilter] = None,
    pagination: Optional[PaginationParams] = None,
    sort_by: Optional[CountrySortBy] = None,
) -> CountryListResult:
    """Filter, sort and paginate in that order."""
    filtered = apply_filter(countries, country_filter)
    ordered = apply_sort(filtered, sort_by)
    return paginate(ordered, pagination)
