"""
Source repository backed by the REST Countries provider.

Every call performs a full upstream fetch; there is no partial or
incremental loading. Caching is layered on top by ``CachedCountryRepository``.
"""

import logging
from typing import Optional

from ..errors import UpstreamNotFound
from ..models import (
    Country,
    CountryFilter,
    CountryListResult,
    CountrySortBy,
    PaginationParams,
)
from ..normalizer import normalize_countries, normalize_country
from ..query_engine import run_query
from ..upstream import RestCountriesClient
from ..validation import canonicalize_code, validate_pagination, validate_sort_by

logger = logging.getLogger(__name__)


class RestCountriesRepository:
    """Fetches, normalizes and queries countries from the provider."""

    def __init__(self, client: RestCountriesClient):
        self.client = client

    async def find_all(
        self,
        country_filter: Optional[CountryFilter] = None,
        pagination: Optional[PaginationParams] = None,
        sort_by: Optional[CountrySortBy] = None,
    ) -> CountryListResult:
        """
        Fetch every country, then filter, sort and paginate.

        Args:
            country_filter: Optional predicates
            pagination: Page window, defaults to page 1 with 20 items
            sort_by: Optional order; None keeps provider order

        Returns:
            CountryListResult: The requested page and the filtered total

        Raises:
            RequestValidationError: If pagination or sort order is invalid (before any fetch)
            UpstreamError: If the provider cannot be reached or answers badly
            NormalizationError: If a provider record lacks mandatory fields
        """
        effective = validate_pagination(pagination)
        sort_by = validate_sort_by(sort_by)

        raws = await self.client.fetch_all()
        countries = normalize_countries(raws)
        result = run_query(countries, country_filter, effective, sort_by)

        logger.info(
            f"Fetched {len(countries)} countries upstream, {result.total} matched, "
            f"returning page {result.page} ({len(result.items)} items)"
        )
        return result

    async def find_by_code(self, code: str) -> Optional[Country]:
        """
        Look up a country by alpha-2 or alpha-3 code, case-insensitively.

        Returns:
            Country or None when the provider reports the code as unknown

        Raises:
            RequestValidationError: If the code is blank
            UpstreamError: For any upstream failure other than "not found"
            NormalizationError: If the provider record lacks mandatory fields
        """
        normalized_code = canonicalize_code(code)

        try:
            raws = await self.client.fetch_by_code(normalized_code)
        except UpstreamNotFound:
            logger.info(f"Country {normalized_code} not found upstream")
            return None

        if not raws:
            logger.info(f"Country {normalized_code} not found upstream")
            return None
        return normalize_country(raws[0])
