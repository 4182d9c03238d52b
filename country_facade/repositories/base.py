"""
Country repository contract.
"""

from typing import Optional, Protocol, runtime_checkable

from ..models import (
    Country,
    CountryFilter,
    CountryListResult,
    CountrySortBy,
    PaginationParams,
)


@runtime_checkable
class CountryRepository(Protocol):
    """
    Read-only access to countries.

    Both operations are async because implementations fetch over the network
    or read an async cache.
    """

    async def find_all(
        self,
        country_filter: Optional[CountryFilter] = None,
        pagination: Optional[PaginationParams] = None,
        sort_by: Optional[CountrySortBy] = None,
    ) -> CountryListResult:
        """Filter, sort and paginate every known country."""
        ...

    async def find_by_code(self, code: str) -> Optional[Country]:
        """Look up by alpha-2 or alpha-3 code; None when it does not exist."""
        ...
