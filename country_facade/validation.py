"""
Request validation shared by every repository entry point.

Both checks run before any cache or upstream I/O.
"""

from typing import Optional, Union

from .errors import RequestValidationError
from .models import MAX_PER_PAGE, CountrySortBy, PaginationParams


def validate_pagination(pagination: Optional[PaginationParams]) -> PaginationParams:
    """
    Validate pagination bounds and resolve defaults.

    Args:
        pagination: Requested window, or None for the defaults

    Returns:
        PaginationParams: The effective window

    Raises:
        RequestValidationError: If page < 1 or per_page is outside [1, 100]
    """
    if pagination is None:
        return PaginationParams()

    if pagination.page < 1:
        raise RequestValidationError(
            f"Page must be greater than 0, got {pagination.page}"
        )
    if pagination.per_page < 1 or pagination.per_page > MAX_PER_PAGE:
        raise RequestValidationError(
            f"Items per page must be between 1 and {MAX_PER_PAGE}, got {pagination.per_page}"
        )
    return pagination


def canonicalize_code(code: Optional[str]) -> str:
    """
    Canonical form of a country code: stripped and uppercase.

    Raises:
        RequestValidationError: If the code is missing or blank
    """
    if code is None or not code.strip():
        raise RequestValidationError("Country code is required")
    return code.strip().upper()


def validate_sort_by(sort_by: Optional[Union[CountrySortBy, str]]) -> Optional[CountrySortBy]:
    """
    Resolve a sort order given as enum member or raw value.

    Raises:
        RequestValidationError: If the value is not a known order
    """
    if sort_by is None:
        return None
    try:
        return CountrySortBy(sort_by)
    except ValueError as e:
        allowed = ", ".join(order.value for order in CountrySortBy)
        raise RequestValidationError(
            f"Sort order must be one of: {allowed}, got {sort_by!r}"
        ) from e
