"""
Error taxonomy for the country facade.

Validation errors are raised before any I/O, upstream errors wrap transport
and protocol failures, and normalization errors flag provider records that
lack mandatory fields. A "not found" lookup is not an error: repositories
return ``None`` for it.
"""

from typing import Optional, Sequence


class CountryFacadeError(Exception):
    """Base exception for every failure surfaced by the facade."""
    pass


class RequestValidationError(CountryFacadeError, ValueError):
    """Invalid request arguments (pagination bounds, blank country code)."""
    pass


class UpstreamError(CountryFacadeError):
    """
    Upstream provider failure.

    Raised for transport errors, timeouts, unexpected status codes and
    malformed bodies. The underlying exception is kept in ``cause`` and is
    also chained as ``__cause__`` by the raiser.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class NormalizationError(CountryFacadeError):
    """A provider record is missing mandatory fields or has the wrong types."""

    def __init__(
        self,
        message: str,
        fields: Sequence[str] = (),
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.fields = tuple(fields)
        self.code = code


class UpstreamNotFound(Exception):
    """Typed signal for a 404 from the provider; callers map it to ``None``."""

    def __init__(self, path: str):
        super().__init__(f"Upstream resource not found: {path}")
        self.path = path
