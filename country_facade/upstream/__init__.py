"""
Upstream provider access.
"""

from .client import RestCountriesClient, build_async_client

__all__ = [
    "RestCountriesClient",
    "build_async_client",
]
