"""
REST Countries HTTP client.

A thin wrapper around ``httpx.AsyncClient`` that standardizes the base URL,
timeout and headers, maps 404 to the ``UpstreamNotFound`` signal, and turns
every other failure into ``UpstreamError`` with the cause chained.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..errors import UpstreamError, UpstreamNotFound
from ..utils.config import AppConfig

logger = logging.getLogger(__name__)


def build_async_client(config: Optional[AppConfig] = None) -> httpx.AsyncClient:
    """
    Create an ``httpx.AsyncClient`` configured for the provider.

    Args:
        config: Application configuration, defaults to ``AppConfig()``

    Returns:
        httpx.AsyncClient: Client with base URL, timeout and static headers
    """
    config = config or AppConfig()
    return httpx.AsyncClient(
        base_url=config.upstream_base_url,
        timeout=httpx.Timeout(config.upstream_timeout_seconds),
        headers={
            "Accept": "application/json",
            "User-Agent": config.upstream_user_agent,
        },
        follow_redirects=True,
    )


class RestCountriesClient:
    """Async client for the REST Countries v3.1 endpoints."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        fields: Optional[str] = None,
    ):
        """
        Args:
            http_client: Configured client (see ``build_async_client``)
            fields: Comma-separated field list sent as ``?fields=``; None requests everything
        """
        self.http_client = http_client
        self.fields = fields

    def _params(self) -> Dict[str, str]:
        return {"fields": self.fields} if self.fields else {}

    async def get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        GET a path and return the parsed JSON body.

        Raises:
            UpstreamNotFound: If the provider answers 404
            UpstreamError: On transport failure, timeout, other non-2xx status or malformed JSON
        """
        try:
            response = await self.http_client.get(path, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Upstream request to {path} timed out: {e}")
            raise UpstreamError(f"Upstream request to {path} timed out", e) from e
        except httpx.HTTPError as e:
            logger.error(f"Upstream request to {path} failed: {e}")
            raise UpstreamError(f"Upstream request to {path} failed", e) from e

        if response.status_code == 404:
            raise UpstreamNotFound(path)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Upstream returned {response.status_code} for {path}")
            raise UpstreamError(f"Upstream returned status {response.status_code}", e) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Upstream returned a malformed body for {path}: {e}")
            raise UpstreamError(f"Upstream returned a malformed body for {path}", e) from e

    async def fetch_all(self) -> List[Dict[str, Any]]:
        """Fetch every country document."""
        body = await self.get_json("/all", params=self._params())
        return self._documents(body, "/all")

    async def fetch_by_code(self, code: str) -> List[Dict[str, Any]]:
        """
        Fetch the documents for an alpha-2 or alpha-3 code.

        The provider answers with a list; a bare object is wrapped in one.

        Raises:
            UpstreamNotFound: If the provider has no such code
        """
        # One path segment, whatever the caller passed
        path = f"/alpha/{quote(code, safe='')}"
        body = await self.get_json(path, params=self._params())
        if isinstance(body, dict):
            return [body]
        return self._documents(body, path)

    @staticmethod
    def _documents(body: Any, path: str) -> List[Dict[str, Any]]:
        """
        Check a body is a list of JSON objects.

        Raises:
            UpstreamError: If the body or one of its items has the wrong shape
        """
        if not isinstance(body, list):
            raise UpstreamError(f"Expected a list from {path}, got {type(body).__name__}")
        for index, item in enumerate(body):
            if not isinstance(item, dict):
                raise UpstreamError(
                    f"Expected country objects from {path}, item {index} is {type(item).__name__}"
                )
        return body

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()

    async def __aenter__(self) -> "RestCountriesClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
