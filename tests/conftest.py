"""
Shared fixtures for the country facade tests.

Provider documents mirror REST Countries v3.1 payloads; the upstream is faked
with ``httpx.MockTransport`` so no test touches the network.
"""

import copy
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from country_facade.cache import CacheManager, InMemoryCacheBackend
from country_facade.models import (
    Country,
    CountryFilter,
    CountryListResult,
    CountryName,
    CountrySortBy,
    PaginationParams,
)
from country_facade.query_engine import run_query
from country_facade.repositories import RestCountriesRepository
from country_facade.upstream import RestCountriesClient

BASE_URL = "https://restcountries.test/v3.1"

BRAZIL_RAW: Dict[str, Any] = {
    "cca2": "BR",
    "cca3": "BRA",
    "name": {
        "common": "Brazil",
        "official": "Federative Republic of Brazil",
        "nativeName": {
            "por": {"common": "Brasil", "official": "República Federativa do Brasil"},
        },
    },
    "capital": ["Brasília"],
    "region": "Americas",
    "subregion": "South America",
    "population": 212559417,
    "area": 8515767.049,
    "currencies": {"BRL": {"name": "Brazilian real", "symbol": "R$"}},
    "languages": {"por": "Portuguese"},
    "timezones": ["UTC-05:00", "UTC-04:00", "UTC-03:00", "UTC-02:00"],
    "flags": {"svg": "https://flagcdn.com/br.svg", "png": "https://flagcdn.com/w320/br.png"},
    "maps": {
        "googleMaps": "https://goo.gl/maps/waCKk21HeeqFzkNC9",
        "openStreetMaps": "https://www.openstreetmap.org/relation/59470",
    },
}

USA_RAW: Dict[str, Any] = {
    "cca2": "US",
    "cca3": "USA",
    "name": {"common": "United States", "official": "United States of America"},
    "capital": ["Washington, D.C."],
    "region": "Americas",
    "subregion": "North America",
    "population": 329484123,
    "area": 9372610,
    "currencies": {"USD": {"name": "United States dollar", "symbol": "$"}},
    "languages": {"eng": "English"},
    "timezones": ["UTC-12:00", "UTC-05:00"],
    "flags": {"svg": "https://flagcdn.com/us.svg", "png": "https://flagcdn.com/w320/us.png"},
    "maps": {"googleMaps": "https://goo.gl/maps/e8M246zq4A5zH6Xv6"},
}

PORTUGAL_RAW: Dict[str, Any] = {
    "cca2": "PT",
    "cca3": "PRT",
    "name": {
        "common": "Portugal",
        "official": "Portuguese Republic",
        "nativeName": {"por": {"common": "Portugal", "official": "República Portuguesa"}},
    },
    "capital": ["Lisbon"],
    "region": "Europe",
    "subregion": "Southern Europe",
    "population": 10276617,
    "area": 92090.0,
    "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
    "languages": {"por": "Portuguese"},
    "timezones": ["UTC-01:00", "UTC"],
}


def make_country(
    code2: str,
    common: str,
    population: int,
    region: str = "Americas",
    code3: Optional[str] = None,
    **kwargs: Any,
) -> Country:
    """Build a canonical country with sensible defaults."""
    official = kwargs.pop("official", common)
    return Country(
        code2=code2,
        code3=code3 or f"{code2}X",
        name=CountryName(common=common, official=official),
        region=region,
        population=population,
        **kwargs,
    )


class FakeCountryRepository:
    """In-memory source repository that counts how often it is called."""

    def __init__(self, countries: List[Country]):
        self.countries = countries
        self.find_all_calls = 0
        self.find_by_code_calls = 0
        self.error: Optional[BaseException] = None

    async def find_all(
        self,
        country_filter: Optional[CountryFilter] = None,
        pagination: Optional[PaginationParams] = None,
        sort_by: Optional[CountrySortBy] = None,
    ) -> CountryListResult:
        self.find_all_calls += 1
        if self.error is not None:
            raise self.error
        return run_query(self.countries, country_filter, pagination, sort_by)

    async def find_by_code(self, code: str) -> Optional[Country]:
        self.find_by_code_calls += 1
        if self.error is not None:
            raise self.error
        for country in self.countries:
            if code in (country.code2, country.code3):
                return country
        return None


class FailingCacheBackend:
    """Backend whose every operation raises, as a dead cache server would."""

    def __init__(self):
        self.get_calls = 0
        self.set_calls = 0

    async def get(self, key: str) -> Optional[str]:
        self.get_calls += 1
        raise ConnectionError("cache backend down")

    async def set(self, key: str, value: str, ttl: int) -> None:
        self.set_calls += 1
        raise ConnectionError("cache backend down")

    async def delete(self, key: str) -> bool:
        raise ConnectionError("cache backend down")

    async def flush(self) -> None:
        raise ConnectionError("cache backend down")

    async def close(self) -> None:
        pass


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class UpstreamStub:
    """
    Routes for a fake REST Countries server.

    ``responses`` maps a path below the base URL (e.g. ``/all``) to either a
    JSON-compatible body, an ``httpx.Response``, or a callable raising an
    exception. Unknown paths answer 404.
    """

    def __init__(self, responses: Dict[str, Any]):
        self.responses = responses
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/v3.1"):]
        if path not in self.responses:
            return httpx.Response(404, json={"status": 404, "message": "Not Found"})
        response = self.responses[path]
        if isinstance(response, httpx.Response):
            return response
        if callable(response):
            return response(request)
        return httpx.Response(200, json=response)

    def count(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path.endswith(path))


def build_client(stub: UpstreamStub, fields: Optional[str] = None) -> RestCountriesClient:
    http_client = httpx.AsyncClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(stub),
        headers={"Accept": "application/json"},
    )
    return RestCountriesClient(http_client, fields=fields)


@pytest.fixture
def raw_countries() -> List[Dict[str, Any]]:
    """Brazil, United States and Portugal as provider documents."""
    return copy.deepcopy([BRAZIL_RAW, USA_RAW, PORTUGAL_RAW])


@pytest.fixture
def upstream(raw_countries) -> UpstreamStub:
    """Upstream answering /all and the alpha lookups for the three countries."""
    routes: Dict[str, Any] = {"/all": raw_countries}
    for raw in raw_countries:
        routes[f"/alpha/{raw['cca2']}"] = [raw]
        routes[f"/alpha/{raw['cca3']}"] = [raw]
    return UpstreamStub(routes)


@pytest.fixture
async def source_repository(upstream):
    """RestCountriesRepository over the stubbed upstream."""
    client = build_client(upstream)
    yield RestCountriesRepository(client)
    await client.aclose()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock) -> CacheManager:
    """Cache manager over an in-memory backend driven by the fake clock."""
    return CacheManager(InMemoryCacheBackend(max_entries=100, clock=clock))


@pytest.fixture
def country_factory() -> Callable[..., Country]:
    return make_country
