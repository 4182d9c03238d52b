"""
Enums for the country facade.
"""

from enum import Enum


class CountrySortBy(str, Enum):
    """Sort orders supported by the query engine."""
    NAME = "name"
    NAME_DESC = "name_desc"
    POPULATION = "population"
    POPULATION_DESC = "population_desc"


class CacheLookupStatus(str, Enum):
    """Outcome of a cache read."""
    HIT = "hit"
    MISS = "miss"
    UNAVAILABLE = "unavailable"   # Backend raised or payload was corrupt
