"""
Country Facade

A cached query layer over the REST Countries provider:
1. Upstream normalization into a stable Country shape
2. Filter, sort and pagination over normalized records
3. Cache-aside repository with TTL expiry and graceful degradation

The translated public API in ``country_facade.api`` and the ``country-facade``
CLI sit on top of the repositories.
"""

__version__ = "0.1.0"
