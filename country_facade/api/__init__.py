"""
Translated public API over the country repositories.
"""

from .schemas import (
    OrdenacaoPais,
    FiltroPais,
    PaisesArgs,
    PaisArgs,
    NomePais,
    Moeda,
    Bandeiras,
    Mapas,
    Pais,
    ListaPaises,
)
from .mapper import CountryMapper
from .handlers import CountryQueryHandler, parse_args

__all__ = [
    "OrdenacaoPais",
    "FiltroPais",
    "PaisesArgs",
    "PaisArgs",
    "NomePais",
    "Moeda",
    "Bandeiras",
    "Mapas",
    "Pais",
    "ListaPaises",
    "CountryMapper",
    "CountryQueryHandler",
    "parse_args",
]
