"""
Public (translated) API models.

The public surface uses Portuguese field names: ``paises`` lists countries
and ``pais`` fetches one. Arguments are validated here; results are built by
``CountryMapper`` from canonical records. Unknown argument keys are dropped.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..models import DEFAULT_PAGE, DEFAULT_PER_PAGE, MAX_PER_PAGE, CountryFilter, CountrySortBy


class OrdenacaoPais(str, Enum):
    """Public sort orders."""
    NOME = "nome"
    NOME_DESC = "nome_desc"
    POPULACAO = "populacao"
    POPULACAO_DESC = "populacao_desc"

    def to_sort_by(self) -> CountrySortBy:
        return _SORT_MAP[self]


_SORT_MAP = {
    OrdenacaoPais.NOME: CountrySortBy.NAME,
    OrdenacaoPais.NOME_DESC: CountrySortBy.NAME_DESC,
    OrdenacaoPais.POPULACAO: CountrySortBy.POPULATION,
    OrdenacaoPais.POPULACAO_DESC: CountrySortBy.POPULATION_DESC,
}


# Arguments

class FiltroPais(BaseModel):
    """Public filter arguments."""
    model_config = ConfigDict(extra="ignore")

    nome: Optional[str] = None
    regiao: Optional[str] = None
    subregiao: Optional[str] = None
    moeda: Optional[str] = None
    lingua: Optional[str] = None

    def to_filter(self) -> CountryFilter:
        return CountryFilter(
            name=self.nome,
            region=self.regiao,
            subregion=self.subregiao,
            currency=self.moeda,
            language=self.lingua,
        )


class PaisesArgs(BaseModel):
    """Arguments of the ``paises`` query."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    filtro: Optional[FiltroPais] = None
    pagina: int = Field(DEFAULT_PAGE, ge=1)
    por_pagina: int = Field(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE, alias="porPagina")
    ordenacao: OrdenacaoPais = OrdenacaoPais.NOME


class PaisArgs(BaseModel):
    """Arguments of the ``pais`` query."""
    model_config = ConfigDict(extra="ignore")

    codigo: str = Field(..., min_length=1)


# Results

class NomePais(BaseModel):
    comum: str
    oficial: str
    nativo: Optional[str] = None


class Moeda(BaseModel):
    codigo: str
    nome: Optional[str] = None
    simbolo: Optional[str] = None


class Bandeiras(BaseModel):
    svg: Optional[str] = None
    png: Optional[str] = None


class Mapas(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    google_maps: Optional[str] = Field(None, alias="googleMaps")
    open_street_maps: Optional[str] = Field(None, alias="openStreetMaps")


class Pais(BaseModel):
    """Public country shape."""

    codigo2: str
    codigo3: str
    nome: NomePais
    capital: Optional[str] = None
    regiao: str
    subregiao: Optional[str] = None
    populacao: int
    area: Optional[float] = None
    moedas: Tuple[Moeda, ...] = ()
    linguas: Tuple[str, ...] = ()
    fusos: Tuple[str, ...] = ()
    bandeiras: Optional[Bandeiras] = None
    mapas: Optional[Mapas] = None


class ListaPaises(BaseModel):
    """Public page of countries."""
    model_config = ConfigDict(populate_by_name=True)

    itens: Tuple[Pais, ...] = ()
    total: int
    pagina: int
    por_pagina: int = Field(..., alias="porPagina")
