"""
Canonical-to-public mapping.
"""

from ..models import Country, CountryListResult
from .schemas import Bandeiras, ListaPaises, Mapas, Moeda, NomePais, Pais


class CountryMapper:
    """Translate canonical records into the public shapes."""

    @staticmethod
    def to_public(country: Country) -> Pais:
        return Pais(
            codigo2=country.code2,
            codigo3=country.code3,
            nome=NomePais(
                comum=country.name.common,
                oficial=country.name.official,
                nativo=country.name.native,
            ),
            capital=country.capital,
            regiao=country.region,
            subregiao=country.subregion,
            populacao=country.population,
            area=country.area,
            moedas=tuple(
                Moeda(codigo=currency.code, nome=currency.name, simbolo=currency.symbol)
                for currency in country.currencies
            ),
            linguas=country.languages,
            fusos=country.timezones,
            bandeiras=(
                Bandeiras(svg=country.flags.svg, png=country.flags.png)
                if country.flags is not None else None
            ),
            mapas=(
                Mapas(
                    google_maps=country.maps.google_maps,
                    open_street_maps=country.maps.open_street_maps,
                )
                if country.maps is not None else None
            ),
        )

    @classmethod
    def to_public_list(cls, result: CountryListResult) -> ListaPaises:
        return ListaPaises(
            itens=tuple(cls.to_public(country) for country in result.items),
            total=result.total,
            pagina=result.page,
            por_pagina=result.per_page,
        )
