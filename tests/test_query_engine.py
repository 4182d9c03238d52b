"""
Tests for filtering, sorting and pagination.
"""

import pytest

from country_facade.errors import RequestValidationError
from country_facade.models import Country, CountryFilter, CountrySortBy, Currency, PaginationParams
from country_facade.query_engine import (
    apply_filter,
    apply_sort,
    collation_key,
    matches_filter,
    paginate,
    run_query,
)

from conftest import make_country


@pytest.fixture
def countries():
    return [
        make_country(
            "BR", "Brazil", 212559417,
            subregion="South America",
            currencies=[Currency(code="BRL", name="Brazilian real", symbol="R$")],
            languages=["Portuguese"],
        ),
        make_country(
            "US", "United States", 329484123,
            subregion="North America",
            currencies=[Currency(code="USD")],
            languages=["English"],
        ),
        make_country(
            "PT", "Portugal", 10276617,
            region="Europe",
            subregion="Southern Europe",
            currencies=[Currency(code="EUR")],
            languages=["Portuguese"],
        ),
        make_country("AQ", "Antarctica", 1000, region="Antarctic"),
    ]


def codes(items):
    return [country.code2 for country in items]


class TestFilter:
    """Test filter predicates."""

    def test_none_filter_keeps_everything(self, countries):
        """Test a missing filter keeps all countries."""
        assert apply_filter(countries, None) == countries

    def test_empty_filter_keeps_everything(self, countries):
        """Test a filter with every field unset keeps all countries."""
        assert apply_filter(countries, CountryFilter()) == countries

    def test_name_substring_case_insensitive(self, countries):
        """Test the name predicate is a case-insensitive substring match."""
        assert codes(apply_filter(countries, CountryFilter(name="BRA"))) == ["BR"]
        assert codes(apply_filter(countries, CountryFilter(name="ta"))) == ["US", "AQ"]

    def test_region_is_exact(self, countries):
        """Test region does not match partially or case-insensitively."""
        assert codes(apply_filter(countries, CountryFilter(region="Americas"))) == ["BR", "US"]
        assert apply_filter(countries, CountryFilter(region="americas")) == []
        assert apply_filter(countries, CountryFilter(region="Americ")) == []

    def test_absent_subregion_never_matches(self, countries):
        """Test a country without subregion is excluded by a subregion filter."""
        result = apply_filter(countries, CountryFilter(subregion="Southern Europe"))
        assert codes(result) == ["PT"]

    def test_currency_code(self, countries):
        """Test the currency predicate matches any listed currency code."""
        assert codes(apply_filter(countries, CountryFilter(currency="EUR"))) == ["PT"]
        assert apply_filter(countries, CountryFilter(currency="eur")) == []

    def test_language_name(self, countries):
        """Test the language predicate matches any listed language."""
        assert codes(apply_filter(countries, CountryFilter(language="Portuguese"))) == ["BR", "PT"]

    def test_predicates_are_combined(self, countries):
        """Test several predicates must all hold."""
        country_filter = CountryFilter(region="Americas", language="Portuguese")
        assert codes(apply_filter(countries, country_filter)) == ["BR"]

    def test_empty_string_places_no_constraint(self, countries):
        """Test empty-string predicates are treated as unset."""
        assert apply_filter(countries, CountryFilter(name="", region="")) == countries

    def test_matches_filter_single(self, countries):
        """Test the single-country predicate."""
        assert matches_filter(countries[0], CountryFilter(currency="BRL"))
        assert not matches_filter(countries[0], CountryFilter(currency="USD"))


class TestSort:
    """Test sort orders."""

    def test_population_desc(self, countries):
        """Test descending population order."""
        result = apply_sort(countries, CountrySortBy.POPULATION_DESC)
        assert codes(result) == ["US", "BR", "PT", "AQ"]

    def test_population_asc(self, countries):
        """Test ascending population order."""
        result = apply_sort(countries, CountrySortBy.POPULATION)
        assert codes(result) == ["AQ", "PT", "BR", "US"]

    def test_name_orders(self, countries):
        """Test ascending and descending name order."""
        assert codes(apply_sort(countries, CountrySortBy.NAME)) == ["AQ", "BR", "PT", "US"]
        assert codes(apply_sort(countries, CountrySortBy.NAME_DESC)) == ["US", "PT", "BR", "AQ"]

    def test_none_keeps_input_order(self, countries):
        """Test no sort leaves the order untouched."""
        assert apply_sort(countries, None) == countries

    def test_accented_names_sort_with_base_letter(self):
        """Test accented initials sort beside their base letter."""
        items = [
            make_country("ZW", "Zimbabwe", 1),
            make_country("AX", "Åland Islands", 1),
            make_country("AF", "Afghanistan", 1),
            make_country("CI", "Côte d'Ivoire", 1),
            make_country("CO", "Colombia", 1),
        ]
        assert codes(apply_sort(items, CountrySortBy.NAME)) == ["AF", "AX", "CO", "CI", "ZW"]

    def test_name_sort_is_case_insensitive(self):
        """Test lowercase initials do not sort after uppercase ones."""
        items = [make_country("ZZ", "zeta", 1), make_country("AA", "Alpha", 1)]
        assert codes(apply_sort(items, CountrySortBy.NAME)) == ["AA", "ZZ"]

    def test_ties_keep_input_order_ascending(self):
        """Test equal populations keep their relative input order."""
        items = [make_country("BB", "B", 100), make_country("AA", "A", 100)]
        assert codes(apply_sort(items, CountrySortBy.POPULATION)) == ["BB", "AA"]

    def test_ties_keep_input_order_descending(self):
        """Test descending sort is stable too."""
        items = [
            make_country("BB", "B", 100),
            make_country("CC", "C", 200),
            make_country("AA", "A", 100),
        ]
        assert codes(apply_sort(items, CountrySortBy.POPULATION_DESC)) == ["CC", "BB", "AA"]

    def test_accepts_raw_value(self, countries):
        """Test a plain string value is accepted as sort order."""
        assert codes(apply_sort(countries, "population")) == ["AQ", "PT", "BR", "US"]

    def test_unknown_value_rejected(self, countries):
        """Test an unknown sort order raises RequestValidationError."""
        with pytest.raises(RequestValidationError, match="Sort order must be one of"):
            apply_sort(countries, "area")

    def test_collation_key_orders_case_after_base(self):
        """Test lowercase sorts before uppercase when names differ only by case."""
        assert collation_key("alpha") < collation_key("Alpha")
        assert collation_key("Alpha") < collation_key("beta")


class TestPaginate:
    """Test page slicing."""

    def test_defaults(self, countries):
        """Test None pagination uses page 1 with 20 items."""
        result = paginate(countries)
        assert result.page == 1
        assert result.per_page == 20
        assert result.total == 4
        assert len(result.items) == 4

    def test_second_page(self, countries):
        """Test slicing a middle page."""
        result = paginate(countries, PaginationParams(page=2, per_page=3))
        assert codes(result.items) == ["AQ"]
        assert result.total == 4

    def test_page_past_end(self, countries):
        """Test a page past the end is empty but still reports the total."""
        result = paginate(countries, PaginationParams(page=5, per_page=2))
        assert result.items == ()
        assert result.total == 4
        assert result.page == 5
        assert result.per_page == 2

    @pytest.mark.parametrize(
        "page,per_page",
        [(0, 20), (-1, 20), (1, 0), (1, 101)],
    )
    def test_out_of_bounds(self, countries, page, per_page):
        """Test invalid windows are rejected."""
        with pytest.raises(RequestValidationError):
            paginate(countries, PaginationParams(page=page, per_page=per_page))

    def test_per_page_upper_bound_allowed(self, countries):
        """Test per_page of 100 is accepted."""
        assert paginate(countries, PaginationParams(per_page=100)).per_page == 100


class TestRunQuery:
    """Test the full pipeline."""

    def test_filter_sort_paginate(self, countries):
        """Test total counts matches before the page is cut."""
        result = run_query(
            countries,
            CountryFilter(region="Americas"),
            PaginationParams(page=1, per_page=1),
            CountrySortBy.POPULATION_DESC,
        )
        assert codes(result.items) == ["US"]
        assert result.total == 2

    def test_population_desc_top_two(self, countries):
        """Test the two most populous countries of three."""
        result = run_query(
            countries[:3],
            None,
            PaginationParams(page=1, per_page=2),
            CountrySortBy.POPULATION_DESC,
        )
        assert [country.population for country in result.items] == [329484123, 212559417]
        assert result.total == 3

    def test_no_match(self, countries):
        """Test a filter matching nothing yields an empty page and zero total."""
        result = run_query(countries, CountryFilter(name="Atlantis"))
        assert result.items == ()
        assert result.total == 0

    def test_items_are_countries(self, countries):
        """Test items keep their canonical type."""
        result = run_query(countries)
        assert all(isinstance(country, Country) for country in result.items)
