"""
Command-line interface for the country facade.

    country-facade list --region Europe --sort populacao_desc --per-page 5
    country-facade show br --json
"""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich import box

from .api import ListaPaises, Pais
from .container import CountryFacade
from .errors import CountryFacadeError
from .utils.config import get_config
from .utils.logging import configure_logging

app = typer.Typer(help="Query REST Countries through a cached facade.", no_args_is_help=True)
console = Console()


def _format_population(value: int) -> str:
    return f"{value:,}"


def _render_list(result: ListaPaises) -> None:
    table = Table(
        title=f"Countries (page {result.pagina}, {len(result.itens)} of {result.total})",
        box=box.ROUNDED,
    )
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Region")
    table.add_column("Capital")
    table.add_column("Population", justify="right", style="green")
    for pais in result.itens:
        table.add_row(
            pais.codigo2,
            pais.nome.comum,
            pais.regiao,
            pais.capital or "-",
            _format_population(pais.populacao),
        )
    console.print(table)


def _render_country(pais: Pais) -> None:
    table = Table(title=f"{pais.nome.comum} ({pais.codigo2}/{pais.codigo3})", box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Official name", pais.nome.oficial)
    table.add_row("Native name", pais.nome.nativo or "-")
    table.add_row("Capital", pais.capital or "-")
    table.add_row("Region", pais.regiao)
    table.add_row("Subregion", pais.subregiao or "-")
    table.add_row("Population", _format_population(pais.populacao))
    table.add_row("Area (km²)", f"{pais.area:,.0f}" if pais.area is not None else "-")
    table.add_row("Currencies", ", ".join(moeda.codigo for moeda in pais.moedas) or "-")
    table.add_row("Languages", ", ".join(pais.linguas) or "-")
    table.add_row("Timezones", ", ".join(pais.fusos) or "-")
    console.print(table)


def _print_json(model) -> None:
    console.print_json(json.dumps(model.model_dump(mode="json", by_alias=True), ensure_ascii=False))


async def _list(args: dict, as_json: bool) -> None:
    async with CountryFacade(get_config()) as facade:
        result = await facade.handler.paises(args)
    if as_json:
        _print_json(result)
    else:
        _render_list(result)


async def _show(code: str, as_json: bool) -> bool:
    async with CountryFacade(get_config()) as facade:
        pais = await facade.handler.pais({"codigo": code})
    if pais is None:
        return False
    if as_json:
        _print_json(pais)
    else:
        _render_country(pais)
    return True


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
) -> None:
    """Configure logging before any command runs."""
    try:
        level = log_level or get_config().log_level
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    configure_logging(level)


@app.command("list")
def list_countries(
    name: Optional[str] = typer.Option(None, help="Substring of the common name"),
    region: Optional[str] = typer.Option(None, help="Exact region"),
    subregion: Optional[str] = typer.Option(None, help="Exact subregion"),
    currency: Optional[str] = typer.Option(None, help="Currency code, e.g. EUR"),
    language: Optional[str] = typer.Option(None, help="Language name, e.g. Portuguese"),
    page: int = typer.Option(1, help="Page number"),
    per_page: int = typer.Option(20, "--per-page", help="Items per page (1-100)"),
    sort: str = typer.Option("nome", help="nome, nome_desc, populacao or populacao_desc"),
    as_json: bool = typer.Option(False, "--json", help="Print the public JSON shape"),
) -> None:
    """List countries with optional filters, sorting and pagination."""
    filtro = {
        "nome": name,
        "regiao": region,
        "subregiao": subregion,
        "moeda": currency,
        "lingua": language,
    }
    args = {
        "filtro": {key: value for key, value in filtro.items() if value is not None},
        "pagina": page,
        "porPagina": per_page,
        "ordenacao": sort,
    }
    try:
        asyncio.run(_list(args, as_json))
    except CountryFacadeError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)


@app.command("show")
def show_country(
    code: str = typer.Argument(..., help="Alpha-2 or alpha-3 code"),
    as_json: bool = typer.Option(False, "--json", help="Print the public JSON shape"),
) -> None:
    """Show one country by code."""
    try:
        found = asyncio.run(_show(code, as_json))
    except CountryFacadeError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    if not found:
        console.print(f"[yellow]Country {code.strip().upper()} not found[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
