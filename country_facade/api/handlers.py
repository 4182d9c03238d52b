"""
Query handlers for the public API.

Each handler validates raw public arguments, calls the repository and maps
the result. Transport (GraphQL, HTTP) is left to the embedding application.
"""

import logging
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import RequestValidationError
from ..models import PaginationParams
from ..repositories import CountryRepository
from .mapper import CountryMapper
from .schemas import ListaPaises, Pais, PaisArgs, PaisesArgs

logger = logging.getLogger(__name__)

ArgsT = TypeVar("ArgsT", bound=BaseModel)


def parse_args(model: Type[ArgsT], args: Optional[Mapping[str, Any]]) -> ArgsT:
    """
    Validate public arguments.

    Raises:
        RequestValidationError: If the arguments do not match the model
    """
    try:
        return model.model_validate(dict(args or {}))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise RequestValidationError(f"Invalid arguments: {problems}") from e


class CountryQueryHandler:
    """Serves ``paises`` and ``pais`` over a country repository."""

    def __init__(self, repository: CountryRepository):
        self.repository = repository

    async def paises(self, args: Optional[Mapping[str, Any]] = None) -> ListaPaises:
        """List countries; defaults to page 1, 20 per page, sorted by name."""
        parsed = parse_args(PaisesArgs, args)
        result = await self.repository.find_all(
            parsed.filtro.to_filter() if parsed.filtro is not None else None,
            PaginationParams(page=parsed.pagina, per_page=parsed.por_pagina),
            parsed.ordenacao.to_sort_by(),
        )
        return CountryMapper.to_public_list(result)

    async def pais(self, args: Optional[Mapping[str, Any]] = None) -> Optional[Pais]:
        """Fetch one country by code; None when it does not exist."""
        parsed = parse_args(PaisArgs, args)
        country = await self.repository.find_by_code(parsed.codigo)
        if country is None:
            logger.debug(f"Country {parsed.codigo} not found")
            return None
        return CountryMapper.to_public(country)
