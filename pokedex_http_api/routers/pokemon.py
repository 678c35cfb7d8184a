# pokedex_http_api/routers/pokemon.py

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_pokemon_service
from ..schemas.common import ErrorResponse, NamedResourceList, SearchResult, SearchResultList
from ..schemas.pokemon import EvolutionChain, Pokemon, PokemonSpecies, PokemonType
from ..services.pokemon_service import DEFAULT_PAGE_SIZE, PokemonDataService

router = APIRouter(
    tags=["pokemon"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


def _parse_int(raw: Optional[str], default: int) -> int:
    """
    Lenient query-string integer: anything that is not a plain integer
    falls back to ``default``.
    """
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _not_found(what: str, identifier: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{what} '{identifier}' not found",
    )


def _project(service: PokemonDataService, pokemon: List[Pokemon]) -> SearchResultList:
    return SearchResultList(
        count=len(pokemon),
        results=[
            SearchResult(id=p.id, name=p.name, url=service.pokemon_url(p))
            for p in pokemon
        ],
    )


# ---------------------------------------------------------------------------
# Pokemon
# ---------------------------------------------------------------------------


@router.get(
    "/pokemon",
    response_model=NamedResourceList,
    summary="List Pokemon",
    description="One page of Pokemon references in load order.",
)
def list_pokemon(
    *,
    service: PokemonDataService = Depends(get_pokemon_service),
    offset: Optional[str] = Query(None, description="Items to skip (default 0)."),
    limit: Optional[str] = Query(
        None, description=f"Page size (default {DEFAULT_PAGE_SIZE}, max 100)."
    ),
) -> NamedResourceList:
    return service.get_all_pokemon(
        offset=_parse_int(offset, 0),
        limit=_parse_int(limit, DEFAULT_PAGE_SIZE),
    )


@router.get(
    "/pokemon/{identifier}",
    response_model=Pokemon,
    summary="Get a Pokemon",
    description="Fetch a Pokemon by numeric id or (case-insensitive) name.",
)
def get_pokemon(
    identifier: str,
    service: PokemonDataService = Depends(get_pokemon_service),
) -> Pokemon:
    pokemon = service.get_pokemon(identifier)
    if pokemon is None:
        raise _not_found("Pokemon", identifier)
    return pokemon


@router.get(
    "/pokemon-species/{identifier}",
    response_model=PokemonSpecies,
    summary="Get a Pokemon species",
)
def get_pokemon_species(
    identifier: str,
    service: PokemonDataService = Depends(get_pokemon_service),
) -> PokemonSpecies:
    species = service.get_pokemon_species(identifier)
    if species is None:
        raise _not_found("Pokemon species", identifier)
    return species


@router.get(
    "/evolution-chain/{chain_id}",
    response_model=EvolutionChain,
    summary="Get an evolution chain",
    description="Evolution chains are addressed by numeric id only.",
)
def get_evolution_chain(
    chain_id: str,
    service: PokemonDataService = Depends(get_pokemon_service),
) -> EvolutionChain:
    text = chain_id.strip()
    if not (text.isascii() and text.isdigit()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Evolution chain id must be an integer",
        )

    chain = service.get_evolution_chain(int(text))
    if chain is None:
        raise _not_found("Evolution chain", chain_id)
    return chain


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@router.get("/type", response_model=NamedResourceList, summary="List types")
def list_types(
    service: PokemonDataService = Depends(get_pokemon_service),
) -> NamedResourceList:
    return service.get_all_types()


@router.get("/type/{identifier}", response_model=PokemonType, summary="Get a type")
def get_type(
    identifier: str,
    service: PokemonDataService = Depends(get_pokemon_service),
) -> PokemonType:
    pokemon_type = service.get_type(identifier)
    if pokemon_type is None:
        raise _not_found("Type", identifier)
    return pokemon_type


@router.get(
    "/type/{identifier}/pokemon",
    response_model=SearchResultList,
    summary="List the Pokemon of a type",
)
def list_pokemon_by_type(
    identifier: str,
    service: PokemonDataService = Depends(get_pokemon_service),
) -> SearchResultList:
    # An unknown type is a 404 here, not an empty listing.
    if service.get_type(identifier) is None:
        raise _not_found("Type", identifier)
    return _project(service, service.get_pokemon_by_type(identifier))


# ---------------------------------------------------------------------------
# Search / suggestions
# ---------------------------------------------------------------------------


@router.get(
    "/search/pokemon",
    response_model=SearchResultList,
    summary="Search Pokemon by name",
    description="Case-insensitive substring match on the Pokemon name.",
)
def search_pokemon(
    *,
    service: PokemonDataService = Depends(get_pokemon_service),
    q: Optional[str] = Query(None, description="Search text (required)."),
) -> SearchResultList:
    if q is None or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'q' is required",
        )
    return _project(service, service.search_pokemon(q.strip()))


@router.get(
    "/suggestions",
    response_model=List[str],
    summary="Name suggestions",
    description=(
        "Up to 10 display names containing the query. Queries shorter than "
        "3 characters return an empty list."
    ),
)
def get_suggestions(
    *,
    service: PokemonDataService = Depends(get_pokemon_service),
    q: Optional[str] = Query(None, description="Partial name (required)."),
) -> List[str]:
    if q is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'q' is required",
        )
    return service.get_pokemon_suggestions(q)
