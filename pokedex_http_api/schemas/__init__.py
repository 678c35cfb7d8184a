# pokedex_http_api/schemas/__init__.py

"""
Pydantic schemas for the Pokedex HTTP API.

- ``pokemon``: scraped records held in memory (Pokemon, species, chains, types)
- ``suggestions``: the name-suggestion index
- ``system``: stats, status, reload, health and version envelopes
- ``common``: shared bases, list envelopes and the error envelope
"""

from .common import (
    APIModel,
    ErrorResponse,
    NamedResource,
    NamedResourceList,
    SearchResult,
    SearchResultList,
)
from .pokemon import EvolutionChain, Pokemon, PokemonSpecies, PokemonType
from .suggestions import SuggestionIndex, SuggestionsMetadata
from .system import (
    DataStats,
    HealthResponse,
    InitializationStatus,
    ReloadResponse,
    ServiceStatus,
    SuggestionIndexValidation,
    VersionInfo,
)

__all__ = [
    "APIModel",
    "ErrorResponse",
    "NamedResource",
    "NamedResourceList",
    "SearchResult",
    "SearchResultList",
    "EvolutionChain",
    "Pokemon",
    "PokemonSpecies",
    "PokemonType",
    "SuggestionIndex",
    "SuggestionsMetadata",
    "DataStats",
    "HealthResponse",
    "InitializationStatus",
    "ReloadResponse",
    "ServiceStatus",
    "SuggestionIndexValidation",
    "VersionInfo",
]
