# pokedex_http_api/schemas/system.py

"""
Response models for the service-level endpoints: aggregate counts,
initialization status, suggestion index validation, reload, health and
version.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import APIModel
from .suggestions import SuggestionsMetadata


class DataStats(APIModel):
    """
    Current size of each major collection. Collections that never loaded
    report 0.
    """

    total_pokemon: int = 0
    total_types: int = 0
    total_evolution_chains: int = 0
    total_species: int = 0


class InitializationStatus(APIModel):
    """
    Per-collection load state, used by diagnostics and tests to assert on
    partial-load scenarios.
    """

    initialized: bool = Field(
        ...,
        description="True when Pokemon data or the suggestion index is usable.",
    )
    pokemon_data_loaded: bool = False
    pokemon_count: int = 0
    suggestions_data_loaded: bool = False
    suggestions_count: int = 0
    species_count: int = 0
    types_count: int = 0
    evolution_chains_count: int = 0
    loaded_at: Optional[datetime] = Field(
        default=None,
        description="UTC time of the last successful load generation.",
    )
    suggestions_metadata: Optional[SuggestionsMetadata] = None


class SuggestionIndexValidation(APIModel):
    """
    Advisory structural check of the suggestion index. Invalid entries are
    reported, never removed.
    """

    is_valid: bool
    errors: List[str] = Field(default_factory=list)


class ServiceStatus(APIModel):
    status: InitializationStatus
    suggestions_validation: SuggestionIndexValidation


class ReloadResponse(APIModel):
    message: str
    stats: DataStats


class HealthResponse(APIModel):
    status: str = "ok"
    service: str
    timestamp: datetime
    initialized: bool


class VersionInfo(APIModel):
    name: str
    version: str


__all__ = [
    "DataStats",
    "InitializationStatus",
    "SuggestionIndexValidation",
    "ServiceStatus",
    "ReloadResponse",
    "HealthResponse",
    "VersionInfo",
]
