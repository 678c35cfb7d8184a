# pokedex_http_api/schemas/common.py

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base Pydantic model for HTTP-facing response envelopes.

    Fields are snake_case in Python and camelCase on the wire, which is
    what the Pokedex frontend consumes (``totalPokemon``, ``isValid`` ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NamedResource(BaseModel):
    """
    Lightweight reference to a resource: a display name plus the URL that
    resolves it through the lookup endpoints.
    """

    name: str
    url: str


class NamedResourceList(BaseModel):
    """
    Envelope used by list endpoints: total size plus one page of references.
    """

    count: int = Field(..., description="Total number of items in the collection.")
    results: List[NamedResource] = Field(default_factory=list)


class SearchResult(BaseModel):
    id: int
    name: str
    url: str


class SearchResultList(BaseModel):
    count: int
    results: List[SearchResult] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """
    Standard error envelope for every non-2xx response produced by the app.
    """

    status: str = "error"
    code: int
    message: str


__all__ = [
    "APIModel",
    "NamedResource",
    "NamedResourceList",
    "SearchResult",
    "SearchResultList",
    "ErrorResponse",
]
