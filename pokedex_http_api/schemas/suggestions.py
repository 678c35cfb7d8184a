"""
pokedex_http_api/schemas/suggestions.py

Shapes for the name-suggestion index (``suggestions.json``).

The index is a flat, generation-ordered list of ``{id, name, displayName}``
entries plus a metadata block written by the extraction script. Entries are
kept as raw JSON values in memory (see ``SuggestionIndex``) so that one
malformed entry can be reported and skipped on its own; only the metadata
block is modelled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Tuple

from pydantic import ConfigDict, Field

from .common import APIModel


class SuggestionsMetadata(APIModel):
    """
    Metadata block of ``suggestions.json``. Every field is optional: a
    missing or odd metadata block never prevents the index from loading.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    generated_at: Optional[datetime] = Field(
        default=None,
        description="When the index was generated (ISO timestamp).",
    )
    total_count: Optional[int] = Field(
        default=None,
        description="Number of entries the generator wrote.",
    )
    generation: Optional[int] = Field(
        default=None,
        description="Pokemon generation the index covers (1 for Gen 1).",
    )
    description: Optional[str] = None


@dataclass(frozen=True)
class SuggestionIndex:
    """
    In-memory suggestion index.

    ``entries`` holds the raw JSON values in file order; each is expected to
    be an object with ``id`` (int), ``name`` (lowercase str) and
    ``displayName`` (str), but nothing here enforces it.
    """

    metadata: SuggestionsMetadata = field(default_factory=SuggestionsMetadata)
    entries: Tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["SuggestionsMetadata", "SuggestionIndex"]
