# pokedex_http_api/services/pokemon_service.py

from __future__ import annotations

from typing import Any, List, Optional, TypeVar

from ..data.store import LoadReport, PokemonDataStore, RecordIndex
from ..logging import get_logger
from ..schemas.common import NamedResource, NamedResourceList
from ..schemas.pokemon import EvolutionChain, Pokemon, PokemonSpecies, PokemonType
from ..schemas.system import DataStats, InitializationStatus, SuggestionIndexValidation
from .suggestions import match_suggestions, normalize_query

logger = get_logger(__name__)

R = TypeVar("R")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _resolve(index: RecordIndex[R], identifier: Any) -> Optional[R]:
    """
    Shared id-or-name resolution.

    * ``int`` > 0: exact id match. ``bool`` and non-positive ints miss.
    * ``str``: trimmed; case-insensitive name match first, then an exact
      match of the text against the id rendered as a string.
    * anything else (None, float, ...): miss.

    Bad identifiers are the caller's mistake, so they resolve to None
    instead of raising.
    """
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        return index.get_by_id(identifier) if identifier > 0 else None
    if not isinstance(identifier, str):
        return None

    text = identifier.strip()
    if not text:
        return None

    hit = index.get_by_name(text.lower())
    if hit is not None:
        return hit

    if text.isascii() and text.isdigit():
        candidate = index.get_by_id(int(text))
        # "025" is not the string form of id 25.
        if candidate is not None and str(getattr(candidate, "id")) == text:
            return candidate
    return None


class PokemonDataService:
    """
    Read operations over the store's current snapshot.

    Responsibilities:
    - Resolve ids / names with one consistent policy (see ``_resolve``).
    - Paginate, search and filter collections.
    - Apply the suggestion business rules.
    - Compute derived fields (image and resource URLs) at read time.

    Every method reads ``store.snapshot`` once, so a concurrent reload can
    never hand it data from two different load generations.
    """

    def __init__(
        self,
        store: PokemonDataStore,
        *,
        base_url: str = "",
        api_prefix: str = "/api/v2",
    ) -> None:
        self._store = store
        self._base_url = (base_url or "").rstrip("/")
        self._api_prefix = (api_prefix or "").rstrip("/")

    @property
    def store(self) -> PokemonDataStore:
        return self._store

    # -------------------------------------------------------------------------
    # URL helpers
    # -------------------------------------------------------------------------

    def _resource_url(self, resource: str, record_id: int) -> str:
        return f"{self._base_url}{self._api_prefix}/{resource}/{record_id}"

    def _image_url(self, path: str, record_id: int) -> str:
        return f"{self._base_url}/images/pokemon/{path}{record_id}.png"

    def _with_local_images(self, pokemon: Pokemon) -> Pokemon:
        """
        Point sprite URLs at this server's image mirror. Only sprites that
        exist upstream are rewritten; official artwork is always provided.
        """
        sprites = pokemon.sprites
        pid = pokemon.id

        def rewrite(original: Optional[str], path: str) -> Optional[str]:
            return self._image_url(path, pid) if original else None

        other = dict(sprites.other)
        other["official-artwork"] = {
            "front_default": self._image_url("official-artwork/", pid),
            "front_shiny": None,
        }
        local = sprites.model_copy(
            update={
                "front_default": rewrite(sprites.front_default, "sprites/"),
                "front_shiny": rewrite(sprites.front_shiny, "sprites/shiny/"),
                "back_default": rewrite(sprites.back_default, "sprites/back/"),
                "back_shiny": rewrite(sprites.back_shiny, "sprites/back/shiny/"),
                "other": other,
            }
        )
        return pokemon.model_copy(update={"sprites": local})

    # -------------------------------------------------------------------------
    # Single-record lookups
    # -------------------------------------------------------------------------

    def get_pokemon(self, identifier: Any) -> Optional[Pokemon]:
        """
        Pokemon by id or name, with image URLs rewritten to this server.
        """
        pokemon = _resolve(self._store.snapshot.pokemon, identifier)
        return self._with_local_images(pokemon) if pokemon is not None else None

    def get_pokemon_species(self, identifier: Any) -> Optional[PokemonSpecies]:
        return _resolve(self._store.snapshot.species, identifier)

    def get_evolution_chain(self, chain_id: Any) -> Optional[EvolutionChain]:
        """
        Evolution chain by integer id only; chains have no name.
        """
        if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id <= 0:
            return None
        return self._store.snapshot.evolution_chains.get_by_id(chain_id)

    def get_type(self, identifier: Any) -> Optional[PokemonType]:
        return _resolve(self._store.snapshot.types, identifier)

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    def get_all_pokemon(
        self,
        offset: Optional[int] = 0,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> NamedResourceList:
        """
        One page of Pokemon references in load order.

        ``offset`` below 0 becomes 0; ``limit`` of 0 or less means the
        default page size, and is capped at ``MAX_PAGE_SIZE``. Anything that
        is not an int (None, floats, bools, strings) counts as unset.
        """
        offset = max(offset, 0) if _is_int(offset) else 0
        if not _is_int(limit) or limit <= 0:
            limit = DEFAULT_PAGE_SIZE
        limit = min(limit, MAX_PAGE_SIZE)

        records = self._store.snapshot.pokemon.records
        page = records[offset:offset + limit]
        return NamedResourceList(
            count=len(records),
            results=[
                NamedResource(name=p.name, url=self._resource_url("pokemon", p.id))
                for p in page
            ],
        )

    def get_all_types(self) -> NamedResourceList:
        records = self._store.snapshot.types.records
        return NamedResourceList(
            count=len(records),
            results=[
                NamedResource(name=t.name, url=self._resource_url("type", t.id))
                for t in records
            ],
        )

    def search_pokemon(self, query: str) -> List[Pokemon]:
        """
        Case-insensitive substring match on the name, in load order.

        An empty query matches everything; rejecting it is the caller's job.
        """
        if not isinstance(query, str):
            return []
        needle = query.lower()
        return [p for p in self._store.snapshot.pokemon if needle in p.name.lower()]

    def get_pokemon_by_type(self, identifier: Any) -> List[Pokemon]:
        """
        Pokemon listed as members of a type, in load order. An unknown type
        yields an empty list.
        """
        snapshot = self._store.snapshot
        pokemon_type = _resolve(snapshot.types, identifier)
        if pokemon_type is None:
            return []

        member_ids = set(pokemon_type.member_ids())
        return [p for p in snapshot.pokemon if p.id in member_ids]

    def pokemon_url(self, pokemon: Pokemon) -> str:
        return self._resource_url("pokemon", pokemon.id)

    # -------------------------------------------------------------------------
    # Suggestions
    # -------------------------------------------------------------------------

    def get_pokemon_suggestions(self, query: Any) -> List[str]:
        """
        Up to 10 display names whose name contains ``query``.

        Returns [] for non-string, blank or shorter-than-3 queries, and when
        the suggestion index is not loaded.
        """
        needle = normalize_query(query)
        if needle is None:
            return []

        suggestions = self._store.snapshot.suggestions
        if suggestions is None:
            logger.warning("suggestions_unavailable", query=needle)
            return []

        return match_suggestions(suggestions.entries, needle)

    # -------------------------------------------------------------------------
    # Stats / lifecycle
    # -------------------------------------------------------------------------

    def get_stats(self) -> DataStats:
        snapshot = self._store.snapshot
        return DataStats(
            total_pokemon=len(snapshot.pokemon),
            total_types=len(snapshot.types),
            total_evolution_chains=len(snapshot.evolution_chains),
            total_species=len(snapshot.species),
        )

    def reload(self) -> LoadReport:
        return self._store.reload()

    def is_initialized(self) -> bool:
        return self._store.is_initialized()

    def get_initialization_status(self) -> InitializationStatus:
        return self._store.get_initialization_status()

    def validate_suggestions_data(self) -> SuggestionIndexValidation:
        return self._store.validate_suggestion_index()


__all__ = ["PokemonDataService", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE"]
