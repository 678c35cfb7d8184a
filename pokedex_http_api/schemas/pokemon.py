"""
pokedex_http_api/schemas/pokemon.py

Pydantic models for the records held in memory by the data store.

The on-disk files are PokeAPI-shaped JSON produced by the scraping job.
Models validate the fields the service relies on (ids, names, references)
and keep every other key as-is (``extra="allow"``), so a record is served
back exactly as it was scraped, plus any derived fields computed at read
time.

All record models are frozen: a load generation is never mutated in place,
only replaced wholesale on reload.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Core types
# ---------------------------------------------------------------------------


# Booleans and numeric strings are rejected; ids are positive integers.
RecordID = Annotated[int, Field(strict=True, ge=1)]


class RecordModel(BaseModel):
    """
    Common base for scraped records: tolerant of unknown keys, immutable.
    """

    model_config = ConfigDict(extra="allow", frozen=True)


class NamedAPIResource(RecordModel):
    name: str
    url: str


class APIResource(RecordModel):
    url: str


def resource_id_from_url(url: Any) -> Optional[int]:
    """
    Extract the trailing numeric id from a PokeAPI-style resource URL.

    ``"https://pokeapi.co/api/v2/pokemon/25/"`` -> ``25``. Returns None when
    the URL does not end in a positive integer segment.
    """
    if not isinstance(url, str):
        return None
    segments = [s for s in url.strip().split("/") if s]
    if not segments or not segments[-1].isdigit():
        return None
    value = int(segments[-1])
    return value if value > 0 else None


# ---------------------------------------------------------------------------
# Pokemon
# ---------------------------------------------------------------------------


class Sprites(RecordModel):
    front_default: Optional[str] = None
    front_shiny: Optional[str] = None
    front_female: Optional[str] = None
    front_shiny_female: Optional[str] = None
    back_default: Optional[str] = None
    back_shiny: Optional[str] = None
    back_female: Optional[str] = None
    back_shiny_female: Optional[str] = None
    # Keyed by artwork source, e.g. "official-artwork", "dream_world".
    other: Dict[str, Any] = Field(default_factory=dict)


class PokemonAbility(RecordModel):
    ability: NamedAPIResource
    is_hidden: bool = False
    slot: int = 1


class PokemonStat(RecordModel):
    base_stat: int
    effort: int = 0
    stat: NamedAPIResource


class PokemonTypeSlot(RecordModel):
    slot: int
    type: NamedAPIResource


class Pokemon(RecordModel):
    """
    A single Pokemon as scraped from ``/pokemon/{id}``.
    """

    id: RecordID
    name: str = Field(..., min_length=1)
    height: int = 0
    weight: int = 0
    base_experience: Optional[int] = None
    order: int = 0
    is_default: bool = True
    sprites: Sprites = Field(default_factory=Sprites)
    abilities: List[PokemonAbility] = Field(default_factory=list)
    stats: List[PokemonStat] = Field(default_factory=list)
    types: List[PokemonTypeSlot] = Field(default_factory=list)
    species: Optional[NamedAPIResource] = None


# ---------------------------------------------------------------------------
# Species
# ---------------------------------------------------------------------------


class PokedexNumber(RecordModel):
    entry_number: int
    pokedex: NamedAPIResource


class LocalizedName(RecordModel):
    name: str
    language: NamedAPIResource


class FlavorText(RecordModel):
    flavor_text: str
    language: NamedAPIResource
    version: Optional[NamedAPIResource] = None


class PokemonSpecies(RecordModel):
    """
    Species-level data (``/pokemon-species/{id}``): classification flags,
    breeding data, the evolution chain reference and localized text.
    """

    id: RecordID
    name: str = Field(..., min_length=1)
    order: int = 0
    gender_rate: int = -1
    capture_rate: int = 0
    base_happiness: Optional[int] = None
    is_baby: bool = False
    is_legendary: bool = False
    is_mythical: bool = False
    hatch_counter: Optional[int] = None
    has_gender_differences: bool = False
    forms_switchable: bool = False
    growth_rate: Optional[NamedAPIResource] = None
    pokedex_numbers: List[PokedexNumber] = Field(default_factory=list)
    egg_groups: List[NamedAPIResource] = Field(default_factory=list)
    color: Optional[NamedAPIResource] = None
    shape: Optional[NamedAPIResource] = None
    evolves_from_species: Optional[NamedAPIResource] = None
    evolution_chain: Optional[APIResource] = None
    habitat: Optional[NamedAPIResource] = None
    generation: Optional[NamedAPIResource] = None
    names: List[LocalizedName] = Field(default_factory=list)
    flavor_text_entries: List[FlavorText] = Field(default_factory=list)

    @property
    def evolution_chain_id(self) -> Optional[int]:
        if self.evolution_chain is None:
            return None
        return resource_id_from_url(self.evolution_chain.url)


# ---------------------------------------------------------------------------
# Evolution chains
# ---------------------------------------------------------------------------


class EvolutionDetail(RecordModel):
    """
    Conditions for one transition. Only the commonly used thresholds are
    typed; the rest (held_item, known_move, party_species, ...) pass through.
    """

    trigger: Optional[NamedAPIResource] = None
    item: Optional[Any] = None
    gender: Optional[int] = None
    min_level: Optional[int] = None
    min_happiness: Optional[int] = None
    min_beauty: Optional[int] = None
    min_affection: Optional[int] = None
    needs_overworld_rain: bool = False
    relative_physical_stats: Optional[int] = None
    time_of_day: str = ""
    turn_upside_down: bool = False


class ChainLink(RecordModel):
    is_baby: bool = False
    species: NamedAPIResource
    evolution_details: List[EvolutionDetail] = Field(default_factory=list)
    evolves_to: List["ChainLink"] = Field(default_factory=list)

    def iter_species(self) -> List[NamedAPIResource]:
        """Depth-first list of every species in this subtree, root first."""
        found = [self.species]
        for child in self.evolves_to:
            found.extend(child.iter_species())
        return found


class EvolutionChain(RecordModel):
    id: RecordID
    baby_trigger_item: Optional[Any] = None
    chain: ChainLink


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class DamageRelations(RecordModel):
    no_damage_to: List[NamedAPIResource] = Field(default_factory=list)
    half_damage_to: List[NamedAPIResource] = Field(default_factory=list)
    double_damage_to: List[NamedAPIResource] = Field(default_factory=list)
    no_damage_from: List[NamedAPIResource] = Field(default_factory=list)
    half_damage_from: List[NamedAPIResource] = Field(default_factory=list)
    double_damage_from: List[NamedAPIResource] = Field(default_factory=list)


class TypePokemon(RecordModel):
    pokemon: NamedAPIResource
    slot: int = 1


class PokemonType(RecordModel):
    id: RecordID
    name: str = Field(..., min_length=1)
    damage_relations: DamageRelations = Field(default_factory=DamageRelations)
    pokemon: List[TypePokemon] = Field(default_factory=list)

    def member_ids(self) -> List[int]:
        """Ids of member Pokemon, in listing order; unparseable URLs skipped."""
        ids: List[int] = []
        for member in self.pokemon:
            pokemon_id = resource_id_from_url(member.pokemon.url)
            if pokemon_id is not None:
                ids.append(pokemon_id)
        return ids


ChainLink.model_rebuild()


__all__ = [
    "RecordID",
    "RecordModel",
    "NamedAPIResource",
    "APIResource",
    "resource_id_from_url",
    "Sprites",
    "PokemonAbility",
    "PokemonStat",
    "PokemonTypeSlot",
    "Pokemon",
    "PokedexNumber",
    "LocalizedName",
    "FlavorText",
    "PokemonSpecies",
    "EvolutionDetail",
    "ChainLink",
    "EvolutionChain",
    "DamageRelations",
    "TypePokemon",
    "PokemonType",
]
