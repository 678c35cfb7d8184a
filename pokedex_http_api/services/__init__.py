# pokedex_http_api/services/__init__.py

from .pokemon_service import PokemonDataService
from .suggestions import MAX_SUGGESTIONS, MIN_QUERY_LENGTH

__all__ = ["PokemonDataService", "MAX_SUGGESTIONS", "MIN_QUERY_LENGTH"]
