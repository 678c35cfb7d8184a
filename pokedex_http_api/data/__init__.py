# pokedex_http_api/data/__init__.py
"""
Data store for the Pokedex HTTP API.

- ``loader``: reads and validates the individual JSON files
- ``store``: owns the current load generation (``DataSnapshot``) and the
  reload / diagnostics API
- ``validation``: advisory checks for the suggestion index
- ``errors``: ``DataLoadError`` and friends
"""

from .errors import DataLoadError, PokedexDataError
from .loader import DATA_FILES, PRIMARY_DATASET, DatasetName, DatasetReport, FileOutcome
from .store import DataSnapshot, LoadReport, PokemonDataStore, RecordIndex

__all__ = [
    "DataLoadError",
    "PokedexDataError",
    "DATA_FILES",
    "PRIMARY_DATASET",
    "DatasetName",
    "DatasetReport",
    "FileOutcome",
    "DataSnapshot",
    "LoadReport",
    "PokemonDataStore",
    "RecordIndex",
]
