"""
Pokedex HTTP API.

Read-only data service that loads the scraped Pokedex datasets (Pokemon,
species, evolution chains, types and the name-suggestion index) from local
JSON files into memory and serves them over FastAPI.

Intended usage:
    uvicorn pokedex_http_api.main:app --host 0.0.0.0 --port 20275
"""

__version__ = "1.0.0"

SERVICE_NAME = "Pokemon API Service"

__all__ = ["__version__", "SERVICE_NAME"]
