# pokedex_http_api/routers/__init__.py
from fastapi import APIRouter

from .pokemon import router as pokemon_router
from .system import health_router
from .system import router as system_router

# Everything served under the API prefix.
api_router = APIRouter()
api_router.include_router(pokemon_router)
api_router.include_router(system_router)

__all__ = ["api_router", "health_router"]
