# pokedex_http_api/container.py
from __future__ import annotations

from dependency_injector import containers, providers

from .config import get_settings
from .data.store import PokemonDataStore
from .services.pokemon_service import PokemonDataService


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    One container is created per application (``create_app``) and kept on
    ``app.state.container``, so independently configured apps (e.g. in
    tests) never share a data store.
    """

    # 1. Configuration
    # Overridden with providers.Object(Settings(...)) by create_app / tests.
    settings = providers.Singleton(get_settings)

    # 2. Data store (Singleton: one in-memory snapshot per app).
    # Built lazily; the application lifespan touches it at startup so that
    # data is loaded before the first request.
    data_store = providers.Singleton(
        PokemonDataStore,
        data_dir=settings.provided.data_path,
    )

    # 3. Read service (Singleton: stateless apart from the store it wraps)
    pokemon_service = providers.Singleton(
        PokemonDataService,
        store=data_store,
        base_url=settings.provided.public_base_url,
        api_prefix=settings.provided.api_root,
    )
