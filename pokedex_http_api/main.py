# pokedex_http_api/main.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from dependency_injector import providers
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import SERVICE_NAME, __version__
from .config import AppEnv, Settings, get_settings
from .container import Container
from .data.errors import DataLoadError
from .logging import get_logger
from .logging.config import configure_logging
from .routers import api_router, health_router
from .telemetry import instrument_fastapi, setup_telemetry

logger = get_logger(__name__)


def _error_body(code: int, message: str) -> dict:
    return {"status": "error", "code": code, "message": message}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application Lifecycle Manager.
    Handles startup (telemetry, initial data load) and shutdown.
    """
    container: Container = app.state.container
    settings = container.settings()

    setup_telemetry(settings)
    logger.info(
        "app_starting",
        app=settings.APP_NAME,
        env=settings.APP_ENV.value,
        data_dir=str(settings.data_path),
    )

    # First access builds the store, which loads the data files.
    try:
        service = container.pokemon_service()
    except DataLoadError as e:
        logger.error("data_initialization_failed", path=e.path, detail=e.detail)
        raise

    logger.info("app_ready", initialized=service.is_initialized(), **service.get_stats().model_dump())

    yield

    logger.info("app_shutdown")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Factory function to create the FastAPI application.

    ``settings`` defaults to the process-wide instance from the environment;
    tests pass their own so each app gets its own data directory.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    container = Container()
    container.settings.override(providers.Object(settings))

    is_production = settings.APP_ENV == AppEnv.PRODUCTION
    app = FastAPI(
        title=SERVICE_NAME,
        version=__version__,
        description="Read-mostly Pokedex data service (Pokemon, species, evolution chains, types).",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        lifespan=lifespan,
    )
    app.state.container = container

    # 1. CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # 2. Auto-Instrument FastAPI for Tracing
    instrument_fastapi(app, settings)

    # 3. Global Exception Handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Standardizes HTTP errors (404 lookups, 400 bad parameters, 401/403 auth).
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catches unhandled exceptions so stack traces never leak outside DEBUG.
        """
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(exc) if settings.DEBUG else "Internal Server Error",
            ),
        )

    # 4. Mount Routes
    app.include_router(api_router, prefix=settings.api_root)
    app.include_router(health_router)

    return app


# Entry point for Uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "pokedex_http_api.main:app",
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.APP_ENV == AppEnv.DEVELOPMENT,
    )
