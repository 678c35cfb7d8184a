# pokedex_http_api/routers/system.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, status

from .. import SERVICE_NAME, __version__
from ..config import Settings
from ..data.errors import DataLoadError
from ..dependencies import get_pokemon_service, get_settings_dep, verify_api_key
from ..logging import get_logger
from ..schemas.system import (
    DataStats,
    HealthResponse,
    ReloadResponse,
    ServiceStatus,
    VersionInfo,
)
from ..services.pokemon_service import PokemonDataService

logger = get_logger(__name__)

# Mounted under the API prefix.
router = APIRouter(tags=["system"])

# Mounted at the root, for load balancers and orchestrators.
health_router = APIRouter(tags=["health"])


def _version_info(settings: Settings) -> VersionInfo:
    return VersionInfo(name=settings.APP_NAME, version=__version__)


@router.get("/stats", response_model=DataStats, summary="Collection sizes")
def get_stats(
    service: PokemonDataService = Depends(get_pokemon_service),
) -> DataStats:
    return service.get_stats()


@router.get(
    "/status",
    response_model=ServiceStatus,
    summary="Load status and suggestion index check",
)
def get_status(
    service: PokemonDataService = Depends(get_pokemon_service),
) -> ServiceStatus:
    return ServiceStatus(
        status=service.get_initialization_status(),
        suggestions_validation=service.validate_suggestions_data(),
    )


@router.post(
    "/reload",
    response_model=ReloadResponse,
    summary="Reload data files",
    description="Re-reads every data file and swaps in the new generation.",
)
def reload_data(
    service: PokemonDataService = Depends(get_pokemon_service),
    _key: str = Depends(verify_api_key),
) -> ReloadResponse:
    try:
        report = service.reload()
    except DataLoadError as e:
        logger.error("data_reload_failed", path=e.path, detail=e.detail)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Data reload failed",
        ) from e

    logger.info("data_reloaded", warnings=len(report.warnings))
    return ReloadResponse(message="Data reloaded successfully", stats=service.get_stats())


@router.get("/version", response_model=VersionInfo, summary="Service version")
def get_version(settings: Settings = Depends(get_settings_dep)) -> VersionInfo:
    return _version_info(settings)


# ---------------------------------------------------------------------------
# Root-level probes
# ---------------------------------------------------------------------------


@health_router.get("/health", response_model=HealthResponse)
def liveness_probe(
    service: PokemonDataService = Depends(get_pokemon_service),
) -> HealthResponse:
    """
    Liveness probe. Always 200 while the process serves requests.
    """
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        timestamp=datetime.now(timezone.utc),
        initialized=service.is_initialized(),
    )


@health_router.get("/health/ready")
def readiness_probe(
    response: Response,
    service: PokemonDataService = Depends(get_pokemon_service),
) -> dict:
    """
    Readiness probe. 503 until some Pokemon data or the suggestion index
    is usable.
    """
    ready = service.is_initialized()
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_probe_failed")
    return {"status": "ready" if ready else "not_ready"}


@health_router.get("/version", response_model=VersionInfo)
def root_version(settings: Settings = Depends(get_settings_dep)) -> VersionInfo:
    return _version_info(settings)
