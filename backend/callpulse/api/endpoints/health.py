from fastapi import APIRouter, Depends
from callpulse.core.logging import get_logger
from callpulse.api.dependencies import get_interaction_loader
from callpulse.services import InteractionLoader

logger = get_logger(__name__)
router = APIRouter()

@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    logger.info("Health check requested")
    return {"status": "healthy", "service": "CallPulse Supervisor Analytics"}

@router.get("/remote")
async def remote_api_health(loader: InteractionLoader = Depends(get_interaction_loader)):
    """Reachability of the remote interaction API and the session's data source."""
    reachable = await loader.fetcher.check_health()
    logger.info("Remote API health requested", reachable=reachable)

    last_result = loader.last_result
    return {
        "status": "healthy" if reachable else "degraded",
        "remote_api": {
            "base_url": loader.base_url,
            "reachable": reachable,
        },
        "loader_state": loader.state.value,
        "spec_cached": loader.cache.cached is not None,
        "using_fallback": last_result.used_fallback if last_result is not None else None,
    }
